"""Identifier case conversion matching lodash word splitting."""

from __future__ import annotations

import re
from typing import List

_WORD_RE = re.compile(
    r"[A-Z]{2,}(?=[A-Z][a-z]|[^A-Za-z]|$)"
    r"|[A-Z]?[a-z]+"
    r"|[A-Z]+(?=[A-Z][a-z])"
    r"|[A-Z]+"
    r"|[0-9]+"
)


def split_words(value: str) -> List[str]:
    """Split ``value`` on case changes, digit runs and separators."""
    return _WORD_RE.findall(value)


def snake_case(value: str) -> str:
    return "_".join(word.lower() for word in split_words(value))


def camel_case(value: str) -> str:
    words = split_words(value)
    if not words:
        return ""
    head, *rest = words
    return head.lower() + "".join(word[:1].upper() + word[1:].lower() for word in rest)


def constant_case(value: str) -> str:
    """Upper snake case, as used for Java constant names."""
    return snake_case(value).upper()


__all__ = ["camel_case", "constant_case", "snake_case", "split_words"]
