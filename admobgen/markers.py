"""Autogenerated region markers for plugin manifest replacement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple


class ManifestError(RuntimeError):
    """Raised when the plugin manifest cannot be updated."""


class MarkerNotFoundError(ManifestError):
    """Raised when a named autogenerated region is missing from the manifest."""

    def __init__(self, key: str, marker: str) -> None:
        super().__init__(f"Manifest region {key} is missing marker: {marker.strip()}")
        self.key = key
        self.marker = marker


@dataclass(frozen=True)
class RegionSpan:
    """Character span of the content between a begin/end marker pair."""

    key: str
    start: int
    end: int

    def slice(self, text: str) -> str:
        return text[self.start : self.end]


class MarkerManager:
    """Locates and rewrites ``<!-- AUTOGENERATED: KEY_BEGIN/END -->`` regions.

    The region body starts after the line ending in ``KEY_BEGIN -->`` and stops
    before the newline that precedes the indented ``KEY_END`` comment, so both
    marker lines and their indentation survive a replacement untouched.
    """

    BEGIN_FMT = "{key}_BEGIN -->\n"
    END_FMT = "<!-- AUTOGENERATED: {key}_END"

    def find_region(self, text: str, key: str, *, start: int = 0) -> RegionSpan:
        """Return the body span of region ``key`` at or after ``start``."""
        begin = self.BEGIN_FMT.format(key=key)
        begin_index = text.find(begin, start)
        if begin_index == -1:
            raise MarkerNotFoundError(key, begin)
        body_start = begin_index + len(begin)

        end = self.END_FMT.format(key=key)
        end_index = text.find(end, body_start)
        if end_index == -1:
            raise MarkerNotFoundError(key, end)

        # The body stops at the last newline of the whitespace run before the
        # end marker; at least one indent character must follow that newline.
        gap = text[body_start:end_index]
        trailing = len(gap) - len(gap.rstrip())
        newline = gap.rfind("\n", len(gap) - trailing, len(gap) - 1)
        if newline == -1:
            raise MarkerNotFoundError(key, end)
        return RegionSpan(key=key, start=body_start, end=body_start + newline)

    def replace(self, text: str, replacements: Sequence[Tuple[str, str]]) -> str:
        """Replace region bodies in order; each region must follow the previous one.

        All regions are located before any text changes, so a missing marker
        leaves the input untouched.
        """
        spans = []
        position = 0
        for key, body in replacements:
            span = self.find_region(text, key, start=position)
            spans.append((span, body))
            position = span.end

        pieces = []
        cursor = 0
        for span, body in spans:
            pieces.append(text[cursor : span.start])
            pieces.append(body)
            cursor = span.end
        pieces.append(text[cursor:])
        return "".join(pieces)

    def extract(self, text: str, keys: Sequence[str]) -> Dict[str, str]:
        """Return the current body of each region in ``keys``."""
        blocks: Dict[str, str] = {}
        position = 0
        for key in keys:
            span = self.find_region(text, key, start=position)
            blocks[key] = span.slice(text)
            position = span.end
        return blocks


__all__ = ["ManifestError", "MarkerManager", "MarkerNotFoundError", "RegionSpan"]
