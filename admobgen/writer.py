"""Full-overwrite writes for generated files."""

from __future__ import annotations

import difflib
from pathlib import Path, PurePosixPath
from typing import Optional

from .logging import get_logger
from .models import RenderedFile, WriteOutcome

logger = get_logger("writer")


def _read_existing(path: Path) -> Optional[str]:
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")


def unified_diff(rel_path: PurePosixPath, original: Optional[str], updated: str) -> str:
    diff = difflib.unified_diff(
        (original or "").splitlines(keepends=True),
        updated.splitlines(keepends=True),
        fromfile=f"{rel_path} (original)" if original is not None else "/dev/null",
        tofile=f"{rel_path} (updated)",
    )
    return "".join(diff)


def write_text(root: Path, rel_path: PurePosixPath, content: str, *, dry_run: bool = False) -> WriteOutcome:
    """Overwrite ``root / rel_path`` with ``content`` unless ``dry_run`` is set.

    The file is rewritten even when the content is unchanged; no merging or
    appending ever happens. I/O errors propagate to the caller.
    """
    target = root / rel_path
    original = _read_existing(target)
    changed = original != content
    diff = unified_diff(rel_path, original, content) if changed else ""

    if dry_run:
        logger.debug("Dry-run: %s %s", "would update" if changed else "unchanged", rel_path)
        return WriteOutcome(path=rel_path, changed=changed, diff=diff)

    target.write_text(content, encoding="utf-8")
    logger.debug("Wrote %s (%d bytes)", rel_path, len(content.encode("utf-8")))
    return WriteOutcome(path=rel_path, changed=changed, diff=diff)


def write_rendered(root: Path, rendered: RenderedFile, *, dry_run: bool = False) -> WriteOutcome:
    return write_text(root, rendered.path, rendered.content, dry_run=dry_run)


__all__ = ["unified_diff", "write_rendered", "write_text"]
