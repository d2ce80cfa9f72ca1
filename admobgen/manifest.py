"""Source-file discovery and plugin.xml synchronisation."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, List, Sequence

from .logging import get_logger
from .markers import ManifestError, MarkerManager, MarkerNotFoundError
from .models import ManifestEntry, WriteOutcome
from .writer import write_text

ANDROID = "android"
IOS = "ios"

ANDROID_MARKER = "ANDROID"
IOS_MARKER = "IOS"

ANDROID_TARGET_DIR = "src/admob/plugin"
ENTRY_INDENT = " " * 8


def _require_directory(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"Source directory not found: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"Source path is not a directory: {path}")


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _iter_files(root: Path, suffix: str, *, recursive: bool) -> Iterator[str]:
    """Yield POSIX paths relative to ``root`` for visible files ending in ``suffix``."""
    if not recursive:
        with os.scandir(root) as entries:
            for entry in entries:
                if entry.is_file() and not _is_hidden(entry.name) and entry.name.endswith(suffix):
                    yield entry.name
        return

    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""
        dirnames[:] = [name for name in dirnames if not _is_hidden(name)]
        for filename in filenames:
            if _is_hidden(filename) or not filename.endswith(suffix):
                continue
            yield f"{rel_dir}/{filename}" if rel_dir else filename


def android_entry(rel_path: str) -> ManifestEntry:
    """Build the tag for a Java source, mirroring its subdirectory in ``target-dir``."""
    parent = PurePosixPath(rel_path).parent.as_posix()
    sub_dir = "" if parent == "." else f"/{parent}"
    tag = (
        f'{ENTRY_INDENT}<source-file src="src/android/{rel_path}" '
        f'target-dir="{ANDROID_TARGET_DIR}{sub_dir}" />'
    )
    return ManifestEntry(platform=ANDROID, tag=tag)


def ios_entry(name: str) -> ManifestEntry:
    return ManifestEntry(platform=IOS, tag=f'{ENTRY_INDENT}<source-file src="src/ios/{name}" />')


def scan_android(source_dir: Path) -> List[ManifestEntry]:
    """Recursively collect ``*.java`` sources under ``source_dir``."""
    _require_directory(source_dir)
    return [android_entry(rel_path) for rel_path in _iter_files(source_dir, ".java", recursive=True)]


def scan_ios(source_dir: Path) -> List[ManifestEntry]:
    """Collect ``*.swift`` sources directly inside ``source_dir``."""
    _require_directory(source_dir)
    return [ios_entry(name) for name in _iter_files(source_dir, ".swift", recursive=False)]


def render_block(entries: Sequence[ManifestEntry]) -> str:
    return "\n".join(sorted({entry.tag for entry in entries}))


def pending_entries(
    paths: Iterable[PurePosixPath], android_dir: PurePosixPath, ios_dir: PurePosixPath
) -> tuple[List[ManifestEntry], List[ManifestEntry]]:
    """Entries for files that are about to be written but may not exist yet.

    ``paths`` are relative to the packages root and follow the same rules as the
    directory scans: nested ``.java`` under ``android_dir``, top-level ``.swift``
    in ``ios_dir``, hidden names skipped.
    """
    android_entries: List[ManifestEntry] = []
    ios_entries: List[ManifestEntry] = []
    for path in paths:
        if path.suffix == ".java" and path.is_relative_to(android_dir):
            relative = path.relative_to(android_dir)
            if not any(_is_hidden(part) for part in relative.parts):
                android_entries.append(android_entry(relative.as_posix()))
        elif path.suffix == ".swift" and path.parent == ios_dir and not _is_hidden(path.name):
            ios_entries.append(ios_entry(path.name))
    return android_entries, ios_entries


class ManifestUpdater:
    """Rewrites the autogenerated source-file regions of ``plugin.xml``."""

    def __init__(self, marker_manager: MarkerManager | None = None) -> None:
        self.marker_manager = marker_manager or MarkerManager()
        self.logger = get_logger("manifest")

    def scan(self, android_dir: Path, ios_dir: Path) -> tuple[List[ManifestEntry], List[ManifestEntry]]:
        """Scan both platform directories concurrently."""
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="admobgen-scan") as pool:
            android_future = pool.submit(scan_android, android_dir)
            ios_future = pool.submit(scan_ios, ios_dir)
            android_entries = android_future.result()
            ios_entries = ios_future.result()
        self.logger.debug(
            "Discovered %d Android and %d iOS sources", len(android_entries), len(ios_entries)
        )
        return android_entries, ios_entries

    def apply(
        self,
        manifest_text: str,
        android_entries: Sequence[ManifestEntry],
        ios_entries: Sequence[ManifestEntry],
    ) -> str:
        """Return ``manifest_text`` with both regions replaced."""
        return self.marker_manager.replace(
            manifest_text,
            [
                (ANDROID_MARKER, render_block(android_entries)),
                (IOS_MARKER, render_block(ios_entries)),
            ],
        )

    def update(
        self,
        root: Path,
        manifest_path: PurePosixPath,
        android_dir: PurePosixPath,
        ios_dir: PurePosixPath,
        *,
        pending: Iterable[PurePosixPath] = (),
        dry_run: bool = False,
    ) -> WriteOutcome:
        """Synchronise ``root / manifest_path`` with the sources on disk.

        ``pending`` lists generated files that a dry run skipped writing; they are
        listed as if they had been written.
        """
        android_entries, ios_entries = self.scan(root / android_dir, root / ios_dir)
        extra_android, extra_ios = pending_entries(pending, android_dir, ios_dir)
        android_entries.extend(extra_android)
        ios_entries.extend(extra_ios)
        manifest_file = root / manifest_path
        original = manifest_file.read_text(encoding="utf-8")
        try:
            updated = self.apply(original, android_entries, ios_entries)
        except MarkerNotFoundError as exc:
            self.logger.error("Refusing to rewrite %s: %s", manifest_path, exc)
            raise
        outcome = write_text(root, manifest_path, updated, dry_run=dry_run)
        if outcome.changed:
            self.logger.info("Manifest %s updated", manifest_path)
        else:
            self.logger.info("Manifest %s already in sync", manifest_path)
        return outcome


__all__ = [
    "ANDROID",
    "IOS",
    "ManifestError",
    "ManifestUpdater",
    "MarkerNotFoundError",
    "android_entry",
    "ios_entry",
    "pending_entries",
    "render_block",
    "scan_android",
    "scan_ios",
]
