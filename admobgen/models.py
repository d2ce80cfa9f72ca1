"""Core data models shared across admobgen components."""

from dataclasses import dataclass
from pathlib import PurePosixPath


@dataclass(frozen=True)
class RenderedFile:
    """Generated text destined for a path relative to the packages root."""

    path: PurePosixPath
    content: str


@dataclass(frozen=True)
class ManifestEntry:
    """A single ``<source-file>`` tag discovered for one platform."""

    platform: str
    tag: str

    def __str__(self) -> str:
        return self.tag


@dataclass
class WriteOutcome:
    """Result of writing (or previewing) one generated file."""

    path: PurePosixPath
    changed: bool
    diff: str = ""
