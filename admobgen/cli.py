"""CLI entrypoint for admobgen."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .markers import ManifestError
from .orchestrator import Orchestrator

DEFAULT_PACKAGES_DIR = "packages"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="admobgen",
        description=(
            "Generate admob constant sources for Java, Swift and TypeScript and "
            "sync plugin.xml with the platform sources."
        ),
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=DEFAULT_PACKAGES_DIR,
        help=f"Path to the packages directory (defaults to ./{DEFAULT_PACKAGES_DIR}).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview generated changes without writing any files.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a DEBUG-level log of the run to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for admobgen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()
    dry_run = bool(args.dry_run)

    try:
        result = orchestrator.run(args.path, dry_run=dry_run)
    except (ConfigError, ManifestError) as exc:
        parser.exit(1, f"admobgen failed: {exc}\n")
    except (OSError, UnicodeDecodeError) as exc:
        parser.exit(1, f"admobgen failed: {exc}\nRun with --verbose for more details.\n")

    changed = result.changed
    if not changed:
        message = "Generated files already up to date"
        if dry_run:
            message += " (dry-run)"
        print(message)
        return

    if dry_run:
        print("Generated changes (dry-run):")
        for outcome in changed:
            print(outcome.diff or f"(no diff for {outcome.path})")
        return

    for outcome in changed:
        print(f"Updated {_relativize(result.root / outcome.path)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
