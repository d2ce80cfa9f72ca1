"""Pipeline orchestration for a generation run."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .config import GeneratorConfig, load_config
from .definitions import Definitions
from .logging import get_logger
from .manifest import ManifestUpdater
from .models import WriteOutcome
from .renderers import OutputTarget
from .writer import write_rendered


@dataclass
class RunResult:
    """Outcome of a generation run."""

    root: Path
    generated: List[WriteOutcome] = field(default_factory=list)
    manifest: Optional[WriteOutcome] = None
    dry_run: bool = False

    @property
    def outcomes(self) -> List[WriteOutcome]:
        outcomes = list(self.generated)
        if self.manifest is not None:
            outcomes.append(self.manifest)
        return outcomes

    @property
    def changed(self) -> List[WriteOutcome]:
        return [outcome for outcome in self.outcomes if outcome.changed]


class Orchestrator:
    """Coordinates constant generation and manifest synchronisation."""

    def __init__(
        self,
        targets: Optional[Iterable[OutputTarget]] = None,
        manifest_updater: ManifestUpdater | None = None,
        definitions: Definitions | None = None,
    ) -> None:
        self.targets = list(targets) if targets is not None else list(OutputTarget)
        self.manifest_updater = manifest_updater or ManifestUpdater()
        self._definitions_override = definitions
        self.logger = get_logger("orchestrator")

    def run(self, path: str | Path, *, dry_run: bool = False) -> RunResult:
        """Render every target, then bring plugin.xml in line with the sources on disk."""
        packages_dir = Path(path).expanduser().resolve()
        if not packages_dir.is_dir():
            raise FileNotFoundError(f"Packages directory not found: {packages_dir}")
        self.logger.info("Starting generation run for %s", packages_dir)

        config = load_config(packages_dir)
        root = config.root
        if config.source is not None:
            self.logger.debug("Loaded configuration from %s", config.source)
        definitions = self._definitions_override or config.definitions

        result = RunResult(root=root, dry_run=dry_run)
        result.generated = self._generate(root, config, definitions, dry_run=dry_run)

        self.logger.info("Synchronising %s", config.manifest_path)
        result.manifest = self.manifest_updater.update(
            root,
            config.manifest_path,
            config.android_dir,
            config.ios_dir,
            pending=[target.path for target in self.targets] if dry_run else (),
            dry_run=dry_run,
        )

        self.logger.info(
            "Generation finished: %d of %d file(s) changed%s",
            len(result.changed),
            len(result.outcomes),
            " (dry-run)" if dry_run else "",
        )
        return result

    def _generate(
        self,
        root: Path,
        config: GeneratorConfig,
        definitions: Definitions,
        *,
        dry_run: bool,
    ) -> List[WriteOutcome]:
        """Run one render/write pipeline per target on a thread pool.

        Every pipeline is allowed to finish before the first failure, in target
        order, is re-raised. Files already written are left in place.
        """
        with ThreadPoolExecutor(
            max_workers=config.max_workers, thread_name_prefix="admobgen-render"
        ) as pool:
            futures: List[Future[WriteOutcome]] = [
                pool.submit(self._render_and_write, root, target, definitions, dry_run)
                for target in self.targets
            ]
            wait(futures)
        return self._collect(futures)

    def _render_and_write(
        self, root: Path, target: OutputTarget, definitions: Definitions, dry_run: bool
    ) -> WriteOutcome:
        self.logger.debug("Rendering %s", target.name)
        outcome = write_rendered(root, target.build(definitions), dry_run=dry_run)
        if outcome.changed:
            self.logger.info("Generated %s", outcome.path)
        else:
            self.logger.debug("%s unchanged", outcome.path)
        return outcome

    def _collect(self, futures: Sequence[Future[WriteOutcome]]) -> List[WriteOutcome]:
        outcomes: List[WriteOutcome] = []
        first_error: BaseException | None = None
        for target, future in zip(self.targets, futures):
            error = future.exception()
            if error is None:
                outcomes.append(future.result())
                continue
            self.logger.error("Failed to generate %s: %s", target.path, error)
            if first_error is None:
                first_error = error
        if first_error is not None:
            raise first_error
        return outcomes


__all__ = ["Orchestrator", "RunResult"]
