"""Pipeline driver: library copies, incremental walk and ledger persistence."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterator
from enum import Enum
from pathlib import Path

from asset_cooker.application.library_copy import copy_libraries
from asset_cooker.application.options import CookOptions
from asset_cooker.application.results import (
    OutcomeKind,
    ProcessingOutcome,
    RunSummary,
)
from asset_cooker.handlers.registry import HandlerRegistry
from asset_cooker.ledger import BuildLedger, modified_time_utc
from asset_cooker.schemas import PipelineSettings
from asset_cooker.settings import SETTINGS_FILE_NAME

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    """Stages of a single pipeline run, in order."""

    INIT = "init"
    LIBRARY_COPY = "library_copy"
    WALK = "walk"
    PERSIST = "persist"
    DONE = "done"


class PipelineDriver:
    """Run one incremental cook over a source tree.

    The driver owns the registry, ledger and settings for the duration of the
    run and is their only mutator. Failures of individual files are logged and
    recorded as outcomes; they never abort the walk.
    """

    def __init__(
        self,
        options: CookOptions,
        settings: PipelineSettings,
        registry: HandlerRegistry,
        ledger: BuildLedger,
    ) -> None:
        self.options = options
        self.settings = settings
        self.registry = registry
        self.ledger = ledger
        self.stage = PipelineStage.INIT

    def run(self) -> RunSummary:
        """Copy libraries, process changed assets and save the ledger."""
        summary = RunSummary()
        if self.options.force:
            logger.warning("Ignoring last processed times; every asset will be imported.")
            self.ledger.clear()

        self.stage = PipelineStage.LIBRARY_COPY
        summary.library_copies = copy_libraries(
            self.settings,
            self.options.platform,
            self.options.source_root,
            self.options.output_root,
        )

        self.stage = PipelineStage.WALK
        summary.outcomes = self.walk()

        self.stage = PipelineStage.PERSIST
        self.ledger.save()

        self.stage = PipelineStage.DONE
        logger.info("Cook finished: %s", summary.describe())
        return summary

    def walk(self) -> list[ProcessingOutcome]:
        """Process every file found under the source root when the walk starts."""
        source_files = list(self.iter_source_files())
        return [self.process_file(path) for path in source_files]

    def iter_source_files(self) -> Iterator[Path]:
        """Yield regular files under the source root in sorted order."""
        for path in sorted(self.options.source_root.rglob("*")):
            if path.is_file():
                yield path

    def is_ignored(self, source_path: Path) -> bool:
        """Check ``source_path`` against the ignored file patterns."""
        relative = source_path.relative_to(self.options.source_root).as_posix()
        return any(
            fnmatch.fnmatchcase(relative, pattern) or fnmatch.fnmatchcase(source_path.name, pattern)
            for pattern in self.settings.ignored_file_patterns
        )

    def output_path_for(self, source_path: Path) -> Path:
        """Mirror a source path onto the output root."""
        return self.options.output_root / source_path.relative_to(self.options.source_root)

    def process_file(self, source_path: Path) -> ProcessingOutcome:
        """Process one source file if it changed since it was last processed.

        Parameters
        ----------
        source_path : Path
            Absolute path of a file under the source root.

        Returns
        -------
        ProcessingOutcome
            What happened to the file. Exceptions raised by handlers are
            captured here and reported as ``FAILED``.
        """
        relative = source_path.relative_to(self.options.source_root)
        if source_path.name == SETTINGS_FILE_NAME:
            return ProcessingOutcome(source_path, OutcomeKind.SKIPPED, detail="settings")
        if self.is_ignored(source_path):
            logger.debug("Ignoring %s", relative)
            return ProcessingOutcome(source_path, OutcomeKind.SKIPPED, detail="ignored")

        try:
            modified_at = modified_time_utc(source_path)
        except (OSError, ValueError, OverflowError) as exc:
            logger.error("Failed to read modification time of %s: %s", relative, exc)
            return ProcessingOutcome(source_path, OutcomeKind.FAILED, detail=str(exc))
        if not self.ledger.is_stale(source_path, modified_at):
            return ProcessingOutcome(source_path, OutcomeKind.SKIPPED, detail="unchanged")

        handler = self.registry.resolve(source_path.suffix)
        if handler is None:
            logger.warning("No handler found for file: %s", source_path)
            return ProcessingOutcome(source_path, OutcomeKind.UNHANDLED)

        try:
            written = handler.import_file(source_path, self.output_path_for(source_path))
        except Exception as exc:
            logger.error(
                "Failed to import file %s with handler %s: %s", relative, handler.name, exc
            )
            logger.debug("Handler failure details", exc_info=True)
            return ProcessingOutcome(
                source_path, OutcomeKind.FAILED, handler_name=handler.name, detail=str(exc)
            )

        self.ledger.mark_processed(source_path, modified_at)
        logger.info("Imported %s with handler %s", relative, handler.name)
        return ProcessingOutcome(
            source_path, OutcomeKind.PROCESSED, handler_name=handler.name, output_path=written
        )
