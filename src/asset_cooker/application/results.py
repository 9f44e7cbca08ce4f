"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class OutcomeKind(str, Enum):
    """What happened to one source file during the walk."""

    SKIPPED = "skipped"
    PROCESSED = "processed"
    FAILED = "failed"
    UNHANDLED = "unhandled"


@dataclass(frozen=True)
class ProcessingOutcome:
    """Per-file walk outcome, used for logging and summaries only."""

    source_path: Path
    kind: OutcomeKind
    handler_name: str | None = None
    output_path: Path | None = None
    detail: str = ""


@dataclass(frozen=True)
class LibraryCopyOutcome:
    """Result of copying one library file."""

    source_path: Path
    destination: Path
    copied: bool
    detail: str = ""


@dataclass
class RunSummary:
    """Structured outcome of a pipeline run."""

    outcomes: list[ProcessingOutcome] = field(default_factory=list)
    library_copies: list[LibraryCopyOutcome] = field(default_factory=list)

    def count(self, kind: OutcomeKind) -> int:
        return sum(1 for outcome in self.outcomes if outcome.kind is kind)

    def of_kind(self, kind: OutcomeKind) -> list[ProcessingOutcome]:
        return [outcome for outcome in self.outcomes if outcome.kind is kind]

    @property
    def processed(self) -> int:
        return self.count(OutcomeKind.PROCESSED)

    @property
    def failed(self) -> int:
        return self.count(OutcomeKind.FAILED)

    @property
    def skipped(self) -> int:
        return self.count(OutcomeKind.SKIPPED)

    @property
    def unhandled(self) -> int:
        return self.count(OutcomeKind.UNHANDLED)

    def describe(self) -> str:
        """Return a one-line human readable summary."""
        copied = sum(1 for entry in self.library_copies if entry.copied)
        return (
            f"{self.processed} processed, {self.skipped} skipped, "
            f"{self.failed} failed, {self.unhandled} unhandled, "
            f"{copied} libraries copied"
        )
