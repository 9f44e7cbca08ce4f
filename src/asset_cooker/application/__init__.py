"""Application-layer use-cases, options and results."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from asset_cooker.application.options import CookOptions
from asset_cooker.application.results import (
    LibraryCopyOutcome,
    OutcomeKind,
    ProcessingOutcome,
    RunSummary,
)


def cook_content(
    *,
    source_dir: Path,
    output_dir: Path,
    platform: str,
    configuration: str,
    ledger_dir: Path | None = None,
    force: bool = False,
    handler_modules: Iterable[str] | None = None,
) -> RunSummary:
    """Cook a source tree via lazy use-case import."""
    from asset_cooker.application.use_cases import cook_content as _impl

    return _impl(
        source_dir=source_dir,
        output_dir=output_dir,
        platform=platform,
        configuration=configuration,
        ledger_dir=ledger_dir,
        force=force,
        handler_modules=handler_modules,
    )


__all__ = [
    "CookOptions",
    "LibraryCopyOutcome",
    "OutcomeKind",
    "ProcessingOutcome",
    "RunSummary",
    "cook_content",
]
