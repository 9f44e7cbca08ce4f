"""Copy platform runtime libraries into the output tree."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from asset_cooker.application.results import LibraryCopyOutcome
from asset_cooker.schemas import PipelineSettings

logger = logging.getLogger(__name__)


def copy_libraries(
    settings: PipelineSettings,
    platform: str,
    source_root: Path,
    output_root: Path,
) -> list[LibraryCopyOutcome]:
    """Copy the platform's library files into the output tree.

    Parameters
    ----------
    settings : PipelineSettings
        Settings holding ``libraryCopies``.
    platform : str
        Active platform key.
    source_root : Path
        Root that library ``relativePath`` entries are resolved against.
    output_root : Path
        Root that ``outputRelativePath`` entries are resolved against.

    Returns
    -------
    list[LibraryCopyOutcome]
        One outcome per configured entry. Missing sources, existing
        destinations and copy failures are reported, never raised.
    """
    outcomes: list[LibraryCopyOutcome] = []
    for entry in settings.library_copies.get(platform, []):
        source = source_root / entry.relative_path
        destination = output_root / entry.output_relative_path / source.name
        if not source.is_file():
            logger.warning("Library copy file %s does not exist; skipping.", source)
            outcomes.append(LibraryCopyOutcome(source, destination, False, "missing source"))
            continue
        if destination.exists():
            logger.debug("Library file %s already exists at %s; skipping.", source, destination)
            outcomes.append(LibraryCopyOutcome(source, destination, False, "already present"))
            continue

        try:
            logger.debug("Copying library file %s to %s", source, destination)
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, destination)
        except OSError as exc:
            logger.error("Failed to copy library file %s to %s: %s", source, destination, exc)
            outcomes.append(LibraryCopyOutcome(source, destination, False, str(exc)))
            continue
        outcomes.append(LibraryCopyOutcome(source, destination, True))
    return outcomes
