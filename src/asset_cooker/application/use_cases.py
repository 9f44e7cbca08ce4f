"""Application use-case assembling and running a cook."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from asset_cooker.application.options import CookOptions
from asset_cooker.application.pipeline import PipelineDriver
from asset_cooker.application.results import RunSummary
from asset_cooker.errors import SourceTreeError
from asset_cooker.handlers.registry import create_default_registry
from asset_cooker.ledger import BuildLedger, ledger_file_name
from asset_cooker.schemas import CookRequest
from asset_cooker.settings import load_settings

logger = logging.getLogger(__name__)


def build_cook_options(
    *,
    source_dir: Path,
    output_dir: Path,
    platform: str,
    configuration: str,
    ledger_dir: Path | None = None,
    force: bool = False,
) -> CookOptions:
    """Validate run arguments and prepare the source and output trees.

    Raises
    ------
    SourceTreeError
        If arguments are invalid or the source directory does not exist.
    """
    try:
        request = CookRequest(
            source_dir=source_dir,
            output_dir=output_dir,
            platform=platform,
            configuration=configuration,
            ledger_dir=ledger_dir,
        )
    except ValidationError as exc:
        raise SourceTreeError(f"Invalid cook arguments: {exc}") from exc

    source_root = request.source_dir.expanduser().resolve()
    output_root = request.output_dir.expanduser().resolve()
    if not source_root.is_dir():
        raise SourceTreeError(f"Content directory {source_root} does not exist.")
    if not output_root.exists():
        logger.warning("Output directory %s does not exist; creating it.", output_root)
        output_root.mkdir(parents=True)

    ledger_root = (request.ledger_dir or Path.cwd()).expanduser().resolve()
    return CookOptions(
        source_root=source_root,
        output_root=output_root,
        platform=request.platform,
        configuration=request.configuration,
        ledger_path=ledger_root / ledger_file_name(request.platform, request.configuration),
        force=force,
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
    """Use-case: cook changed assets from a source tree into an output tree."""
    options = build_cook_options(
        source_dir=source_dir,
        output_dir=output_dir,
        platform=platform,
        configuration=configuration,
        ledger_dir=ledger_dir,
        force=force,
    )
    logger.info(
        "Running asset cooker with content directory %s, output directory %s, "
        "platform %s, configuration %s",
        options.source_root,
        options.output_root,
        options.platform,
        options.configuration,
    )

    settings = load_settings(options.source_root)
    registry = create_default_registry(settings, extra_modules=handler_modules)
    ledger = BuildLedger.load(options.ledger_path)
    driver = PipelineDriver(options, settings, registry, ledger)
    return driver.run()
