#!/usr/bin/env python3
"""
asset_cooker.cli.cli

Typer-based CLI for cooking a source asset tree into an output tree.

Examples
--------
Install core + mesh support:

    uv pip install -e ".[mesh]"

Cook assets for a target:

    asset-cooker cook Content Build/Content linux Debug
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path

import typer

from asset_cooker.errors import CookerError, HandlerRegistrationError

app = typer.Typer(
    name="asset-cooker",
    help="Incrementally convert source assets into build-ready artifacts.",
    no_args_is_help=True,
)

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    """Configure root logging once for the process.

    Parameters
    ----------
    verbose : bool
        Whether per-file trace messages (DEBUG) should be shown.
    """
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)


def _print_cook_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly fatal error.

    Parameters
    ----------
    exc : Exception
        Exception raised before or around the pipeline run.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log per-file trace messages."
    ),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    verbose : bool, default=False
        Whether to log at DEBUG level.
    """
    _configure_logging(verbose)
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("cook")
def cook_cmd(
    ctx: typer.Context,
    source_dir: Path = typer.Argument(..., help="Content source directory."),
    output_dir: Path = typer.Argument(..., help="Content output directory."),
    platform: str = typer.Argument(..., help="Target platform, e.g. linux or windows."),
    configuration: str = typer.Argument(..., help="Build configuration, e.g. Debug."),
    ledger_dir: Path | None = typer.Option(
        None,
        "--ledger-dir",
        help="Directory holding the last-processed ledger (default: current directory).",
    ),
    force: bool = typer.Option(
        False, "--force", help="Ignore the ledger and import every asset."
    ),
    handler_module: list[str] | None = typer.Option(
        None,
        "--handler-module",
        help="Handler module import path or file path (repeatable).",
    ),
) -> None:
    """Cook changed assets from SOURCE_DIR into OUTPUT_DIR.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    source_dir : Path
        Root of the source asset tree.
    output_dir : Path
        Root of the mirrored output tree; created when missing.
    platform : str
        Platform key for library copies and the ledger file name.
    configuration : str
        Build configuration for the ledger file name.

    Notes
    -----
    - Individual asset failures are logged and do not change the exit code.
    - Concurrent runs sharing a ledger directory are not supported.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from asset_cooker.application.use_cases import cook_content

        summary = cook_content(
            source_dir=source_dir,
            output_dir=output_dir,
            platform=platform,
            configuration=configuration,
            ledger_dir=ledger_dir,
            force=force,
            handler_modules=handler_module,
        )
    except CookerError as exc:
        raise typer.Exit(code=_print_cook_error(exc, debug))
    except Exception as exc:
        raise typer.Exit(code=_print_cook_error(exc, debug))
    typer.echo(f"✓ Cooked: {summary.describe()}")


@app.command("handlers")
def handlers_cmd(
    source_dir: Path | None = typer.Argument(
        None,
        exists=True,
        file_okay=False,
        help="Optional source directory whose settings configure the handlers.",
    ),
    handler_module: list[str] | None = typer.Option(
        None,
        "--handler-module",
        help="Handler module import path or file path (repeatable).",
    ),
) -> None:
    """Print which handler each extension resolves to."""
    from asset_cooker.handlers.registry import create_default_registry
    from asset_cooker.schemas import PipelineSettings
    from asset_cooker.settings import load_settings

    settings = (
        load_settings(source_dir.resolve(), write_defaults=False) if source_dir else PipelineSettings()
    )
    try:
        registry = create_default_registry(settings, extra_modules=handler_module)
    except HandlerRegistrationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    for registration in registry.registrations():
        typer.echo(
            f"{registration.extension}: {registration.handler.name} "
            f"(priority {registration.priority})"
        )
    wildcard = registry.wildcard()
    if wildcard is not None:
        typer.echo(f"*: {wildcard.handler.name} (priority {wildcard.priority})")
    else:
        typer.echo("*: <none>")


if __name__ == "__main__":
    app()
