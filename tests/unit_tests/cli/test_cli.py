"""Unit tests for CLI command behavior."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from asset_cooker.application.results import OutcomeKind, ProcessingOutcome, RunSummary
from asset_cooker.cli import cli as cli_module
from asset_cooker.errors import SourceTreeError

runner = CliRunner()


def test_help_shows_commands() -> None:
    """Ensure top-level help lists the commands."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "cook" in result.output
    assert "handlers" in result.output


def test_cook_requires_four_positional_arguments(tmp_path: Path) -> None:
    """A wrong argument count is a usage error."""
    result = runner.invoke(cli_module.app, ["cook", str(tmp_path), str(tmp_path), "linux"])
    assert result.exit_code == 2


def test_cook_forwards_arguments(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Forward positional arguments and options to the use-case."""
    called: dict[str, object] = {}

    def fake_cook(**kwargs: object) -> RunSummary:
        called.update(kwargs)
        return RunSummary(
            outcomes=[ProcessingOutcome(tmp_path / "a.txt", OutcomeKind.FAILED, "copy")]
        )

    import asset_cooker.application.use_cases as use_cases

    monkeypatch.setattr(use_cases, "cook_content", fake_cook)
    result = runner.invoke(
        cli_module.app,
        [
            "cook",
            str(tmp_path / "src"),
            str(tmp_path / "out"),
            "linux",
            "Debug",
            "--force",
            "--ledger-dir",
            str(tmp_path),
            "--handler-module",
            "studio.handlers",
        ],
    )

    assert result.exit_code == 0, result.output
    assert called == {
        "source_dir": tmp_path / "src",
        "output_dir": tmp_path / "out",
        "platform": "linux",
        "configuration": "Debug",
        "ledger_dir": tmp_path,
        "force": True,
        "handler_modules": ["studio.handlers"],
    }
    assert "1 failed" in result.output


def test_cook_missing_source_exits_nonzero(tmp_path: Path) -> None:
    """Fatal startup errors produce a non-zero exit code."""
    result = runner.invoke(
        cli_module.app,
        ["cook", str(tmp_path / "missing"), str(tmp_path / "out"), "linux", "Debug"],
    )
    assert result.exit_code == 1
    assert "SourceTreeError" in result.output


def test_cook_debug_prints_traceback(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """--debug adds a traceback to fatal errors."""

    def fake_cook(**_kwargs: object) -> RunSummary:
        raise SourceTreeError("boom", exit_code=3)

    import asset_cooker.application.use_cases as use_cases

    monkeypatch.setattr(use_cases, "cook_content", fake_cook)
    result = runner.invoke(
        cli_module.app,
        ["--debug", "cook", str(tmp_path), str(tmp_path), "linux", "Debug"],
    )
    assert result.exit_code == 3
    assert "Traceback" in result.output


def test_handlers_lists_resolution_table() -> None:
    """Print every active extension claim and the catch-all."""
    result = runner.invoke(cli_module.app, ["handlers"])
    assert result.exit_code == 0, result.output
    assert ".glsl: shader (priority 1)" in result.output
    assert ".glb: mesh (priority 1)" in result.output
    assert "*: copy (priority 1)" in result.output


def test_handlers_rejects_bad_module() -> None:
    """Surface handler module import failures as usage errors."""
    result = runner.invoke(
        cli_module.app, ["handlers", "--handler-module", "module.that.does.not.exist"]
    )
    assert result.exit_code != 0
    assert "Unable to import handler module" in result.output


def test_handlers_does_not_write_settings(tmp_path: Path) -> None:
    """Listing handlers for a source tree never creates a settings file."""
    result = runner.invoke(cli_module.app, ["handlers", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "*: copy (priority 1)" in result.output
    assert not (tmp_path / "cooker_settings.json").exists()
