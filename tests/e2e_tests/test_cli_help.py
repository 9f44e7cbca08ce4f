"""End-to-end smoke test for CLI help output."""

from __future__ import annotations

import shutil
import subprocess

import pytest

import asset_cooker


def test_package_import_smoke() -> None:
    """Ensure package can be imported in the test process."""
    assert asset_cooker.__version__


def test_cli_help_smoke() -> None:
    """Ensure the installed CLI entrypoint responds to --help."""
    if shutil.which("asset-cooker") is None:
        pytest.skip("asset-cooker console script is not installed")
    result = subprocess.run(
        ["asset-cooker", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "Incrementally convert source assets" in result.stdout
