"""Unit tests for the library copy stage."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from asset_cooker.application.library_copy import copy_libraries
from asset_cooker.schemas import LibraryToCopy, PipelineSettings


def _settings(entries: dict[str, list[tuple[str, str]]]) -> PipelineSettings:
    return PipelineSettings(
        library_copies={
            platform: [
                LibraryToCopy(relative_path=src, output_relative_path=out) for src, out in items
            ]
            for platform, items in entries.items()
        }
    )


def test_copies_into_output_subdirectory(tmp_path: Path) -> None:
    """Copy verbatim, preserving the name, creating directories."""
    source, output = tmp_path / "src", tmp_path / "out"
    (source / "Libs").mkdir(parents=True)
    (source / "Libs" / "libfoo.so").write_bytes(b"\x7fELF")

    outcomes = copy_libraries(
        _settings({"linux": [("Libs/libfoo.so", "bin/lib")]}), "linux", source, output
    )

    assert [o.copied for o in outcomes] == [True]
    assert (output / "bin" / "lib" / "libfoo.so").read_bytes() == b"\x7fELF"


def test_missing_source_is_skipped_and_others_still_copy(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """A missing library is a logged skip; later entries still copy."""
    source, output = tmp_path / "src", tmp_path / "out"
    source.mkdir()
    (source / "present.so").write_bytes(b"ok")

    outcomes = copy_libraries(
        _settings({"linux": [("absent.so", ""), ("present.so", "")]}), "linux", source, output
    )

    assert [(o.copied, o.detail) for o in outcomes] == [(False, "missing source"), (True, "")]
    assert (output / "present.so").exists()
    assert "absent.so does not exist" in caplog.text


def test_existing_destination_is_not_overwritten(tmp_path: Path) -> None:
    """Pre-existing destinations are left alone."""
    source, output = tmp_path / "src", tmp_path / "out"
    source.mkdir()
    output.mkdir()
    (source / "lib.dll").write_bytes(b"new")
    (output / "lib.dll").write_bytes(b"old")

    outcomes = copy_libraries(_settings({"windows": [("lib.dll", "")]}), "windows", source, output)

    assert outcomes[0].detail == "already present"
    assert (output / "lib.dll").read_bytes() == b"old"


def test_copy_failure_does_not_abort(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Failures on one entry are logged and the next entry proceeds."""
    source, output = tmp_path / "src", tmp_path / "out"
    source.mkdir()
    (source / "a.so").write_bytes(b"a")
    (source / "b.so").write_bytes(b"b")
    real_copy = shutil.copy2

    def flaky_copy(src: Path, dst: Path) -> object:
        if Path(src).name == "a.so":
            raise PermissionError("denied")
        return real_copy(src, dst)

    monkeypatch.setattr("asset_cooker.application.library_copy.shutil.copy2", flaky_copy)
    outcomes = copy_libraries(
        _settings({"linux": [("a.so", ""), ("b.so", "")]}), "linux", source, output
    )

    assert [o.copied for o in outcomes] == [False, True]
    assert outcomes[0].detail == "denied"


def test_unknown_platform_is_noop(tmp_path: Path) -> None:
    """Platforms without entries copy nothing."""
    assert copy_libraries(_settings({"linux": [("a.so", "")]}), "macos", tmp_path, tmp_path) == []
