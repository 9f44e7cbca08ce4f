"""Shared pytest configuration, marker assignment and content fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def content_tree(tmp_path: Path) -> Path:
    """Create a small source tree with shader, model and text assets."""
    root = tmp_path / "Content"
    files = {
        "Shaders/a.glsl": "#version 450\nvoid main() {}\n",
        "Models/b.glb": "glb placeholder",
        "Docs/c.txt": "plain text",
    }
    for relative, text in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return root
