"""Typed option objects for a cooking run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CookOptions:
    """Resolved locations and switches for one pipeline run."""

    source_root: Path
    output_root: Path
    platform: str
    configuration: str
    ledger_path: Path
    force: bool = False
