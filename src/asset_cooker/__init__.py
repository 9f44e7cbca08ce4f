"""Incremental asset cooking pipeline."""

from __future__ import annotations

from asset_cooker.application import cook_content
from asset_cooker.application.results import OutcomeKind, RunSummary

__version__ = "0.1.0"

__all__ = ["OutcomeKind", "RunSummary", "cook_content", "__version__"]
