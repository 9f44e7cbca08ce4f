"""Shared type aliases used across the cooker modules."""

from __future__ import annotations

from collections.abc import Mapping

WILDCARD_EXTENSION = "*"

type ExtensionClaim = tuple[str, int]
type ProcessorSettings = Mapping[str, str]
