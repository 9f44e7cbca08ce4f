"""Loading and persistence of the settings document in the source root."""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path

from pydantic import ValidationError

from asset_cooker.errors import SettingsError
from asset_cooker.schemas import PipelineSettings

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "cooker_settings.json"

# String literals are matched first so their contents are never rewritten.
_STRING = r'"(?:\\.|[^"\\])*"'
_COMMENTS = re.compile(_STRING + r"|//[^\n]*|/\*.*?\*/", re.DOTALL)
_TRAILING_COMMAS = re.compile(_STRING + r"|,(?=\s*[}\]])")


def settings_path(source_root: Path) -> Path:
    """Return the settings document location for a source root."""
    return source_root / SETTINGS_FILE_NAME


def _strip_json_extensions(text: str) -> str:
    """Remove comments and trailing commas outside string literals."""

    def keep_strings(match: re.Match[str]) -> str:
        token = match.group(0)
        if token.startswith('"'):
            return token
        return " " if token.startswith("/*") else ""

    return _TRAILING_COMMAS.sub(keep_strings, _COMMENTS.sub(keep_strings, text))


def parse_settings(text: str) -> PipelineSettings:
    """Parse a settings document.

    Comments (``//`` and ``/* */``) and trailing commas are accepted.

    Parameters
    ----------
    text : str
        JSON document text.

    Returns
    -------
    PipelineSettings
        Validated settings.

    Raises
    ------
    SettingsError
        If the text is not valid JSON or does not match the schema.
    """
    try:
        payload = json.loads(_strip_json_extensions(text))
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Invalid settings JSON: {exc}") from exc
    try:
        return PipelineSettings.model_validate(payload)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings document: {exc}") from exc


def write_settings(path: Path, settings: PipelineSettings) -> None:
    """Write settings as indented camelCase JSON."""
    path.write_text(
        settings.model_dump_json(by_alias=True, indent=2) + "\n",
        encoding="utf-8",
    )


def load_settings(source_root: Path, *, write_defaults: bool = True) -> PipelineSettings:
    """Load settings from the source root, falling back to defaults.

    A missing document is created with default values. A document that
    cannot be parsed is left untouched and defaults are used for this run.

    Parameters
    ----------
    source_root : Path
        Root of the source asset tree.
    write_defaults : bool, default=True
        Whether a missing document is created on disk.

    Returns
    -------
    PipelineSettings
        Loaded or default settings.
    """
    path = settings_path(source_root)
    if not path.exists():
        settings = PipelineSettings()
        if not write_defaults:
            logger.info("No settings file found (checked for %s); using defaults.", path)
            return settings
        logger.warning(
            "No settings file found (checked for %s); using defaults, writing new settings file.",
            path,
        )
        write_settings(path, settings)
        return settings

    try:
        settings = parse_settings(path.read_text(encoding="utf-8"))
    except SettingsError as exc:
        logger.error("Failed to load settings file %s: %s", path, exc)
        return PipelineSettings()

    logger.info("Loaded settings: %s", path)
    return settings


def path_with_additions(settings: PipelineSettings, base_path: str | None = None) -> str:
    """Return a PATH value extended with existing speculative directories.

    Parameters
    ----------
    settings : PipelineSettings
        Settings holding ``speculativePathAdditions``.
    base_path : str | None, optional
        PATH to extend; defaults to the current process PATH.

    Returns
    -------
    str
        PATH string for spawned tools.
    """
    parts = [base_path if base_path is not None else os.environ.get("PATH", "")]
    for addition in settings.speculative_path_additions:
        if Path(addition).is_dir():
            parts.append(addition)
        else:
            logger.debug("Speculative PATH addition %s does not exist; ignoring.", addition)
    return os.pathsep.join(part for part in parts if part)
