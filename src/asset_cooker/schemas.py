"""Pydantic schemas for runtime validation of cooker inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class LibraryToCopy(BaseModel):
    """Auxiliary file copied verbatim into the output tree."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    relative_path: str
    output_relative_path: str = ""

    @field_validator("relative_path")
    @classmethod
    def _validate_relative_path(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("relativePath cannot be empty.")
        return value


class PipelineSettings(BaseModel):
    """Settings document stored in the source root."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    ignored_file_patterns: list[str] = Field(default_factory=list)
    speculative_path_additions: list[str] = Field(default_factory=list)
    library_copies: dict[str, list[LibraryToCopy]] = Field(default_factory=dict)
    processor_settings: dict[str, str] = Field(default_factory=dict)

    def processor_setting(self, key: str, default: str = "") -> str:
        """Return a processor setting, or ``default`` when it is not set."""
        return self.processor_settings.get(key, default)

    def output_extension(self, key: str, default: str) -> str:
        """Return an extension setting with a leading dot, e.g. ``spv`` -> ``.spv``."""
        extension = self.processor_setting(key, default).strip() or default
        return extension if extension.startswith(".") else f".{extension}"


class CookRequest(BaseModel):
    """Validated positional arguments of a cooking run."""

    model_config = ConfigDict(extra="forbid")

    source_dir: Path
    output_dir: Path
    platform: str
    configuration: str
    ledger_dir: Path | None = None

    @field_validator("platform", "configuration")
    @classmethod
    def _validate_target(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("platform and configuration cannot be empty.")
        if any(sep in value for sep in ("/", "\\")):
            raise ValueError("platform and configuration cannot contain path separators.")
        return value
