"""Built-in copy and shader handlers."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

from asset_cooker.errors import HandlerError
from asset_cooker.schemas import PipelineSettings
from asset_cooker.settings import path_with_additions
from asset_cooker.types import WILDCARD_EXTENSION, ExtensionClaim

logger = logging.getLogger(__name__)

SHADER_COMPILER = "glslangValidator"


class CopyHandler:
    """Copy any file verbatim into the output tree."""

    name = "copy"

    def claimed_extensions(self) -> list[ExtensionClaim]:
        return [(WILDCARD_EXTENSION, 1)]

    def import_file(self, source_path: Path, output_path: Path) -> Path:
        if output_path.exists():
            output_path.unlink()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source_path, output_path)
        logger.debug("%s -> %s", source_path, output_path)
        return output_path


def find_shader_compiler(
    search_path: str | None = None,
    vulkan_sdk: str | None = None,
) -> Path | None:
    """Locate the shader compiler executable.

    Parameters
    ----------
    search_path : str | None, optional
        PATH-style string to search; defaults to the process PATH.
    vulkan_sdk : str | None, optional
        Vulkan SDK root whose ``bin`` directory is checked as a fallback;
        defaults to ``$VULKAN_SDK``.

    Returns
    -------
    Path | None
        Executable path, or ``None`` when it cannot be found.
    """
    found = shutil.which(SHADER_COMPILER, path=search_path)
    if found:
        return Path(found)

    sdk_root = vulkan_sdk if vulkan_sdk is not None else os.environ.get("VULKAN_SDK")
    if not sdk_root:
        return None
    found = shutil.which(SHADER_COMPILER, path=str(Path(sdk_root) / "bin"))
    return Path(found) if found else None


class ShaderHandler:
    """Compile shaders to SPIR-V with glslangValidator.

    Notes
    -----
    The compiler is located once, on first use. It runs synchronously and has
    no timeout.
    """

    name = "shader"

    def __init__(self, settings: PipelineSettings | None = None) -> None:
        self._settings = settings or PipelineSettings()
        self._compiler: Path | None = None

    def claimed_extensions(self) -> list[ExtensionClaim]:
        return [(".glsl", 1), (".hlsl", 1), (".comp", 1)]

    def _tool_path(self) -> str:
        return path_with_additions(self._settings)

    def compiler(self) -> Path:
        """Return the compiler path, raising ``HandlerError`` if it is missing."""
        if self._compiler is None:
            self._compiler = find_shader_compiler(self._tool_path())
        if self._compiler is None:
            raise HandlerError(
                f"Couldn't find {SHADER_COMPILER}; not in PATH, and VULKAN_SDK is not set "
                "or does not contain it."
            )
        return self._compiler

    def import_file(self, source_path: Path, output_path: Path) -> Path:
        compiler = self.compiler()
        compiled_path = output_path.with_suffix(
            self._settings.output_extension("CompiledShaderExtension", ".spv")
        )
        compiled_path.parent.mkdir(parents=True, exist_ok=True)

        env = dict(os.environ)
        env["PATH"] = self._tool_path()
        completed = subprocess.run(
            [str(compiler), "-V", str(source_path), "-o", str(compiled_path)],
            capture_output=True,
            text=True,
            check=False,
            env=env,
        )
        if completed.returncode != 0:
            details = (completed.stderr or completed.stdout or "").strip()
            raise HandlerError(f"Failed to compile shader {source_path.name}: {details}")
        logger.debug("%s -> %s", source_path, compiled_path)
        return compiled_path
