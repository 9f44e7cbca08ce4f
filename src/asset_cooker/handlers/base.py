"""Handler protocol for converting a single source asset."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from asset_cooker.types import ExtensionClaim


@runtime_checkable
class AssetHandler(Protocol):
    """Protocol implemented by asset handlers."""

    name: str

    def claimed_extensions(self) -> list[ExtensionClaim]:
        """Return the extensions this handler claims.

        Returns
        -------
        list[tuple[str, int]]
            ``(extension, priority)`` pairs. Extensions include the leading
            dot; ``"*"`` claims every file.
        """

    def import_file(self, source_path: Path, output_path: Path) -> Path:
        """Convert one source asset.

        Parameters
        ----------
        source_path : Path
            Absolute path of the source asset.
        output_path : Path
            Mirrored location in the output tree. Handlers may change the
            extension but write only inside this path's directory.

        Returns
        -------
        Path
            Path of the written artifact.

        Raises
        ------
        Exception
            Any exception marks the asset as failed for this run.
        """
