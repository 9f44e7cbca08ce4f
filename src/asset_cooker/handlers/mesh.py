"""Mesh handler backed by trimesh."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from asset_cooker.errors import HandlerError
from asset_cooker.handlers.mesh_format import SubMesh, write_mesh
from asset_cooker.schemas import PipelineSettings
from asset_cooker.types import ExtensionClaim

logger = logging.getLogger(__name__)


def load_submeshes(source_path: Path) -> list[SubMesh]:
    """Load and triangulate a model file into submeshes.

    Parameters
    ----------
    source_path : Path
        Model file readable by trimesh.

    Returns
    -------
    list[SubMesh]
        One submesh per geometry, with scene transforms applied.

    Raises
    ------
    HandlerError
        If trimesh is not installed or cannot read the file.
    """
    try:
        import trimesh
    except Exception as exc:
        raise HandlerError(
            "trimesh is required for mesh import. Install extra: asset-cooker[mesh]"
        ) from exc

    try:
        scene = trimesh.load(str(source_path), force="scene")
    except Exception as exc:
        raise HandlerError(f"Failed to import {source_path.name}: {exc}") from exc

    materials: dict[int, int] = {}
    submeshes: list[SubMesh] = []
    for index, geometry in enumerate(scene.dump()):
        if not hasattr(geometry, "faces"):
            continue
        visual = getattr(geometry, "visual", None)
        material = getattr(visual, "material", None)
        material_index = 0
        if material is not None:
            material_index = materials.setdefault(id(material), len(materials))

        vertex_count = len(geometry.vertices)
        uv = getattr(visual, "uv", None)
        if uv is not None and len(uv) == vertex_count:
            uvs = np.asarray(uv)[:, :2]
        else:
            uvs = np.zeros((vertex_count, 2))
        name = str(geometry.metadata.get("name", f"submesh_{index}"))
        submeshes.append(
            SubMesh(
                positions=np.asarray(geometry.vertices),
                normals=np.asarray(geometry.vertex_normals),
                uvs=uvs,
                indices=np.asarray(geometry.faces).reshape(-1),
                material_index=material_index,
                name=name,
            )
        )
        logger.info(
            "Submesh %s has %d vertices and %d indices",
            name,
            vertex_count,
            submeshes[-1].index_count,
        )

    if not submeshes:
        raise HandlerError(f"{source_path.name} contains no triangle geometry.")
    return submeshes


class MeshHandler:
    """Convert model files into the runtime mesh layout."""

    name = "mesh"

    def __init__(self, settings: PipelineSettings | None = None) -> None:
        self._settings = settings or PipelineSettings()

    def claimed_extensions(self) -> list[ExtensionClaim]:
        return [(".glb", 1), (".gltf", 1), (".obj", 1)]

    def import_file(self, source_path: Path, output_path: Path) -> Path:
        mesh_path = output_path.with_suffix(
            self._settings.output_extension("MeshExtension", ".mesh")
        )
        if mesh_path.exists():
            mesh_path.unlink()
        write_mesh(mesh_path, load_submeshes(source_path))
        logger.debug("%s -> %s", source_path, mesh_path)
        return mesh_path
