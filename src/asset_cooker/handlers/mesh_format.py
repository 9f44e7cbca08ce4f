"""Binary mesh layout consumed by the engine runtime.

Layout (little-endian)::

    u32 magic ("PAWS")
    u32 submesh count
    per submesh:
        u32 vertex count, u32 index count, u32 material index
        vertex count * (f32 position[3], f32 normal[3], f32 uv[2])
        index count * u16
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from asset_cooker.errors import HandlerError

MESH_MAGIC = 0x53574150
MAX_INDEX = np.iinfo(np.uint16).max


@dataclass
class SubMesh:
    """Triangulated geometry sharing one material."""

    positions: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray
    material_index: int = 0
    name: str = field(default="")

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def index_count(self) -> int:
        return int(self.indices.size)


def _vertex_block(submesh: SubMesh) -> bytes:
    count = submesh.vertex_count
    positions = np.asarray(submesh.positions, dtype="<f4").reshape(count, 3)
    normals = np.asarray(submesh.normals, dtype="<f4").reshape(count, 3)
    uvs = np.asarray(submesh.uvs, dtype="<f4").reshape(count, 2)
    return np.hstack([positions, normals, uvs]).astype("<f4").tobytes()


def _index_block(submesh: SubMesh) -> bytes:
    indices = np.asarray(submesh.indices).reshape(-1)
    if indices.size and (indices.min() < 0 or indices.max() > MAX_INDEX):
        raise HandlerError(
            f"Submesh '{submesh.name}' has indices outside the 16-bit range "
            f"(max {int(indices.max())})."
        )
    return indices.astype("<u2").tobytes()


def encode_mesh(submeshes: Sequence[SubMesh]) -> bytes:
    """Encode submeshes into the runtime mesh layout."""
    chunks = [np.array([MESH_MAGIC, len(submeshes)], dtype="<u4").tobytes()]
    for submesh in submeshes:
        header = [submesh.vertex_count, submesh.index_count, submesh.material_index]
        chunks.append(np.array(header, dtype="<u4").tobytes())
        chunks.append(_vertex_block(submesh))
        chunks.append(_index_block(submesh))
    return b"".join(chunks)


def write_mesh(path: Path, submeshes: Sequence[SubMesh]) -> Path:
    """Encode submeshes and write them to ``path``."""
    payload = encode_mesh(submeshes)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)
    return path
