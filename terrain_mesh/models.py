# region Imports
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from terrain_mesh.config import MAX_MESH_CELLS
from terrain_mesh.errors import InvalidPixelFormat, MeshTooLargeError
# endregion


# region Helpers
def _readonly(arr: np.ndarray) -> np.ndarray:
    # owned copy: later writes to the caller's array must not leak in
    owned = np.array(arr, copy=True)
    owned.flags.writeable = False
    return owned


def _as_uint8(arr: np.ndarray) -> np.ndarray:
    if arr.dtype == np.uint8:
        return arr
    if not np.issubdtype(arr.dtype, np.integer):
        raise InvalidPixelFormat(f"Pixel channels must be integer bytes, got dtype {arr.dtype}")
    if arr.size and (arr.min() < 0 or arr.max() > 255):
        raise InvalidPixelFormat("Pixel channel values must lie in [0, 255]")
    return arr.astype(np.uint8)
# endregion


# region Encoded Pixel Grid
@dataclass(frozen=True, eq=False)
class EncodedPixelGrid:
    """
    data: (H, W, C) uint8 channel bytes, C >= 3 for decoding (R, G, B, [A, ...]).
    """
    data: np.ndarray

    def __post_init__(self):
        arr = np.asarray(self.data)
        if arr.ndim == 2:
            # single-channel image; decode() rejects it
            arr = arr[:, :, np.newaxis]
        if arr.ndim != 3:
            raise InvalidPixelFormat(f"Expected a (height, width, channels) array, got shape {arr.shape}")
        object.__setattr__(self, "data", _readonly(_as_uint8(arr)))

    @classmethod
    def from_buffer(cls, buffer, width: int, height: int, channels: int = 4) -> "EncodedPixelGrid":
        """Wrap a flat row-major byte buffer (e.g. RGBA image data)."""
        if width < 1 or height < 1 or channels < 1:
            raise InvalidPixelFormat(f"Invalid shape descriptor {width}x{height}x{channels}")
        flat = np.frombuffer(bytes(buffer), dtype=np.uint8)
        expected = width * height * channels
        if flat.size != expected:
            raise InvalidPixelFormat(
                f"Buffer holds {flat.size} bytes, shape {width}x{height}x{channels} needs {expected}"
            )
        return cls(flat.reshape(height, width, channels))

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def channels(self) -> int:
        return int(self.data.shape[2])

    @property
    def shape(self) -> Tuple[int, int]:
        """(width, height)"""
        return self.width, self.height
# endregion


# region Elevation Grid
@dataclass(frozen=True, eq=False)
class ElevationGrid:
    """
    values: (H, W) float32 elevation in meters; values[y, x] is cell (x, y).
    """
    values: np.ndarray

    def __post_init__(self):
        arr = np.asarray(self.values, dtype=np.float32)
        if arr.ndim != 2:
            raise ValueError(f"Elevation grid must be 2D (height, width), got shape {arr.shape}")
        object.__setattr__(self, "values", _readonly(arr))

    @classmethod
    def filled(cls, width: int, height: int, value: float) -> "ElevationGrid":
        return cls(np.full((height, width), value, dtype=np.float32))

    @property
    def width(self) -> int:
        return int(self.values.shape[1])

    @property
    def height(self) -> int:
        return int(self.values.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        """(width, height)"""
        return self.width, self.height

    def at(self, x: int, y: int) -> float:
        return float(self.values[y, x])
# endregion


# region Mesh
@dataclass(frozen=True, eq=False)
class Mesh:
    """
    vertices: flat float32 buffer, (x, y, elevation) per cell in raster order (x + y*width)
    indices:  flat uint16 buffer, three vertex indices per triangle
    """
    vertices: np.ndarray
    indices: np.ndarray
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid mesh grid {self.width}x{self.height}")
        cells = self.width * self.height

        vertices = np.asarray(self.vertices).ravel()
        if vertices.size != cells * 3:
            raise ValueError(
                f"Vertex buffer holds {vertices.size} floats, a {self.width}x{self.height} grid needs {cells * 3}"
            )

        # checked before the uint16 cast, which would wrap silently
        indices = np.asarray(self.indices).ravel()
        if indices.size % 3 != 0:
            raise ValueError(f"Index buffer length {indices.size} is not a multiple of 3")
        if indices.size:
            if not np.issubdtype(indices.dtype, np.integer):
                raise ValueError(f"Indices must be integers, got dtype {indices.dtype}")
            lo, hi = int(indices.min()), int(indices.max())
            if lo < 0 or hi >= cells:
                raise ValueError(f"Index range [{lo}, {hi}] outside the {cells} vertices of the grid")
            if hi > np.iinfo(np.uint16).max:
                raise MeshTooLargeError(self.width, self.height, MAX_MESH_CELLS)

        object.__setattr__(self, "vertices", _readonly(vertices.astype(np.float32)))
        object.__setattr__(self, "indices", _readonly(indices.astype(np.uint16)))

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.size // 3)

    @property
    def index_count(self) -> int:
        return int(self.indices.size)

    @property
    def triangle_count(self) -> int:
        return int(self.indices.size // 3)

    def positions(self) -> np.ndarray:
        """(vertex_count, 3) view of the vertex buffer."""
        return self.vertices.reshape(-1, 3)

    def triangles(self) -> np.ndarray:
        """(triangle_count, 3) view of the index buffer."""
        return self.indices.reshape(-1, 3)

    def elevation_range(self) -> Optional[Tuple[float, float]]:
        if self.vertex_count == 0:
            return None
        z = self.positions()[:, 2]
        return float(z.min()), float(z.max())
# endregion
