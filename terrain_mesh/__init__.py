"""Terrain-RGB tile decoding and grid triangulation."""

from terrain_mesh.decode import decode, elevation_from_rgb
from terrain_mesh.errors import (
    DimensionMismatchError,
    InvalidPixelFormat,
    MeshTooLargeError,
    TerrainMeshError,
    TileFetchError,
)
from terrain_mesh.mesh import build, vertex_index
from terrain_mesh.models import ElevationGrid, EncodedPixelGrid, Mesh
from terrain_mesh.pipeline import (
    TerrainMesh,
    build_terrain_mesh,
    check_alignment,
    decimate,
    load_tile_mesh,
    vertex_colors,
)

__all__ = [
    "DimensionMismatchError",
    "ElevationGrid",
    "EncodedPixelGrid",
    "InvalidPixelFormat",
    "Mesh",
    "MeshTooLargeError",
    "TerrainMesh",
    "TerrainMeshError",
    "TileFetchError",
    "build",
    "build_terrain_mesh",
    "check_alignment",
    "decimate",
    "decode",
    "elevation_from_rgb",
    "load_tile_mesh",
    "vertex_colors",
    "vertex_index",
]
