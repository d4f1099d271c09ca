# region Imports
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import numpy as np
import requests
from loguru import logger

from terrain_mesh.decode import decode
from terrain_mesh.errors import DimensionMismatchError
from terrain_mesh.mesh import build
from terrain_mesh.models import ElevationGrid, EncodedPixelGrid, Mesh
from terrain_mesh.tiles import fetch_pixels, satellite_tile_url, terrain_tile_url
# endregion


# region Result Container
@dataclass(frozen=True, eq=False)
class TerrainMesh:
    """
    elevation: decoded tile, meters
    mesh:      indexed triangle mesh built from it
    colors:    optional aligned color grid (e.g. satellite imagery)
    """
    elevation: ElevationGrid
    mesh: Mesh
    colors: Optional[EncodedPixelGrid] = None
# endregion


# region Alignment
def check_alignment(elevation: ElevationGrid, colors: EncodedPixelGrid) -> None:
    if elevation.shape != colors.shape:
        raise DimensionMismatchError(elevation.shape, colors.shape)


def vertex_colors(colors: EncodedPixelGrid) -> np.ndarray:
    """(W*H, 3) uint8 RGB per mesh vertex, same raster order as Mesh.vertices."""
    if colors.channels < 3:
        # greyscale imagery: repeat the single channel
        return np.repeat(colors.data[:, :, :1], 3, axis=2).reshape(-1, 3)
    return colors.data[:, :, :3].reshape(-1, 3)
# endregion


# region Decimation
def decimate(grid: EncodedPixelGrid, step: int) -> EncodedPixelGrid:
    """Keep every `step`-th column and row, starting at cell (0, 0)."""
    if int(step) != step or step < 1:
        raise ValueError(f"step must be a positive integer, got {step}")
    if step == 1:
        return grid
    return EncodedPixelGrid(grid.data[::step, ::step])
# endregion


# region Orchestration
def build_terrain_mesh(
    pixels: EncodedPixelGrid,
    colors: Optional[EncodedPixelGrid] = None,
    step: int = 1,
) -> TerrainMesh:
    """
    Decode a terrain-RGB grid and mesh it; colors must match its shape.

    step > 1 samples every step-th cell of both grids before meshing, so a
    full 256x256 tile fits the 16-bit index buffer with step=2. Mesh x, y
    are then in decimated grid units.
    """
    if colors is not None and colors.shape != pixels.shape:
        raise DimensionMismatchError(pixels.shape, colors.shape)
    pixels = decimate(pixels, step)
    if colors is not None:
        colors = decimate(colors, step)

    elevation = decode(pixels)
    if colors is not None:
        check_alignment(elevation, colors)
    mesh = build(elevation)
    logger.debug(
        f"Built mesh {mesh.width}x{mesh.height} (step {step}): "
        f"{mesh.vertex_count} vertices, {mesh.triangle_count} triangles"
    )
    return TerrainMesh(elevation=elevation, mesh=mesh, colors=colors)


def load_tile_mesh(
    zoom: int,
    x: int,
    y: int,
    *,
    token: Optional[str] = None,
    with_satellite: bool = False,
    step: int = 1,
    session: Optional[requests.Session] = None,
) -> TerrainMesh:
    pixels = fetch_pixels(terrain_tile_url(zoom, x, y, token), session=session)
    colors = None
    if with_satellite:
        colors = fetch_pixels(satellite_tile_url(zoom, x, y, token), session=session)

    result = build_terrain_mesh(pixels, colors, step=step)
    logger.info(
        f"Tile {zoom}/{x}/{y}: {result.mesh.vertex_count} vertices, "
        f"{result.mesh.index_count} indices"
    )
    return result
# endregion
