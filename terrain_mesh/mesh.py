# region Imports
import numpy as np
from terrain_mesh.config import MAX_MESH_CELLS
from terrain_mesh.errors import MeshTooLargeError
from terrain_mesh.models import ElevationGrid, Mesh
# endregion


# region Index Helpers
def vertex_index(x: int, y: int, width: int) -> int:
    """Raster-order vertex index of grid cell (x, y)."""
    return x + y * width
# endregion


# region Mesh Builder
def build(elevation: ElevationGrid) -> Mesh:
    """
    Triangulate an elevation grid into an indexed mesh.

    One vertex (x, y, z) per cell at index x + y*width. Every quad with
    top-left corner (x, y) is split along the (x, y)-(x+1, y+1) diagonal:

        (x,y) ---- (x+1,y)
          |  \\  A    |
          |   B  \\   |
        (x,y+1) -- (x+1,y+1)

    A = (x,y) -> (x+1,y) -> (x+1,y+1)
    B = (x,y) -> (x+1,y+1) -> (x,y+1)

    Quads are emitted in raster order of their top-left corner.
    Raises MeshTooLargeError when the grid needs more than 65535 vertices.
    """
    if not isinstance(elevation, ElevationGrid):
        elevation = ElevationGrid(elevation)
    W, H = elevation.width, elevation.height

    if W * H >= MAX_MESH_CELLS:
        raise MeshTooLargeError(W, H, MAX_MESH_CELLS)

    # region Vertices
    ys, xs = np.mgrid[0:H, 0:W]
    vertices = np.empty((H, W, 3), dtype=np.float32)
    vertices[:, :, 0] = xs
    vertices[:, :, 1] = ys
    vertices[:, :, 2] = elevation.values
    # endregion

    # region Indices
    if W < 2 or H < 2:
        indices = np.empty(0, dtype=np.uint16)
    else:
        qy, qx = np.mgrid[0:H - 1, 0:W - 1]
        tl = vertex_index(qx, qy, W).ravel()
        tr = vertex_index(qx + 1, qy, W).ravel()
        br = vertex_index(qx + 1, qy + 1, W).ravel()
        bl = vertex_index(qx, qy + 1, W).ravel()
        indices = np.stack([tl, tr, br, tl, br, bl], axis=1).astype(np.uint16).ravel()
    # endregion

    return Mesh(vertices=vertices.ravel(), indices=indices, width=W, height=H)
# endregion
