# region Imports
from __future__ import annotations
from typing import Optional
import numpy as np

from terrain_mesh.errors import DimensionMismatchError
from terrain_mesh.models import EncodedPixelGrid, Mesh
from terrain_mesh.pipeline import vertex_colors
# endregion


# region PyVista Import
def _pyvista():
    try:
        import pyvista as pv
    except ImportError as e:
        raise RuntimeError(
            "3D preview requires pyvista. Install with: pip install pyvista"
        ) from e
    return pv
# endregion


# region Mesh Conversion
def mesh_to_polydata(mesh: Mesh, colors: Optional[EncodedPixelGrid] = None, z_scale: float = 1.0):
    """Convert a Mesh to pyvista.PolyData; colors become the "rgb" point array."""
    pv = _pyvista()
    points = mesh.positions().astype(np.float32)
    if z_scale != 1.0:
        points[:, 2] *= z_scale

    tris = mesh.triangles().astype(np.int64)
    faces = np.hstack([np.full((len(tris), 1), 3, dtype=np.int64), tris]).ravel()
    poly = pv.PolyData(points, faces)

    if colors is not None:
        if colors.shape != (mesh.width, mesh.height):
            raise DimensionMismatchError((mesh.width, mesh.height), colors.shape)
        poly.point_data["rgb"] = vertex_colors(colors)
    else:
        poly.point_data["elev_m"] = mesh.positions()[:, 2]
    return poly
# endregion


# region Terrain 3D Plot
def plot_mesh_3d(mesh: Mesh, colors: Optional[EncodedPixelGrid] = None, z_scale: float = 1.0,
                 title: str = "Terrain tile"):
    """Render a terrain mesh, satellite-colored when colors are given."""
    pv = _pyvista()
    surf = mesh_to_polydata(mesh, colors, z_scale=z_scale)

    p = pv.Plotter()
    if colors is not None:
        p.add_mesh(surf, scalars="rgb", rgb=True, show_edges=False)
    else:
        p.add_mesh(surf, scalars="elev_m", cmap="terrain", show_edges=False)
        p.add_scalar_bar(title="elev_m")

    p.add_axes()
    p.show_grid()
    p.set_background("black")
    p.add_text(title, color="white")
    p.show()
# endregion
