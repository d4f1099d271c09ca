# region Imports
from __future__ import annotations
import json
from typing import Any, Dict, Optional
import numpy as np
from loguru import logger

from terrain_mesh.errors import DimensionMismatchError
from terrain_mesh.models import Mesh
# endregion


# region JSON
def mesh_to_dict(mesh: Mesh) -> Dict[str, Any]:
    return {
        "width": mesh.width,
        "height": mesh.height,
        "vertex_count": mesh.vertex_count,
        "index_count": mesh.index_count,
        "vertices": mesh.vertices.tolist(),
        "indices": mesh.indices.tolist(),
    }


def write_mesh_json(mesh: Mesh, out_path: str = "terrain_mesh.json") -> None:
    with open(out_path, "w") as f:
        json.dump(mesh_to_dict(mesh), f)
    logger.info(f"Wrote {mesh.vertex_count} vertices to {out_path}")
# endregion


# region Wavefront OBJ
def write_obj(mesh: Mesh, out_path: str = "terrain_mesh.obj", colors: Optional[np.ndarray] = None) -> None:
    """
    Write `v x y z [r g b]` lines then 1-based `f a b c` faces.
    colors: optional (vertex_count, 3) uint8 per-vertex RGB.
    """
    pos = mesh.positions()
    if colors is not None:
        colors = np.asarray(colors).reshape(-1, 3)
        if len(colors) != len(pos):
            raise DimensionMismatchError((len(pos), 1), (len(colors), 1))
        rgb = colors.astype(np.float64) / 255.0

    with open(out_path, "w") as f:
        f.write(f"# {mesh.width}x{mesh.height} terrain grid\n")
        for i, (x, y, z) in enumerate(pos):
            if colors is None:
                f.write(f"v {x:g} {y:g} {z:.6g}\n")
            else:
                r, g, b = rgb[i]
                f.write(f"v {x:g} {y:g} {z:.6g} {r:.4f} {g:.4f} {b:.4f}\n")
        for a, b, c in mesh.triangles().astype(np.int64) + 1:
            f.write(f"f {a} {b} {c}\n")
    logger.info(f"Wrote {mesh.vertex_count} vertices, {mesh.triangle_count} faces to {out_path}")
# endregion
