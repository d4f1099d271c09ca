# region Header
"""
run_tile.py — fetch a terrain-RGB tile, mesh it, export / preview it

Requires:
  pip install numpy pillow requests loguru
Optional (for 3D):
  pip install pyvista
"""
# endregion

# region Imports
from __future__ import annotations
import argparse
import sys
from typing import List, Optional
from loguru import logger

from terrain_mesh.config import DEFAULT_TILE
from terrain_mesh.errors import TerrainMeshError
from terrain_mesh.export import write_mesh_json, write_obj
from terrain_mesh.pipeline import load_tile_mesh, vertex_colors
# endregion


# region Arguments
def build_parser() -> argparse.ArgumentParser:
    z, x, y = DEFAULT_TILE
    parser = argparse.ArgumentParser(description="Terrain-RGB tile to triangle mesh")
    parser.add_argument("--zoom", type=int, default=z)
    parser.add_argument("--x", type=int, default=x)
    parser.add_argument("--y", type=int, default=y)
    parser.add_argument("--token", help="Mapbox access token (default: $MAPBOX_ACCESS_TOKEN)")
    parser.add_argument("--satellite", action="store_true", help="also fetch the satellite tile for vertex colors")
    parser.add_argument("--json", dest="json_path")
    parser.add_argument("--obj", dest="obj_path")
    parser.add_argument("--show", action="store_true", help="open a 3D preview (needs pyvista)")
    parser.add_argument("--step", type=int, default=2,
                        help="sample every STEP-th cell; full 256x256 tiles need 2 or more (default: 2)")
    parser.add_argument("--z-scale", type=float, default=1.0)
    return parser
# endregion


# region Main
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        result = load_tile_mesh(args.zoom, args.x, args.y, token=args.token,
                                with_satellite=args.satellite, step=args.step)
    except (TerrainMeshError, ValueError) as e:
        logger.error(f"Tile {args.zoom}/{args.x}/{args.y} failed: {e}")
        return 1

    mesh = result.mesh
    rng = mesh.elevation_range()
    if rng is None:
        logger.error(f"Tile {args.zoom}/{args.x}/{args.y} produced an empty mesh")
        return 1
    lo, hi = rng
    logger.info(f"{mesh.vertex_count} vertices, {mesh.triangle_count} triangles, elevation {lo:.1f}..{hi:.1f} m")

    colors = vertex_colors(result.colors) if result.colors is not None else None
    if args.json_path:
        write_mesh_json(mesh, args.json_path)
    if args.obj_path:
        write_obj(mesh, args.obj_path, colors=colors)

    if args.show:
        from terrain_mesh.terrain_3d import plot_mesh_3d
        plot_mesh_3d(mesh, result.colors, z_scale=args.z_scale,
                     title=f"Tile {args.zoom}/{args.x}/{args.y}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
# endregion
