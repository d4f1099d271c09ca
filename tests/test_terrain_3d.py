"""Tests for terrain_3d.py — PyVista conversion (skipped without pyvista)."""

from __future__ import annotations

import numpy as np
import pytest

pv = pytest.importorskip("pyvista")

from terrain_mesh.errors import DimensionMismatchError
from terrain_mesh.mesh import build
from terrain_mesh.models import ElevationGrid, EncodedPixelGrid
from terrain_mesh.terrain_3d import mesh_to_polydata


def test_polydata_counts():
    poly = mesh_to_polydata(build(ElevationGrid.filled(3, 3, 2.0)))
    assert poly.n_points == 9
    assert poly.n_cells == 8
    assert np.allclose(poly.point_data["elev_m"], 2.0)


def test_z_scale():
    poly = mesh_to_polydata(build(ElevationGrid.filled(2, 2, 2.0)), z_scale=3.0)
    assert np.allclose(poly.points[:, 2], 6.0)


def test_rgb_point_data(satellite_tile):
    mesh = build(ElevationGrid.filled(4, 3, 0.0))
    poly = mesh_to_polydata(mesh, satellite_tile)
    assert poly.point_data["rgb"].shape == (12, 3)


def test_color_mismatch():
    mesh = build(ElevationGrid.filled(4, 3, 0.0))
    colors = EncodedPixelGrid(np.zeros((4, 4, 3), dtype=np.uint8))
    with pytest.raises(DimensionMismatchError):
        mesh_to_polydata(mesh, colors)
