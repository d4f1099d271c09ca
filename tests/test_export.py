"""Tests for export.py — JSON and OBJ writers."""

from __future__ import annotations

import json

import numpy as np
import pytest

from terrain_mesh.errors import DimensionMismatchError
from terrain_mesh.export import mesh_to_dict, write_mesh_json, write_obj
from terrain_mesh.mesh import build
from terrain_mesh.models import ElevationGrid


@pytest.fixture
def flat_mesh():
    return build(ElevationGrid.filled(3, 3, 5.0))


class TestJson:

    def test_payload_counts(self, flat_mesh):
        payload = mesh_to_dict(flat_mesh)
        assert payload["vertex_count"] == 9
        assert payload["index_count"] == 24
        assert len(payload["vertices"]) == 27
        assert payload["indices"][:6] == [0, 1, 4, 0, 4, 3]

    def test_write_and_reload(self, flat_mesh, tmp_path):
        path = tmp_path / "mesh.json"
        write_mesh_json(flat_mesh, str(path))
        data = json.loads(path.read_text())
        assert data["width"] == 3 and data["height"] == 3
        assert data["vertices"][:3] == [0.0, 0.0, 5.0]


class TestObj:

    def test_line_counts(self, flat_mesh, tmp_path):
        path = tmp_path / "mesh.obj"
        write_obj(flat_mesh, str(path))
        lines = path.read_text().splitlines()
        assert sum(1 for l in lines if l.startswith("v ")) == 9
        assert sum(1 for l in lines if l.startswith("f ")) == 8

    def test_one_based_faces(self, flat_mesh, tmp_path):
        path = tmp_path / "mesh.obj"
        write_obj(flat_mesh, str(path))
        faces = [l for l in path.read_text().splitlines() if l.startswith("f ")]
        assert faces[0] == "f 1 2 5"
        assert faces[1] == "f 1 5 4"

    def test_vertex_lines(self, flat_mesh, tmp_path):
        path = tmp_path / "mesh.obj"
        write_obj(flat_mesh, str(path))
        verts = [l for l in path.read_text().splitlines() if l.startswith("v ")]
        assert verts[0] == "v 0 0 5"
        assert verts[1] == "v 1 0 5"

    def test_vertex_colors(self, flat_mesh, tmp_path):
        path = tmp_path / "mesh.obj"
        colors = np.zeros((9, 3), dtype=np.uint8)
        colors[0] = (255, 0, 51)
        write_obj(flat_mesh, str(path), colors=colors)
        first = next(l for l in path.read_text().splitlines() if l.startswith("v "))
        assert first == "v 0 0 5 1.0000 0.0000 0.2000"

    def test_color_count_mismatch(self, flat_mesh, tmp_path):
        with pytest.raises(DimensionMismatchError):
            write_obj(flat_mesh, str(tmp_path / "m.obj"), colors=np.zeros((4, 3), dtype=np.uint8))
