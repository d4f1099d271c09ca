"""Tests for run_tile.py — CLI wiring with tile loading stubbed out."""

from __future__ import annotations

import json

import numpy as np

import run_tile
from terrain_mesh.errors import TileFetchError
from terrain_mesh.models import EncodedPixelGrid
from terrain_mesh.pipeline import build_terrain_mesh


def test_exports_written(monkeypatch, tmp_path, rgb_tile, satellite_tile):
    calls = []

    def fake_load(zoom, x, y, **kwargs):
        calls.append((zoom, x, y, kwargs))
        return build_terrain_mesh(rgb_tile, satellite_tile)

    monkeypatch.setattr(run_tile, "load_tile_mesh", fake_load)
    json_path = tmp_path / "m.json"
    obj_path = tmp_path / "m.obj"
    code = run_tile.main([
        "--zoom", "5", "--x", "3", "--y", "4", "--token", "t", "--satellite",
        "--json", str(json_path), "--obj", str(obj_path),
    ])
    assert code == 0
    assert calls == [(5, 3, 4, {"token": "t", "with_satellite": True, "step": 2})]
    assert json.loads(json_path.read_text())["vertex_count"] == 12
    first_v = next(l for l in obj_path.read_text().splitlines() if l.startswith("v "))
    assert len(first_v.split()) == 7


def test_failure_exit_code(monkeypatch):
    def fake_load(*args, **kwargs):
        raise TileFetchError("HTTP 401")

    monkeypatch.setattr(run_tile, "load_tile_mesh", fake_load)
    assert run_tile.main(["--token", "t"]) == 1


def test_step_forwarded(monkeypatch, rgb_tile):
    seen = {}

    def fake_load(zoom, x, y, **kwargs):
        seen.update(kwargs)
        return build_terrain_mesh(rgb_tile)

    monkeypatch.setattr(run_tile, "load_tile_mesh", fake_load)
    assert run_tile.main(["--token", "t", "--step", "1"]) == 0
    assert seen["step"] == 1


def test_empty_mesh_exit_code(monkeypatch):
    empty = build_terrain_mesh(EncodedPixelGrid(np.zeros((0, 0, 4), dtype=np.uint8)))
    monkeypatch.setattr(run_tile, "load_tile_mesh", lambda *a, **k: empty)
    assert run_tile.main(["--token", "t"]) == 1
