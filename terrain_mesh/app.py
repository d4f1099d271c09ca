# app.py — Flask API serving terrain-RGB tiles as meshes and previews
# deps: pip install flask numpy pillow requests loguru

from __future__ import annotations
import io
import numpy as np
from flask import Flask, request, jsonify, make_response
from loguru import logger
from PIL import Image

from terrain_mesh.config import DEFAULT_TILE
from terrain_mesh.decode import decode, elevation_from_rgb
from terrain_mesh.errors import (
    DimensionMismatchError,
    InvalidPixelFormat,
    MeshTooLargeError,
    TileFetchError,
)
from terrain_mesh.export import mesh_to_dict
from terrain_mesh.models import ElevationGrid
from terrain_mesh.pipeline import load_tile_mesh
from terrain_mesh.tiles import fetch_pixels, terrain_tile_url

app = Flask(__name__)

# ======= CORS =======
@app.after_request
def _cors(resp):
    resp.headers["Access-Control-Allow-Origin"]  = "*"
    resp.headers["Access-Control-Allow-Headers"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = "GET,OPTIONS"
    return resp

# ======= error mapping =======
def _error(e: Exception, status: int):
    logger.error(f"{request.path} failed ({status}): {e}")
    return jsonify({"error": str(e)}), status

@app.errorhandler(ValueError)
@app.errorhandler(InvalidPixelFormat)
def _bad_request(e):
    return _error(e, 400)

@app.errorhandler(MeshTooLargeError)
def _too_large(e):
    return _error(e, 413)

@app.errorhandler(DimensionMismatchError)
def _mismatch(e):
    return _error(e, 422)

@app.errorhandler(TileFetchError)
def _upstream(e):
    return _error(e, 502)

# ======= helpers =======
def _token():
    return request.args.get("token") or None

def _step() -> int:
    # full 256x256 tiles need step >= 2 to fit a uint16 index buffer
    return int(request.args.get("step", "1"))

def elevation_preview_png(elevation: ElevationGrid) -> bytes:
    """Greyscale PNG of an elevation grid, stretched between the 2nd and 98th percentiles."""
    arr = elevation.values.astype(np.float64)
    valid = arr[np.isfinite(arr)]
    if valid.size == 0:
        lo, hi = 0.0, 1.0
    else:
        lo, hi = np.percentile(valid, [2, 98])
        if hi <= lo:
            lo, hi = float(valid.min()), float(valid.max())
            if hi <= lo:
                hi = lo + 1.0

    scaled = np.clip((arr - lo) / max(hi - lo, 1e-6), 0, 1)
    buf = io.BytesIO()
    Image.fromarray((scaled * 255).astype(np.uint8)).save(buf, "PNG")
    return buf.getvalue()

# ======= endpoints =======
@app.route("/", methods=["GET"])
def root():
    z, x, y = DEFAULT_TILE
    return {
        "ok": True,
        "mesh": f"/tile/{z}/{x}/{y}/mesh?step=2",
        "preview": f"/tile/{z}/{x}/{y}/elevation.png",
        "point": f"/tile/{z}/{x}/{y}/point?px=0&py=0",
    }

@app.route("/tile/<int:z>/<int:x>/<int:y>/mesh", methods=["GET"])
def tile_mesh(z, x, y):
    result = load_tile_mesh(z, x, y, token=_token(), step=_step())
    return jsonify(mesh_to_dict(result.mesh))

@app.route("/tile/<int:z>/<int:x>/<int:y>/elevation.png", methods=["GET"])
def tile_preview(z, x, y):
    pixels = fetch_pixels(terrain_tile_url(z, x, y, _token()))
    resp = make_response(elevation_preview_png(decode(pixels)))
    resp.headers["Content-Type"] = "image/png"
    return resp

@app.route("/tile/<int:z>/<int:x>/<int:y>/point", methods=["GET"])
def tile_point(z, x, y):
    try:
        px = int(request.args["px"]); py = int(request.args["py"])
    except (KeyError, ValueError):
        return jsonify({"error": "px and py required"}), 400

    pixels = fetch_pixels(terrain_tile_url(z, x, y, _token()))
    if not (0 <= px < pixels.width and 0 <= py < pixels.height):
        return jsonify({"error": f"pixel {px},{py} outside {pixels.width}x{pixels.height} tile"}), 400
    if pixels.channels < 3:
        raise InvalidPixelFormat(f"Tile has {pixels.channels} channels, need 3")

    r, g, b = (int(v) for v in pixels.data[py, px, :3])
    return jsonify({"tile": [z, x, y], "pixel": [px, py], "elevation_m": elevation_from_rgb(r, g, b)})


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8081, threaded=True)
