# region Imports
from __future__ import annotations
from typing import Optional
import io
import numpy as np
import requests
from loguru import logger
from PIL import Image, UnidentifiedImageError

from terrain_mesh.config import HTTP_TIMEOUT_S, MAPBOX_TOKEN, SATELLITE_URL, TERRAIN_RGB_URL
from terrain_mesh.errors import TileFetchError
from terrain_mesh.models import EncodedPixelGrid
# endregion


# region Tile Addressing
def check_tile_address(zoom: int, x: int, y: int) -> None:
    if zoom < 0:
        raise ValueError(f"zoom must be >= 0, got {zoom}")
    n = 2 ** zoom
    if not (0 <= x < n and 0 <= y < n):
        raise ValueError(f"tile {x},{y} outside the {n}x{n} grid at zoom {zoom}")


def _tile_url(template: str, zoom: int, x: int, y: int, token: Optional[str]) -> str:
    check_tile_address(zoom, x, y)
    token = token or MAPBOX_TOKEN
    if not token:
        raise TileFetchError("No Mapbox access token; set MAPBOX_ACCESS_TOKEN or pass token=")
    return template.format(z=zoom, x=x, y=y, token=token)


def terrain_tile_url(zoom: int, x: int, y: int, token: Optional[str] = None) -> str:
    return _tile_url(TERRAIN_RGB_URL, zoom, x, y, token)


def satellite_tile_url(zoom: int, x: int, y: int, token: Optional[str] = None) -> str:
    return _tile_url(SATELLITE_URL, zoom, x, y, token)


def _redact(url: str) -> str:
    return url.split("?", 1)[0]
# endregion


# region Image Decode
def decode_image(data: bytes) -> EncodedPixelGrid:
    """Decode PNG/JPEG bytes to an RGBA pixel grid (H, W, 4)."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            rgba = np.asarray(img.convert("RGBA"), dtype=np.uint8)
    except (UnidentifiedImageError, OSError) as e:
        raise TileFetchError(f"Could not decode tile image: {e}") from e
    return EncodedPixelGrid(rgba)
# endregion


# region Fetch
def fetch_pixels(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = HTTP_TIMEOUT_S,
) -> EncodedPixelGrid:
    """GET an image tile and decode it; any failure raises TileFetchError."""
    http = session or requests
    logger.debug(f"Fetching tile {_redact(url)}")
    try:
        r = http.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise TileFetchError(f"Tile request failed for {_redact(url)}: {e}") from e

    if r.status_code != 200:
        raise TileFetchError(f"Tile request for {_redact(url)} returned HTTP {r.status_code}")

    pixels = decode_image(r.content)
    logger.info(f"Fetched {pixels.width}x{pixels.height} tile from {_redact(url)}")
    return pixels
# endregion
