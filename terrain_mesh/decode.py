# region Imports
import numpy as np
from terrain_mesh.config import ELEVATION_OFFSET_M, ELEVATION_STEP_M
from terrain_mesh.errors import InvalidPixelFormat
from terrain_mesh.models import EncodedPixelGrid, ElevationGrid
# endregion


# region Scalar Decode
def elevation_from_rgb(r: int, g: int, b: int) -> float:
    """Terrain-RGB decode of one pixel, in meters."""
    for name, v in (("r", r), ("g", g), ("b", b)):
        if not 0 <= int(v) <= 255:
            raise InvalidPixelFormat(f"Channel {name}={v} outside [0, 255]")
    code = int(r) * 65536 + int(g) * 256 + int(b)
    return float(np.float32(ELEVATION_OFFSET_M + code * ELEVATION_STEP_M))
# endregion


# region Grid Decode
def decode(pixels: EncodedPixelGrid) -> ElevationGrid:
    """
    Decode a terrain-RGB pixel grid to float32 meters.

    Channels beyond the third (alpha) are ignored. No clamping is applied:
    every 24-bit code maps to a value in [-10000.0, 1667721.5].
    """
    if not isinstance(pixels, EncodedPixelGrid):
        pixels = EncodedPixelGrid(pixels)
    if pixels.channels < 3:
        raise InvalidPixelFormat(
            f"Terrain-RGB decoding needs at least 3 channels per pixel, got {pixels.channels}"
        )

    rgb = pixels.data[:, :, :3].astype(np.int64)
    code = rgb[:, :, 0] * 65536 + rgb[:, :, 1] * 256 + rgb[:, :, 2]
    # float64 first so the 0.1 step is exact before narrowing
    meters = ELEVATION_OFFSET_M + code.astype(np.float64) * ELEVATION_STEP_M
    return ElevationGrid(meters.astype(np.float32))
# endregion
