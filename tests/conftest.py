from __future__ import annotations

import numpy as np
import pytest

from terrain_mesh.models import EncodedPixelGrid


@pytest.fixture
def rgb_tile():
    """4 wide x 3 high RGBA tile; cell (x, y) encodes code 10*x + 1000*y."""
    arr = np.zeros((3, 4, 4), dtype=np.uint8)
    for y in range(3):
        for x in range(4):
            code = 10 * x + 1000 * y
            arr[y, x] = (code >> 16) & 0xFF, (code >> 8) & 0xFF, code & 0xFF, 255
    return EncodedPixelGrid(arr)


@pytest.fixture
def satellite_tile():
    """4x3 RGB colors; cell (x, y) is (x, y, 7)."""
    arr = np.zeros((3, 4, 3), dtype=np.uint8)
    for y in range(3):
        for x in range(4):
            arr[y, x] = (x, y, 7)
    return EncodedPixelGrid(arr)
