class TerrainMeshError(Exception):
    """Base class for terrain decoding and meshing errors."""


class InvalidPixelFormat(TerrainMeshError):
    """Raised when a pixel grid has fewer than 3 channels or a malformed buffer."""

    def __init__(self, message: str):
        super().__init__(message)


class MeshTooLargeError(TerrainMeshError):
    """Raised when a grid has too many cells for a 16-bit index buffer."""

    def __init__(self, width: int, height: int, limit: int):
        self.width = width
        self.height = height
        self.limit = limit
        super().__init__(
            f"Grid {width}x{height} has {width * height} cells; "
            f"a uint16 index buffer addresses fewer than {limit}. Downsample or tile the input."
        )


class DimensionMismatchError(TerrainMeshError):
    """Raised when two grids that must be aligned differ in shape."""

    def __init__(self, expected, actual):
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        super().__init__(
            f"Grid shape mismatch: elevation is {self.expected[0]}x{self.expected[1]}, "
            f"colors are {self.actual[0]}x{self.actual[1]} (width x height)"
        )


class TileFetchError(TerrainMeshError):
    """Raised when a tile image cannot be fetched or decoded."""

    def __init__(self, message: str):
        super().__init__(message)
