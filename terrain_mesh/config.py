# config.py
import os

# Mapbox raster tile endpoints; {token} is filled from MAPBOX_TOKEN unless overridden
TERRAIN_RGB_URL = "https://api.mapbox.com/v4/mapbox.terrain-rgb/{z}/{x}/{y}.pngraw?access_token={token}"
SATELLITE_URL = "https://api.mapbox.com/v4/mapbox.satellite/{z}/{x}/{y}.png?access_token={token}"
MAPBOX_TOKEN = os.environ.get("MAPBOX_ACCESS_TOKEN")

HTTP_TIMEOUT_S = 10.0

# Default tile (zoom, x, y)
DEFAULT_TILE = (14, 15066, 9841)

# Terrain-RGB decode: meters = ELEVATION_OFFSET_M + (R*65536 + G*256 + B) * ELEVATION_STEP_M
ELEVATION_OFFSET_M = -10000.0
ELEVATION_STEP_M = 0.1

# uint16 index buffer: at most 65535 addressable vertices
MAX_MESH_CELLS = 2 ** 16
