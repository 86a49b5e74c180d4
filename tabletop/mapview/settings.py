# mapview/settings.py
from __future__ import annotations
import os

# Window / render
SCREEN_WIDTH: int = 1280
SCREEN_HEIGHT: int = 720
SCREEN_SIZE: tuple[int, int] = (SCREEN_WIDTH, SCREEN_HEIGHT)
WINDOW_TITLE: str = "mapview - visibility debug viewer"

# Tiles (px at zoom 1.0). Hex tiles use this as the circumradius.
TILE_SIZE: int = 32

# World dimensions (in tiles)
WORLD_COLS: int = 120
WORLD_ROWS: int = 80

# "cartesian" or "hex"; fixed for the lifetime of a map
MAP_VARIANT: str = os.environ.get("MAPVIEW_VARIANT", "cartesian")
CARTESIAN_METRIC: str = "chebyshev"   # 8-neighbour adjacency

# Timestep (fixed update loop)
FIXED_DT: float = 1.0 / 60.0
MAX_STEPS: int = 5
DT_CLAMP: float = 0.25

# Camera
CAMERA_PAN_SPEED: float = 800.0      # px/sec
CAMERA_FAST_MULT: float = 2.0        # hold Shift to go faster
MOUSE_DRAG_BUTTONS: tuple[int, ...] = (2, 3)  # middle or right
ZOOM_STEP: float = 1.1
ZOOM_MIN: float = 0.25
ZOOM_MAX: float = 4.0

# Radius policy defaults
BASE_RADIUS: float = 20.0
ZOOM_FACTOR: float = 1.0
MIN_RADIUS: float = 0.0
MAX_RADIUS: float | None = None      # None = unbounded
MOVE_THRESHOLD: float = 1.0          # tiles, in the active metric
ZOOM_THRESHOLD: float = 0.05         # absolute zoom delta

# Tile index
INDEX_BUCKET_SIZE: int = 16          # tiles per bucket edge

# Fog memory
FOG_DECAY_TURNS: int = 20

# Colors
BG_COLOR: tuple[int, int, int] = (15, 15, 20)
GRID_COLOR: tuple[int, int, int] = (45, 45, 60)
TILE_VISIBLE_RGB: tuple[int, int, int] = (70, 110, 80)
OBSTACLE_RGB: tuple[int, int, int] = (160, 40, 40)
CENTER_RGB: tuple[int, int, int] = (220, 220, 40)
FOG_SOFT_RGBA: tuple[int, int, int, int] = (0, 0, 0, 140)  # explored-not-visible
FOG_HARD_RGBA: tuple[int, int, int, int] = (0, 0, 0, 220)  # never seen

# HUD / labels
HUD_BG_RGBA: tuple[int, int, int, int] = (0, 0, 0, 150)
HUD_TEXT_RGB: tuple[int, int, int] = (240, 240, 240)
HUD_FONT_SIZE: int = 20

# Logging
LOG_LEVEL: str = os.environ.get("MAPVIEW_LOG_LEVEL", "info")
