# mapview/world/grid.py
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Iterator

from mapview import settings
from mapview.world.coords import (
    Cart, Coord, Hex, Metric, Tile, Variant, axial_to_offset, coerce_coord, offset_to_axial,
)
from mapview.world.tile_index import TileIndex

SQRT3 = math.sqrt(3.0)


def hex_round(q: float, r: float) -> Hex:
    """Round fractional axial coordinates to the containing hex (cube rounding)."""
    s = -q - r
    rq, rr, rs = round(q), round(r), round(s)
    dq, dr, ds = abs(rq - q), abs(rr - r), abs(rs - s)
    if dq > dr and dq > ds:
        rq = -rr - rs
    elif dr > ds:
        rr = -rq - rs
    return Hex(int(rq), int(rr))


@dataclass(slots=True)
class MapGrid:
    """
    Rectangular map of ``cols`` x ``rows`` cells.

    Cartesian maps address cells as ``Cart(col, row)``. Hex maps are flat-top
    hexes in odd-q offset layout, addressed by their axial ``Hex(q, r)``;
    ``tile_size`` is then the hex circumradius.
    """
    cols: int = settings.WORLD_COLS
    rows: int = settings.WORLD_ROWS
    tile_size: int = settings.TILE_SIZE
    variant: Variant = "cartesian"
    blocked: set[Coord] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.variant not in ("cartesian", "hex"):
            raise ValueError(f"unknown map variant {self.variant!r}")

    @property
    def default_metric(self) -> Metric:
        return "hex" if self.variant == "hex" else settings.CARTESIAN_METRIC  # type: ignore[return-value]

    # --- cells ---
    def cells(self) -> Iterator[Coord]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield offset_to_axial(col, row) if self.variant == "hex" else Cart(col, row)

    def in_bounds(self, coord: Coord) -> bool:
        coord = coerce_coord(coord, self.variant)
        if self.variant == "hex":
            col, row = axial_to_offset(coord)  # type: ignore[arg-type]
        else:
            col, row = coord
        return 0 <= col < self.cols and 0 <= row < self.rows

    # --- obstacles / passability ---
    def is_blocked(self, coord: Coord) -> bool:
        return coord in self.blocked

    def is_passable(self, coord: Coord) -> bool:
        return self.in_bounds(coord) and coord not in self.blocked

    def toggle_obstacle(self, coord: Coord) -> None:
        if not self.in_bounds(coord):
            return
        if coord in self.blocked:
            self.blocked.remove(coord)
        else:
            self.blocked.add(coord)

    def build_index(self, metric: Metric | None = None, bucket_size: int = settings.INDEX_BUCKET_SIZE) -> TileIndex:
        """One tile per cell; payload is the cell's terrain ("wall" or "floor")."""
        index = TileIndex(metric=metric or self.default_metric, bucket_size=bucket_size)
        if index.variant != self.variant:
            raise ValueError(f"metric {index.metric!r} does not apply to a {self.variant} map")
        index.extend(Tile(c, "wall" if c in self.blocked else "floor") for c in self.cells())
        return index

    # --- pixel math (world px, zoom 1.0) ---
    def world_size(self) -> tuple[int, int]:
        ts = self.tile_size
        if self.variant == "hex":
            return int(ts * (1.5 * (self.cols - 1) + 2)), int(SQRT3 * ts * (self.rows + 0.5))
        return self.cols * ts, self.rows * ts

    def center_px(self, coord: Coord) -> tuple[float, float]:
        ts = self.tile_size
        if self.variant == "hex":
            q, r = coord
            return ts * (1.5 * q + 1), SQRT3 * ts * (r + q / 2 + 0.5)
        col, row = coord
        return col * ts + ts / 2, row * ts + ts / 2

    def from_px(self, x: float, y: float) -> Coord:
        ts = self.tile_size
        if self.variant == "hex":
            x, y = x - ts, y - SQRT3 * ts / 2
            q = (2.0 / 3.0 * x) / ts
            r = (-x / 3.0 + SQRT3 / 3.0 * y) / ts
            return hex_round(q, r)
        return Cart(int(x // ts), int(y // ts))

    def polygon_px(self, coord: Coord) -> list[tuple[float, float]]:
        """Outline of a cell in world px."""
        cx, cy = self.center_px(coord)
        ts = self.tile_size
        if self.variant == "hex":
            return [
                (cx + ts * math.cos(math.radians(60 * i)), cy + ts * math.sin(math.radians(60 * i)))
                for i in range(6)
            ]
        h = ts / 2
        return [(cx - h, cy - h), (cx + h, cy - h), (cx + h, cy + h), (cx - h, cy + h)]
