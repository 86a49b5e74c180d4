# mapview/world/los.py
from __future__ import annotations
from typing import Iterator, Protocol

from mapview.world.coords import Cart, Coord, Hex, hex_distance
from mapview.world.grid import hex_round


class Passable(Protocol):
    def is_passable(self, coord: Coord) -> bool: ...


def bresenham_line(a: Cart, b: Cart) -> Iterator[Cart]:
    """Tiles from a to b inclusive using Bresenham (4-connected)."""
    x0, y0 = int(a[0]), int(a[1])
    x1, y1 = int(b[0]), int(b[1])
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        yield Cart(x0, y0)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def hex_line(a: Hex, b: Hex) -> Iterator[Hex]:
    """Hexes from a to b inclusive, by sampling the straight line in cube space."""
    n = int(hex_distance(a, b))
    if n == 0:
        yield Hex(int(a[0]), int(a[1]))
        return
    # nudge off exact edges so ties round consistently
    aq, ar = a[0] + 1e-6, a[1] + 1e-6
    bq, br = b[0] + 1e-6, b[1] + 1e-6
    for i in range(n + 1):
        t = i / n
        yield hex_round(aq + (bq - aq) * t, ar + (br - ar) * t)


def line(a: Coord, b: Coord) -> Iterator[Coord]:
    if isinstance(a, Hex):
        return hex_line(a, b)  # type: ignore[arg-type]
    return bresenham_line(a, b)  # type: ignore[arg-type]


def los_clear(grid: Passable, a: Coord, b: Coord) -> bool:
    """True if the straight line from a to b has no *blocked* tiles between them."""
    it = iter(line(a, b))
    next(it, None)  # skip the source tile
    for c in it:
        if c == b:
            return True
        if not grid.is_passable(c):
            return False
    return True
