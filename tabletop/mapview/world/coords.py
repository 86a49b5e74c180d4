# mapview/world/coords.py
from __future__ import annotations
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Callable, Iterator, Literal, NamedTuple, Union

from mapview.errors import InvalidCoordinate


class Cart(NamedTuple):
    """Offset / Cartesian tile coordinate."""

    x: float
    y: float


class Hex(NamedTuple):
    """Axial hex coordinate (flat-top)."""

    q: float
    r: float


Coord = Union[Cart, Hex]
Variant = Literal["cartesian", "hex"]
Metric = Literal["chebyshev", "manhattan", "euclidean", "hex"]

# 4-, 8- and 6-neighbour adjacency
CARDINALS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONALS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
HEX_DIRS: tuple[tuple[int, int], ...] = ((1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1))


@dataclass(frozen=True, slots=True)
class Tile:
    """A map cell. Equality and hashing only look at the coordinate."""

    coord: Coord
    payload: Any = field(default=None, compare=False, hash=False)


# --- distance ---
def chebyshev(a: Coord, b: Coord) -> float:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def manhattan(a: Coord, b: Coord) -> float:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def euclidean(a: Coord, b: Coord) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def hex_distance(a: Coord, b: Coord) -> float:
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    total = abs(dq) + abs(dr) + abs(dq + dr)
    # always even for integer hexes
    return total // 2 if isinstance(total, int) else total / 2


METRICS: dict[str, tuple[Variant, Callable[[Coord, Coord], float]]] = {
    "chebyshev": ("cartesian", chebyshev),
    "manhattan": ("cartesian", manhattan),
    "euclidean": ("cartesian", euclidean),
    "hex": ("hex", hex_distance),
}


def check_metric(metric: str) -> Variant:
    """Return the coordinate variant a metric works on."""
    try:
        return METRICS[metric][0]
    except KeyError:
        raise ValueError(f"unknown metric {metric!r}; expected one of {sorted(METRICS)}") from None


def distance(a: Coord, b: Coord, metric: Metric = "chebyshev") -> float:
    check_metric(metric)
    return METRICS[metric][1](a, b)


# --- validation ---
def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidCoordinate(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidCoordinate(f"{name} must be finite, got {value!r}")
    return value


def coerce_coord(value: Any, variant: Variant = "cartesian") -> Coord:
    """Validate ``value`` and return it as a ``Cart`` or ``Hex``.

    Accepts the matching tuple type, a plain 2-tuple, or a mapping with
    ``x``/``y`` (cartesian) or ``q``/``r`` (hex) keys.
    """
    cls, keys = (Hex, ("q", "r")) if variant == "hex" else (Cart, ("x", "y"))
    other = Cart if cls is Hex else Hex

    if isinstance(value, cls):
        a, b = value
    elif isinstance(value, other):
        raise InvalidCoordinate(f"{type(value).__name__} coordinate on a {variant} map: {value!r}")
    elif isinstance(value, Mapping):
        missing = [k for k in keys if k not in value]
        if missing:
            raise InvalidCoordinate(f"{variant} coordinate missing {', '.join(missing)}: {value!r}")
        a, b = value[keys[0]], value[keys[1]]
    elif isinstance(value, (tuple, list)) and len(value) == 2:
        a, b = value
    else:
        raise InvalidCoordinate(f"not a {variant} coordinate: {value!r}")

    a, b = _number(a, keys[0]), _number(b, keys[1])
    return value if isinstance(value, cls) else cls(a, b)


def origin(variant: Variant) -> Coord:
    return Hex(0, 0) if variant == "hex" else Cart(0, 0)


# --- adjacency / layout ---
def neighbors(coord: Coord, metric: Metric = "chebyshev") -> Iterator[Coord]:
    """Adjacent coordinates: 8 for chebyshev, 4 for manhattan/euclidean, 6 for hex."""
    a, b = coord
    if metric == "hex":
        for dq, dr in HEX_DIRS:
            yield Hex(a + dq, b + dr)
        return
    check_metric(metric)
    dirs = CARDINALS + DIAGONALS if metric == "chebyshev" else CARDINALS
    for dx, dy in dirs:
        yield Cart(a + dx, b + dy)


# Flat-top hexes, odd-q offset layout
def offset_to_axial(col: int, row: int) -> Hex:
    return Hex(col, row - (col - (col & 1)) // 2)


def axial_to_offset(h: Hex) -> tuple[int, int]:
    q, r = int(h.q), int(h.r)
    return q, r + (q - (q & 1)) // 2
