# mapview/world/tile_index.py
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Iterable, Iterator

from mapview import settings
from mapview.errors import InvalidRadius
from mapview.world.coords import METRICS, Coord, Metric, Tile, Variant, check_metric, coerce_coord

logger = logging.getLogger(__name__)

BucketKey = tuple[int, int]


def check_radius(radius: Any) -> float:
    """Reject negative (or NaN / non-numeric) radii; never clamps."""
    if isinstance(radius, bool) or not isinstance(radius, Real):
        raise InvalidRadius(radius)
    if math.isnan(radius) or radius < 0:
        raise InvalidRadius(radius)
    return radius


@dataclass(slots=True)
class TileIndex:
    """
    Spatial index over map tiles, bucketed on a uniform grid.

    A radius query only scans the buckets overlapping the square
    ``|da| <= R, |db| <= R`` around the centre. That square contains the
    radius ball for every supported metric (hex distance is the max of
    |dq|, |dr| and |dq + dr|), so the exact distance test afterwards
    decides membership.

    Not locked: mutate from one writer, never during an in-flight query.
    """
    metric: Metric = "chebyshev"
    bucket_size: int = settings.INDEX_BUCKET_SIZE
    version: int = field(default=0, init=False)
    _tiles: dict[Coord, Tile] = field(default_factory=dict, init=False)
    _buckets: dict[BucketKey, dict[Coord, Tile]] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        check_metric(self.metric)
        if self.bucket_size < 1:
            raise ValueError(f"bucket_size must be >= 1, got {self.bucket_size}")

    @property
    def variant(self) -> Variant:
        return METRICS[self.metric][0]

    def distance(self, a: Coord, b: Coord) -> float:
        return METRICS[self.metric][1](a, b)

    # --- mutation ---
    def insert(self, tile: Tile) -> None:
        """Add ``tile``, replacing whatever was stored at its coordinate."""
        coord = coerce_coord(tile.coord, self.variant)
        if coord is not tile.coord:
            tile = Tile(coord, tile.payload)
        self._tiles[coord] = tile
        self._buckets.setdefault(self._bucket_of(coord), {})[coord] = tile
        self.version += 1

    def extend(self, tiles: Iterable[Tile]) -> None:
        for t in tiles:
            self.insert(t)

    def remove(self, coord: Any) -> None:
        coord = coerce_coord(coord, self.variant)
        if self._tiles.pop(coord, None) is None:
            return
        key = self._bucket_of(coord)
        bucket = self._buckets[key]
        del bucket[coord]
        if not bucket:
            del self._buckets[key]
        self.version += 1

    def clear(self) -> None:
        self._tiles.clear()
        self._buckets.clear()
        self.version += 1

    # --- lookup ---
    def get(self, coord: Any) -> Tile | None:
        return self._tiles.get(coerce_coord(coord, self.variant))

    def __contains__(self, coord: Any) -> bool:
        return self.get(coord) is not None

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles.values())

    def query_radius(self, center: Any, radius: float) -> frozenset[Tile]:
        """All tiles with ``distance(center, tile.coord) <= radius``.

        The centre need not hold a tile. Raises ``InvalidRadius`` for a
        negative radius and ``InvalidCoordinate`` for a malformed centre.
        """
        radius = check_radius(radius)
        center = coerce_coord(center, self.variant)
        if not self._tiles:
            return frozenset()

        dist = METRICS[self.metric][1]
        return frozenset(t for t in self._candidates(center, radius) if dist(center, t.coord) <= radius)

    def _candidates(self, center: Coord, radius: float) -> Iterable[Tile]:
        if math.isinf(radius):
            return self._tiles.values()
        a0, b0 = self._bucket_of((center[0] - radius, center[1] - radius))
        a1, b1 = self._bucket_of((center[0] + radius, center[1] + radius))
        span = (a1 - a0 + 1) * (b1 - b0 + 1)
        if span > len(self._buckets):
            logger.debug("radius %s spans %d buckets (%d occupied); scanning all tiles", radius, span, len(self._buckets))
            return self._tiles.values()
        return self._scan_buckets(a0, b0, a1, b1)

    def _scan_buckets(self, a0: int, b0: int, a1: int, b1: int) -> Iterator[Tile]:
        for ba in range(a0, a1 + 1):
            for bb in range(b0, b1 + 1):
                bucket = self._buckets.get((ba, bb))
                if bucket:
                    yield from bucket.values()

    def _bucket_of(self, coord: tuple[float, float]) -> BucketKey:
        size = self.bucket_size
        return int(coord[0] // size), int(coord[1] // size)
