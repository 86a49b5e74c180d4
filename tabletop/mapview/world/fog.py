# mapview/world/fog.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable

from mapview import settings
from mapview.world.coords import Coord, Tile
from mapview.world.los import Passable, los_clear
from mapview.world.tile_index import TileIndex


def compute_visible(index: TileIndex, grid: Passable, origin: Coord, radius: float) -> frozenset[Tile]:
    """Tiles within ``radius`` of ``origin`` that also have a clear line of sight.

    Blocking tiles are themselves visible; only what lies behind them is hidden.
    """
    return frozenset(t for t in index.query_radius(origin, radius) if los_clear(grid, origin, t.coord))


def _coords(cells: Iterable[Tile | Coord]) -> Iterable[Coord]:
    for c in cells:
        yield c.coord if isinstance(c, Tile) else c


@dataclass(frozen=True, slots=True)
class FogStats:
    explored: int
    visible: int
    memory_only: int
    new: int
    coverage: float  # % of explored cells currently visible


@dataclass(slots=True)
class FogMemory:
    """
    Explored-cell memory for fog of war. Three states per cell:
    visible (in the current VisibleSet), explored (remembered here), unexplored.
    Each remembered cell keeps the turn it was last seen, for decay.
    """
    last_seen: dict[Coord, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.last_seen)

    def __contains__(self, coord: Coord) -> bool:
        return coord in self.last_seen

    def is_explored(self, coord: Coord) -> bool:
        return coord in self.last_seen

    def remember(self, visible: Iterable[Tile | Coord], turn: int = 0) -> None:
        for c in _coords(visible):
            self.last_seen[c] = turn

    def decay(self, turn: int, max_age: int = settings.FOG_DECAY_TURNS) -> None:
        """Forget cells not seen for more than ``max_age`` turns."""
        self.last_seen = {c: t for c, t in self.last_seen.items() if turn - t <= max_age}

    def reset(self) -> None:
        self.last_seen.clear()

    def within(self, min_a: float, min_b: float, max_a: float, max_b: float) -> set[Coord]:
        """Remembered cells inside an inclusive coordinate box."""
        return {c for c in self.last_seen if min_a <= c[0] <= max_a and min_b <= c[1] <= max_b}

    def stats(self, visible: Iterable[Tile | Coord]) -> FogStats:
        vis = set(_coords(visible))
        explored = set(self.last_seen)
        return FogStats(
            explored=len(explored),
            visible=len(vis),
            memory_only=len(explored - vis),
            new=len(vis - explored),
            coverage=(len(vis) / len(explored) * 100.0) if explored else 0.0,
        )

    @classmethod
    def merge(cls, *memories: FogMemory) -> FogMemory:
        """Shared team memory; keeps the most recent sighting per cell."""
        merged: dict[Coord, int] = {}
        for mem in memories:
            for c, t in mem.last_seen.items():
                if t > merged.get(c, t - 1):
                    merged[c] = t
        return cls(merged)
