# mapview/view/resolver.py
from __future__ import annotations
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from mapview.view import radius as policy
from mapview.view.radius import RadiusConfig, RadiusState
from mapview.world.coords import Tile
from mapview.world.tile_index import TileIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Resolution:
    visible_tiles: frozenset[Tile]
    radius_state: RadiusState
    recomputed: bool


def resolve(
    camera: Any,
    index: TileIndex,
    config: RadiusConfig | Mapping[str, Any] | None = None,
    previous: RadiusState | None = None,
    *,
    now: float | None = None,
) -> Resolution:
    """
    Resolve the tiles visible from ``camera``.

    The radius state is only refreshed when the camera moved or zoomed past
    the configured thresholds; ``recomputed`` tells the caller whether a
    previously cached VisibleSet for ``previous`` is still usable. The index
    is queried either way, so the result never depends on a cache.

    A None camera resolves ``base_radius`` around the origin.
    """
    state = policy.update(previous, camera, config, index.metric, now=now)
    visible = index.query_radius(state.center, state.radius)
    return Resolution(visible, state, recomputed=state is not previous)


@dataclass(slots=True)
class VisibilityResolver:
    """
    Per-view resolver that remembers the last RadiusState and VisibleSet.

    The cached set is reused while the radius state is unchanged and the
    index has not been mutated since it was computed.
    """
    index: TileIndex
    config: RadiusConfig = field(default_factory=RadiusConfig)
    state: RadiusState | None = field(default=None, init=False)
    _visible: frozenset[Tile] = field(default_factory=frozenset, init=False)
    _index_version: int = field(default=-1, init=False)

    @property
    def visible(self) -> frozenset[Tile]:
        return self._visible

    def invalidate(self) -> None:
        self.state = None
        self._index_version = -1

    def set_config(self, config: RadiusConfig) -> None:
        self.config = config
        self.invalidate()

    def resolve(self, camera: Any, *, now: float | None = None) -> Resolution:
        state = policy.update(self.state, camera, self.config, self.index.metric, now=now)
        if state is self.state and self._index_version == self.index.version:
            return Resolution(self._visible, state, recomputed=False)

        self._visible = self.index.query_radius(state.center, state.radius)
        self._index_version = self.index.version
        recomputed = state is not self.state
        self.state = state
        logger.debug("resolved %d visible tiles (radius=%.3f)", len(self._visible), state.radius)
        return Resolution(self._visible, state, recomputed=recomputed)
