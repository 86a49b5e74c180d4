# mapview/view/radius.py
from __future__ import annotations
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mapview import settings
from mapview.view.camera import CameraState, as_camera_state
from mapview.world.coords import Coord, Metric, check_metric, coerce_coord, distance, origin

logger = logging.getLogger(__name__)

# camelCase option names accepted by RadiusConfig.from_mapping
_OPTION_ALIASES: dict[str, str] = {
    "baseRadius": "base_radius",
    "zoomFactor": "zoom_factor",
    "minRadius": "min_radius",
    "maxRadius": "max_radius",
    "moveThreshold": "move_threshold",
    "zoomThreshold": "zoom_threshold",
}


@dataclass(frozen=True, slots=True)
class RadiusConfig:
    base_radius: float = settings.BASE_RADIUS
    zoom_factor: float = settings.ZOOM_FACTOR
    min_radius: float = settings.MIN_RADIUS
    max_radius: float | None = settings.MAX_RADIUS
    move_threshold: float = settings.MOVE_THRESHOLD
    zoom_threshold: float = settings.ZOOM_THRESHOLD

    def __post_init__(self) -> None:
        if self.base_radius < 0:
            raise ValueError(f"base_radius must be >= 0, got {self.base_radius}")
        if self.zoom_factor <= 0:
            raise ValueError(f"zoom_factor must be > 0, got {self.zoom_factor}")
        if self.min_radius < 0:
            raise ValueError(f"min_radius must be >= 0, got {self.min_radius}")
        if self.max_radius is not None and self.max_radius < self.min_radius:
            raise ValueError(f"max_radius {self.max_radius} is below min_radius {self.min_radius}")
        if self.move_threshold < 0 or self.zoom_threshold < 0:
            raise ValueError("recompute thresholds must be >= 0")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "RadiusConfig":
        """Build a config from snake_case or camelCase option names. Unknown keys raise."""
        kwargs: dict[str, Any] = {}
        for key, value in (options or {}).items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise ValueError(f"unknown radius option {key!r}")
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True, slots=True)
class RadiusState:
    """The last computed visibility window. ``zoom`` is None for a camera-less state."""

    radius: float
    center: Coord
    zoom: float | None
    last_update: float


def _config(config: RadiusConfig | Mapping[str, Any] | None) -> RadiusConfig:
    if isinstance(config, RadiusConfig):
        return config
    return RadiusConfig.from_mapping(config)


def compute_radius(camera: Any, config: RadiusConfig | Mapping[str, Any] | None = None) -> float:
    """``clamp(base / (zoom * zoom_factor), min, max)``; no camera means ``base``."""
    cfg = _config(config)
    cam = as_camera_state(camera)
    if cam is None:
        radius = cfg.base_radius
    else:
        radius = cfg.base_radius / (cam.zoom * cfg.zoom_factor)
    radius = max(cfg.min_radius, radius)
    if cfg.max_radius is not None:
        radius = min(cfg.max_radius, radius)
    return radius


def _view_of(cam: CameraState | None, metric: Metric) -> tuple[Coord, float | None]:
    variant = check_metric(metric)
    if cam is None or cam.position is None:
        center = origin(variant)
    else:
        center = coerce_coord(cam.position, variant)
    return center, (cam.zoom if cam is not None else None)


def should_recompute(
    previous: RadiusState | None,
    camera: Any,
    config: RadiusConfig | Mapping[str, Any] | None = None,
    metric: Metric = "chebyshev",
) -> bool:
    if previous is None:
        return True
    cfg = _config(config)
    center, zoom = _view_of(as_camera_state(camera), metric)

    if distance(center, previous.center, metric) > cfg.move_threshold:
        return True
    if zoom is None or previous.zoom is None:
        return (zoom is None) != (previous.zoom is None)
    return abs(zoom - previous.zoom) > cfg.zoom_threshold


def update(
    previous: RadiusState | None,
    camera: Any,
    config: RadiusConfig | Mapping[str, Any] | None = None,
    metric: Metric = "chebyshev",
    *,
    now: float | None = None,
) -> RadiusState:
    """Return ``previous`` untouched unless the camera moved or zoomed past a threshold."""
    cfg = _config(config)
    cam = as_camera_state(camera)
    if not should_recompute(previous, cam, cfg, metric):
        return previous  # type: ignore[return-value]

    center, zoom = _view_of(cam, metric)
    state = RadiusState(
        radius=compute_radius(cam, cfg),
        center=center,
        zoom=zoom,
        last_update=time.monotonic() if now is None else now,
    )
    logger.debug("radius recomputed: %.3f at %s (zoom=%s)", state.radius, state.center, state.zoom)
    return state
