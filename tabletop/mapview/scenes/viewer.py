# mapview/scenes/viewer.py
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field

import pygame

from mapview import settings
from mapview.view.camera import Camera2D
from mapview.view.radius import RadiusConfig
from mapview.view.resolver import Resolution, VisibilityResolver
from mapview.world.coords import Coord, Tile, offset_to_axial, Cart
from mapview.world.fog import FogMemory, compute_visible
from mapview.world.grid import MapGrid

logger = logging.getLogger(__name__)

PAN_KEYS: dict[int, tuple[int, int]] = {
    pygame.K_LEFT: (-1, 0),
    pygame.K_RIGHT: (1, 0),
    pygame.K_UP: (0, -1),
    pygame.K_DOWN: (0, 1),
}


@dataclass
class MapViewerScene:
    """
    Debug view over the visibility engine:
    - Pan (arrows / drag with middle or right button), zoom (wheel or +/-)
    - Visible set drawn lit, explored cells soft-fogged, the rest hard-fogged
    - Left click toggles an obstacle, L toggles line-of-sight filtering
    - R clears fog memory
    """
    screen: pygame.Surface
    grid: MapGrid = field(default_factory=MapGrid)
    config: RadiusConfig = field(default_factory=RadiusConfig)
    camera: Camera2D = field(init=False)
    resolver: VisibilityResolver = field(init=False)
    fog: FogMemory = field(default_factory=FogMemory, init=False)
    use_los: bool = field(default=False, init=False)

    # drag
    _dragging: bool = field(default=False, init=False)
    _drag_start_screen: tuple[int, int] | None = field(default=None, init=False)
    _drag_start_offset: tuple[float, float] | None = field(default=None, init=False)

    _pan: set[int] = field(default_factory=set, init=False)
    _turn: int = field(default=0, init=False)
    _last: Resolution | None = field(default=None, init=False)
    _visible: frozenset[Tile] = field(default_factory=frozenset, init=False)

    def __post_init__(self) -> None:
        world_w, world_h = self.grid.world_size()
        sw, sh = self.screen.get_size()
        self.camera = Camera2D(world_w, world_h, sw, sh)
        self.camera.center_on_px(world_w / 2, world_h / 2)
        self.resolver = VisibilityResolver(self.grid.build_index(), self.config)
        self._font = pygame.font.Font(None, settings.HUD_FONT_SIZE)
        self._refresh()

    # ---- Input ----
    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.QUIT))
            elif event.key in PAN_KEYS:
                self._pan.add(event.key)
            elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                self.camera.zoom_by(settings.ZOOM_STEP)
            elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                self.camera.zoom_by(1 / settings.ZOOM_STEP)
            elif event.key == pygame.K_l:
                self.use_los = not self.use_los
                self.resolver.invalidate()
            elif event.key == pygame.K_r:
                self.fog.reset()

        if event.type == pygame.KEYUP:
            self._pan.discard(event.key)

        if event.type == pygame.MOUSEWHEEL and event.y:
            anchor = pygame.mouse.get_pos()
            factor = settings.ZOOM_STEP if event.y > 0 else 1 / settings.ZOOM_STEP
            self.camera.zoom_by(factor, anchor)

        # camera drag
        if event.type == pygame.MOUSEBUTTONDOWN and event.button in settings.MOUSE_DRAG_BUTTONS:
            self._dragging = True
            self._drag_start_screen = event.pos
            self._drag_start_offset = (self.camera.offset_x, self.camera.offset_y)

        if event.type == pygame.MOUSEBUTTONUP and event.button in settings.MOUSE_DRAG_BUTTONS:
            self._dragging = False
            self._drag_start_screen = None
            self._drag_start_offset = None

        if event.type == pygame.MOUSEMOTION and self._dragging and self._drag_start_screen and self._drag_start_offset:
            sx, sy = self._drag_start_screen
            ox0, oy0 = self._drag_start_offset
            mx, my = event.pos
            z = self.camera.zoom
            self.camera.set_offset(ox0 - (mx - sx) / z, oy0 - (my - sy) / z)

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.toggle_obstacle(self.grid.from_px(*self.camera.screen_to_world(*event.pos)))

    def toggle_obstacle(self, coord: Coord) -> None:
        if not self.grid.in_bounds(coord):
            return
        self.grid.toggle_obstacle(coord)
        terrain = "wall" if self.grid.is_blocked(coord) else "floor"
        self.resolver.index.insert(Tile(coord, terrain))

    # ---- Update ----
    def update(self, dt: float) -> None:
        if self._pan:
            speed = settings.CAMERA_PAN_SPEED * dt / self.camera.zoom
            if pygame.key.get_mods() & pygame.KMOD_SHIFT:
                speed *= settings.CAMERA_FAST_MULT
            dx = sum(PAN_KEYS[k][0] for k in self._pan)
            dy = sum(PAN_KEYS[k][1] for k in self._pan)
            self.camera.move(dx * speed, dy * speed)
        self._refresh()

    def _refresh(self) -> None:
        res = self.resolver.resolve(self.camera.snapshot(self.grid))
        if res.recomputed or self._last is None or res.visible_tiles is not self._last.visible_tiles:
            self._turn += 1
            if self.use_los:
                st = res.radius_state
                self._visible = compute_visible(self.resolver.index, self.grid, st.center, st.radius)
            else:
                self._visible = res.visible_tiles
            self.fog.remember(self._visible, self._turn)
        self._last = res

    @property
    def visible(self) -> frozenset[Tile]:
        return self._visible

    # ---- Draw ----
    def draw(self, surface: pygame.Surface, alpha: float = 0.0) -> None:
        surface.fill(settings.BG_COLOR)
        visible = {t.coord for t in self._visible}
        fog = pygame.Surface(surface.get_size(), pygame.SRCALPHA)

        for c in self._cells_in_view():
            poly = [self.camera.world_to_screen(x, y) for x, y in self.grid.polygon_px(c)]
            if self.grid.is_blocked(c):
                pygame.draw.polygon(surface, settings.OBSTACLE_RGB, poly)
            elif c in visible:
                pygame.draw.polygon(surface, settings.TILE_VISIBLE_RGB, poly)
            pygame.draw.polygon(surface, settings.GRID_COLOR, poly, width=1)
            if c not in visible:
                rgba = settings.FOG_SOFT_RGBA if c in self.fog else settings.FOG_HARD_RGBA
                pygame.draw.polygon(fog, rgba, poly)

        surface.blit(fog, (0, 0))
        if self._last is not None:
            cx, cy = self.camera.world_to_screen(*self.grid.center_px(self._last.radius_state.center))
            pygame.draw.circle(surface, settings.CENTER_RGB, (cx, cy), max(3, int(self.grid.tile_size * self.camera.zoom / 4)))
        self._draw_hud(surface)

    def _cells_in_view(self) -> list[Coord]:
        rect = self.camera.view_rect()
        ts = self.grid.tile_size
        if self.grid.variant == "hex":
            col_w, row_h = 1.5 * ts, math.sqrt(3.0) * ts
        else:
            col_w, row_h = ts, ts
        first_c = max(0, int(rect.left // col_w) - 1)
        last_c = min(self.grid.cols, int(rect.right // col_w) + 2)
        first_r = max(0, int(rect.top // row_h) - 1)
        last_r = min(self.grid.rows, int(rect.bottom // row_h) + 2)
        cells: list[Coord] = []
        for row in range(first_r, last_r):
            for col in range(first_c, last_c):
                cells.append(offset_to_axial(col, row) if self.grid.variant == "hex" else Cart(col, row))
        return cells

    def _draw_hud(self, surface: pygame.Surface) -> None:
        if self._last is None:
            return
        st = self._last.radius_state
        lines = [
            f"{self.grid.variant} / {self.resolver.index.metric}   zoom {self.camera.zoom:.2f}",
            f"center {tuple(st.center)}   radius {st.radius:.2f}",
            f"visible {len(self._visible)}   explored {len(self.fog)}   LOS {'on' if self.use_los else 'off'}",
        ]
        pad = 6
        line_h = self._font.get_linesize()
        w = max(self._font.size(s)[0] for s in lines) + pad * 2
        h = line_h * len(lines) + pad * 2
        bg = pygame.Surface((w, h), pygame.SRCALPHA)
        bg.fill(settings.HUD_BG_RGBA)
        surface.blit(bg, (8, 8))
        for i, s in enumerate(lines):
            img = self._font.render(s, True, settings.HUD_TEXT_RGB)
            surface.blit(img, (8 + pad, 8 + pad + i * line_h))
