import pygame

from mapview.scenes.viewer import MapViewerScene
from mapview.view.radius import RadiusConfig
from mapview.world.coords import chebyshev, hex_distance
from mapview.world.grid import MapGrid


def make_scene(screen, **grid_kwargs):
    grid = MapGrid(cols=30, rows=20, tile_size=16, **grid_kwargs)
    return MapViewerScene(screen, grid, RadiusConfig(base_radius=4))


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k, mod=0)


def test_initial_visible_set_within_radius(screen):
    scene = make_scene(screen)
    state = scene.resolver.state
    assert state.radius == 4
    assert scene.visible
    assert all(chebyshev(state.center, t.coord) <= 4 for t in scene.visible)
    assert len(scene.fog) == len(scene.visible)
    scene.draw(screen)


def test_zoom_key_shrinks_radius(screen):
    scene = make_scene(screen)
    before = scene.resolver.state.radius
    scene.handle_event(key(pygame.K_EQUALS))
    scene.update(1 / 60)
    assert scene.camera.zoom > 1.0
    assert scene.resolver.state.radius < before


def test_obstacle_toggle_updates_index(screen):
    scene = make_scene(screen)
    center = scene.resolver.state.center
    scene.toggle_obstacle(center)
    assert scene.resolver.index.get(center).payload == "wall"
    scene.update(1 / 60)
    scene.toggle_obstacle(center)
    assert scene.resolver.index.get(center).payload == "floor"


def test_los_toggle_and_fog_reset(screen):
    scene = make_scene(screen)
    scene.handle_event(key(pygame.K_l))
    assert scene.use_los
    scene.update(1 / 60)
    scene.handle_event(key(pygame.K_r))
    assert len(scene.fog) == 0
    scene.draw(screen)


def test_hex_scene(screen):
    scene = make_scene(screen, variant="hex")
    state = scene.resolver.state
    assert scene.resolver.index.metric == "hex"
    assert all(hex_distance(state.center, t.coord) <= 4 for t in scene.visible)
    scene.draw(screen)
