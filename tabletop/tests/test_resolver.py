from mapview.view.camera import CameraState
from mapview.view.radius import RadiusConfig
from mapview.view.resolver import VisibilityResolver, resolve
from mapview.world.coords import Cart, Hex, Tile
from mapview.world.tile_index import TileIndex


def coords_of(tiles):
    return {t.coord for t in tiles}


def test_resolve_uses_camera_radius(cart_index):
    # base 20 at zoom 20 -> radius 1
    res = resolve(CameraState(Cart(0, 0), 20.0), cart_index, RadiusConfig(base_radius=20))
    assert res.recomputed
    assert res.radius_state.radius == 1
    assert coords_of(res.visible_tiles) == {(0, 0), (1, 0)}


def test_resolve_is_idempotent(cart_index):
    cam = CameraState(Cart(0, 0), 20.0)
    first = resolve(cam, cart_index)
    second = resolve(cam, cart_index, previous=first.radius_state)
    assert not second.recomputed
    assert second.radius_state is first.radius_state
    assert second.visible_tiles == first.visible_tiles


def test_resolve_recomputes_after_move(cart_index):
    first = resolve(CameraState(Cart(0, 0), 20.0), cart_index)
    moved = resolve(CameraState(Cart(5, 4), 20.0), cart_index, previous=first.radius_state)
    assert moved.recomputed
    assert coords_of(moved.visible_tiles) == {(5, 5)}


def test_resolve_without_camera(cart_index):
    res = resolve(None, cart_index, {"baseRadius": 20})
    assert res.radius_state.center == Cart(0, 0)
    assert res.radius_state.radius == 20
    assert coords_of(res.visible_tiles) == {(0, 0), (1, 0), (5, 5)}


def test_resolve_hex(hex_index):
    res = resolve({"position": {"q": 0, "r": 0}, "zoom": 20.0}, hex_index)
    assert coords_of(res.visible_tiles) == {(0, 0), (1, -1)}


def test_resolve_empty_index():
    res = resolve(CameraState(Cart(0, 0)), TileIndex())
    assert res.visible_tiles == frozenset()


def test_cached_resolver_reuses_visible_set(cart_index):
    resolver = VisibilityResolver(cart_index, RadiusConfig(base_radius=20))
    cam = CameraState(Cart(0, 0), 20.0)

    first = resolver.resolve(cam, now=0.0)
    second = resolver.resolve(cam, now=1.0)
    assert first.recomputed and not second.recomputed
    assert second.visible_tiles is first.visible_tiles
    assert second.radius_state.last_update == 0.0


def test_cached_resolver_sees_index_changes(cart_index):
    resolver = VisibilityResolver(cart_index, RadiusConfig(base_radius=20))
    cam = CameraState(Cart(0, 0), 20.0)
    resolver.resolve(cam)

    cart_index.insert(Tile(Cart(0, 1), "new"))
    res = resolver.resolve(cam)
    assert not res.recomputed
    assert coords_of(res.visible_tiles) == {(0, 0), (1, 0), (0, 1)}

    cart_index.remove(Cart(1, 0))
    assert coords_of(resolver.resolve(cam).visible_tiles) == {(0, 0), (0, 1)}


def test_cached_resolver_config_change_invalidates(cart_index):
    resolver = VisibilityResolver(cart_index, RadiusConfig(base_radius=20))
    cam = CameraState(Cart(0, 0), 20.0)
    resolver.resolve(cam)

    resolver.set_config(RadiusConfig(base_radius=200))
    res = resolver.resolve(cam)
    assert res.recomputed
    assert res.radius_state.radius == 10
    assert len(res.visible_tiles) == 3

    resolver.invalidate()
    assert resolver.resolve(cam).recomputed
