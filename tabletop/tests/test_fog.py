from mapview.world.coords import Cart, Hex
from mapview.world.fog import FogMemory, compute_visible
from mapview.world.grid import MapGrid
from mapview.world.los import bresenham_line, hex_line, los_clear


def test_bresenham_and_hex_lines():
    assert list(bresenham_line(Cart(0, 0), Cart(3, 0))) == [(0, 0), (1, 0), (2, 0), (3, 0)]
    assert list(hex_line(Hex(0, 0), Hex(3, 0))) == [(0, 0), (1, 0), (2, 0), (3, 0)]
    assert list(hex_line(Hex(2, 2), Hex(2, 2))) == [(2, 2)]
    steps = list(hex_line(Hex(0, 0), Hex(2, -4)))
    assert len(steps) == 5
    assert steps[0] == (0, 0) and steps[-1] == (2, -4)


def test_los_blocked_by_wall():
    grid = MapGrid(cols=5, rows=1, blocked={Cart(2, 0)})
    assert los_clear(grid, Cart(0, 0), Cart(1, 0))
    assert los_clear(grid, Cart(0, 0), Cart(2, 0))
    assert not los_clear(grid, Cart(0, 0), Cart(3, 0))


def test_compute_visible_hides_tiles_behind_walls():
    grid = MapGrid(cols=5, rows=1, blocked={Cart(2, 0)})
    index = grid.build_index()
    visible = compute_visible(index, grid, Cart(0, 0), 10)
    assert {t.coord for t in visible} == {(0, 0), (1, 0), (2, 0)}
    assert index.get(Cart(2, 0)).payload == "wall"


def test_compute_visible_on_hex_map():
    grid = MapGrid(cols=6, rows=1, variant="hex")
    index = grid.build_index()
    origin = Hex(0, 0)
    assert compute_visible(index, grid, origin, 2) == index.query_radius(origin, 2)


def test_fog_memory_decay_and_stats():
    fog = FogMemory()
    fog.remember([Cart(0, 0), Cart(1, 0)], turn=1)
    fog.remember([Cart(1, 0)], turn=5)
    assert fog.is_explored(Cart(0, 0))
    assert Cart(3, 3) not in fog

    stats = fog.stats([Cart(1, 0), Cart(2, 0)])
    assert (stats.explored, stats.visible, stats.memory_only, stats.new) == (2, 2, 1, 1)
    assert stats.coverage == 100.0

    fog.decay(turn=25, max_age=20)
    assert set(fog.last_seen) == {(1, 0)}

    fog.reset()
    assert len(fog) == 0
    assert fog.stats([]).coverage == 0.0


def test_fog_memory_merge_and_bounds():
    a = FogMemory({Cart(0, 0): 1})
    b = FogMemory({Cart(0, 0): 3, Cart(4, 4): 2})
    merged = FogMemory.merge(a, b)
    assert merged.last_seen == {Cart(0, 0): 3, Cart(4, 4): 2}
    assert merged.within(0, 0, 1, 1) == {Cart(0, 0)}
