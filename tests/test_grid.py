import pytest

from outpost.constants import SIDEBAR_WIDTH
from outpost.models.grid import DEPOSIT, EMPTY, Grid, lcg_stream


def test_lcg_first_values():
    rand = lcg_stream(0)
    assert next(rand) == 12345 / 0xFFFFFFFF
    second = (1103515245 * 12345 + 12345) & 0xFFFFFFFF
    assert next(rand) == second / 0xFFFFFFFF


def test_generation_is_deterministic():
    a = Grid(60, 40, seed=1234)
    b = Grid(60, 40, seed=1234)
    c = Grid(60, 40, seed=4321)
    assert a.deposits == b.deposits
    assert a.tiles == b.tiles
    assert a.deposits != c.deposits


def test_deposit_tiles_match_deposit_layer():
    g = Grid(60, 40, seed=99, deposit_chance=0.5)
    for y in range(g.height):
        for x in range(g.width):
            assert (g.tiles[y][x] == DEPOSIT) == g.deposits[y][x]
    assert any(DEPOSIT in row for row in g.tiles)


def test_zero_chance_means_no_deposits():
    g = Grid(20, 10, seed=7, deposit_chance=0.0)
    assert all(tile == EMPTY for row in g.tiles for tile in row)


def test_bad_dimensions_rejected():
    with pytest.raises(ValueError):
        Grid(0, 10, seed=1)


def test_wrapped_distance():
    g = Grid(10, 8, seed=1)
    assert g.distance(0, 0, 9, 7) == 1
    assert g.distance(0, 0, 5, 0) == 5
    assert g.distance(2, 3, 2 + 10, 3 - 8) == 0
    for x, y in [(0, 0), (3, 4), (9, 7)]:
        assert g.distance(x, y, 5, 5) == g.distance(x + 10, y - 16, 5, 5)


def test_get_out_of_range_is_none():
    g = Grid(10, 8, seed=1)
    assert g.get(-1, 0) is None
    assert g.get(10, 0) is None
    assert g.get(0, 8) is None
    assert g.get_wrapped(-1, 0) == g.get(9, 0)


def test_set_wraps_and_connectors():
    g = Grid(10, 8, seed=1, deposit_chance=0.0)
    g.set(-1, -1, "H")
    assert g.get(9, 7) == "H"
    assert not g.is_empty(9, 7)
    assert g.is_connector(9, 7)
    assert g.has_connector_neighbor(0, 7)   # wraps east to west
    assert not g.has_connector_neighbor(0, 0)

    g.set(5, 5, "S")
    assert not g.is_connector(5, 5)
    assert not g.has_connector_neighbor(5, 4)


def test_hit_test_without_camera():
    g = Grid(10, 8, seed=1)
    assert g.origin_x == SIDEBAR_WIDTH + 20
    px = g.origin_x + g.cell_w * 2 + 5
    py = g.origin_y + g.cell_h * 3 + 5
    assert g.hit_test(px, py) == (2, 3)
    assert g.hit_test(g.origin_x - 5, py) is None
    assert g.hit_test(g.origin_x + g.cell_w * 10 + 1, py) is None


def test_hit_test_with_camera_wraps():
    g = Grid(200, 150, seed=1)
    tiles_w, tiles_h = g.viewport_tiles(1280, 720)
    assert (tiles_w, tiles_h) == (37, 28)
    assert g.viewport_origin(0, 0, 1280, 720) == (-19, -14)

    tile = g.hit_test(g.origin_x + 1, g.origin_y + 1, 0, 0, 1280, 720)
    assert tile == (181, 136)

    centre = g.hit_test(g.origin_x + 19 * g.cell_w + 1, g.origin_y + 14 * g.cell_h + 1, 0, 0, 1280, 720)
    assert centre == (0, 0)

    assert g.hit_test(1279, 719, 0, 0, 1280, 720) is None
