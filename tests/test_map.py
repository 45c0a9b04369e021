import pytest

from delve.map.tiles import GameMap, Tile


def test_new_map_is_solid_rock():
    m = GameMap(6, 4)
    assert all(m.is_blocked(x, y) and m.blocks_sight(x, y) for x in range(6) for y in range(4))


def test_out_of_bounds_behaves_as_wall():
    m = GameMap(3, 3)
    m.carve(1, 1)
    assert not m.is_blocked(1, 1)
    assert m.is_blocked(-1, 0)
    assert m.is_blocked(3, 1)
    assert m.blocks_sight(1, 3)


def test_ascii_rows():
    m = GameMap(3, 2)
    m.carve(1, 0)
    assert m.to_ascii() == ["#.#", "###"]


def test_serialization_keeps_explored_flags():
    m = GameMap(4, 3)
    m.carve(1, 1)
    m.tiles[1][1].explored = True
    m.tiles[2][2].explored = True
    restored = GameMap.from_dict(m.to_dict())
    assert restored.tile(1, 1) == Tile(blocked=False, explored=True, block_sight=False)
    assert restored.tile(2, 2) == Tile(blocked=True, explored=True, block_sight=True)
    assert restored.tile(0, 0) == Tile.wall()


def test_mismatched_tile_data_rejected():
    data = GameMap(4, 3).to_dict()
    data["tiles"] = data["tiles"][:-1]
    with pytest.raises(ValueError):
        GameMap.from_dict(data)


def test_invalid_size():
    with pytest.raises(ValueError):
        GameMap(0, 5)
