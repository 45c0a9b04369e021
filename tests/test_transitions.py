from delve.transitions import from_dungeon_level, table


def test_value_of_last_reached_transition():
    max_monsters = table((1, 2), (4, 3), (6, 5))
    assert from_dungeon_level(max_monsters, 1) == 2
    assert from_dungeon_level(max_monsters, 3) == 2
    assert from_dungeon_level(max_monsters, 4) == 3
    assert from_dungeon_level(max_monsters, 6) == 5
    assert from_dungeon_level(max_monsters, 40) == 5


def test_below_first_transition_is_zero():
    troll = table((3, 15), (5, 30), (7, 60))
    assert from_dungeon_level(troll, 1) == 0
    assert from_dungeon_level(troll, 2) == 0
    assert from_dungeon_level(troll, 3) == 15


def test_empty_table_is_zero():
    assert from_dungeon_level([], 5) == 0
