import pytest

from delve.exceptions import InvariantViolation
from delve.world.entities import PLAYER, EntityList
from delve.world.entity import DeathKind, Entity, Fighter


def _entity(name, x=0, y=0):
    return Entity(x=x, y=y, glyph=name[0], name=name)


def test_player_is_index_zero():
    player = _entity("player")
    entities = EntityList(player, [_entity("a"), _entity("b")])
    assert entities[PLAYER] is player
    assert entities.player is player
    assert len(entities) == 3


def test_pair_returns_both_in_order():
    entities = EntityList(_entity("player"), [_entity("a")])
    first, second = entities.pair(1, 0)
    assert (first.name, second.name) == ("a", "player")


def test_pair_same_index_is_invariant_violation():
    entities = EntityList(_entity("player"), [_entity("a")])
    with pytest.raises(InvariantViolation):
        entities.pair(1, 1)


def test_swap_remove_moves_last_into_hole():
    entities = EntityList(_entity("player"), [_entity("a"), _entity("b"), _entity("c")])
    removed = entities.swap_remove(1)
    assert removed.name == "a"
    assert [e.name for e in entities] == ["player", "c", "b"]


def test_swap_remove_last():
    entities = EntityList(_entity("player"), [_entity("a"), _entity("b")])
    assert entities.swap_remove(2).name == "b"
    assert [e.name for e in entities] == ["player", "a"]


def test_player_cannot_be_removed():
    entities = EntityList(_entity("player"), [_entity("a")])
    with pytest.raises(InvariantViolation):
        entities.swap_remove(PLAYER)


def test_truncate_keeps_only_player():
    player = _entity("player")
    entities = EntityList(player, [_entity("a"), _entity("b")])
    entities.truncate_to_player()
    assert list(entities) == [player]


def test_at_lists_indices_on_tile():
    entities = EntityList(_entity("player", 1, 1), [_entity("a", 2, 2), _entity("b", 1, 1)])
    assert entities.at(1, 1) == [0, 2]
    assert entities.at(5, 5) == []


def _player(x=0, y=0):
    player = _entity("player", x, y)
    player.fighter = Fighter(base_max_hp=10, hp=10, base_defense=0, base_power=1, xp=0, on_death=DeathKind.PLAYER)
    return player


def test_list_roundtrip_and_empty_rejected():
    entities = EntityList(_player(3, 4), [_entity("a", 1, 2)])
    restored = EntityList.from_list(entities.to_list())
    assert [(e.name, e.pos) for e in restored] == [("player", (3, 4)), ("a", (1, 2))]
    with pytest.raises(ValueError):
        EntityList.from_list([])


def test_pair_rejects_negative_alias_of_same_entity():
    entities = EntityList(_entity("player"), [_entity("a"), _entity("b")])
    with pytest.raises(InvariantViolation):
        entities.pair(2, -1)


def test_pair_rejects_out_of_range():
    entities = EntityList(_entity("player"), [_entity("a")])
    with pytest.raises(InvariantViolation):
        entities.pair(0, 2)


def test_swap_remove_bad_index_loses_nothing():
    entities = EntityList(_entity("player"), [_entity("a"), _entity("b")])
    for index in (-3, -1, 3):
        with pytest.raises(InvariantViolation):
            entities.swap_remove(index)
    assert [e.name for e in entities] == ["player", "a", "b"]


def test_from_list_requires_player_first():
    monster = _entity("orc")
    monster.fighter = Fighter(base_max_hp=5, hp=5, base_defense=0, base_power=1, xp=3, on_death=DeathKind.MONSTER)
    with pytest.raises(InvariantViolation):
        EntityList.from_list([monster.to_dict(), _player().to_dict()])
    with pytest.raises(InvariantViolation):
        EntityList.from_list([_entity("stairs").to_dict()])
