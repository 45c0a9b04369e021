from conftest import ScriptedChooser, ScriptedTargeter

from delve.config import GameConstants
from delve.dungeon.generator import STAIRS_NAME
from delve.engine import Descend, DropItem, Engine, Move, PickUp, PlayerAction, Quit, ShowCharacter, UseItem, Wait
from delve.engine.engine import WELCOME_MESSAGE
from delve.rng import RandomSource
from delve.world.entities import PLAYER
from delve.world.entity import Entity, ItemKind


def _engine(world, visibility, chooser=None, targeter=None):
    return Engine(world, RandomSource(1), visibility=visibility, targeter=targeter, chooser=chooser)


def test_new_game_sets_up_player_and_dagger():
    engine = Engine.new_game(GameConstants(seed=21))
    world = engine.world
    player = world.player
    assert world.entities[PLAYER] is player
    assert player.alive and player.fighter.hp == 100
    assert [item.name for item in world.game.inventory] == ["dagger"]
    assert world.game.inventory[0].equipment.equipped
    assert engine.character_sheet().power == 4
    assert world.messages.texts() == [WELCOME_MESSAGE]
    assert world.map.tile(*player.pos).explored
    assert engine.visibility.is_in_fov(*player.pos)


def test_new_game_is_reproducible():
    a = Engine.new_game(GameConstants(seed=5))
    b = Engine.new_game(GameConstants(seed=5))
    assert a.world.map.to_ascii() == b.world.map.to_ascii()
    assert [e.pos for e in a.world.entities] == [e.pos for e in b.world.entities]


def test_move_takes_a_turn(world, all_visible):
    engine = _engine(world, all_visible)
    assert engine.step(Move(1, 0)) is PlayerAction.TOOK_TURN
    assert world.player.pos == (6, 5)


def test_bumping_a_monster_attacks_and_it_answers(world, add_monster, all_visible):
    orc = add_monster("orc", 6, 5)
    engine = _engine(world, all_visible)
    assert engine.step(Move(1, 0)) is PlayerAction.TOOK_TURN
    assert world.player.pos == (5, 5)
    assert world.entities[orc].fighter.hp == 18
    assert world.player.fighter.hp == 97
    assert world.messages.texts()[-2:] == [
        "Player attacks orc for 2 hit points.",
        "Orc attacks player for 3 hit points.",
    ]


def test_bumping_a_wall_still_takes_a_turn(world, add_monster, all_visible):
    world.player.set_pos(1, 1)
    orc = add_monster("orc", 4, 1)
    engine = _engine(world, all_visible)
    assert engine.step(Move(-1, 0)) is PlayerAction.TOOK_TURN
    assert world.entities[orc].pos == (3, 1)


def test_wait_lets_monsters_act(world, add_monster, all_visible):
    orc = add_monster("orc", 9, 5)
    engine = _engine(world, all_visible)
    engine.step(Wait())
    assert world.entities[orc].pos == (8, 5)


def test_pick_up_and_drop_are_free(world, add_monster, make_item, all_visible):
    orc = add_monster("orc", 6, 5)
    world.entities.append(make_item(ItemKind.HEAL, *world.player.pos))
    engine = _engine(world, all_visible)

    assert engine.step(PickUp()) is PlayerAction.DIDNT_TAKE_TURN
    assert len(world.game.inventory) == 1
    assert engine.step(DropItem(0)) is PlayerAction.DIDNT_TAKE_TURN
    assert world.game.inventory == []
    assert world.player.fighter.hp == 100
    assert world.entities[orc].fighter.hp == 20


def test_pick_up_with_nothing_here(world, all_visible):
    engine = _engine(world, all_visible)
    assert engine.step(PickUp()) is PlayerAction.DIDNT_TAKE_TURN
    assert engine.pick_up() is False


def test_using_an_item_is_free(world, add_monster, make_item, all_visible):
    orc = add_monster("orc", 8, 5)
    world.game.inventory.append(make_item(ItemKind.CONFUSE))
    engine = _engine(world, all_visible, targeter=ScriptedTargeter(monsters=[orc]))
    assert engine.step(UseItem(0)) is PlayerAction.DIDNT_TAKE_TURN
    assert world.entities[orc].pos == (8, 5)
    assert world.game.inventory == []


def test_out_of_range_inventory_index_is_ignored(world, all_visible):
    engine = _engine(world, all_visible)
    assert engine.step(UseItem(3)) is PlayerAction.DIDNT_TAKE_TURN
    assert engine.step(DropItem(-1)) is PlayerAction.DIDNT_TAKE_TURN


def test_quit_exits(world, all_visible):
    assert _engine(world, all_visible).step(Quit()) is PlayerAction.EXIT


def test_dead_player_cannot_act(world, add_monster, all_visible):
    orc = add_monster("orc", 9, 5)
    world.player.alive = False
    engine = _engine(world, all_visible)
    assert engine.step(Move(1, 0)) is PlayerAction.DIDNT_TAKE_TURN
    assert world.player.pos == (5, 5)
    assert world.entities[orc].pos == (9, 5)


def test_monsters_act_in_list_order(world, add_monster, all_visible):
    first = add_monster("orc", 6, 5)
    second = add_monster("orc", 4, 5)
    world.player.fighter.hp = 4
    engine = _engine(world, all_visible)
    engine.step(Wait())
    assert not world.player.alive
    texts = world.messages.texts()
    assert texts[-3:] == [
        "Orc attacks player for 3 hit points.",
        "Orc attacks player for 3 hit points.",
        "You died!",
    ]
    assert world.entities[first].alive and world.entities[second].alive


def test_descend_on_stairs_builds_next_level(world, make_item, all_visible):
    world.entities.append(Entity(x=5, y=5, glyph="<", name=STAIRS_NAME))
    world.game.inventory.append(make_item(ItemKind.HEAL))
    world.player.fighter.hp = 40
    engine = _engine(world, all_visible)

    assert engine.step(Descend()) is PlayerAction.DIDNT_TAKE_TURN
    assert world.game.dungeon_level == 2
    assert world.player.fighter.hp == 90
    assert len(world.game.inventory) == 1
    assert world.entities[PLAYER] is world.player
    assert world.entities[len(world.entities) - 1].name == STAIRS_NAME
    assert not world.map.is_blocked(*world.player.pos)


def test_descend_off_stairs_does_nothing(world, all_visible):
    engine = _engine(world, all_visible)
    assert engine.descend() is False
    assert world.game.dungeon_level == 1


def test_level_up_checked_after_each_step(world, all_visible):
    world.player.fighter.xp = 360
    chooser = ScriptedChooser([2, 1])
    engine = _engine(world, all_visible, chooser=chooser)
    engine.step(Wait())
    assert world.player.level == 2
    assert world.player.fighter.xp == 10
    sheet = engine.character_sheet()
    assert (sheet.level, sheet.defense, sheet.xp_to_level_up) == (2, 2, 500)


def test_show_character_is_free(world, add_monster, all_visible):
    orc = add_monster("orc", 9, 5)
    engine = _engine(world, all_visible)
    assert engine.step(ShowCharacter()) is PlayerAction.DIDNT_TAKE_TURN
    assert world.entities[orc].pos == (9, 5)
