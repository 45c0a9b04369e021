from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .. import colors
from ..ai.controller import take_turn
from ..combat.resolver import attack, heal
from ..config import GameConstants
from ..dungeon.generator import STAIRS_NAME, DungeonGenerator, spawn_item
from ..fov.fov import FovMap
from ..game.state import Game, Messages, World
from ..items import equipment
from ..items.effects import ItemEffectDispatcher, UseResult
from ..items.inventory import drop_item, pick_item_up
from ..progression.leveling import check_level_up, xp_to_level_up
from ..rng import RandomSource
from ..world.entities import PLAYER, EntityList
from ..world.entity import DeathKind, Entity, Fighter
from ..world.movement import move_by
from .interfaces import Chooser, Targeter, Visibility
from .targeting import CancellingTargeter, FixedChooser

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome stranger! Prepare to perish in the Tombs of the Ancient Kings."


class PlayerAction(Enum):
    TOOK_TURN = "took_turn"
    DIDNT_TAKE_TURN = "didnt_take_turn"
    EXIT = "exit"


@dataclass(frozen=True)
class Move:
    dx: int
    dy: int


@dataclass(frozen=True)
class Wait:
    pass


@dataclass(frozen=True)
class PickUp:
    pass


@dataclass(frozen=True)
class UseItem:
    inventory_index: int


@dataclass(frozen=True)
class DropItem:
    inventory_index: int


@dataclass(frozen=True)
class Descend:
    pass


@dataclass(frozen=True)
class ShowCharacter:
    """Free action; the front end reads ``Engine.character_sheet()`` to display it."""


@dataclass(frozen=True)
class Quit:
    pass


Action = Union[Move, Wait, PickUp, UseItem, DropItem, Descend, ShowCharacter, Quit]


@dataclass(frozen=True)
class CharacterSheet:
    level: int
    xp: int
    xp_to_level_up: int
    max_hp: int
    power: int
    defense: int


def new_player(constants: GameConstants) -> Entity:
    return Entity(
        x=0,
        y=0,
        glyph="@",
        name="player",
        color=colors.WHITE,
        blocks=True,
        alive=True,
        level=1,
        fighter=Fighter(
            base_max_hp=constants.player_max_hp,
            hp=constants.player_max_hp,
            base_defense=constants.player_defense,
            base_power=constants.player_power,
            xp=0,
            on_death=DeathKind.PLAYER,
        ),
    )


class Engine:
    """Turn engine: resolves one player action, then lets every monster act once.

    The player's action always completes before any AI runs. Monsters act in the
    order of the entity list.
    """

    def __init__(
        self,
        world: World,
        rng: RandomSource,
        visibility: Optional[Visibility] = None,
        targeter: Optional[Targeter] = None,
        chooser: Optional[Chooser] = None,
    ) -> None:
        self.world = world
        self.rng = rng
        self.visibility = visibility or FovMap()
        self.targeter = targeter or CancellingTargeter()
        self.chooser = chooser or FixedChooser()
        self.generator = DungeonGenerator(world.constants, rng)

    @classmethod
    def new_game(
        cls,
        constants: Optional[GameConstants] = None,
        rng: Optional[RandomSource] = None,
        visibility: Optional[Visibility] = None,
        targeter: Optional[Targeter] = None,
        chooser: Optional[Chooser] = None,
    ) -> "Engine":
        constants = constants or GameConstants()
        rng = rng or RandomSource(constants.seed)
        entities = EntityList(new_player(constants))
        level = DungeonGenerator(constants, rng).generate(1, entities)
        game = Game(map=level.game_map, messages=Messages(), inventory=[], dungeon_level=1)
        world = World(game=game, entities=entities, constants=constants)

        dagger = spawn_item(constants.content.starting_weapon, 0, 0)
        if dagger.equipment is not None:
            dagger.equipment.equipped = True
        game.inventory.append(dagger)

        engine = cls(world, rng, visibility=visibility, targeter=targeter, chooser=chooser)
        engine.recompute_fov()
        game.messages.add(WELCOME_MESSAGE, colors.RED)
        logger.info("New game started (seed=%s)", rng.seed)
        return engine

    @property
    def player_alive(self) -> bool:
        return self.world.player.alive

    def recompute_fov(self) -> None:
        player = self.world.player
        self.visibility.compute(self.world.map, player.x, player.y, self.world.constants.torch_radius)

    def step(self, action: Action) -> PlayerAction:
        """Resolve a player action; if it used a turn, advance every monster once."""
        result = self.player_action(action)
        if result is PlayerAction.TOOK_TURN and self.player_alive:
            self.advance_monsters()
        if self.player_alive:
            check_level_up(self.world, self.chooser)
        return result

    def player_action(self, action: Action) -> PlayerAction:
        world = self.world
        world.entities.check_player()
        if isinstance(action, Quit):
            return PlayerAction.EXIT
        if not self.player_alive:
            return PlayerAction.DIDNT_TAKE_TURN

        if isinstance(action, Move):
            self.player_move_or_attack(action.dx, action.dy)
            self.recompute_fov()
            return PlayerAction.TOOK_TURN
        if isinstance(action, Wait):
            return PlayerAction.TOOK_TURN
        if isinstance(action, PickUp):
            self.pick_up()
        elif isinstance(action, UseItem):
            if 0 <= action.inventory_index < len(world.game.inventory):
                self.use_item(action.inventory_index)
        elif isinstance(action, DropItem):
            if 0 <= action.inventory_index < len(world.game.inventory):
                drop_item(world, action.inventory_index)
        elif isinstance(action, Descend):
            self.descend()
        return PlayerAction.DIDNT_TAKE_TURN

    def player_move_or_attack(self, dx: int, dy: int) -> None:
        world = self.world
        player = world.player
        x, y = player.x + dx, player.y + dy
        target = next(
            (
                index
                for index, entity in world.entities.enumerate()
                if index != PLAYER and entity.alive and entity.fighter is not None and entity.pos == (x, y)
            ),
            None,
        )
        if target is not None:
            attack(world, PLAYER, target)
        else:
            move_by(PLAYER, dx, dy, world.map, world.entities)

    def advance_monsters(self) -> None:
        # Indices are re-read every iteration; AI never removes entities
        for index in range(1, len(self.world.entities)):
            entity = self.world.entities[index]
            if entity.ai is not None and entity.alive:
                take_turn(self.world, index, self.visibility, self.rng)

    def pick_up(self) -> bool:
        player = self.world.player
        for index, entity in self.world.entities.enumerate():
            if index != PLAYER and entity.item is not None and entity.pos == player.pos:
                return pick_item_up(self.world, index)
        return False

    def use_item(self, inventory_index: int) -> UseResult:
        dispatcher = ItemEffectDispatcher(self.world, self.visibility, self.targeter)
        return dispatcher.use(inventory_index)

    def on_stairs(self) -> bool:
        player = self.world.player
        return any(
            e.name == STAIRS_NAME and e.pos == player.pos
            for index, e in self.world.entities.enumerate()
            if index != PLAYER
        )

    def descend(self) -> bool:
        if not self.on_stairs():
            return False
        self.next_level()
        return True

    def next_level(self) -> None:
        """Rest, then build the next level. The inventory carries over."""
        world = self.world
        world.messages.add("You take a moment to rest, and recover your strength.", colors.VIOLET)
        heal(world, PLAYER, equipment.max_hp(world, PLAYER) // world.constants.rest_heal_divisor)
        world.messages.add(
            "After a rare moment of peace, you descend deeper into the heart of the dungeon...", colors.RED
        )
        world.game.dungeon_level += 1
        level = self.generator.generate(world.game.dungeon_level, world.entities)
        world.game.map = level.game_map
        self.recompute_fov()
        logger.info("Descended to dungeon level %d", world.game.dungeon_level)

    def character_sheet(self) -> CharacterSheet:
        world = self.world
        player = world.player
        fighter = player.fighter
        return CharacterSheet(
            level=player.level,
            xp=fighter.xp if fighter else 0,
            xp_to_level_up=xp_to_level_up(world),
            max_hp=equipment.max_hp(world, PLAYER),
            power=equipment.power(world, PLAYER),
            defense=equipment.defense(world, PLAYER),
        )


__all__ = [
    "Engine",
    "PlayerAction",
    "Action",
    "Move",
    "Wait",
    "PickUp",
    "UseItem",
    "DropItem",
    "Descend",
    "ShowCharacter",
    "Quit",
    "CharacterSheet",
    "new_player",
]
