from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .. import colors
from ..combat.resolver import attack
from ..world.entities import PLAYER
from ..world.movement import move_by, move_towards
from .states import BASIC, Ai, BasicAi, ConfusedAi

if TYPE_CHECKING:
    from ..engine.interfaces import Visibility
    from ..game.state import World
    from ..rng import RandomSource

logger = logging.getLogger(__name__)

# Monsters closer than this to the player attack instead of moving
MELEE_DISTANCE = 2.0


def take_turn(world: "World", index: int, visibility: "Visibility", rng: "RandomSource") -> None:
    """Advance the AI state of the entity at ``index`` by one turn."""
    entity = world.entities[index]
    ai = entity.ai
    if ai is None or not entity.alive:
        return
    if isinstance(ai, ConfusedAi):
        new_ai = _confused_turn(world, index, ai, rng)
    else:
        new_ai = _basic_turn(world, index, visibility)
    # The monster may have been neutralised during its own turn
    if entity.alive and entity.ai is ai:
        entity.ai = new_ai


def _basic_turn(world: "World", index: int, visibility: "Visibility") -> BasicAi:
    # If you can see it, it can see you
    monster = world.entities[index]
    player = world.player
    if not visibility.is_in_fov(monster.x, monster.y):
        return BASIC
    if monster.distance_to(player) >= MELEE_DISTANCE:
        move_towards(index, player.x, player.y, world.map, world.entities)
    elif player.alive and player.fighter is not None and player.fighter.hp > 0:
        attack(world, index, PLAYER)
    return BASIC


def _confused_turn(world: "World", index: int, ai: ConfusedAi, rng: "RandomSource") -> Ai:
    monster = world.entities[index]
    if ai.turns_remaining >= 0:
        move_by(index, rng.randint(-1, 1), rng.randint(-1, 1), world.map, world.entities)
        return ConfusedAi(previous=ai.previous, turns_remaining=ai.turns_remaining - 1)
    world.messages.add(f"The {monster.name} is no longer confused!", colors.RED)
    logger.debug("%s reverts to %s", monster.name, type(ai.previous).__name__)
    return ai.previous


__all__ = ["take_turn", "MELEE_DISTANCE"]
