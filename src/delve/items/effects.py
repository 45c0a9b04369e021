from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional

from .. import colors
from ..ai.states import confuse
from ..combat.resolver import award_xp, heal, take_damage
from ..world.entities import PLAYER
from ..world.entity import ItemKind
from . import equipment
from .inventory import toggle_equipment

if TYPE_CHECKING:
    from ..engine.interfaces import Targeter, Visibility
    from ..game.state import World

logger = logging.getLogger(__name__)


class UseResult(Enum):
    USED_UP = "used_up"
    USED_AND_KEPT = "used_and_kept"
    CANCELLED = "cancelled"


def closest_monster(world: "World", visibility: "Visibility", max_range: float) -> Optional[int]:
    """Nearest living hostile in view and closer than ``max_range + 1`` to the player.

    Ties go to the first entity found at the minimum distance.
    """
    player = world.player
    closest: Optional[int] = None
    closest_dist = float(max_range + 1)
    for index, entity in world.entities.enumerate():
        if index == PLAYER or entity.fighter is None or entity.ai is None or not entity.alive:
            continue
        if not visibility.is_in_fov(entity.x, entity.y):
            continue
        dist = player.distance_to(entity)
        if dist < closest_dist:
            closest = index
            closest_dist = dist
    return closest


class ItemEffectDispatcher:
    """Resolves the use of an inventory item against the world.

    Targeted effects go through ``targeter``, which the front end implements; tests
    pass a scripted one.
    """

    def __init__(self, world: "World", visibility: "Visibility", targeter: "Targeter") -> None:
        self.world = world
        self.visibility = visibility
        self.targeter = targeter
        self._handlers: Dict[ItemKind, Callable[[int], UseResult]] = {
            ItemKind.HEAL: self.cast_heal,
            ItemKind.LIGHTNING: self.cast_lightning,
            ItemKind.CONFUSE: self.cast_confuse,
            ItemKind.FIREBALL: self.cast_fireball,
            ItemKind.SWORD: self.toggle,
            ItemKind.SHIELD: self.toggle,
        }

    def use(self, inventory_index: int) -> UseResult:
        inventory = self.world.game.inventory
        item = inventory[inventory_index]
        handler = self._handlers.get(item.item) if item.item is not None else None
        if handler is None:
            self.world.messages.add(f"The {item.name} cannot be used.", colors.WHITE)
            return UseResult.CANCELLED

        result = handler(inventory_index)
        logger.debug("Used %s -> %s", item.name, result.value)
        if result is UseResult.USED_UP:
            inventory.pop(inventory_index)
        elif result is UseResult.CANCELLED:
            self.world.messages.add("Cancelled", colors.WHITE)
        return result

    def cast_heal(self, inventory_index: int) -> UseResult:
        world = self.world
        fighter = world.player.fighter
        if fighter is None:
            return UseResult.CANCELLED
        if fighter.hp >= equipment.max_hp(world, PLAYER):
            world.messages.add("You are already at full health.", colors.RED)
            return UseResult.CANCELLED
        world.messages.add("Your wounds start to feel better!", colors.LIGHT_VIOLET)
        heal(world, PLAYER, world.constants.heal_amount)
        return UseResult.USED_UP

    def cast_lightning(self, inventory_index: int) -> UseResult:
        world = self.world
        constants = world.constants
        target = closest_monster(world, self.visibility, constants.lightning_range)
        if target is None:
            world.messages.add("No enemy is close enough to strike.", colors.RED)
            return UseResult.CANCELLED
        world.messages.add(
            f"A lightning bolt strikes the {world.entities[target].name} with a loud thunder! "
            f"The damage is {constants.lightning_damage} hit points.",
            colors.LIGHT_BLUE,
        )
        xp = take_damage(world, target, constants.lightning_damage)
        award_xp(world, target, xp)
        return UseResult.USED_UP

    def cast_confuse(self, inventory_index: int) -> UseResult:
        world = self.world
        world.messages.add("Left-click an enemy to confuse it, or right-click to cancel.", colors.LIGHT_CYAN)
        target = self.targeter.monster(float(world.constants.confuse_range))
        if target is None:
            return UseResult.CANCELLED
        monster = world.entities[target]
        monster.ai = confuse(monster.ai, world.constants.confuse_turns)
        world.messages.add(
            f"The eyes of the {monster.name} look vacant, as it starts to stumble around!",
            colors.LIGHT_GREEN,
        )
        return UseResult.USED_UP

    def cast_fireball(self, inventory_index: int) -> UseResult:
        world = self.world
        constants = world.constants
        world.messages.add(
            "Left-click a target tile for the fireball, or right-click to cancel.", colors.LIGHT_CYAN
        )
        tile = self.targeter.tile(None)
        if tile is None:
            return UseResult.CANCELLED
        x, y = tile
        world.messages.add(
            f"The fireball explodes, burning everything within {constants.fireball_radius} tiles!",
            colors.ORANGE,
        )
        xp_to_gain = 0
        for index, entity in world.entities.enumerate():
            if entity.fighter is None or entity.distance(x, y) > constants.fireball_radius:
                continue
            world.messages.add(
                f"The {entity.name} gets burned for {constants.fireball_damage} hit points.", colors.ORANGE
            )
            xp = take_damage(world, index, constants.fireball_damage)
            if xp is not None and index != PLAYER:
                # No reward for burning yourself
                xp_to_gain += xp
        if xp_to_gain and world.player.fighter is not None:
            world.player.fighter.xp += xp_to_gain
        return UseResult.USED_UP

    def toggle(self, inventory_index: int) -> UseResult:
        if not toggle_equipment(self.world, inventory_index):
            return UseResult.CANCELLED
        return UseResult.USED_AND_KEPT


__all__ = ["UseResult", "ItemEffectDispatcher", "closest_monster"]
