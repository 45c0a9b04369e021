from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..world.entities import PLAYER
from ..world.entity import Equipment

if TYPE_CHECKING:
    from ..game.state import World


def equipped_items(world: "World", index: int) -> List[Equipment]:
    """Equipment currently worn by the entity at ``index``.

    Only the player carries an inventory; monsters never wear anything.
    """
    if index != PLAYER:
        return []
    return [
        item.equipment
        for item in world.game.inventory
        if item.equipment is not None and item.equipment.equipped
    ]


def max_hp(world: "World", index: int) -> int:
    fighter = world.entities[index].fighter
    if fighter is None:
        return 0
    return fighter.base_max_hp + sum(e.max_hp_bonus for e in equipped_items(world, index))


def power(world: "World", index: int) -> int:
    fighter = world.entities[index].fighter
    if fighter is None:
        return 0
    return fighter.base_power + sum(e.power_bonus for e in equipped_items(world, index))


def defense(world: "World", index: int) -> int:
    fighter = world.entities[index].fighter
    if fighter is None:
        return 0
    return fighter.base_defense + sum(e.defense_bonus for e in equipped_items(world, index))


__all__ = ["equipped_items", "max_hp", "power", "defense"]
