from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from .. import colors
from ..world.entity import Entity, Slot

if TYPE_CHECKING:
    from ..game.state import Messages, World

logger = logging.getLogger(__name__)


def get_equipped_in_slot(slot: Slot, inventory: List[Entity]) -> Optional[int]:
    """Inventory index of the item currently equipped in ``slot``, if any."""
    for inventory_index, item in enumerate(inventory):
        if item.equipment is not None and item.equipment.equipped and item.equipment.slot == slot:
            return inventory_index
    return None


def equip(item: Entity, messages: "Messages") -> None:
    if item.equipment is None:
        messages.add(f"Can't equip {item.name} because it's not equipment.", colors.RED)
        return
    if item.equipment.equipped:
        return
    item.equipment.equipped = True
    messages.add(f"Equipped {item.name} on {item.equipment.slot.value}.", colors.LIGHT_GREEN)


def dequip(item: Entity, messages: "Messages") -> None:
    if item.equipment is None:
        messages.add(f"Can't dequip {item.name} because it's not equipment.", colors.RED)
        return
    if not item.equipment.equipped:
        return
    item.equipment.equipped = False
    messages.add(f"Dequipped {item.name} from {item.equipment.slot.value}.", colors.LIGHT_YELLOW)


def toggle_equipment(world: "World", inventory_index: int) -> bool:
    """Equip or unequip an inventory item, keeping one item per slot.

    Returns False when the item carries no equipment data.
    """
    inventory = world.game.inventory
    item = inventory[inventory_index]
    if item.equipment is None:
        return False
    if item.equipment.equipped:
        dequip(item, world.messages)
        return True
    current = get_equipped_in_slot(item.equipment.slot, inventory)
    if current is not None:
        dequip(inventory[current], world.messages)
    equip(item, world.messages)
    return True


def pick_item_up(world: "World", index: int) -> bool:
    """Move the world entity at ``index`` into the inventory.

    Fails with a message, leaving everything untouched, when the inventory is full.
    Equipment is worn immediately if its slot is free.
    """
    inventory = world.game.inventory
    if len(inventory) >= world.constants.inventory_capacity:
        world.messages.add(
            f"Your inventory is full, cannot pick up {world.entities[index].name}.", colors.RED
        )
        return False

    item = world.entities.swap_remove(index)
    world.messages.add(f"You picked up a {item.name}!", colors.GREEN)
    inventory.append(item)
    logger.debug("Picked up %s (%d/%d)", item.name, len(inventory), world.constants.inventory_capacity)

    if item.equipment is not None and get_equipped_in_slot(item.equipment.slot, inventory) is None:
        equip(item, world.messages)
    return True


def drop_item(world: "World", inventory_index: int) -> Entity:
    """Put an inventory item back on the map under the player, unequipping it first."""
    item = world.game.inventory.pop(inventory_index)
    if item.equipment is not None:
        dequip(item, world.messages)
    player = world.player
    item.set_pos(player.x, player.y)
    world.messages.add(f"You dropped a {item.name}.", colors.YELLOW)
    world.entities.append(item)
    return item


__all__ = [
    "get_equipped_in_slot",
    "equip",
    "dequip",
    "toggle_equipment",
    "pick_item_up",
    "drop_item",
]
