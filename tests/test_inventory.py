from delve.items.equipment import power
from delve.items.inventory import drop_item, get_equipped_in_slot, pick_item_up, toggle_equipment
from delve.world.entities import PLAYER
from delve.world.entity import ItemKind, Slot


def _place(world, item):
    item.set_pos(*world.player.pos)
    return world.entities.append(item)


def test_pick_up_moves_item_into_inventory(world, make_item):
    index = _place(world, make_item(ItemKind.HEAL))
    assert pick_item_up(world, index)
    assert len(world.entities) == 1
    assert [i.name for i in world.game.inventory] == ["healing potion"]
    assert world.messages.texts()[-1] == "You picked up a healing potion!"


def test_full_inventory_refuses(world, make_item):
    world.game.inventory.extend(make_item(ItemKind.HEAL) for _ in range(26))
    index = _place(world, make_item(ItemKind.CONFUSE))
    assert not pick_item_up(world, index)
    assert len(world.game.inventory) == 26
    assert world.entities[index].name == "scroll of confusion"
    assert world.messages.texts()[-1] == "Your inventory is full, cannot pick up scroll of confusion."


def test_equipment_auto_equips_into_free_slot(world, make_item):
    index = _place(world, make_item(ItemKind.SWORD))
    pick_item_up(world, index)
    sword = world.game.inventory[0]
    assert sword.equipment.equipped
    assert "Equipped sword on right hand." in world.messages.texts()
    assert power(world, PLAYER) == 5


def test_second_item_for_same_slot_stays_in_pack(world, make_item):
    pick_item_up(world, _place(world, make_item(ItemKind.SWORD)))
    pick_item_up(world, _place(world, make_item(ItemKind.SWORD)))
    first, second = world.game.inventory
    assert first.equipment.equipped
    assert not second.equipment.equipped


def test_toggle_swaps_items_in_slot(world, make_item):
    pick_item_up(world, _place(world, make_item(ItemKind.SWORD)))
    pick_item_up(world, _place(world, make_item(ItemKind.SWORD)))

    assert toggle_equipment(world, 1)
    first, second = world.game.inventory
    assert not first.equipment.equipped
    assert second.equipment.equipped
    assert get_equipped_in_slot(Slot.RIGHT_HAND, world.game.inventory) == 1
    texts = world.messages.texts()
    assert texts[-2:] == ["Dequipped sword from right hand.", "Equipped sword on right hand."]


def test_toggle_unequips(world, make_item):
    pick_item_up(world, _place(world, make_item(ItemKind.SHIELD)))
    assert toggle_equipment(world, 0)
    assert get_equipped_in_slot(Slot.LEFT_HAND, world.game.inventory) is None


def test_toggle_non_equipment(world, make_item):
    world.game.inventory.append(make_item(ItemKind.HEAL))
    assert not toggle_equipment(world, 0)


def test_drop_equipped_item_unequips_and_places_under_player(world, make_item):
    pick_item_up(world, _place(world, make_item(ItemKind.SHIELD)))
    world.player.set_pos(7, 7)
    dropped = drop_item(world, 0)

    assert world.game.inventory == []
    assert not dropped.equipment.equipped
    assert dropped.pos == (7, 7)
    assert world.entities[len(world.entities) - 1] is dropped
    assert world.messages.texts()[-2:] == ["Dequipped shield from left hand.", "You dropped a shield."]


def test_drop_plain_item_has_no_dequip_message(world, make_item):
    world.game.inventory.append(make_item(ItemKind.HEAL))
    drop_item(world, 0)
    assert world.messages.texts() == ["You dropped a healing potion."]
