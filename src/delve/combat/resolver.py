from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .. import colors
from ..exceptions import InvariantViolation
from ..items import equipment
from ..world.entities import PLAYER
from ..world.entity import DeathKind, Entity

if TYPE_CHECKING:
    from ..game.state import Messages, World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttackResult:
    damage: int
    killed: bool
    xp_awarded: int = 0


def _player_death(player: Entity, messages: "Messages") -> None:
    # The core only marks the corpse; ending input is up to the caller
    messages.add("You died!", colors.RED)
    player.glyph = "%"
    player.color = colors.DARK_RED


def _monster_death(monster: Entity, messages: "Messages") -> None:
    xp = monster.fighter.xp if monster.fighter else 0
    messages.add(f"{monster.name.capitalize()} is dead! You gain {xp} experience points.", colors.ORANGE)
    monster.glyph = "%"
    monster.color = colors.DARK_RED
    monster.blocks = False
    monster.fighter = None
    monster.ai = None
    monster.name = f"remains of {monster.name}"
    messages.add(monster.name, colors.ORANGE)


def on_death(kind: DeathKind, entity: Entity, messages: "Messages") -> None:
    if kind is DeathKind.PLAYER:
        _player_death(entity, messages)
    elif kind is DeathKind.MONSTER:
        _monster_death(entity, messages)
    else:  # pragma: no cover - closed enum
        raise InvariantViolation(f"Unknown death kind: {kind!r}")


def take_damage(world: "World", index: int, amount: int) -> Optional[int]:
    """Apply damage; return the xp reward if this blow killed the entity.

    HP never drops below 0. The reward is returned at most once per entity: a dead
    entity takes no further damage and yields nothing.
    """
    if amount < 0:
        raise InvariantViolation(f"Damage must be non-negative, got {amount}")
    entity = world.entities[index]
    fighter = entity.fighter
    if fighter is None or not entity.alive:
        return None
    if amount > 0:
        fighter.hp = max(0, fighter.hp - amount)
        logger.debug("%s takes %d damage (hp=%d)", entity.name, amount, fighter.hp)
    if fighter.hp <= 0:
        entity.alive = False
        xp = fighter.xp
        on_death(fighter.on_death, entity, world.messages)
        logger.debug("%s died (xp reward %d)", entity.name, xp)
        return xp
    return None


def award_xp(world: "World", victim_index: int, xp: Optional[int]) -> int:
    """Credit a kill's xp to the player. The player's own death is never rewarded."""
    if not xp or victim_index == PLAYER:
        return 0
    fighter = world.player.fighter
    if fighter is None:
        return 0
    fighter.xp += xp
    return xp


def attack(world: "World", attacker_index: int, defender_index: int) -> AttackResult:
    """Resolve one melee attack: damage = max(0, power - defense)."""
    attacker, defender = world.entities.pair(attacker_index, defender_index)
    damage = max(0, equipment.power(world, attacker_index) - equipment.defense(world, defender_index))
    if damage <= 0:
        world.messages.add(
            f"{attacker.name.capitalize()} attacks {defender.name} but it has no effect!", colors.WHITE
        )
        return AttackResult(damage=0, killed=False)

    world.messages.add(
        f"{attacker.name.capitalize()} attacks {defender.name} for {damage} hit points.", colors.WHITE
    )
    xp = take_damage(world, defender_index, damage)
    awarded = award_xp(world, defender_index, xp)
    return AttackResult(damage=damage, killed=xp is not None, xp_awarded=awarded)


def heal(world: "World", index: int, amount: int) -> int:
    """Restore hp up to the effective maximum. Returns the amount actually healed."""
    fighter = world.entities[index].fighter
    if fighter is None:
        return 0
    before = fighter.hp
    fighter.hp = min(fighter.hp + amount, equipment.max_hp(world, index))
    return fighter.hp - before


__all__ = ["AttackResult", "attack", "take_damage", "award_xp", "heal", "on_death"]
