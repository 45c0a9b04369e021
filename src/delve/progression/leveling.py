from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from .. import colors
from ..exceptions import InvariantViolation

if TYPE_CHECKING:
    from ..engine.interfaces import Chooser
    from ..game.state import World

logger = logging.getLogger(__name__)

LEVEL_UP_PROMPT = "Level up! Choose a stat to raise:\n"


class StatChoice(Enum):
    CONSTITUTION = 0
    STRENGTH = 1
    AGILITY = 2

    @property
    def label(self) -> str:
        return {StatChoice.CONSTITUTION: "HP", StatChoice.STRENGTH: "attack", StatChoice.AGILITY: "defense"}[self]


def xp_to_level_up(world: "World") -> int:
    return world.constants.level_up_xp(world.player.level)


def level_up_options(world: "World") -> List[str]:
    fighter = world.player.fighter
    if fighter is None:
        raise InvariantViolation("The player has no fighter component")
    bonus = world.constants.constitution_bonus
    return [
        f"Constitution (+{bonus} HP, from {fighter.base_max_hp})",
        f"Strength (+1 attack, from {fighter.base_power})",
        f"Agility (+1 defense, from {fighter.base_defense})",
    ]


def _ask_for_stat(world: "World", chooser: "Chooser") -> StatChoice:
    # Keep asking until a choice is made and confirmed
    while True:
        picked = chooser.choose(LEVEL_UP_PROMPT, level_up_options(world))
        if picked is None or not 0 <= picked < len(StatChoice):
            continue
        choice = StatChoice(picked)
        confirm = chooser.choose(f"Are you sure you want to upgrade your {choice.label}?\n", ["no", "yes"])
        if confirm == 1:
            return choice


def apply_stat_choice(world: "World", choice: StatChoice) -> None:
    fighter = world.player.fighter
    if fighter is None:
        raise InvariantViolation("The player has no fighter component")
    if choice is StatChoice.CONSTITUTION:
        fighter.base_max_hp += world.constants.constitution_bonus
        fighter.hp += world.constants.constitution_bonus
    elif choice is StatChoice.STRENGTH:
        fighter.base_power += 1
    else:
        fighter.base_defense += 1


def check_level_up(world: "World", chooser: "Chooser") -> Optional[StatChoice]:
    """Level the player up once if their xp has reached the threshold.

    Only the threshold is subtracted from xp; any surplus carries over. Returns the
    committed stat choice, or None if no level was gained.
    """
    player = world.player
    fighter = player.fighter
    if fighter is None:
        return None
    threshold = xp_to_level_up(world)
    if fighter.xp < threshold:
        return None

    player.level += 1
    world.messages.add(
        f"Your battle skills grow stronger! You reached level {player.level}!", colors.YELLOW
    )
    choice = _ask_for_stat(world, chooser)
    fighter.xp -= threshold
    apply_stat_choice(world, choice)
    logger.info("Player reached level %d, raised %s", player.level, choice.name.lower())
    return choice


__all__ = ["StatChoice", "check_level_up", "apply_stat_choice", "xp_to_level_up", "level_up_options"]
