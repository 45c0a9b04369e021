from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..ai.states import Ai, ai_from_dict
from ..colors import WHITE, Color, as_color


class Slot(str, Enum):
    LEFT_HAND = "left hand"
    RIGHT_HAND = "right hand"
    HEAD = "head"


class ItemKind(str, Enum):
    HEAL = "heal"
    LIGHTNING = "lightning"
    CONFUSE = "confuse"
    FIREBALL = "fireball"
    SWORD = "sword"
    SHIELD = "shield"


class DeathKind(str, Enum):
    """Which fixed death behaviour runs when a Fighter first drops to 0 hp."""

    PLAYER = "player"
    MONSTER = "monster"


@dataclass
class Fighter:
    base_max_hp: int
    hp: int
    base_defense: int
    base_power: int
    xp: int
    on_death: DeathKind

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_max_hp": self.base_max_hp,
            "hp": self.hp,
            "base_defense": self.base_defense,
            "base_power": self.base_power,
            "xp": self.xp,
            "on_death": self.on_death.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Fighter":
        return cls(
            base_max_hp=int(data["base_max_hp"]),
            hp=int(data["hp"]),
            base_defense=int(data["base_defense"]),
            base_power=int(data["base_power"]),
            xp=int(data["xp"]),
            on_death=DeathKind(data["on_death"]),
        )


@dataclass
class Equipment:
    slot: Slot
    equipped: bool = False
    power_bonus: int = 0
    defense_bonus: int = 0
    max_hp_bonus: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slot": self.slot.value,
            "equipped": self.equipped,
            "power_bonus": self.power_bonus,
            "defense_bonus": self.defense_bonus,
            "max_hp_bonus": self.max_hp_bonus,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Equipment":
        return cls(
            slot=Slot(data["slot"]),
            equipped=bool(data["equipped"]),
            power_bonus=int(data.get("power_bonus", 0)),
            defense_bonus=int(data.get("defense_bonus", 0)),
            max_hp_bonus=int(data.get("max_hp_bonus", 0)),
        )


@dataclass
class Entity:
    """Anything that sits on the map: the player, monsters, items, stairs.

    Components are optional; a corpse is an Entity whose fighter and ai have been cleared.
    """

    x: int
    y: int
    glyph: str
    name: str
    color: Color = WHITE
    blocks: bool = False
    alive: bool = False
    always_visible: bool = False
    level: int = 1
    fighter: Optional[Fighter] = None
    ai: Optional[Ai] = None
    item: Optional[ItemKind] = None
    equipment: Optional[Equipment] = None

    @property
    def pos(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def set_pos(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def distance(self, x: int, y: int) -> float:
        return math.hypot(x - self.x, y - self.y)

    def distance_to(self, other: "Entity") -> float:
        return self.distance(other.x, other.y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "glyph": self.glyph,
            "name": self.name,
            "color": list(self.color),
            "blocks": self.blocks,
            "alive": self.alive,
            "always_visible": self.always_visible,
            "level": self.level,
            "fighter": self.fighter.to_dict() if self.fighter else None,
            "ai": self.ai.to_dict() if self.ai else None,
            "item": self.item.value if self.item else None,
            "equipment": self.equipment.to_dict() if self.equipment else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entity":
        fighter = data.get("fighter")
        equipment = data.get("equipment")
        item = data.get("item")
        return cls(
            x=int(data["x"]),
            y=int(data["y"]),
            glyph=str(data["glyph"]),
            name=str(data["name"]),
            color=as_color(data.get("color", WHITE)),
            blocks=bool(data.get("blocks", False)),
            alive=bool(data.get("alive", False)),
            always_visible=bool(data.get("always_visible", False)),
            level=int(data.get("level", 1)),
            fighter=Fighter.from_dict(fighter) if fighter else None,
            ai=ai_from_dict(data.get("ai")),
            item=ItemKind(item) if item else None,
            equipment=Equipment.from_dict(equipment) if equipment else None,
        )

    def __repr__(self) -> str:
        return f"Entity({self.name}@{self.x},{self.y})"


__all__ = ["Entity", "Fighter", "Equipment", "Slot", "ItemKind", "DeathKind"]
