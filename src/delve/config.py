from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from . import colors
from .transitions import Transition, table
from .world.entity import ItemKind, Slot

logger = logging.getLogger(__name__)


class MonsterTemplate(BaseModel):
    name: str
    glyph: str
    color: Tuple[int, int, int]
    max_hp: int = Field(..., gt=0)
    defense: int = 0
    power: int = 0
    xp: int = 0


class ItemTemplate(BaseModel):
    kind: ItemKind
    name: str
    glyph: str
    color: Tuple[int, int, int]
    slot: Optional[Slot] = None
    power_bonus: int = 0
    defense_bonus: int = 0
    max_hp_bonus: int = 0


def _default_monsters() -> Dict[str, MonsterTemplate]:
    return {
        "orc": MonsterTemplate(
            name="orc", glyph="o", color=colors.DESATURATED_GREEN, max_hp=20, defense=0, power=4, xp=35
        ),
        "troll": MonsterTemplate(
            name="troll", glyph="T", color=colors.DARKER_GREEN, max_hp=30, defense=2, power=8, xp=100
        ),
    }


def _default_items() -> Dict[ItemKind, ItemTemplate]:
    return {
        ItemKind.HEAL: ItemTemplate(kind=ItemKind.HEAL, name="healing potion", glyph="!", color=colors.VIOLET),
        ItemKind.LIGHTNING: ItemTemplate(
            kind=ItemKind.LIGHTNING, name="scroll of lightning bolt", glyph="#", color=colors.LIGHT_YELLOW
        ),
        ItemKind.FIREBALL: ItemTemplate(
            kind=ItemKind.FIREBALL, name="scroll of fireball", glyph="#", color=colors.LIGHT_YELLOW
        ),
        ItemKind.CONFUSE: ItemTemplate(
            kind=ItemKind.CONFUSE, name="scroll of confusion", glyph="#", color=colors.LIGHT_YELLOW
        ),
        ItemKind.SWORD: ItemTemplate(
            kind=ItemKind.SWORD, name="sword", glyph="/", color=colors.SKY, slot=Slot.RIGHT_HAND, power_bonus=3
        ),
        ItemKind.SHIELD: ItemTemplate(
            kind=ItemKind.SHIELD,
            name="shield",
            glyph="[",
            color=colors.DARKER_ORANGE,
            slot=Slot.LEFT_HAND,
            defense_bonus=1,
        ),
    }


class ContentTables(BaseModel):
    """Level-scaled spawn tables and the templates they draw from.

    Weight tables are transition tables: an entry at level 0 is a constant weight.
    Dictionary order is the draw order for weighted choice.
    """

    max_monsters: List[Transition] = Field(default_factory=lambda: table((1, 2), (4, 3), (6, 5)))
    max_items: List[Transition] = Field(default_factory=lambda: table((1, 1), (4, 2)))
    monster_weights: Dict[str, List[Transition]] = Field(
        default_factory=lambda: {
            "orc": table((0, 80)),
            "troll": table((3, 15), (5, 30), (7, 60)),
        }
    )
    # Healing potions always show up, even if every other item has zero weight
    item_weights: Dict[ItemKind, List[Transition]] = Field(
        default_factory=lambda: {
            ItemKind.HEAL: table((0, 35)),
            ItemKind.LIGHTNING: table((4, 25)),
            ItemKind.FIREBALL: table((6, 25)),
            ItemKind.CONFUSE: table((2, 10)),
            ItemKind.SWORD: table((4, 5)),
            ItemKind.SHIELD: table((8, 15)),
        }
    )
    monsters: Dict[str, MonsterTemplate] = Field(default_factory=_default_monsters)
    items: Dict[ItemKind, ItemTemplate] = Field(default_factory=_default_items)
    starting_weapon: ItemTemplate = Field(
        default_factory=lambda: ItemTemplate(
            kind=ItemKind.SWORD, name="dagger", glyph="-", color=colors.SKY, slot=Slot.LEFT_HAND, power_bonus=2
        )
    )

    @model_validator(mode="after")
    def check_templates(self) -> "ContentTables":
        missing = [name for name in self.monster_weights if name not in self.monsters]
        if missing:
            raise ValueError(f"Monster weights reference unknown monsters: {missing}")
        missing_items = [kind.value for kind in self.item_weights if kind not in self.items]
        if missing_items:
            raise ValueError(f"Item weights reference unknown items: {missing_items}")
        return self


class GameConstants(BaseModel):
    """Every tuning value of the simulation core, passed explicitly to each subsystem."""

    seed: Optional[int] = None

    map_width: int = 80
    map_height: int = 43
    room_min_size: int = Field(6, ge=3)
    room_max_size: int = 10
    max_rooms: int = Field(30, ge=1)

    player_max_hp: int = 100
    player_defense: int = 1
    player_power: int = 2

    heal_amount: int = 40
    lightning_damage: int = 40
    lightning_range: int = 5
    confuse_range: int = 8
    confuse_turns: int = 10
    fireball_radius: int = 3
    fireball_damage: int = 25

    level_up_base: int = 200
    level_up_factor: int = 150
    constitution_bonus: int = 20
    # Descending restores max_hp // rest_heal_divisor
    rest_heal_divisor: int = Field(2, ge=1)

    inventory_capacity: int = Field(26, ge=1)
    torch_radius: int = 10

    content: ContentTables = Field(default_factory=ContentTables)

    @field_validator("heal_amount", "lightning_damage", "fireball_damage", "confuse_turns")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be >= 0")
        return v

    @model_validator(mode="after")
    def check_room_sizes(self) -> "GameConstants":
        if self.room_min_size > self.room_max_size:
            raise ValueError("room_min_size must not exceed room_max_size")
        # A room of maximum size must fit with at least one spare column/row
        if self.room_max_size >= self.map_width or self.room_max_size >= self.map_height:
            raise ValueError("map must be larger than room_max_size in both dimensions")
        return self

    @classmethod
    def from_yaml(cls, path: Path) -> "GameConstants":
        """Load constants from a YAML file. Missing fields fall back to defaults."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        cfg = cls.model_validate(raw)
        logger.info("Loaded game constants from %s", path)
        return cfg

    @classmethod
    def from_env(cls, base: Optional["GameConstants"] = None) -> "GameConstants":
        """Apply ``DELVE_SEED``, ``DELVE_MAP_WIDTH`` and ``DELVE_MAP_HEIGHT`` overrides."""
        data = (base or cls()).model_dump()
        for env_name, key in (
            ("DELVE_SEED", "seed"),
            ("DELVE_MAP_WIDTH", "map_width"),
            ("DELVE_MAP_HEIGHT", "map_height"),
        ):
            value = os.getenv(env_name)
            if value is not None and value.strip() != "":
                data[key] = int(value)
                logger.debug("Override %s=%s from %s", key, value, env_name)
        return cls.model_validate(data)

    def level_up_xp(self, level: int) -> int:
        return self.level_up_base + level * self.level_up_factor


__all__ = ["GameConstants", "ContentTables", "MonsterTemplate", "ItemTemplate"]
