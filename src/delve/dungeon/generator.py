from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from .. import colors
from ..ai.states import BASIC
from ..config import GameConstants, ItemTemplate, MonsterTemplate
from ..map.tiles import GameMap
from ..rng import RandomSource
from ..transitions import from_dungeon_level
from ..world.entities import EntityList
from ..world.entity import DeathKind, Entity, Equipment, Fighter
from ..world.movement import is_blocked

logger = logging.getLogger(__name__)

STAIRS_NAME = "stairs"


@dataclass(frozen=True)
class Rect:
    """Room bounds; the outer ring of tiles stays wall."""

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> "Rect":
        return cls(x, y, x + w, y + h)

    def center(self) -> Tuple[int, int]:
        return ((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: "Rect") -> bool:
        # Inclusive: rooms sharing a border row/column count as overlapping
        return self.x1 <= other.x2 and self.x2 >= other.x1 and self.y1 <= other.y2 and self.y2 >= other.y1

    def interior(self) -> Iterator[Tuple[int, int]]:
        for x in range(self.x1 + 1, self.x2):
            for y in range(self.y1 + 1, self.y2):
                yield (x, y)


@dataclass
class GeneratedLevel:
    game_map: GameMap
    rooms: List[Rect] = field(default_factory=list)


def spawn_monster(template: MonsterTemplate, x: int, y: int) -> Entity:
    return Entity(
        x=x,
        y=y,
        glyph=template.glyph,
        name=template.name,
        color=template.color,
        blocks=True,
        alive=True,
        fighter=Fighter(
            base_max_hp=template.max_hp,
            hp=template.max_hp,
            base_defense=template.defense,
            base_power=template.power,
            xp=template.xp,
            on_death=DeathKind.MONSTER,
        ),
        ai=BASIC,
    )


def spawn_item(template: ItemTemplate, x: int, y: int) -> Entity:
    item = Entity(x=x, y=y, glyph=template.glyph, name=template.name, color=template.color, always_visible=True)
    item.item = template.kind
    if template.slot is not None:
        item.equipment = Equipment(
            slot=template.slot,
            power_bonus=template.power_bonus,
            defense_bonus=template.defense_bonus,
            max_hp_bonus=template.max_hp_bonus,
        )
    return item


class DungeonGenerator:
    """Rooms-and-corridors level builder.

    Candidate rooms that overlap an accepted one are discarded. Each accepted room
    after the first is joined to the previous one by an L-shaped tunnel, so every
    room is reachable from the first. Generation never fails: the first candidate is
    always accepted, and blocked spawn spots are simply skipped.
    """

    def __init__(self, constants: GameConstants, rng: RandomSource) -> None:
        self.constants = constants
        self.rng = rng

    def generate(self, level: int, entities: EntityList) -> GeneratedLevel:
        """Build a fresh map and repopulate ``entities``, keeping only the player at index 0."""
        c = self.constants
        game_map = GameMap(c.map_width, c.map_height)
        entities.truncate_to_player()
        rooms: List[Rect] = []

        for _ in range(c.max_rooms):
            w = self.rng.randint(c.room_min_size, c.room_max_size)
            h = self.rng.randint(c.room_min_size, c.room_max_size)
            x = self.rng.randint(0, c.map_width - w - 1)
            y = self.rng.randint(0, c.map_height - h - 1)
            new_room = Rect.from_size(x, y, w, h)

            if any(new_room.intersects(other) for other in rooms):
                continue

            self._carve_room(game_map, new_room)
            new_x, new_y = new_room.center()
            if not rooms:
                # Placed before spawning so nothing lands on the player's tile
                entities.player.set_pos(new_x, new_y)
            self.place_objects(new_room, game_map, entities, level)

            if rooms:
                prev_x, prev_y = rooms[-1].center()
                if self.rng.coin():
                    self._carve_h_tunnel(game_map, prev_x, new_x, prev_y)
                    self._carve_v_tunnel(game_map, prev_y, new_y, new_x)
                else:
                    self._carve_v_tunnel(game_map, prev_y, new_y, prev_x)
                    self._carve_h_tunnel(game_map, prev_x, new_x, new_y)
            rooms.append(new_room)

        last_x, last_y = rooms[-1].center()
        stairs = Entity(x=last_x, y=last_y, glyph="<", name=STAIRS_NAME, color=colors.WHITE, always_visible=True)
        entities.append(stairs)

        logger.debug("Level %d: %d rooms, %d entities", level, len(rooms), len(entities))
        return GeneratedLevel(game_map=game_map, rooms=rooms)

    def place_objects(self, room: Rect, game_map: GameMap, entities: EntityList, level: int) -> None:
        content = self.constants.content

        max_monsters = from_dungeon_level(content.max_monsters, level)
        monster_weights = {
            name: from_dungeon_level(weights, level) for name, weights in content.monster_weights.items()
        }
        if not any(monster_weights.values()):
            max_monsters = 0
        for _ in range(self.rng.randint(0, max_monsters)):
            x = self.rng.randint(room.x1 + 1, room.x2 - 1)
            y = self.rng.randint(room.y1 + 1, room.y2 - 1)
            if is_blocked(x, y, game_map, entities):
                continue
            name = self.rng.weighted_choice(monster_weights)
            entities.append(spawn_monster(content.monsters[name], x, y))

        max_items = from_dungeon_level(content.max_items, level)
        item_weights = {kind: from_dungeon_level(weights, level) for kind, weights in content.item_weights.items()}
        if not any(item_weights.values()):
            max_items = 0
        for _ in range(self.rng.randint(0, max_items)):
            x = self.rng.randint(room.x1 + 1, room.x2 - 1)
            y = self.rng.randint(room.y1 + 1, room.y2 - 1)
            if is_blocked(x, y, game_map, entities):
                continue
            kind = self.rng.weighted_choice(item_weights)
            entities.append(spawn_item(content.items[kind], x, y))

    @staticmethod
    def _carve_room(game_map: GameMap, room: Rect) -> None:
        for x, y in room.interior():
            game_map.carve(x, y)

    @staticmethod
    def _carve_h_tunnel(game_map: GameMap, x1: int, x2: int, y: int) -> None:
        for x in range(min(x1, x2), max(x1, x2) + 1):
            game_map.carve(x, y)

    @staticmethod
    def _carve_v_tunnel(game_map: GameMap, y1: int, y2: int, x: int) -> None:
        for y in range(min(y1, y2), max(y1, y2) + 1):
            game_map.carve(x, y)


__all__ = ["DungeonGenerator", "GeneratedLevel", "Rect", "STAIRS_NAME", "spawn_monster", "spawn_item"]
