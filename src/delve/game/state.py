from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

from ..colors import Color, as_color
from ..config import GameConstants
from ..map.tiles import GameMap
from ..world.entities import EntityList
from ..world.entity import Entity

logger = logging.getLogger(__name__)


@dataclass
class Messages:
    """Player-facing message log, oldest first."""

    entries: List[Tuple[str, Color]] = field(default_factory=list)

    def add(self, text: str, color: Color) -> None:
        self.entries.append((text, color))
        logger.debug("message: %s", text)

    def __iter__(self) -> Iterator[Tuple[str, Color]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def texts(self) -> List[str]:
        return [text for text, _ in self.entries]

    def last(self, count: int) -> List[Tuple[str, Color]]:
        return self.entries[-count:] if count > 0 else []


@dataclass
class Game:
    """Level-independent state: the current map, message log, inventory and depth."""

    map: GameMap
    messages: Messages = field(default_factory=Messages)
    inventory: List[Entity] = field(default_factory=list)
    dungeon_level: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "map": self.map.to_dict(),
            "messages": [[text, list(color)] for text, color in self.messages],
            "inventory": [item.to_dict() for item in self.inventory],
            "dungeon_level": self.dungeon_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Game":
        return cls(
            map=GameMap.from_dict(data["map"]),
            messages=Messages([(str(text), as_color(color)) for text, color in data.get("messages", [])]),
            inventory=[Entity.from_dict(d) for d in data.get("inventory", [])],
            dungeon_level=int(data.get("dungeon_level", 1)),
        )


@dataclass
class World:
    """Everything the turn logic mutates: the Game aggregate plus the world entities."""

    game: Game
    entities: EntityList
    constants: GameConstants = field(default_factory=GameConstants)

    @property
    def player(self) -> Entity:
        return self.entities.player

    @property
    def messages(self) -> Messages:
        return self.game.messages

    @property
    def map(self) -> GameMap:
        return self.game.map

    def to_dict(self) -> Dict[str, Any]:
        return {"game": self.game.to_dict(), "entities": self.entities.to_list()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], constants: GameConstants) -> "World":
        return cls(
            game=Game.from_dict(data["game"]),
            entities=EntityList.from_list(data["entities"]),
            constants=constants,
        )


__all__ = ["Messages", "Game", "World"]
