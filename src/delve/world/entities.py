from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from ..exceptions import InvariantViolation
from .entity import DeathKind, Entity

logger = logging.getLogger(__name__)

PLAYER = 0


class EntityList:
    """Dense, ordered arena of world entities addressed by integer index.

    Index 0 always holds the player for the lifetime of the list. Removal uses
    swap-removal, which moves the last entity into the freed index; callers must not
    hold indices across a removal.
    """

    def __init__(self, player: Entity, others: Iterable[Entity] = ()) -> None:
        self._player = player
        self._items: List[Entity] = [player, *others]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Entity:
        return self._items[index]

    @property
    def player(self) -> Entity:
        self.check_player()
        return self._items[PLAYER]

    def check_player(self) -> None:
        if not self._items or self._items[PLAYER] is not self._player:
            raise InvariantViolation("Index 0 of the entity list is not the player")

    def _check_index(self, index: int) -> None:
        # Negative indices would alias entries counted from the tail
        if not 0 <= index < len(self._items):
            raise InvariantViolation(f"Entity index {index} out of range 0..{len(self._items) - 1}")

    def pair(self, first: int, second: int) -> Tuple[Entity, Entity]:
        """Return the entities at two *distinct* indices, in argument order.

        Passing the same index twice is a programming error and raises
        InvariantViolation; it is not a recoverable condition.
        """
        self._check_index(first)
        self._check_index(second)
        if first == second:
            raise InvariantViolation(f"pair() requires distinct indices, got {first} twice")
        return self._items[first], self._items[second]

    def append(self, entity: Entity) -> int:
        self._items.append(entity)
        return len(self._items) - 1

    def swap_remove(self, index: int) -> Entity:
        """Remove and return the entity at ``index``; the last entity takes its place."""
        self._check_index(index)
        if index == PLAYER:
            raise InvariantViolation("The player cannot be removed from the entity list")
        last = self._items.pop()
        if index == len(self._items):
            return last
        removed = self._items[index]
        self._items[index] = last
        return removed

    def truncate_to_player(self) -> None:
        """Discard every entity except the player."""
        self.check_player()
        del self._items[1:]

    def enumerate(self) -> Iterator[Tuple[int, Entity]]:
        return enumerate(self._items)

    def at(self, x: int, y: int) -> List[int]:
        """Indices of every entity standing on (x, y), in collection order."""
        return [i for i, e in enumerate(self._items) if e.x == x and e.y == y]

    def to_list(self) -> List[Dict[str, Any]]:
        self.check_player()
        return [e.to_dict() for e in self._items]

    @classmethod
    def from_list(cls, data: List[Dict[str, Any]]) -> "EntityList":
        if not data:
            raise ValueError("Entity list must contain at least the player")
        entities = [Entity.from_dict(d) for d in data]
        player = entities[0]
        if player.fighter is None or player.fighter.on_death is not DeathKind.PLAYER:
            raise InvariantViolation(f"Entity at index 0 is not the player: {player!r}")
        return cls(player, entities[1:])


__all__ = ["EntityList", "PLAYER"]
