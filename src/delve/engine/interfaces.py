"""Boundaries to the services the core is driven by but does not implement.

Rendering, input polling and menu prompts belong to a front end. The core only
relies on the small protocols below, so a terminal, a windowed renderer or a test
script can drive it interchangeably.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol, Sequence, Tuple, Union

if TYPE_CHECKING:
    from ..game.state import World
    from ..map.tiles import GameMap


@dataclass(frozen=True)
class KeyEvent:
    """A key press. ``key`` is a lowercase name such as ``"escape"`` or ``"g"``."""

    key: str


@dataclass(frozen=True)
class MouseEvent:
    """Mouse state in map cell coordinates with pressed-button flags."""

    cx: int
    cy: int
    left: bool = False
    right: bool = False


Event = Union[KeyEvent, MouseEvent]


@dataclass(frozen=True)
class ViewState:
    """Read-only snapshot handed to the renderer."""

    world: "World"
    visibility: "Visibility"
    targeting: bool = False


class Visibility(Protocol):
    def is_in_fov(self, x: int, y: int) -> bool:  # pragma: no cover - Protocol
        ...

    def compute(self, game_map: "GameMap", x: int, y: int, radius: int) -> None:  # pragma: no cover - Protocol
        ...


class Renderer(Protocol):
    def render(self, view: ViewState) -> None:  # pragma: no cover - Protocol
        ...


class InputSource(Protocol):
    def poll(self) -> Optional[Event]:  # pragma: no cover - Protocol
        ...


class Targeter(Protocol):
    """Synchronous targeting requests; ``None`` means the player cancelled."""

    def tile(self, max_range: Optional[float] = None) -> Optional[Tuple[int, int]]:  # pragma: no cover
        ...

    def monster(self, max_range: Optional[float] = None) -> Optional[int]:  # pragma: no cover
        ...


class Chooser(Protocol):
    """Menu prompt: returns the index of the picked option, or None if dismissed."""

    def choose(self, prompt: str, options: Sequence[str]) -> Optional[int]:  # pragma: no cover - Protocol
        ...


__all__ = [
    "KeyEvent",
    "MouseEvent",
    "Event",
    "ViewState",
    "Visibility",
    "Renderer",
    "InputSource",
    "Targeter",
    "Chooser",
]
