from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class BasicAi:
    """Chase the player while visible, attack when adjacent."""

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "basic"}


@dataclass(frozen=True)
class ConfusedAi:
    """Stumble randomly; restores ``previous`` once ``turns_remaining`` drops below zero.

    ``previous`` may itself be a ConfusedAi, so the chain nests arbitrarily deep.
    """

    previous: "Ai"
    turns_remaining: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "confused",
            "previous": self.previous.to_dict(),
            "turns_remaining": self.turns_remaining,
        }


Ai = Union[BasicAi, ConfusedAi]

BASIC = BasicAi()


def confuse(current: Optional[Ai], turns: int) -> ConfusedAi:
    """Wrap the active state; a missing state is treated as Basic."""
    return ConfusedAi(previous=current if current is not None else BASIC, turns_remaining=turns)


def ai_from_dict(data: Optional[Dict[str, Any]]) -> Optional[Ai]:
    if data is None:
        return None
    kind = data.get("kind")
    if kind == "basic":
        return BASIC
    if kind == "confused":
        previous = ai_from_dict(data["previous"])
        if previous is None:
            raise ValueError("Confused AI must wrap a previous state")
        return ConfusedAi(previous=previous, turns_remaining=int(data["turns_remaining"]))
    raise ValueError(f"Unknown AI kind: {kind!r}")


__all__ = ["Ai", "BasicAi", "ConfusedAi", "BASIC", "confuse", "ai_from_dict"]
