from .engine import (
    Action,
    CharacterSheet,
    Descend,
    DropItem,
    Engine,
    Move,
    PickUp,
    PlayerAction,
    Quit,
    ShowCharacter,
    UseItem,
    Wait,
)

__all__ = [
    "Action",
    "CharacterSheet",
    "Descend",
    "DropItem",
    "Engine",
    "Move",
    "PickUp",
    "PlayerAction",
    "Quit",
    "ShowCharacter",
    "UseItem",
    "Wait",
]
