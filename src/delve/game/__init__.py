from .state import Game, Messages, World

__all__ = ["Game", "Messages", "World"]
