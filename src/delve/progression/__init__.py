from .leveling import StatChoice, check_level_up

__all__ = ["StatChoice", "check_level_up"]
