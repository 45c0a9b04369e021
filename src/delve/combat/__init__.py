from .resolver import AttackResult, attack, award_xp, heal, take_damage

__all__ = ["AttackResult", "attack", "award_xp", "heal", "take_damage"]
