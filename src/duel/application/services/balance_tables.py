from __future__ import annotations


LEVEL_DAMAGE_BONUS = 1
LEVEL_HEAL_BONUS = 1
GUARD_DIVISOR = 2

ENEMY_HEAL_THRESHOLD_DIVISOR = 3
ENEMY_SPECIAL_EVERY_ROUNDS = 3


def level_bonus(level: int, per_level: int) -> int:
    return max(0, int(level) - 1) * max(0, int(per_level))
