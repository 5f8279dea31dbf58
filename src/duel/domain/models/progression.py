PLAYER_BASE_HP = 40
HP_PER_LEVEL = 5


def hp_for_level(base_hp: int, level: int, per_level: int = HP_PER_LEVEL) -> int:
    """Max health at ``level`` for a duelist whose level-1 health is ``base_hp``."""

    safe_level = max(1, int(level))
    return max(1, int(base_hp)) + (safe_level - 1) * max(0, int(per_level))
