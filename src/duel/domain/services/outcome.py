from __future__ import annotations

from enum import Enum

from duel.domain.models.combatant import CombatantState


class Outcome(str, Enum):
    CONTINUE = "continue"
    WIN = "win"
    LOSS = "loss"


def evaluate(player: CombatantState, enemy: CombatantState) -> Outcome:
    # Player defeat is checked first: a round that drops both duelists is a loss.
    if player.is_defeated():
        return Outcome.LOSS
    if enemy.is_defeated():
        return Outcome.WIN
    return Outcome.CONTINUE
