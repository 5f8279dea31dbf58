from dataclasses import dataclass, field
from typing import List, Optional

from duel.domain.commands import Command
from duel.domain.models.combatant import CombatantState
from duel.domain.services.outcome import Outcome


@dataclass
class CombatLogEntry:
    text: str


@dataclass
class RoundResult:
    actor: CombatantState
    opponent: CombatantState
    log: List[CombatLogEntry] = field(default_factory=list)
    turn_consumed: bool = True
    enemy_command: Optional[Command] = None


@dataclass
class EncounterResult:
    outcome: Outcome
    player: CombatantState
    enemy: CombatantState
    rounds: int
    unlocked_spells: List[str] = field(default_factory=list)

    @property
    def won(self) -> bool:
        return self.outcome == Outcome.WIN
