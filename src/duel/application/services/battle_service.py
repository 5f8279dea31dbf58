import logging
from enum import Enum
from typing import Callable, Iterable, List, Optional, Protocol

from duel.application.dtos import CombatLogEntry, EncounterResult
from duel.application.services.turn_resolver import TurnResolver
from duel.domain.commands import CommandKind, InvalidInput, command_help_lines, read_command
from duel.domain.models.combatant import CombatantState
from duel.domain.models.house import House
from duel.domain.models.spell import Spell
from duel.domain.services.outcome import Outcome, evaluate


logger = logging.getLogger(__name__)

UnlockTable = Callable[[int], Iterable[Spell]]


class BattlePhase(str, Enum):
    AWAITING_COMMAND = "awaiting_command"
    RESOLVING = "resolving"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in (BattlePhase.WON, BattlePhase.LOST)


class BattleView(Protocol):
    def render_state(self, player: CombatantState, enemy: CombatantState, round_number: int) -> None: ...

    def render_log(self, house: House, entries: List[CombatLogEntry]) -> None: ...

    def render_help(self, house: House, lines: List[str]) -> None: ...

    def render_invalid(self, house: House, raw: str) -> None: ...

    def render_outcome(self, player: CombatantState, enemy: CombatantState, outcome: Outcome) -> None: ...


class NullBattleView:
    def render_state(self, player, enemy, round_number) -> None:
        return None

    def render_log(self, house, entries) -> None:
        return None

    def render_help(self, house, lines) -> None:
        return None

    def render_invalid(self, house, raw) -> None:
        return None

    def render_outcome(self, player, enemy, outcome) -> None:
        return None


class BattleSession:
    """State machine for a single encounter.

    The session owns both combatant states until the encounter ends. Input
    arrives one raw line at a time through :meth:`submit`; the quit token
    propagates as ``QuitRequested`` before anything is resolved.
    """

    def __init__(
        self,
        player: CombatantState,
        enemy: CombatantState,
        resolver: TurnResolver,
        *,
        view: Optional[BattleView] = None,
        unlocks: Optional[UnlockTable] = None,
    ) -> None:
        self.player = player
        self.enemy = enemy
        self.resolver = resolver
        self.view = view or NullBattleView()
        self.unlocks = unlocks
        self.phase = BattlePhase.AWAITING_COMMAND
        self.round_number = 1
        self.last_error: Optional[InvalidInput] = None
        self.unlocked_spells: List[str] = []
        self.outcome = Outcome.CONTINUE

    @property
    def is_over(self) -> bool:
        return self.phase.is_terminal

    def _display(self, method: str, *args) -> None:
        try:
            getattr(self.view, method)(*args)
        except Exception:
            logger.exception("Battle view failed; the duel continues", extra={"view_method": method})

    def show_state(self) -> None:
        self._display("render_state", self.player, self.enemy, self.round_number)

    def submit(self, raw: str) -> BattlePhase:
        if self.is_over:
            raise RuntimeError(f"Encounter already finished ({self.phase.value})")

        self.last_error = None
        command = read_command(raw)
        if isinstance(command, InvalidInput):
            self.last_error = command
            logger.debug("Rejected command", extra={"raw": raw})
            self._display("render_invalid", self.player.house, raw)
            return self.phase

        if command.kind == CommandKind.HELP:
            self._display("render_help", self.player.house, command_help_lines())

        self.phase = BattlePhase.RESOLVING
        result = self.resolver.resolve(command, self.player, self.enemy, self.round_number)
        self.player, self.enemy = result.actor, result.opponent
        if result.log:
            self._display("render_log", self.player.house, result.log)
        if result.turn_consumed:
            self.round_number += 1

        self.outcome = evaluate(self.player, self.enemy)
        if self.outcome == Outcome.WIN:
            self._claim_victory()
            self.phase = BattlePhase.WON
        elif self.outcome == Outcome.LOSS:
            self.phase = BattlePhase.LOST
        else:
            self.phase = BattlePhase.AWAITING_COMMAND

        if self.is_over:
            self._display("render_outcome", self.player, self.enemy, self.outcome)
        return self.phase

    def _claim_victory(self) -> None:
        next_level = self.player.level + 1
        unlocked = tuple(self.unlocks(next_level)) if self.unlocks is not None else ()
        known = {spell.name for spell in self.player.deck}
        self.player = self.player.record_defeat(self.enemy.name).level_up(
            hp_gain=self.resolver.policy.hp_per_level,
            unlocked=unlocked,
        )
        self.unlocked_spells = [spell.name for spell in self.player.deck if spell.name not in known]

    def result(self) -> EncounterResult:
        if not self.is_over:
            raise RuntimeError("Encounter is still in progress")
        return EncounterResult(
            outcome=self.outcome,
            player=self.player,
            enemy=self.enemy,
            rounds=self.round_number - 1,
            unlocked_spells=list(self.unlocked_spells),
        )


class BattleService:
    def __init__(
        self,
        resolver: TurnResolver,
        read_line: Callable[[], str],
        view: Optional[BattleView] = None,
        unlocks: Optional[UnlockTable] = None,
    ) -> None:
        self.resolver = resolver
        self.read_line = read_line
        self.view = view or NullBattleView()
        self.unlocks = unlocks

    def start(self, player: CombatantState, enemy: CombatantState) -> BattleSession:
        return BattleSession(player, enemy, self.resolver, view=self.view, unlocks=self.unlocks)

    def run(self, player: CombatantState, enemy: CombatantState) -> EncounterResult:
        session = self.start(player, enemy)
        while not session.is_over:
            session.show_state()
            session.submit(self.read_line())
        return session.result()
