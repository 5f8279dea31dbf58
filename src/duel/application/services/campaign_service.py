from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable, List, Optional

from duel.application.dtos import EncounterResult
from duel.application.services.battle_service import BattleService
from duel.domain.events import EncounterStarted, OpponentDefeated, PlayerFell, PlayerLeveledUp
from duel.domain.models.combatant import CombatantState
from duel.domain.models.house import House
from duel.domain.models.roster import OpponentProfile, Roster
from duel.errors import InvalidPlayerProfile


logger = logging.getLogger(__name__)

PLAYER_NAME_PATTERN = re.compile(r"^[A-Za-z]+[A-Za-z ]*$")


def is_valid_player_name(name: str) -> bool:
    return bool(PLAYER_NAME_PATTERN.match(str(name or "")))


class CampaignService:
    """Threads the player's state through a run of encounters.

    The player state is handed in and returned by value; nothing here keeps
    a "current player" between calls.
    """

    def __init__(
        self,
        roster: Roster,
        battle_service: BattleService,
        event_publisher: Optional[Callable[[object], None]] = None,
    ) -> None:
        self.roster = roster
        self.battle_service = battle_service
        self.event_publisher = event_publisher

    def _publish(self, event: object) -> None:
        if self.event_publisher is not None:
            self.event_publisher(event)

    def create_player(self, name: str, house: str | House) -> CombatantState:
        clean_name = str(name or "").strip()
        if not is_valid_player_name(clean_name):
            raise InvalidPlayerProfile(f"Names use letters and spaces only: {name!r}")
        try:
            resolved_house = house if isinstance(house, House) else House.normalize(house)
        except ValueError as exc:
            raise InvalidPlayerProfile(str(exc)) from exc
        return self.roster.create_player(clean_name, resolved_house)

    def remaining_opponents(self, player: CombatantState) -> List[OpponentProfile]:
        return [profile for profile in self.roster.opponents if profile.name not in player.defeated]

    def is_champion(self, player: CombatantState) -> bool:
        return not self.remaining_opponents(player)

    def choose_opponent(self, player: CombatantState, raw: str) -> Optional[OpponentProfile]:
        """Match a menu entry by its list number or by name; ``None`` if it is not listed."""

        remaining = self.remaining_opponents(player)
        choice = str(raw or "").strip()
        if choice.isdigit():
            index = int(choice) - 1
            if 0 <= index < len(remaining):
                return remaining[index]
            return None
        for profile in remaining:
            if profile.name.lower() == choice.lower():
                return profile
        return None

    def prepare_enemy(self, player: CombatantState, profile: OpponentProfile) -> CombatantState:
        return self.roster.spawn_opponent(profile.name, profile.house, level=player.level)

    def run_encounter(self, player: CombatantState, enemy: CombatantState) -> EncounterResult:
        self._publish(EncounterStarted(player.name, enemy.name, player.level, enemy.level))
        logger.info("Encounter started", extra={"player": player.name, "opponent": enemy.name})

        result = self.battle_service.run(player, enemy)

        if result.won:
            self._publish(OpponentDefeated(player.name, enemy.name, result.rounds))
            self._publish(
                PlayerLeveledUp(
                    player_name=player.name,
                    from_level=player.level,
                    to_level=result.player.level,
                    hp_max=result.player.hp_max,
                    unlocked_spells=tuple(result.unlocked_spells),
                )
            )
        else:
            self._publish(PlayerFell(player.name, enemy.name, result.rounds))
        return result


class CampaignOutcome(str, Enum):
    CHAMPION = "champion"
    FALLEN = "fallen"
