from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from duel.domain.models.progression import PLAYER_BASE_HP, hp_for_level
from duel.domain.models.combatant import CombatantState
from duel.domain.models.house import House
from duel.domain.models.spell import Spell, level_deck
from duel.errors import UnknownOpponent


@dataclass(frozen=True)
class OpponentProfile:
    name: str
    house: House
    level: int = 1
    hp: int = 30
    spells: Tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class Roster:
    """Immutable catalog of spells and opponents for one campaign."""

    spells: Mapping[str, Spell]
    opponents: Tuple[OpponentProfile, ...]
    player_hp: int = PLAYER_BASE_HP
    player_spells: Tuple[str, ...] = field(default_factory=tuple)

    def get_opponent(self, name: str) -> OpponentProfile:
        key = str(name or "").strip().lower()
        for profile in self.opponents:
            if profile.name.lower() == key:
                return profile
        raise UnknownOpponent(f"No opponent named {name!r}")

    def _resolve_spells(self, names) -> Tuple[Spell, ...]:
        return tuple(self.spells[spell_name] for spell_name in names if spell_name in self.spells)

    def _player_catalog(self) -> Tuple[Spell, ...]:
        if self.player_spells:
            return self._resolve_spells(self.player_spells)
        return tuple(self.spells.values())

    def player_level_deck(self, level: int) -> Tuple[Spell, ...]:
        return level_deck(self._player_catalog(), level)

    def newly_unlocked(self, level: int) -> Tuple[Spell, ...]:
        """Spells from the player's catalog that unlock exactly at ``level``."""

        return tuple(spell for spell in self._player_catalog() if spell.level == level)

    def create_player(self, name: str, house: House) -> CombatantState:
        hp = hp_for_level(self.player_hp, 1)
        return CombatantState(
            name=name,
            house=house,
            hp_max=hp,
            hp_current=hp,
            level=1,
            deck=self.player_level_deck(1),
        )

    def spawn_opponent(self, name: str, house: House | str, level: Optional[int] = None) -> CombatantState:
        """Build a fresh battle state for an opponent.

        The opponent fights at its own level or ``level``, whichever is higher;
        health and deck scale with that level.
        """

        profile = self.get_opponent(name)
        wanted_house = house if isinstance(house, House) else House.normalize(house)
        if profile.house != wanted_house:
            raise UnknownOpponent(f"{profile.name} is not of house {wanted_house.label}")

        battle_level = max(profile.level, int(level or 1))
        hp = hp_for_level(profile.hp, battle_level - profile.level + 1)
        return CombatantState(
            name=profile.name,
            house=profile.house,
            hp_max=hp,
            hp_current=hp,
            level=battle_level,
            deck=level_deck(self._resolve_spells(profile.spells), battle_level),
        )


def build_roster(
    spells: List[Spell],
    opponents: List[OpponentProfile],
    *,
    player_hp: int = PLAYER_BASE_HP,
    player_spells: Optional[List[str]] = None,
) -> Roster:
    catalog: Dict[str, Spell] = {}
    for spell in spells:
        catalog[spell.name] = spell
    return Roster(
        spells=catalog,
        opponents=tuple(opponents),
        player_hp=player_hp,
        player_spells=tuple(player_spells or ()),
    )
