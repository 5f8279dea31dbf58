from dataclasses import dataclass


@dataclass
class EncounterStarted:
    player_name: str
    opponent_name: str
    player_level: int
    opponent_level: int


@dataclass
class OpponentDefeated:
    player_name: str
    opponent_name: str
    rounds: int


@dataclass
class PlayerLeveledUp:
    player_name: str
    from_level: int
    to_level: int
    hp_max: int
    unlocked_spells: tuple


@dataclass
class PlayerFell:
    player_name: str
    opponent_name: str
    rounds: int
