from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SpellKind(str, Enum):
    ATTACK = "attack"
    SPECIAL = "special"
    HEAL = "heal"


@dataclass(frozen=True)
class Spell:
    name: str
    kind: SpellKind
    power: int
    level: int = 1
    recoil: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        if not str(self.name or "").strip():
            raise ValueError("Spell name cannot be empty")
        if int(self.power) < 0:
            raise ValueError(f"Spell power cannot be negative: {self.name}")
        if int(self.level) < 1:
            raise ValueError(f"Spell level must be at least 1: {self.name}")
        if int(self.recoil) < 0:
            raise ValueError(f"Spell recoil cannot be negative: {self.name}")

    def unlocked_at(self, level: int) -> bool:
        return self.level <= level


def level_deck(spells, level: int) -> tuple[Spell, ...]:
    """Return the spells usable at ``level``, keeping catalog order."""

    return tuple(spell for spell in spells if spell.unlocked_at(level))
