from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple

from duel.domain.models.progression import HP_PER_LEVEL
from duel.domain.models.house import House
from duel.domain.models.spell import Spell, SpellKind


@dataclass(frozen=True)
class CombatantState:
    """One duelist's battle and campaign attributes.

    Every operation returns a new state; the battle session that holds a
    state is its only writer for the length of an encounter.
    """

    name: str
    house: House
    hp_max: int
    hp_current: int
    level: int = 1
    deck: Tuple[Spell, ...] = ()
    defeated: frozenset = field(default_factory=frozenset)
    guarding: bool = False

    def __post_init__(self) -> None:
        if int(self.level) < 1:
            raise ValueError("Level must be at least 1")
        if int(self.hp_max) < 1:
            raise ValueError("Max health must be at least 1")
        if not 0 <= int(self.hp_current) <= int(self.hp_max):
            object.__setattr__(self, "hp_current", min(max(0, int(self.hp_current)), int(self.hp_max)))
        if not isinstance(self.deck, tuple):
            object.__setattr__(self, "deck", tuple(self.deck))
        if not isinstance(self.defeated, frozenset):
            object.__setattr__(self, "defeated", frozenset(self.defeated))

    def apply_damage(self, amount: int) -> "CombatantState":
        damage = max(0, int(amount))
        return replace(self, hp_current=max(0, self.hp_current - damage))

    def apply_heal(self, amount: int) -> "CombatantState":
        """Heal by ``amount``, never above ``hp_max``."""

        healed = max(0, int(amount))
        return replace(self, hp_current=min(self.hp_max, self.hp_current + healed))

    def level_up(self, hp_gain: int = HP_PER_LEVEL, unlocked: Iterable[Spell] = ()) -> "CombatantState":
        """Advance one level, grow max health, refill health and extend the deck."""

        hp_max = self.hp_max + max(0, int(hp_gain))
        known = {spell.name for spell in self.deck}
        deck = list(self.deck)
        for spell in unlocked:
            if spell.name not in known:
                deck.append(spell)
                known.add(spell.name)
        return replace(
            self,
            level=self.level + 1,
            hp_max=hp_max,
            hp_current=hp_max,
            deck=tuple(deck),
            guarding=False,
        )

    def record_defeat(self, opponent_name: str) -> "CombatantState":
        if opponent_name in self.defeated:
            return self
        return replace(self, defeated=self.defeated | {opponent_name})

    def is_defeated(self) -> bool:
        return self.hp_current == 0

    def can_act(self) -> bool:
        return bool(self.deck) and not self.is_defeated()

    def with_guard(self, guarding: bool) -> "CombatantState":
        if self.guarding == guarding:
            return self
        return replace(self, guarding=guarding)

    def spells_of_kind(self, kind: SpellKind) -> Tuple[Spell, ...]:
        return tuple(spell for spell in self.deck if spell.kind == kind)

    def best_spell(self, kind: SpellKind) -> Optional[Spell]:
        best: Optional[Spell] = None
        for spell in self.spells_of_kind(kind):
            if best is None or spell.power > best.power:
                best = spell
        return best

