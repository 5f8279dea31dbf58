from __future__ import annotations

import random
from dataclasses import dataclass

from duel.application.services.balance_tables import (
    ENEMY_HEAL_THRESHOLD_DIVISOR,
    ENEMY_SPECIAL_EVERY_ROUNDS,
    GUARD_DIVISOR,
    LEVEL_DAMAGE_BONUS,
    LEVEL_HEAL_BONUS,
    level_bonus,
)
from duel.domain.commands import Command, CommandKind
from duel.domain.models.combatant import CombatantState
from duel.domain.models.progression import HP_PER_LEVEL
from duel.domain.models.spell import Spell, SpellKind


@dataclass(frozen=True)
class CombatPolicy:
    """Numbers behind every spell; swap it out to rebalance the game."""

    level_damage_bonus: int = LEVEL_DAMAGE_BONUS
    level_heal_bonus: int = LEVEL_HEAL_BONUS
    guard_divisor: int = GUARD_DIVISOR
    hp_per_level: int = HP_PER_LEVEL
    damage_variance: int = 0

    def __post_init__(self) -> None:
        if int(self.guard_divisor) < 1:
            raise ValueError("guard_divisor must be at least 1")
        if int(self.hp_per_level) < 0:
            raise ValueError("hp_per_level cannot be negative")
        if int(self.damage_variance) < 0:
            raise ValueError("damage_variance cannot be negative")

    def damage_for(self, spell: Spell, caster: CombatantState, target: CombatantState, rng: random.Random | None = None) -> int:
        amount = spell.power + level_bonus(caster.level, self.level_damage_bonus)
        if self.damage_variance > 0:
            amount += (rng or random).randint(0, self.damage_variance)
        if target.guarding:
            amount //= self.guard_divisor
        return max(0, amount)

    def heal_for(self, spell: Spell, caster: CombatantState) -> int:
        return max(0, spell.power + level_bonus(caster.level, self.level_heal_bonus))


class EnemyTactics:
    """Chooses the opponent's reply once the player has acted."""

    def __init__(
        self,
        heal_threshold_divisor: int = ENEMY_HEAL_THRESHOLD_DIVISOR,
        special_every: int = ENEMY_SPECIAL_EVERY_ROUNDS,
    ) -> None:
        self.heal_threshold_divisor = max(1, int(heal_threshold_divisor))
        self.special_every = max(0, int(special_every))

    def _special_is_safe(self, enemy: CombatantState) -> bool:
        special = enemy.best_spell(SpellKind.SPECIAL)
        return special is not None and special.recoil < enemy.hp_current

    def choose(self, enemy: CombatantState, player: CombatantState, round_number: int) -> Command:
        wounded = enemy.hp_current <= enemy.hp_max // self.heal_threshold_divisor
        if wounded and enemy.best_spell(SpellKind.HEAL) is not None:
            return Command(CommandKind.HEAL)
        if self.special_every and round_number % self.special_every == 0 and self._special_is_safe(enemy):
            return Command(CommandKind.SPECIAL)
        if enemy.best_spell(SpellKind.ATTACK) is not None:
            return Command(CommandKind.ATTACK)
        if self._special_is_safe(enemy):
            return Command(CommandKind.SPECIAL)
        return Command(CommandKind.DEFEND)
