import logging
import random
from typing import List, Optional, Tuple

from duel.application.dtos import CombatLogEntry, RoundResult
from duel.application.services.combat_policy import CombatPolicy, EnemyTactics
from duel.domain.commands import Command, CommandKind
from duel.domain.models.combatant import CombatantState
from duel.domain.models.spell import SpellKind


logger = logging.getLogger(__name__)

_SPELL_KIND_BY_COMMAND = {
    CommandKind.ATTACK: SpellKind.ATTACK,
    CommandKind.SPECIAL: SpellKind.SPECIAL,
    CommandKind.HEAL: SpellKind.HEAL,
}


class TurnResolver:
    """Resolves one full round: the player's command, then the opponent's reply.

    ``help`` and commands the caster has no spell for are free actions unless
    ``help_consumes_turn`` is set, in which case ``help`` costs the round.
    """

    def __init__(
        self,
        policy: Optional[CombatPolicy] = None,
        tactics: Optional[EnemyTactics] = None,
        rng: Optional[random.Random] = None,
        help_consumes_turn: bool = False,
    ) -> None:
        self.policy = policy or CombatPolicy()
        self.tactics = tactics or EnemyTactics()
        self.rng = rng or random.Random()
        self.help_consumes_turn = help_consumes_turn

    def set_seed(self, seed: int) -> None:
        self.rng.seed(seed)

    def resolve(
        self,
        command: Command,
        actor: CombatantState,
        opponent: CombatantState,
        round_number: int = 1,
    ) -> RoundResult:
        log: List[CombatLogEntry] = []
        actor, opponent, consumed = self._apply(command, actor, opponent, log, player_turn=True)
        result = RoundResult(actor=actor, opponent=opponent, log=log, turn_consumed=consumed)
        if not consumed or actor.is_defeated() or opponent.is_defeated():
            return result

        if not opponent.can_act():
            log.append(CombatLogEntry(f"{opponent.name} has no spells to answer with."))
            return result

        reply = self.tactics.choose(opponent, actor, round_number)
        logger.debug("Opponent reply", extra={"opponent": opponent.name, "command": reply.token, "round": round_number})
        opponent, actor, _ = self._apply(reply, opponent, actor, log, player_turn=False)
        result.actor = actor
        result.opponent = opponent
        result.enemy_command = reply
        return result

    def _apply(
        self,
        command: Command,
        caster: CombatantState,
        target: CombatantState,
        log: List[CombatLogEntry],
        *,
        player_turn: bool,
    ) -> Tuple[CombatantState, CombatantState, bool]:
        who = "You" if player_turn else caster.name

        if command.kind == CommandKind.HELP:
            return caster, target, self.help_consumes_turn and player_turn

        if command.kind == CommandKind.DEFEND:
            caster = caster.with_guard(True)
            log.append(CombatLogEntry(f"{who} raise{'' if player_turn else 's'} a shield charm."))
            return caster, target, True

        spell = caster.best_spell(_SPELL_KIND_BY_COMMAND[command.kind])
        if spell is None:
            log.append(CombatLogEntry(f"{who} know{'' if player_turn else 's'} no {command.token} spell."))
            return caster, target, False

        caster = caster.with_guard(False)

        if spell.kind == SpellKind.HEAL:
            before = caster.hp_current
            caster = caster.apply_heal(self.policy.heal_for(spell, caster))
            log.append(
                CombatLogEntry(
                    f"{who} cast{'' if player_turn else 's'} {spell.name} and recover{'' if player_turn else 's'} "
                    f"{caster.hp_current - before} HP ({caster.hp_current}/{caster.hp_max})."
                )
            )
            return caster, target, True

        shielded = target.guarding
        damage = self.policy.damage_for(spell, caster, target, self.rng)
        target = target.apply_damage(damage).with_guard(False)
        victim = target.name if player_turn else "you"
        text = f"{who} cast{'' if player_turn else 's'} {spell.name} at {victim} for {damage} damage ({target.hp_current}/{target.hp_max})."
        if shielded:
            text += " The shield absorbs part of the blow."
        log.append(CombatLogEntry(text))

        if spell.recoil:
            caster = caster.apply_damage(spell.recoil)
            log.append(
                CombatLogEntry(
                    f"The backlash of {spell.name} costs {'you' if player_turn else caster.name} "
                    f"{spell.recoil} HP ({caster.hp_current}/{caster.hp_max})."
                )
            )
        return caster, target, True
