import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from duel.application.services.combat_policy import CombatPolicy, EnemyTactics
from duel.application.services.turn_resolver import TurnResolver
from duel.domain.commands import Command, CommandKind
from duel.domain.models.combatant import CombatantState
from duel.domain.models.house import House
from duel.domain.models.spell import Spell, SpellKind


BOLT = Spell(name="Bolt", kind=SpellKind.ATTACK, power=6)
HAMMER = Spell(name="Hammer", kind=SpellKind.ATTACK, power=20)
BLAST = Spell(name="Blast", kind=SpellKind.SPECIAL, power=12, recoil=3)
MEND = Spell(name="Mend", kind=SpellKind.HEAL, power=5)


def _player(**overrides) -> CombatantState:
    values = dict(name="Ayla", house=House.GRYFFINDOR, hp_max=40, hp_current=40, deck=(BOLT, BLAST, MEND))
    values.update(overrides)
    return CombatantState(**values)


def _enemy(**overrides) -> CombatantState:
    values = dict(name="Draco", house=House.SLYTHERIN, hp_max=30, hp_current=30, deck=(BOLT,))
    values.update(overrides)
    return CombatantState(**values)


class TurnResolverTests(unittest.TestCase):
    def setUp(self) -> None:
        self.resolver = TurnResolver(rng=random.Random(7))

    def test_attack_damages_opponent_and_opponent_replies_in_same_call(self) -> None:
        result = self.resolver.resolve(Command(CommandKind.ATTACK), _player(), _enemy())

        self.assertTrue(result.turn_consumed)
        self.assertEqual(24, result.opponent.hp_current)
        self.assertEqual(Command(CommandKind.ATTACK), result.enemy_command)
        self.assertEqual(34, result.actor.hp_current)
        self.assertEqual(2, len(result.log))

    def test_attack_only_touches_opponent_when_opponent_defends(self) -> None:
        healer_only = _enemy(deck=(MEND,))

        result = self.resolver.resolve(Command(CommandKind.ATTACK), _player(), healer_only)

        self.assertEqual(40, result.actor.hp_current)
        self.assertEqual(24, result.opponent.hp_current)
        self.assertEqual(CommandKind.DEFEND, result.enemy_command.kind)
        self.assertTrue(result.opponent.guarding)

    def test_level_adds_damage_bonus(self) -> None:
        result = self.resolver.resolve(Command(CommandKind.ATTACK), _player(level=3), _enemy(deck=(MEND,)))

        self.assertEqual(22, result.opponent.hp_current)

    def test_defend_halves_the_next_hit_then_drops(self) -> None:
        result = self.resolver.resolve(Command(CommandKind.DEFEND), _player(), _enemy(deck=(HAMMER,)))

        self.assertEqual(30, result.actor.hp_current)
        self.assertFalse(result.actor.guarding)
        self.assertEqual(30, result.opponent.hp_current)

    def test_special_applies_recoil_to_caster(self) -> None:
        result = self.resolver.resolve(Command(CommandKind.SPECIAL), _player(), _enemy(deck=(MEND,)))

        self.assertEqual(18, result.opponent.hp_current)
        self.assertEqual(37, result.actor.hp_current)

    def test_heal_only_touches_actor_and_is_capped(self) -> None:
        result = self.resolver.resolve(Command(CommandKind.HEAL), _player(hp_current=38), _enemy(deck=(MEND,)))

        self.assertEqual(40, result.actor.hp_current)
        self.assertEqual(30, result.opponent.hp_current)

    def test_help_is_a_free_action(self) -> None:
        player, enemy = _player(), _enemy()

        result = self.resolver.resolve(Command(CommandKind.HELP), player, enemy)

        self.assertFalse(result.turn_consumed)
        self.assertIsNone(result.enemy_command)
        self.assertIs(player, result.actor)
        self.assertIs(enemy, result.opponent)

    def test_help_can_be_configured_to_consume_the_turn(self) -> None:
        resolver = TurnResolver(help_consumes_turn=True)

        result = resolver.resolve(Command(CommandKind.HELP), _player(), _enemy())

        self.assertTrue(result.turn_consumed)
        self.assertEqual(34, result.actor.hp_current)

    def test_missing_spell_kind_is_free_and_changes_nothing(self) -> None:
        player = _player(deck=(BOLT,))

        result = self.resolver.resolve(Command(CommandKind.HEAL), player, _enemy())

        self.assertFalse(result.turn_consumed)
        self.assertEqual(player, result.actor)
        self.assertIn("no heal spell", result.log[0].text)

    def test_enemy_does_not_reply_after_falling(self) -> None:
        result = self.resolver.resolve(Command(CommandKind.ATTACK), _player(), _enemy(hp_current=5))

        self.assertTrue(result.opponent.is_defeated())
        self.assertIsNone(result.enemy_command)
        self.assertEqual(40, result.actor.hp_current)

    def test_special_can_drop_both_duelists(self) -> None:
        result = self.resolver.resolve(Command(CommandKind.SPECIAL), _player(hp_current=3), _enemy(hp_current=12))

        self.assertTrue(result.actor.is_defeated())
        self.assertTrue(result.opponent.is_defeated())

    def test_health_never_negative_for_any_command(self) -> None:
        for kind in CommandKind:
            for player_hp in (1, 3, 10, 40):
                for enemy_hp in (1, 6, 30):
                    with self.subTest(kind=kind, player_hp=player_hp, enemy_hp=enemy_hp):
                        result = self.resolver.resolve(
                            Command(kind),
                            _player(hp_current=player_hp),
                            _enemy(hp_current=enemy_hp, deck=(HAMMER, BLAST, MEND)),
                            round_number=3,
                        )
                        self.assertGreaterEqual(result.actor.hp_current, 0)
                        self.assertGreaterEqual(result.opponent.hp_current, 0)

    def test_damage_variance_stays_within_range(self) -> None:
        resolver = TurnResolver(policy=CombatPolicy(damage_variance=3), rng=random.Random(11))
        for _ in range(20):
            result = resolver.resolve(Command(CommandKind.ATTACK), _player(), _enemy(deck=(MEND,)))
            self.assertTrue(21 <= result.opponent.hp_current <= 24)


class EnemyTacticsTests(unittest.TestCase):
    def test_heals_when_wounded(self) -> None:
        enemy = _enemy(hp_current=10, deck=(BOLT, MEND))

        self.assertEqual(CommandKind.HEAL, EnemyTactics().choose(enemy, _player(), 1).kind)

    def test_casts_special_every_third_round(self) -> None:
        enemy = _enemy(deck=(BOLT, BLAST))
        tactics = EnemyTactics()

        self.assertEqual(CommandKind.ATTACK, tactics.choose(enemy, _player(), 2).kind)
        self.assertEqual(CommandKind.SPECIAL, tactics.choose(enemy, _player(), 3).kind)

    def test_avoids_special_that_would_be_fatal(self) -> None:
        enemy = _enemy(hp_current=3, hp_max=3, deck=(BLAST,))

        self.assertEqual(CommandKind.DEFEND, EnemyTactics().choose(enemy, _player(), 3).kind)

    def test_policy_rejects_zero_guard_divisor(self) -> None:
        with self.assertRaises(ValueError):
            CombatPolicy(guard_divisor=0)


if __name__ == "__main__":
    unittest.main()
