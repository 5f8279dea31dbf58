import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from duel.application.services.battle_service import BattleService
from duel.application.services.campaign_service import CampaignService, is_valid_player_name
from duel.application.services.turn_resolver import TurnResolver
from duel.domain.events import EncounterStarted, OpponentDefeated, PlayerFell, PlayerLeveledUp
from duel.domain.models.combatant import CombatantState
from duel.domain.models.house import House
from duel.domain.models.roster import OpponentProfile, build_roster
from duel.domain.models.spell import Spell, SpellKind
from duel.errors import InvalidPlayerProfile, QuitRequested


SPELLS = [
    Spell(name="Lance", kind=SpellKind.ATTACK, power=40, level=1),
    Spell(name="Tickle", kind=SpellKind.ATTACK, power=1, level=1),
    Spell(name="Nova", kind=SpellKind.SPECIAL, power=20, level=2, recoil=2),
]

CRUSH = Spell(name="Crush", kind=SpellKind.ATTACK, power=50)


def _roster():
    return build_roster(
        SPELLS,
        [
            OpponentProfile(name="Goyle", house=House.SLYTHERIN, level=1, hp=20, spells=("Tickle",)),
            OpponentProfile(name="Cedric", house=House.HUFFLEPUFF, level=1, hp=25, spells=("Tickle",)),
        ],
        player_hp=30,
        player_spells=["Lance", "Nova"],
    )


class CampaignServiceTests(unittest.TestCase):
    def _campaign(self, lines, events=None):
        feed = iter(lines)
        roster = _roster()
        battle = BattleService(TurnResolver(), read_line=lambda: next(feed), unlocks=roster.newly_unlocked)
        publisher = events.append if events is not None else None
        return CampaignService(roster, battle, event_publisher=publisher)

    def test_create_player_validates_name_and_house(self) -> None:
        campaign = self._campaign([])

        player = campaign.create_player(" Ayla Stone ", "GRYFFINDOR")

        self.assertEqual("Ayla Stone", player.name)
        self.assertEqual(House.GRYFFINDOR, player.house)
        with self.assertRaises(InvalidPlayerProfile):
            campaign.create_player("R2D2", "gryffindor")
        with self.assertRaises(InvalidPlayerProfile):
            campaign.create_player("Ayla", "durmstrang")

    def test_name_pattern_requires_leading_letter(self) -> None:
        self.assertTrue(is_valid_player_name("Ayla"))
        self.assertTrue(is_valid_player_name("Ayla Stone"))
        self.assertFalse(is_valid_player_name(" Ayla"))
        self.assertFalse(is_valid_player_name(""))
        self.assertFalse(is_valid_player_name("Ayla-2"))

    def test_choose_opponent_by_number_or_name(self) -> None:
        campaign = self._campaign([])
        player = campaign.create_player("Ayla", House.RAVENCLAW)

        self.assertEqual("Goyle", campaign.choose_opponent(player, "1").name)
        self.assertEqual("Cedric", campaign.choose_opponent(player, " cedric ").name)
        self.assertIsNone(campaign.choose_opponent(player, "3"))
        self.assertIsNone(campaign.choose_opponent(player, "0"))
        self.assertIsNone(campaign.choose_opponent(player, "Voldemort"))

    def test_defeated_opponents_leave_the_list(self) -> None:
        campaign = self._campaign([])
        player = campaign.create_player("Ayla", House.RAVENCLAW).record_defeat("Goyle")

        self.assertEqual(["Cedric"], [profile.name for profile in campaign.remaining_opponents(player)])
        self.assertEqual("Cedric", campaign.choose_opponent(player, "1").name)
        self.assertFalse(campaign.is_champion(player))
        self.assertTrue(campaign.is_champion(player.record_defeat("Cedric")))

    def test_win_levels_player_and_publishes_events(self) -> None:
        events: list[object] = []
        campaign = self._campaign(["attack"], events)
        player = campaign.create_player("Ayla", House.RAVENCLAW)
        enemy = campaign.prepare_enemy(player, campaign.roster.get_opponent("Goyle"))

        result = campaign.run_encounter(player, enemy)

        self.assertTrue(result.won)
        self.assertEqual(2, result.player.level)
        self.assertEqual(["Nova"], result.unlocked_spells)
        self.assertIn("Goyle", result.player.defeated)
        self.assertEqual(1, player.level)
        self.assertEqual(
            [EncounterStarted, OpponentDefeated, PlayerLeveledUp],
            [type(event) for event in events],
        )

    def test_loss_publishes_player_fell(self) -> None:
        events: list[object] = []
        campaign = self._campaign(["defend"], events)
        player = campaign.create_player("Ayla", House.RAVENCLAW)
        enemy = CombatantState(name="Crabbe", house=House.SLYTHERIN, hp_max=30, hp_current=30, deck=(CRUSH,))

        result = campaign.run_encounter(player.apply_damage(player.hp_current - 1), enemy)

        self.assertFalse(result.won)
        self.assertIsInstance(events[-1], PlayerFell)
        self.assertEqual(frozenset(), result.player.defeated)

    def test_quit_mid_battle_skips_accounting(self) -> None:
        events: list[object] = []
        campaign = self._campaign(["quit"], events)
        player = campaign.create_player("Ayla", House.RAVENCLAW)
        enemy = campaign.prepare_enemy(player, campaign.roster.get_opponent("Goyle"))

        with self.assertRaises(QuitRequested):
            campaign.run_encounter(player, enemy)

        self.assertEqual([EncounterStarted], [type(event) for event in events])


if __name__ == "__main__":
    unittest.main()
