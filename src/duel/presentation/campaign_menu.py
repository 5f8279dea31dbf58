from typing import Callable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from duel.application.services.campaign_service import CampaignOutcome, CampaignService, is_valid_player_name
from duel.bootstrap import Settings, create_campaign_service
from duel.domain.models.combatant import CombatantState
from duel.domain.models.house import House
from duel.domain.models.roster import Roster
from duel.errors import CatalogLoadError
from duel.infrastructure.json_catalog_loader import load_roster
from duel.presentation.battle_view import RichBattleView
from duel.presentation.prompts import house_style, read_line, read_raw_line


_CONSOLE = Console(highlight=False)


def _say(lines: list[str], house: House | None = None) -> None:
    style = house_style(house)
    for line in lines:
        _CONSOLE.print(f"[{style}]{line}[/{style}]")


def show_title() -> None:
    _CONSOLE.print(
        Panel.fit(
            "[bold yellow]SPELL DUEL[/bold yellow]\n[dim]A duelling club in four houses[/dim]",
            border_style="yellow",
        )
    )
    _say(["", "Input Quit at any point to exit game"])


def setup_roster(settings: Settings, loader: Callable[..., Roster] = load_roster) -> Roster:
    """Ask for the catalog files until a valid pair loads; blank keeps the default."""

    while True:
        spells = read_line("Enter name of spells file (blank for default)").strip() or settings.spells_file
        characters = read_line("Enter name of characters file (blank for default)").strip() or settings.characters_file
        try:
            return loader(spells, characters)
        except CatalogLoadError as exc:
            _say(["Files were invalid. Try again.", f"({exc})"], House.GRYFFINDOR)


def ask_name() -> str:
    _say(["", "Welcome! Welcome!", "I lost my list of names... So remind me who are you?"])
    while True:
        name = read_line("Enter your name").strip()
        if is_valid_player_name(name):
            return name
        _say(
            [
                "Simple stuff,",
                "I wonder how you will fare at school if you struggle at even this...",
                "Try again",
            ]
        )


def ask_house() -> House:
    _say(["", "Also the sorting hat is out for lunch", "So you'll need to choose your own house.", "As a reminder the houses are: "])
    for house in House:
        _say([house.label], house)
    while True:
        raw = read_line("Enter your house choice")
        if House.is_valid(raw):
            house = House.normalize(raw)
            _say([f"Welcome to {house.label}!"], house)
            return house
        _say(["Not a house..."])


def _render_opponents(campaign: CampaignService, player: CombatantState) -> None:
    table = Table(show_header=True, header_style="bold yellow")
    table.add_column("#", justify="right")
    table.add_column("Opponent")
    table.add_column("House")
    table.add_column("Level", justify="right")
    for index, profile in enumerate(campaign.remaining_opponents(player), start=1):
        style = house_style(profile.house)
        table.add_row(str(index), profile.name, f"[{style}]{profile.house.label}[/{style}]", str(profile.level))
    _CONSOLE.print(Panel.fit(table, title="[bold yellow]Opponents[/bold yellow]", border_style=house_style(player.house)))


def _render_enemy_preview(enemy: CombatantState, description: str) -> None:
    spells = ", ".join(spell.name for spell in enemy.deck)
    body = f"{description}\nLevel {enemy.level} | HP {enemy.hp_max}\nSpells: {spells}"
    _CONSOLE.print(Panel.fit(body.strip(), title=f"[bold yellow]{enemy.name}[/bold yellow]", border_style=house_style(enemy.house)))


def play_campaign(campaign: CampaignService, player: CombatantState) -> CampaignOutcome:
    """Menu loop: pick, confirm, duel, repeat until every opponent falls or the player does."""

    while not campaign.is_champion(player):
        _render_opponents(campaign, player)
        profile = campaign.choose_opponent(player, read_line("Enter enemy choice", player.house))
        if profile is None:
            _say(["That wasn't on the list...", "10/10 for effort, -5/7 for execution. Try again"], player.house)
            continue

        enemy = campaign.prepare_enemy(player, profile)
        _render_enemy_preview(enemy, profile.description)
        answer = read_line("Enter Yes to confirm enemy", player.house).strip().upper()
        if answer not in {"Y", "YES"}:
            continue

        _say([f"You are battling with {profile.name}"], player.house)
        result = campaign.run_encounter(player, enemy)
        player = result.player
        if not result.won:
            return CampaignOutcome.FALLEN
        if result.unlocked_spells:
            _say([f"New spells learned: {', '.join(result.unlocked_spells)}"], player.house)

    _say(["Every opponent has fallen. You are the duelling champion!"], player.house)
    return CampaignOutcome.CHAMPION


def run_game(settings: Settings, loader: Callable[..., Roster] = load_roster) -> CampaignOutcome:
    show_title()
    roster = setup_roster(settings, loader)
    name = ask_name()
    house = ask_house()

    campaign = create_campaign_service(
        roster,
        settings,
        read_line=lambda: read_raw_line("Enter command", house),
        view=RichBattleView(_CONSOLE),
    )
    player = campaign.create_player(name, house)
    return play_campaign(campaign, player)
