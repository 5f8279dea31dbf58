from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from duel.application.dtos import CombatLogEntry
from duel.domain.models.combatant import CombatantState
from duel.domain.models.house import House
from duel.domain.services.outcome import Outcome
from duel.presentation.prompts import house_style


def _ornate_title(title: str) -> str:
    return f"[bold yellow]{title}[/bold yellow]"


def _deck_line(state: CombatantState) -> str:
    if not state.deck:
        return "-"
    return ", ".join(f"{spell.name} ({spell.kind.value})" for spell in state.deck)


class RichBattleView:
    """Draws the duel on a rich console, tinted with the player's house."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def render_state(self, player: CombatantState, enemy: CombatantState, round_number: int) -> None:
        table = Table(show_header=True, header_style="bold yellow")
        table.add_column("Duelist")
        table.add_column("House")
        table.add_column("Level", justify="right")
        table.add_column("HP", justify="right")
        table.add_column("Spells")
        table.add_column("Status")
        for state in (player, enemy):
            table.add_row(
                state.name,
                f"[{house_style(state.house)}]{state.house.label}[/{house_style(state.house)}]",
                str(state.level),
                f"{state.hp_current}/{state.hp_max}",
                _deck_line(state),
                "Shielded" if state.guarding else "-",
            )
        self.console.print(
            Panel.fit(
                table,
                title=_ornate_title(f"Round {round_number}"),
                subtitle="[dim]Type help for the list of commands[/dim]",
                subtitle_align="left",
                border_style=house_style(player.house),
            )
        )

    def render_log(self, house: House, entries: List[CombatLogEntry]) -> None:
        body = "\n".join(entry.text for entry in entries) or "Nothing happens."
        self.console.print(Panel.fit(body, title=_ornate_title("Duel Log"), border_style=house_style(house)))

    def render_help(self, house: House, lines: List[str]) -> None:
        self.console.print(Panel.fit("\n".join(lines), title=_ornate_title("Commands"), border_style=house_style(house)))

    def render_invalid(self, house: House, raw: str) -> None:
        style = house_style(house)
        self.console.print(f"[{style}]not a command buddy.[/{style}]")
        self.console.print(f"[{style}]Type in help to get a list of commands[/{style}]")

    def render_outcome(self, player: CombatantState, enemy: CombatantState, outcome: Outcome) -> None:
        if outcome == Outcome.WIN:
            body = f"[bold green]{enemy.name} is defeated![/bold green]\nYou reach level {player.level}."
            title = "Victory"
        else:
            body = f"[bold red]{enemy.name} has bested you.[/bold red]\nYour duelling days are over."
            title = "Defeat"
        self.console.print(Panel.fit(body, title=_ornate_title(title), border_style=house_style(player.house)))
