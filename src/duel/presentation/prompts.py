from rich.console import Console

from duel.domain.commands import is_quit
from duel.domain.models.house import House
from duel.errors import QuitRequested


_CONSOLE = Console(highlight=False)


def house_style(house: House | None) -> str:
    return house.colour if house is not None else "white"


def read_raw_line(prompt: str, house: House | None = None) -> str:
    """Read one line as typed; the caller decides what ``quit`` means."""

    style = house_style(house)
    return _CONSOLE.input(f"[bold {style}]{prompt}[/bold {style}] > ")


def read_line(prompt: str, house: House | None = None) -> str:
    raw = read_raw_line(prompt, house)
    if is_quit(raw):
        raise QuitRequested()
    return raw
