"""Command vocabulary shared by the human player and the battle engine.

The token set is closed and versioned: adding a token changes which raw
lines are legal input, so bump ``COMMAND_VOCABULARY_VERSION`` with it.
Tokens are matched after stripping surrounding whitespace, ignoring case.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Union

from duel.errors import InvalidCommand, QuitRequested


COMMAND_VOCABULARY_VERSION = "1.0.0"
QUIT_TOKEN = "quit"


class CommandKind(str, Enum):
    ATTACK = "attack"
    DEFEND = "defend"
    SPECIAL = "special"
    HEAL = "heal"
    HELP = "help"

    @property
    def is_meta(self) -> bool:
        return self is CommandKind.HELP


COMMAND_TOKENS: Dict[str, CommandKind] = {kind.value: kind for kind in CommandKind}

_COMMAND_HELP: Dict[CommandKind, str] = {
    CommandKind.ATTACK: "cast your strongest attack spell at the opponent",
    CommandKind.DEFEND: "raise a shield that halves the next hit you take",
    CommandKind.SPECIAL: "cast your strongest special spell (it may hurt you too)",
    CommandKind.HEAL: "cast your strongest healing charm on yourself",
    CommandKind.HELP: "show this list (does not use your turn)",
}


@dataclass(frozen=True)
class Command:
    kind: CommandKind

    @property
    def token(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class InvalidInput:
    raw: str


def _normalize(raw: str) -> str:
    return str(raw).strip().lower()


def parse(raw: str) -> Command:
    kind = COMMAND_TOKENS.get(_normalize(raw))
    if kind is None:
        raise InvalidCommand(raw)
    return Command(kind)


def try_parse(raw: str) -> Union[Command, InvalidInput]:
    try:
        return parse(raw)
    except InvalidCommand:
        return InvalidInput(raw)


def is_quit(raw: str) -> bool:
    return _normalize(raw) == QUIT_TOKEN


def read_command(raw: str) -> Union[Command, InvalidInput]:
    """Interpret one input line: quit wins over everything, then the typed parse."""

    if is_quit(raw):
        raise QuitRequested()
    return try_parse(raw)


def command_help_lines() -> List[str]:
    lines = [f"{kind.value:<8} {_COMMAND_HELP[kind]}" for kind in CommandKind]
    lines.append(f"{QUIT_TOKEN:<8} leave the game at any prompt")
    return lines
