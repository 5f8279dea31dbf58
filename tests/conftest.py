import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


_DUEL_ENV_VARS = (
    "DUEL_SPELLS_FILE",
    "DUEL_CHARACTERS_FILE",
    "DUEL_SEED",
    "DUEL_DAMAGE_VARIANCE",
    "DUEL_HELP_CONSUMES_TURN",
    "DUEL_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_duel_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _DUEL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def block_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("duel.__main__.load_dotenv", lambda *_args, **_kwargs: False)
