import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from duel.domain.models.progression import PLAYER_BASE_HP
from duel.domain.models.house import House
from duel.domain.models.roster import OpponentProfile, Roster, build_roster
from duel.domain.models.spell import Spell, SpellKind, level_deck
from duel.errors import CatalogLoadError


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
DEFAULT_SPELLS_FILE = DATA_DIR / "spells.json"
DEFAULT_CHARACTERS_FILE = DATA_DIR / "characters.json"


def _read_json(path: Path) -> Any:
    source = str(path)
    if not path.is_file():
        raise CatalogLoadError(source, "file not found")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogLoadError(source, f"unreadable ({exc})") from exc
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(source, f"invalid JSON at line {exc.lineno}") from exc


def _entries(payload: Any, key: str, source: str) -> List[Dict[str, Any]]:
    if not isinstance(payload, dict):
        raise CatalogLoadError(source, "expected a JSON object at the top level")
    rows = payload.get(key)
    if not isinstance(rows, list) or not rows:
        raise CatalogLoadError(source, f"'{key}' must be a non-empty list")
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise CatalogLoadError(source, f"{key}[{index}] must be an object")
    return rows


def _int_field(row: Dict[str, Any], name: str, source: str, *, default: int | None = None) -> int:
    raw = row.get(name, default)
    if raw is None or isinstance(raw, bool):
        raise CatalogLoadError(source, f"{row.get('name', '?')}: '{name}' must be an integer")
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise CatalogLoadError(source, f"{row.get('name', '?')}: '{name}' must be an integer") from exc


def _name_list(raw: Any, source: str, owner: str) -> Tuple[str, ...]:
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise CatalogLoadError(source, f"{owner}: 'spells' must be a list of spell names")
    return tuple(item.strip() for item in raw)


def parse_spells(payload: Any, source: str = "<spells>") -> List[Spell]:
    spells: List[Spell] = []
    seen: set[str] = set()
    for row in _entries(payload, "spells", source):
        name = str(row.get("name", "") or "").strip()
        if not name:
            raise CatalogLoadError(source, "every spell needs a name")
        if name in seen:
            raise CatalogLoadError(source, f"duplicate spell {name!r}")
        try:
            kind = SpellKind(str(row.get("kind", "")).strip().lower())
        except ValueError as exc:
            raise CatalogLoadError(source, f"{name}: unknown kind {row.get('kind')!r}") from exc
        try:
            spell = Spell(
                name=name,
                kind=kind,
                power=_int_field(row, "power", source),
                level=_int_field(row, "level", source, default=1),
                recoil=_int_field(row, "recoil", source, default=0),
                description=str(row.get("description", "") or ""),
            )
        except ValueError as exc:
            raise CatalogLoadError(source, str(exc)) from exc
        spells.append(spell)
        seen.add(name)
    return spells


def parse_characters(payload: Any, spells: List[Spell], source: str = "<characters>") -> Roster:
    catalog = {spell.name: spell for spell in spells}
    opponents: List[OpponentProfile] = []
    seen: set[str] = set()

    for row in _entries(payload, "characters", source):
        name = str(row.get("name", "") or "").strip()
        if not name:
            raise CatalogLoadError(source, "every character needs a name")
        if name.lower() in seen:
            raise CatalogLoadError(source, f"duplicate character {name!r}")
        try:
            house = House.normalize(row.get("house"))
        except ValueError as exc:
            raise CatalogLoadError(source, f"{name}: {exc}") from exc

        spell_names = _name_list(row.get("spells"), source, name)
        unknown = [spell_name for spell_name in spell_names if spell_name not in catalog]
        if unknown:
            raise CatalogLoadError(source, f"{name}: unknown spells {', '.join(unknown)}")

        level = _int_field(row, "level", source, default=1)
        hp = _int_field(row, "hp", source)
        if level < 1 or hp < 1:
            raise CatalogLoadError(source, f"{name}: level and hp must be positive")
        if not level_deck([catalog[spell_name] for spell_name in spell_names], level):
            raise CatalogLoadError(source, f"{name}: no spells usable at level {level}")

        opponents.append(
            OpponentProfile(
                name=name,
                house=house,
                level=level,
                hp=hp,
                spells=spell_names,
                description=str(row.get("description", "") or ""),
            )
        )
        seen.add(name.lower())

    player_row = payload.get("player", {}) if isinstance(payload, dict) else {}
    if not isinstance(player_row, dict):
        raise CatalogLoadError(source, "'player' must be an object")
    player_hp = _int_field(player_row, "hp", source, default=PLAYER_BASE_HP)
    if player_hp < 1:
        raise CatalogLoadError(source, "player hp must be positive")
    player_spells: Tuple[str, ...] = ()
    if "spells" in player_row:
        player_spells = _name_list(player_row.get("spells"), source, "player")
        unknown = [spell_name for spell_name in player_spells if spell_name not in catalog]
        if unknown:
            raise CatalogLoadError(source, f"player: unknown spells {', '.join(unknown)}")

    roster = build_roster(spells, opponents, player_hp=player_hp, player_spells=list(player_spells))
    if not roster.player_level_deck(1):
        raise CatalogLoadError(source, "player has no spells usable at level 1")
    return roster


def load_roster(spells_path: str | Path | None = None, characters_path: str | Path | None = None) -> Roster:
    spells_file = Path(spells_path) if spells_path else DEFAULT_SPELLS_FILE
    characters_file = Path(characters_path) if characters_path else DEFAULT_CHARACTERS_FILE

    spells = parse_spells(_read_json(spells_file), source=str(spells_file))
    roster = parse_characters(_read_json(characters_file), spells, source=str(characters_file))
    logger.info(
        "Catalog loaded",
        extra={"spell_count": len(roster.spells), "opponent_count": len(roster.opponents)},
    )
    return roster
