import logging
import os
import random
from dataclasses import dataclass
from typing import Callable, Optional

from duel.application.services.battle_service import BattleService, BattleView
from duel.application.services.campaign_service import CampaignService
from duel.application.services.combat_policy import CombatPolicy, EnemyTactics
from duel.application.services.event_bus import EventBus, log_event
from duel.application.services.turn_resolver import TurnResolver
from duel.domain.models.roster import Roster


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes"}


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_log_level(name: str, default: str = "WARNING") -> str:
    raw = os.getenv(name, "").strip().upper() or default
    if not isinstance(logging.getLevelName(raw), int):
        raise ValueError(f"{name} must be a logging level name, got {raw!r}")
    return raw


@dataclass
class Settings:
    spells_file: Optional[str] = None
    characters_file: Optional[str] = None
    seed: Optional[int] = None
    damage_variance: int = 0
    help_consumes_turn: bool = False
    log_level: str = "WARNING"


def load_settings() -> Settings:
    return Settings(
        spells_file=os.getenv("DUEL_SPELLS_FILE") or None,
        characters_file=os.getenv("DUEL_CHARACTERS_FILE") or None,
        seed=_env_int("DUEL_SEED"),
        damage_variance=max(0, _env_int("DUEL_DAMAGE_VARIANCE") or 0),
        help_consumes_turn=_env_flag("DUEL_HELP_CONSUMES_TURN"),
        log_level=_env_log_level("DUEL_LOG_LEVEL"),
    )


def create_turn_resolver(settings: Settings) -> TurnResolver:
    resolver = TurnResolver(
        policy=CombatPolicy(damage_variance=settings.damage_variance),
        tactics=EnemyTactics(),
        rng=random.Random(),
        help_consumes_turn=settings.help_consumes_turn,
    )
    if settings.seed is not None:
        resolver.set_seed(settings.seed)
    return resolver


def create_campaign_service(
    roster: Roster,
    settings: Settings,
    *,
    read_line: Callable[[], str],
    view: Optional[BattleView] = None,
    event_bus: Optional[EventBus] = None,
) -> CampaignService:
    bus = event_bus
    if bus is None:
        bus = EventBus()
        bus.subscribe_all(log_event)
    battle_service = BattleService(
        create_turn_resolver(settings),
        read_line=read_line,
        view=view,
        unlocks=roster.newly_unlocked,
    )
    return CampaignService(roster, battle_service, event_publisher=bus.publish)
