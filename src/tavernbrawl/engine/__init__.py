"""Deterministic, headless rules engine for Tavern Brawl.

IMPORTANT: This package does no I/O; content loading and telemetry live in
`tavernbrawl.services`.
"""

from .actions import (
    NextTurnAction,
    PlayAction,
    PurchaseAction,
    RefreshAction,
    SellAction,
    StartRoundAction,
    UpgradeAction,
)
from .combat import CombatEngine, CombatResult, fixed_hero_damage, resolve_combat
from .config import GameConfig
from .session import (
    GameSession,
    RoundResult,
    StepResult,
    advance_turn,
    new_session,
    play,
    purchase,
    refresh_shop,
    sell,
    start_round,
    step,
    upgrade_tavern,
)
from .types import BuffEffect, CardTemplate, HealEffect, TemplateCatalog

__all__ = [
    "BuffEffect",
    "CardTemplate",
    "CombatEngine",
    "CombatResult",
    "GameConfig",
    "GameSession",
    "HealEffect",
    "NextTurnAction",
    "PlayAction",
    "PurchaseAction",
    "RefreshAction",
    "RoundResult",
    "SellAction",
    "StartRoundAction",
    "StepResult",
    "TemplateCatalog",
    "UpgradeAction",
    "advance_turn",
    "fixed_hero_damage",
    "new_session",
    "play",
    "purchase",
    "refresh_shop",
    "resolve_combat",
    "sell",
    "start_round",
    "step",
    "upgrade_tavern",
]
