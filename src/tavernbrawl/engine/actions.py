from __future__ import annotations

from dataclasses import dataclass

from .types import Zone


@dataclass(frozen=True)
class PurchaseAction:
    player: int
    card_id: int


@dataclass(frozen=True)
class PlayAction:
    player: int
    card_id: int


@dataclass(frozen=True)
class SellAction:
    player: int
    zone: Zone
    card_id: int


@dataclass(frozen=True)
class RefreshAction:
    player: int


@dataclass(frozen=True)
class UpgradeAction:
    player: int


@dataclass(frozen=True)
class StartRoundAction:
    first_attacker: int | None = None


@dataclass(frozen=True)
class NextTurnAction:
    pass


Action = (
    PurchaseAction
    | PlayAction
    | SellAction
    | RefreshAction
    | UpgradeAction
    | StartRoundAction
    | NextTurnAction
)
