from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

Zone = Literal["shop", "hand", "board", "graveyard"]
Phase = Literal["buy", "combat"]

RejectReason = Literal[
    "InsufficientGold",
    "NotFound",
    "BoardFull",
    "TierMaxed",
    "WrongPhase",
    "GameOver",
]

BuffTarget = Literal["random_other_friendly", "all_other_friendly"]
HealTarget = Literal["all_friendly"]


@dataclass(frozen=True)
class BuffEffect:
    """Raise attack and health of friendly minions.

    Health buffs raise max_hp as well, so the bonus survives the
    between-round heal.
    """

    type: Literal["buff"]
    attack_delta: int
    health_delta: int
    target: BuffTarget


@dataclass(frozen=True)
class HealEffect:
    type: Literal["heal"]
    amount: int
    target: HealTarget


Effect = BuffEffect | HealEffect


@dataclass(frozen=True)
class CardTemplate:
    id: str
    name: str
    attack: int
    hp: int
    tier: int = 1
    battlecry: Effect | None = None
    end_of_turn: Effect | None = None
    reborn: bool = False

    def ability_names(self) -> tuple[str, ...]:
        names: list[str] = []
        if self.battlecry is not None:
            names.append("Battlecry")
        if self.end_of_turn is not None:
            names.append("EoT")
        if self.reborn:
            names.append("Reborn")
        return tuple(names)


@dataclass(frozen=True)
class TemplateCatalog:
    """Immutable template catalog used by the engine."""

    templates: dict[str, CardTemplate]

    def get(self, template_id: str) -> CardTemplate:
        return self.templates[template_id]

    def all_ids(self) -> Sequence[str]:
        return list(self.templates.keys())

    def for_tier(self, tier: int) -> list[CardTemplate]:
        return [t for t in self.templates.values() if t.tier <= tier]
