from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    starting_health: int = 30
    board_limit: int = 7
    shop_size: int = 3
    minion_cost: int = 3
    sell_refund: int = 1
    refresh_cost: int = 1
    base_gold: int = 3
    max_gold: int = 10
    max_tavern_tier: int = 2
    upgrade_base_cost: int = 5
    min_upgrade_cost: int = 1
    # Placeholder: hero damage does not yet depend on the surviving board.
    hero_damage: int = 2
    max_combat_steps: int = 500

    def gold_for_turn(self, turn: int) -> int:
        return min(self.base_gold + (turn - 1), self.max_gold)
