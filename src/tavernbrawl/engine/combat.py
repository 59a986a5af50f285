"""Automated combat between two boards.

The engine alternates attacks until one board is empty. Attackers always come
from board index 0; defenders are picked at random from the whole opposing
board. Every action is written to a human readable log, in the order it
happens, which callers display and tests assert on.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Literal

from .state import MinionArena, MinionInstance, PlayerState

CombatPhase = Literal["not_started", "active", "resolved"]
CombatEnd = Literal["board_cleared", "empty_board", "stalemate", "step_limit"]

Event = dict[str, object]

# (winning player, its surviving minions) -> damage dealt to the loser's hero
HeroDamagePolicy = Callable[[PlayerState, list[MinionInstance]], int]


def fixed_hero_damage(amount: int) -> HeroDamagePolicy:
    def policy(winner: PlayerState, survivors: list[MinionInstance]) -> int:
        return amount

    return policy


@dataclass
class CombatResult:
    log: list[str]
    winner: int | None
    loser: int | None
    hero_damage: int
    steps: int
    first_attacker: int | None
    end: CombatEnd
    events: list[Event] = field(default_factory=list)

    @property
    def is_tie(self) -> bool:
        return self.winner is None


class CombatEngine:
    """Single-use state machine: not_started -> active -> resolved."""

    def __init__(
        self,
        arena: MinionArena,
        player_a: PlayerState,
        player_b: PlayerState,
        rng: random.Random,
        *,
        hero_damage: HeroDamagePolicy,
        max_steps: int = 500,
    ) -> None:
        self.arena = arena
        self.players = (player_a, player_b)
        self.rng = rng
        self.hero_damage = hero_damage
        self.max_steps = max_steps
        self.phase: CombatPhase = "not_started"
        self.log: list[str] = []
        self.events: list[Event] = []
        self.steps = 0
        self._current = 0

    def run(self, first_attacker: int | None = None) -> CombatResult:
        """Run the combat to completion.

        `first_attacker` forces the opening player by id; otherwise a coin
        flip on the engine rng decides.
        """
        if self.phase != "not_started":
            raise RuntimeError("Combat already resolved.")

        a, b = self.players
        self.log.append("Combat begins!")

        opener: int | None = None
        end: CombatEnd = "empty_board"
        if a.board and b.board:
            self.phase = "active"
            self._current = self._choose_first(first_attacker)
            opener = self.players[self._current].id
            self.log.append(f"Player {opener} attacks first.")
            self.events.append({"type": "COMBAT_STARTED", "first_attacker": opener})
            end = self._loop()

        return self._resolve(opener, end)

    def _choose_first(self, first_attacker: int | None) -> int:
        if first_attacker is None:
            return 0 if self.rng.random() < 0.5 else 1
        for idx, p in enumerate(self.players):
            if p.id == first_attacker:
                return idx
        raise ValueError(f"Player {first_attacker} is not in this combat.")

    def _can_deal_damage(self) -> bool:
        for p in self.players:
            if any(m.attack > 0 for m in self.arena.minions(p.board)):
                return True
        return False

    def _loop(self) -> CombatEnd:
        a, b = self.players
        while a.board and b.board:
            if not self._can_deal_damage():
                self.log.append("Stalemate! Neither board can deal damage.")
                return "stalemate"
            if self.steps >= self.max_steps:
                self.log.append(f"Combat stopped after {self.steps} attacks.")
                return "step_limit"
            self._step()
        return "board_cleared"

    def _step(self) -> None:
        attacking = self.players[self._current]
        defending = self.players[1 - self._current]
        assert attacking.board and defending.board, "step requires two non-empty boards"

        attacker = self.arena.get(attacking.board[0])
        target_index = self.rng.randrange(len(defending.board))
        defender = self.arena.get(defending.board[target_index])

        self.log.append(
            f"Player {attacking.id}'s {attacker.describe()} attacks "
            f"Player {defending.id}'s {defender.describe()}."
        )
        self.events.append(
            {
                "type": "ATTACK",
                "player": attacking.id,
                "attacker": attacker.id,
                "defender": defender.id,
                "attacker_attack": attacker.attack,
                "defender_attack": defender.attack,
            }
        )

        damage_to_defender = attacker.attack
        damage_to_attacker = defender.attack
        defender.hp -= damage_to_defender
        attacker.hp -= damage_to_attacker

        if defender.hp <= 0:
            self._resolve_death(defending, target_index)
        if attacker.hp <= 0:
            self._resolve_death(attacking, 0)

        self._current = 1 - self._current
        self.steps += 1

    def _resolve_death(self, owner: PlayerState, index: int) -> None:
        minion = self.arena.get(owner.board[index])
        if minion.can_reborn:
            minion.used_reborn = True
            minion.hp = 1
            self.log.append(f"→ {minion.name} is reborn!")
            self.events.append({"type": "MINION_REBORN", "player": owner.id, "minion": minion.id})
            return
        owner.board.pop(index)
        owner.graveyard.append(minion.id)
        self.log.append(f"→ {minion.name} dies.")
        self.events.append({"type": "MINION_DIED", "player": owner.id, "minion": minion.id})

    def _resolve(self, opener: int | None, end: CombatEnd) -> CombatResult:
        self.phase = "resolved"
        a, b = self.players

        if bool(a.board) == bool(b.board):
            self.log.append("It's a tie! No hero damage dealt.")
            self.events.append({"type": "ROUND_TIED"})
            return CombatResult(
                log=self.log,
                winner=None,
                loser=None,
                hero_damage=0,
                steps=self.steps,
                first_attacker=opener,
                end=end,
                events=self.events,
            )

        winner, loser = (a, b) if a.board else (b, a)
        damage = self.hero_damage(winner, self.arena.minions(winner.board))
        loser.health -= damage
        self.log.append(
            f"Player {winner.id} wins the round! Player {loser.id} takes {damage} damage."
        )
        self.events.append(
            {"type": "ROUND_WON", "winner": winner.id, "loser": loser.id, "damage": damage}
        )
        return CombatResult(
            log=self.log,
            winner=winner.id,
            loser=loser.id,
            hero_damage=damage,
            steps=self.steps,
            first_attacker=opener,
            end=end,
            events=self.events,
        )


def resolve_combat(
    arena: MinionArena,
    player_a: PlayerState,
    player_b: PlayerState,
    rng: random.Random,
    *,
    hero_damage: HeroDamagePolicy | None = None,
    first_attacker: int | None = None,
    max_steps: int = 500,
) -> CombatResult:
    """Fight `player_a`'s board against `player_b`'s.

    Mutates both boards and graveyards in place and applies hero damage to
    the loser. Gold, shop and hand are never touched.
    """
    engine = CombatEngine(
        arena,
        player_a,
        player_b,
        rng,
        hero_damage=hero_damage or fixed_hero_damage(2),
        max_steps=max_steps,
    )
    return engine.run(first_attacker=first_attacker)
