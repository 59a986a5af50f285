from __future__ import annotations

import random

from .state import MinionArena, MinionInstance, PlayerState
from .types import BuffEffect, Effect, HealEffect

Event = dict[str, object]


def _buff(minion: MinionInstance, eff: BuffEffect) -> None:
    minion.attack += eff.attack_delta
    minion.hp += eff.health_delta
    minion.max_hp += eff.health_delta


def resolve_effect(
    eff: Effect,
    arena: MinionArena,
    player: PlayerState,
    source: MinionInstance,
    rng: random.Random,
    *,
    trigger: str,
) -> list[Event]:
    """Apply one effect owned by `source` on `player`'s board.

    Returns the events produced; an effect with no legal target is a no-op.
    """
    events: list[Event] = []

    if isinstance(eff, BuffEffect):
        others = [m for m in arena.minions(player.board) if m.id != source.id]
        if not others:
            return events
        if eff.target == "random_other_friendly":
            targets = [rng.choice(others)]
        else:
            targets = others
        for target in targets:
            _buff(target, eff)
            events.append(
                {
                    "type": "BUFF_APPLIED",
                    "trigger": trigger,
                    "player": player.id,
                    "source": source.id,
                    "minion": target.id,
                    "attack_delta": eff.attack_delta,
                    "health_delta": eff.health_delta,
                }
            )

    elif isinstance(eff, HealEffect):
        for target in arena.minions(player.board):
            before = target.hp
            target.hp = min(target.hp + eff.amount, target.max_hp)
            healed = target.hp - before
            if healed > 0:
                events.append(
                    {
                        "type": "HEAL_MINION",
                        "trigger": trigger,
                        "player": player.id,
                        "source": source.id,
                        "minion": target.id,
                        "amount": healed,
                    }
                )

    return events


def trigger_battlecry(
    arena: MinionArena, player: PlayerState, minion: MinionInstance, rng: random.Random
) -> list[Event]:
    if minion.battlecry is None:
        return []
    return resolve_effect(minion.battlecry, arena, player, minion, rng, trigger="battlecry")


def trigger_end_of_turn(
    arena: MinionArena, player: PlayerState, rng: random.Random
) -> list[Event]:
    """Fire end-of-turn effects for `player`'s board, left to right.

    The board order is captured before the first effect fires.
    """
    events: list[Event] = []
    for minion in arena.minions(list(player.board)):
        if minion.end_of_turn is None:
            continue
        events.extend(
            resolve_effect(minion.end_of_turn, arena, player, minion, rng, trigger="end_of_turn")
        )
    return events
