from __future__ import annotations


from .actions import (
    Action,
    NextTurnAction,
    PlayAction,
    PurchaseAction,
    RefreshAction,
    SellAction,
    StartRoundAction,
    UpgradeAction,
)
from .session import GameSession
from .state import MinionArena, MinionInstance, PlayerState


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, PurchaseAction):
        return {"type": "purchase", "player": a.player, "card_id": a.card_id}
    if isinstance(a, PlayAction):
        return {"type": "play", "player": a.player, "card_id": a.card_id}
    if isinstance(a, SellAction):
        return {"type": "sell", "player": a.player, "zone": a.zone, "card_id": a.card_id}
    if isinstance(a, RefreshAction):
        return {"type": "refresh", "player": a.player}
    if isinstance(a, UpgradeAction):
        return {"type": "upgrade", "player": a.player}
    if isinstance(a, StartRoundAction):
        return {"type": "start_round", "first_attacker": a.first_attacker}
    if isinstance(a, NextTurnAction):
        return {"type": "next_turn"}
    # should be unreachable
    return {"type": "unknown"}


def _minion_to_dict(m: MinionInstance) -> dict[str, object]:
    return {
        "id": m.id,
        "template_id": m.template_id,
        "attack": m.attack,
        "hp": m.hp,
        "max_hp": m.max_hp,
        "tier": m.tier,
        "used_reborn": m.used_reborn,
    }


def _player_to_dict(arena: MinionArena, p: PlayerState) -> dict[str, object]:
    return {
        "id": p.id,
        "gold": p.gold,
        "health": p.health,
        "tavern_tier": p.tavern_tier,
        "upgrade_cost": p.upgrade_cost,
        "shop": [_minion_to_dict(m) for m in arena.minions(p.shop)],
        "hand": [_minion_to_dict(m) for m in arena.minions(p.hand)],
        "board": [_minion_to_dict(m) for m in arena.minions(p.board)],
        "graveyard": [_minion_to_dict(m) for m in arena.minions(p.graveyard)],
    }


def snapshot(session: GameSession) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current session."""
    return {
        "seed": session.seed,
        "first_id": session.first_id,
        "turn": session.turn,
        "phase": session.phase,
        "game_over": session.game_over,
        "winner": session.winner,
        "players": [_player_to_dict(session.arena, p) for p in session.players],
        "action_log": [action_to_dict(a) for a in session.action_log],
    }
