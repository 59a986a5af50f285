from __future__ import annotations

from dataclasses import dataclass

from .actions import PlayAction, PurchaseAction, UpgradeAction
from .session import GameSession, step
from .state import MinionInstance, PlayerState


@dataclass(frozen=True)
class AISpec:
    """Simple bot tuning parameters.

    difficulty:
      0 = easy (sometimes skips a purchase)
      1 = normal
      2 = hard (upgrades the tavern as soon as it is affordable)
    """

    difficulty: int = 1


def _minion_value(m: MinionInstance) -> float:
    v = float(m.attack * 2 + m.hp)
    if m.battlecry is not None:
        v += 1.0
    if m.end_of_turn is not None:
        v += 1.5
    if m.reborn:
        v += 1.5
    return v


def _best_shop_minion(session: GameSession, ps: PlayerState) -> MinionInstance | None:
    best: tuple[float, MinionInstance] | None = None
    for m in session.arena.minions(ps.shop):
        score = _minion_value(m)
        if best is None or score > best[0]:
            best = (score, m)
    return best[1] if best is not None else None


def _should_upgrade(session: GameSession, ps: PlayerState, spec: AISpec) -> bool:
    cfg = session.config
    if ps.tavern_tier >= cfg.max_tavern_tier or ps.gold < ps.upgrade_cost:
        return False
    if spec.difficulty >= 2:
        return True
    # Otherwise only when it still leaves gold for a minion.
    return ps.gold - ps.upgrade_cost >= cfg.minion_cost


def bot_take_turn(session: GameSession, player_id: int, spec: AISpec | None = None) -> None:
    """Spend the player's buy phase: upgrade, buy, then play everything.

    The bot uses the session RNG (`session.rng`) so it remains deterministic
    for a given seed.
    """
    spec = spec or AISpec()
    ps = session.player(player_id)
    cfg = session.config

    if _should_upgrade(session, ps, spec):
        step(session, UpgradeAction(player=player_id))

    room = cfg.board_limit - len(ps.board) - len(ps.hand)
    while room > 0 and ps.gold >= cfg.minion_cost and ps.shop:
        if spec.difficulty <= 0 and session.rng.random() < 0.25:
            break
        target = _best_shop_minion(session, ps)
        if target is None:
            break
        res = step(session, PurchaseAction(player=player_id, card_id=target.id))
        if not res.ok:
            break
        room -= 1

    for card_id in list(ps.hand):
        res = step(session, PlayAction(player=player_id, card_id=card_id))
        if not res.ok:
            break
