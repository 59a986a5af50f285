from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Iterable

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
from .combat import CombatResult, HeroDamagePolicy, fixed_hero_damage, resolve_combat
from .config import GameConfig
from .effects import trigger_battlecry, trigger_end_of_turn
from .state import MinionArena, PlayerState
from .types import Phase, RejectReason, TemplateCatalog, Zone

Event = dict[str, object]


@dataclass
class RoundResult:
    log: list[str]
    winner: int | None
    hero_damage: int
    combat: CombatResult
    game_over: bool = False


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: RejectReason | None = None
    round: RoundResult | None = None


@dataclass
class GameSession:
    templates: TemplateCatalog
    config: GameConfig
    seed: int
    rng: random.Random
    arena: MinionArena
    players: list[PlayerState]
    hero_damage: HeroDamagePolicy
    turn: int = 1
    phase: Phase = "buy"
    game_over: bool = False
    winner: int | None = None
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def first_id(self) -> int | None:
        """First minion id this session handed out; `replay` needs it."""
        return self.arena.first_id

    def player(self, player_id: int) -> PlayerState:
        for p in self.players:
            if p.id == player_id:
                return p
        raise KeyError(f"Unknown player: {player_id}")


def _reject(reason: RejectReason) -> StepResult:
    return StepResult(ok=False, events=[], error=reason)


def _emit(session: GameSession, events: list[Event]) -> list[Event]:
    session.event_log.extend(events)
    return events


def _buy_phase_error(session: GameSession) -> RejectReason | None:
    if session.game_over:
        return "GameOver"
    if session.phase != "buy":
        return "WrongPhase"
    return None


def _refresh_shop(session: GameSession, ps: PlayerState) -> Event:
    for minion_id in ps.shop:
        session.arena.discard(minion_id)
    ps.shop.clear()
    pool = session.templates.for_tier(ps.tavern_tier)
    for _ in range(session.config.shop_size):
        ps.shop.append(session.arena.spawn(session.rng.choice(pool)).id)
    return {"type": "SHOP_REFRESHED", "player": ps.id, "shop": list(ps.shop)}


def purchase(session: GameSession, player_id: int, card_id: int) -> StepResult:
    """Move a shop minion into the player's hand for the fixed minion cost."""
    err = _buy_phase_error(session)
    if err:
        return _reject(err)
    ps = session.player(player_id)
    cost = session.config.minion_cost
    if ps.gold < cost:
        return _reject("InsufficientGold")
    if card_id not in ps.shop:
        return _reject("NotFound")

    session.arena.transfer(ps, "shop", "hand", card_id)
    ps.gold -= cost
    return StepResult(
        ok=True,
        events=_emit(
            session,
            [{"type": "MINION_PURCHASED", "player": ps.id, "minion": card_id, "cost": cost}],
        ),
    )


def play(session: GameSession, player_id: int, card_id: int) -> StepResult:
    """Move a hand minion to the right end of the board, then run its battlecry."""
    err = _buy_phase_error(session)
    if err:
        return _reject(err)
    ps = session.player(player_id)
    if card_id not in ps.hand:
        return _reject("NotFound")
    if len(ps.board) >= session.config.board_limit:
        return _reject("BoardFull")

    minion = session.arena.transfer(ps, "hand", "board", card_id)
    events: list[Event] = [
        {"type": "MINION_PLAYED", "player": ps.id, "minion": minion.id, "slot": len(ps.board) - 1}
    ]
    events.extend(trigger_battlecry(session.arena, ps, minion, session.rng))
    return StepResult(ok=True, events=_emit(session, events))


def sell(session: GameSession, player_id: int, zone: Zone, card_id: int) -> StepResult:
    err = _buy_phase_error(session)
    if err:
        return _reject(err)
    ps = session.player(player_id)
    if zone not in ("hand", "board"):
        return _reject("NotFound")
    ids = ps.zone(zone)
    if card_id not in ids:
        return _reject("NotFound")

    ids.remove(card_id)
    session.arena.discard(card_id)
    ps.gold += session.config.sell_refund
    return StepResult(
        ok=True,
        events=_emit(
            session,
            [
                {
                    "type": "MINION_SOLD",
                    "player": ps.id,
                    "zone": zone,
                    "minion": card_id,
                    "refund": session.config.sell_refund,
                }
            ],
        ),
    )


def refresh_shop(session: GameSession, player_id: int) -> StepResult:
    """Paid reroll of the player's shop."""
    err = _buy_phase_error(session)
    if err:
        return _reject(err)
    ps = session.player(player_id)
    if ps.gold < session.config.refresh_cost:
        return _reject("InsufficientGold")

    ps.gold -= session.config.refresh_cost
    return StepResult(ok=True, events=_emit(session, [_refresh_shop(session, ps)]))


def upgrade_tavern(session: GameSession, player_id: int) -> StepResult:
    err = _buy_phase_error(session)
    if err:
        return _reject(err)
    ps = session.player(player_id)
    cfg = session.config
    if ps.tavern_tier >= cfg.max_tavern_tier:
        return _reject("TierMaxed")
    if ps.gold < ps.upgrade_cost:
        return _reject("InsufficientGold")

    ps.gold -= ps.upgrade_cost
    ps.tavern_tier += 1
    ps.upgrade_cost = 0 if ps.tavern_tier >= cfg.max_tavern_tier else cfg.upgrade_base_cost
    events: list[Event] = [{"type": "TAVERN_UPGRADED", "player": ps.id, "tier": ps.tavern_tier}]
    # New tier options show up right away, free of charge.
    events.append(_refresh_shop(session, ps))
    return StepResult(ok=True, events=_emit(session, events))


def _check_game_over(session: GameSession, log: list[str]) -> None:
    defeated = [p for p in session.players if p.defeated]
    if not defeated:
        return
    session.game_over = True
    survivors = [p for p in session.players if not p.defeated]
    if not survivors:
        session.winner = None
        log.append("Both players are defeated. The game is a draw.")
        _emit(session, [{"type": "GAME_ENDED", "winner": None, "reason": "double_ko"}])
        return
    session.winner = survivors[0].id
    log.append(f"Player {session.winner} wins the game!")
    _emit(session, [{"type": "GAME_ENDED", "winner": session.winner, "reason": "health_0"}])


def start_round(session: GameSession, first_attacker: int | None = None) -> StepResult:
    """Run end-of-turn effects, resolve combat and apply its outcome.

    Player 1's board triggers before player 2's. Leaves the session in the
    combat phase until `advance_turn`.
    """
    err = _buy_phase_error(session)
    if err:
        return _reject(err)
    session.phase = "combat"
    first = len(session.event_log)
    _emit(session, [{"type": "COMBAT_PHASE_STARTED", "turn": session.turn}])

    for ps in session.players:
        _emit(session, trigger_end_of_turn(session.arena, ps, session.rng))

    p1, p2 = session.players
    combat = resolve_combat(
        session.arena,
        p1,
        p2,
        session.rng,
        hero_damage=session.hero_damage,
        first_attacker=first_attacker,
        max_steps=session.config.max_combat_steps,
    )
    _emit(session, combat.events)
    log = list(combat.log)
    _check_game_over(session, log)

    result = RoundResult(
        log=log,
        winner=combat.winner,
        hero_damage=combat.hero_damage,
        combat=combat,
        game_over=session.game_over,
    )
    return StepResult(ok=True, events=session.event_log[first:], round=result)


def advance_turn(session: GameSession) -> StepResult:
    """Reset boards after combat and open the next buy phase."""
    if session.game_over:
        return _reject("GameOver")
    if session.phase != "combat":
        return _reject("WrongPhase")

    cfg = session.config
    session.turn += 1
    events: list[Event] = [{"type": "TURN_STARTED", "turn": session.turn}]

    for ps in session.players:
        for minion in session.arena.minions(ps.board):
            minion.restore()
        for minion_id in list(ps.graveyard):
            session.arena.transfer(ps, "graveyard", "board", minion_id).restore()

        ps.gold = cfg.gold_for_turn(session.turn)
        if ps.tavern_tier < cfg.max_tavern_tier:
            ps.upgrade_cost = max(ps.upgrade_cost - 1, cfg.min_upgrade_cost)
        events.append(_refresh_shop(session, ps))

    session.phase = "buy"
    return StepResult(ok=True, events=_emit(session, events))


def step(session: GameSession, action: Action) -> StepResult:
    """Apply a single action to the session.

    This mutates `session` in-place but remains deterministic for a given
    (seed, templates, action sequence).
    """
    session.action_log.append(action)

    if isinstance(action, PurchaseAction):
        return purchase(session, action.player, action.card_id)
    if isinstance(action, PlayAction):
        return play(session, action.player, action.card_id)
    if isinstance(action, SellAction):
        return sell(session, action.player, action.zone, action.card_id)
    if isinstance(action, RefreshAction):
        return refresh_shop(session, action.player)
    if isinstance(action, UpgradeAction):
        return upgrade_tavern(session, action.player)
    if isinstance(action, StartRoundAction):
        return start_round(session, action.first_attacker)
    if isinstance(action, NextTurnAction):
        return advance_turn(session)
    raise TypeError(f"Unknown action: {action!r}")


def new_session(
    templates: TemplateCatalog,
    seed: int,
    config: GameConfig | None = None,
    *,
    hero_damage: HeroDamagePolicy | None = None,
    ids: Iterator[int] | None = None,
    first_id: int | None = None,
) -> GameSession:
    cfg = config or GameConfig()
    if not templates.for_tier(1):
        raise ValueError("Template catalog has no tier 1 templates.")

    players = [
        PlayerState(
            id=player_id,
            gold=cfg.gold_for_turn(1),
            health=cfg.starting_health,
            tavern_tier=1,
            upgrade_cost=cfg.upgrade_base_cost,
        )
        for player_id in (1, 2)
    ]
    session = GameSession(
        templates=templates,
        config=cfg,
        seed=seed,
        rng=random.Random(seed),
        arena=MinionArena(ids, first_id=first_id),
        players=players,
        hero_damage=hero_damage or fixed_hero_damage(cfg.hero_damage),
    )
    for ps in session.players:
        _emit(session, [_refresh_shop(session, ps)])
    return session


def replay(
    templates: TemplateCatalog,
    seed: int,
    actions: Iterable[Action],
    config: GameConfig | None = None,
    *,
    ids: Iterator[int] | None = None,
    first_id: int | None = None,
) -> GameSession:
    """Rebuild a session from its seed and action log.

    Pass the original session's `first_id` (or an equivalent `ids` source)
    so the recorded card ids point at the same minions.
    """
    session = new_session(templates, seed, config, ids=ids, first_id=first_id)
    for a in actions:
        step(session, a)
    return session
