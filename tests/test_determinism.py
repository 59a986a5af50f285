from __future__ import annotations

import itertools

from tavernbrawl.engine.actions import NextTurnAction, StartRoundAction
from tavernbrawl.engine.ai import bot_take_turn
from tavernbrawl.engine.serialize import snapshot
from tavernbrawl.engine.session import new_session, replay, step
from tavernbrawl.paths import get_paths
from tavernbrawl.services.content import ContentService


def _load_templates():
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    return content.load_templates()


def test_bot_spends_first_turn() -> None:
    templates = _load_templates()
    state = new_session(templates, seed=11, ids=itertools.count(1))

    bot_take_turn(state, 1)

    p1 = state.players[0]
    assert p1.gold == 0
    assert len(p1.board) == 1
    assert p1.hand == []
    assert len(p1.shop) == 2


def test_engine_determinism_replay() -> None:
    templates = _load_templates()
    seed = 424242
    state1 = new_session(templates, seed=seed, ids=itertools.count(1))

    for _ in range(12):
        for ps in state1.players:
            bot_take_turn(state1, ps.id)
        step(state1, StartRoundAction())
        if state1.game_over:
            break
        step(state1, NextTurnAction())

    snap1 = snapshot(state1)

    state2 = replay(templates, seed, list(state1.action_log), ids=itertools.count(1))
    snap2 = snapshot(state2)

    assert snap1 == snap2
    assert state1.event_log == state2.event_log


def test_replay_with_default_minion_ids() -> None:
    templates = _load_templates()
    seed = 7
    state1 = new_session(templates, seed=seed)

    for ps in state1.players:
        bot_take_turn(state1, ps.id)
    step(state1, StartRoundAction())
    step(state1, NextTurnAction())
    for ps in state1.players:
        bot_take_turn(state1, ps.id)

    assert all(ps.board for ps in state1.players)
    first_id = state1.first_id
    assert first_id is not None

    state2 = replay(templates, seed, list(state1.action_log), first_id=first_id)

    assert snapshot(state2) == snapshot(state1)
    assert [len(ps.board) for ps in state2.players] == [len(ps.board) for ps in state1.players]
