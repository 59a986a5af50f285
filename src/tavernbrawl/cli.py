from __future__ import annotations

import argparse
from pathlib import Path

from tavernbrawl.engine.actions import NextTurnAction, StartRoundAction
from tavernbrawl.engine.ai import AISpec, bot_take_turn
from tavernbrawl.engine.session import new_session, step
from tavernbrawl.paths import get_paths
from tavernbrawl.services.content import ContentService
from tavernbrawl.services.telemetry import TelemetryService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="tavernbrawl-sim")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--turns", type=int, default=20, help="stop after this many rounds")
    parser.add_argument("--difficulty", type=int, default=1, choices=(0, 1, 2))
    parser.add_argument(
        "--telemetry", type=Path, default=None, help="append JSONL events here (default: userdata/telemetry.jsonl)"
    )
    parser.add_argument("--no-telemetry", action="store_true")
    args = parser.parse_args(argv)

    paths = get_paths()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    telemetry: TelemetryService | None = None
    if not args.no_telemetry:
        telemetry = TelemetryService(args.telemetry or paths.userdata_dir / "telemetry.jsonl")

    session = new_session(content.load_templates(), seed=args.seed)
    spec = AISpec(difficulty=args.difficulty)

    for _ in range(args.turns):
        for ps in session.players:
            bot_take_turn(session, ps.id, spec)
        res = step(session, StartRoundAction())
        assert res.round is not None
        print(f"=== Turn {session.turn} ===")
        for line in res.round.log:
            print(line)
        if telemetry is not None:
            telemetry.log_round(session.turn, res.round.log, res.round.winner, res.round.hero_damage)
        if session.game_over:
            break
        step(session, NextTurnAction())

    health = ", ".join(f"Player {p.id}: {p.health}" for p in session.players)
    print(f"Final health: {health}")
    if session.game_over and telemetry is not None:
        telemetry.log("GAME_ENDED", {"winner": session.winner, "turn": session.turn})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
