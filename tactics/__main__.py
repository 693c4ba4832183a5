"""Entry point: ``python -m tactics``.

  - ``python -m tactics demo``    → Headless scripted battle with logging
  - ``python -m tactics terrain`` → Generate a battlefield and print its height map
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _add_world_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--width", type=int, default=12)
    parser.add_argument("--depth", type=int, default=12)
    parser.add_argument("--height", type=int, default=6)
    parser.add_argument("--scale", type=float, default=30.0)
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    parser.add_argument("--trace-search", action="store_true", help="Log every reachability and A* search")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn-based voxel tactics battle core")
    sub = parser.add_subparsers(dest="command")

    demo = sub.add_parser("demo", help="Run a scripted two-player battle (default)")
    _add_world_args(demo)
    demo.add_argument("--rounds", type=int, default=3)
    demo.add_argument("--json", action="store_true", help="Print the final snapshot as JSON")

    terrain = sub.add_parser("terrain", help="Generate terrain and print the height map")
    _add_world_args(terrain)

    return parser


def _config_from(args: argparse.Namespace):
    from tactics.config import BattleConfig

    return BattleConfig(
        seed=args.seed,
        width=args.width,
        depth=args.depth,
        max_height=args.height,
        noise_scale=args.scale,
        log_level=args.log_level,
    )


def _run_terrain(args: argparse.Namespace) -> None:
    from tactics.systems.terrain import TerrainGenerator
    from tactics.utils.logging import setup_logging

    config = _config_from(args)
    setup_logging(config.log_level, trace_search=args.trace_search)
    grid = TerrainGenerator(config).generate()

    base = -config.max_height / 2
    for z in range(config.depth):
        row = []
        for x in range(config.width):
            top = grid.top_cell(x - config.width / 2, z - config.depth / 2)
            row.append(str(int(top.y - base) + 1) if top is not None else ".")
        print(" ".join(f"{h:>2}" for h in row))


def _run_demo(args: argparse.Namespace) -> None:
    from tactics.core.enums import Domain, Faction, Phase
    from tactics.core.session import BattleSession
    from tactics.core.snapshot import BattleSnapshot
    from tactics.systems.rng import DeterministicRNG
    from tactics.utils.event_log import EventLog
    from tactics.utils.logging import setup_logging

    config = _config_from(args)
    setup_logging(config.log_level, trace_search=args.trace_search)

    session = BattleSession(config)
    log = EventLog()
    log.attach(session.bus)

    grid = session.generate_terrain()
    rng = DeterministicRNG(grid.seed)

    # Each side gets a column of the battlefield edge to deploy on
    blue = session.create_player("Blue", Faction.PLAYER)
    red = session.create_player("Red", Faction.ENEMY)
    rosters = {
        blue.id: ("squire", "ranger", "cleric"),
        red.id: ("knight", "scout", "apprentice"),
    }
    edges = {blue.id: 0, red.id: config.width - 1}
    for player_id, templates in rosters.items():
        for slot, template_id in enumerate(templates):
            x = edges[player_id] - config.width / 2
            z = slot * 2 - config.depth / 2 + 1
            top = grid.top_cell(x, z)
            if top is None:
                continue
            session.spawn_from_template(player_id, template_id, top.pos)

    session.end_turn()
    total_turns = args.rounds * len(rosters)
    for turn in range(total_turns):
        player_id = session.state.current_player_id
        for unit in session.entities.units_of(player_id):
            if unit.defeated:
                continue
            session.select_unit(unit.id)
            options = session.state.reachable[1:]
            if not options:
                continue
            pick = rng.next_int(Domain.SPAWN, unit.id, turn, 0, len(options) - 1)
            if session.find_path(options[pick]):
                session.execute_path()
        session.set_phase(Phase.ACTION)
        session.select_unit(None)
        session.end_turn()

    session.check_invariants()
    logger.info(
        "Demo finished after %d turns: %d events recorded", session.state.turn_number, len(log),
    )
    if args.json:
        print(BattleSnapshot.from_session(session, include_buried=False).model_dump_json(indent=2))


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if args.command == "terrain":
        _run_terrain(args)
    elif args.command == "demo":
        _run_demo(args)
    else:
        # Default: demo with default args
        args = parser.parse_args(["demo"])
        _run_demo(args)


if __name__ == "__main__":
    main()
