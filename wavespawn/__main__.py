"""Entry point: ``python -m wavespawn``.

Modes:
  - ``python -m wavespawn run WAVES.json``   → Headless wave simulation
  - ``python -m wavespawn check WAVES.json`` → Validate a wave config and exit
"""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wave spawn orchestration (headless)")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run a wave config headlessly")
    run.add_argument("waves", type=str, help="Path to a JSON wave config")
    run.add_argument("--seed", type=int, default=42)
    run.add_argument("--ticks", type=int, default=3600)
    run.add_argument("--dt", type=float, default=1.0 / 60.0, help="Simulated seconds per tick")
    run.add_argument("--loop", action=argparse.BooleanOptionalAction, default=None,
                     help="Override the config's loop flag")
    run.add_argument("--replay", type=str, default="replay.json")
    run.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    run.add_argument("--log-file", type=str, default=None)

    check = sub.add_parser("check", help="Validate a wave config")
    check.add_argument("waves", type=str)
    check.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run(args: argparse.Namespace) -> int:
    from dataclasses import replace

    from wavespawn.config import SimulationConfig
    from wavespawn.core.errors import ConfigurationError
    from wavespawn.core.world_state import WorldState
    from wavespawn.engine.world_loop import WorldLoop
    from wavespawn.io.loader import load_plan
    from wavespawn.systems.rng import DeterministicRNG
    from wavespawn.systems.services import FixedTarget, InMemoryEntityService, RecordingFiringService
    from wavespawn.utils.logging import setup_logging
    from wavespawn.utils.replay import ReplayRecorder

    config = SimulationConfig(
        seed=args.seed,
        tick_dt=args.dt,
        max_ticks=args.ticks,
        log_level=args.log_level,
        replay_file=args.replay,
    )
    setup_logging(config.log_level, args.log_file)

    entities = InMemoryEntityService()
    loop = WorldLoop(
        config=config,
        world=WorldState(seed=config.seed),
        entities=entities,
        firing=RecordingFiringService(),
        targets=FixedTarget(),
        rng=DeterministicRNG(config.seed),
        recorder=ReplayRecorder(config.replay_file, config.seed),
    )

    try:
        plan = load_plan(args.waves)
        if args.loop is not None:
            plan = replace(plan, loop=args.loop)
        loop.start_plan(plan)
    except ConfigurationError as e:
        logger.error("Cannot start waves: %s", e)
        return 2

    loop.run()
    logger.info(
        "Done. %d spawned, %d retired, %d killed, %d still alive. Replay written to %s",
        loop.total_spawned, loop.total_retired, loop.total_killed,
        loop.world.alive_count, config.replay_file,
    )
    return 0


def _check(args: argparse.Namespace) -> int:
    from wavespawn.core.errors import ConfigurationError
    from wavespawn.io.loader import load_plan
    from wavespawn.utils.logging import setup_logging

    setup_logging(args.log_level)
    try:
        plan = load_plan(args.waves)
    except ConfigurationError as e:
        logger.error("Invalid wave config: %s", e)
        return 2
    for idx, wave in enumerate(plan.waves):
        logger.info("Wave %d %r: %d enemies on %r at speed %.2f",
                    idx, wave.label, wave.enemy_count, wave.path_id, wave.move_speed)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command == "run":
        return _run(args)
    return _check(args)


if __name__ == "__main__":
    sys.exit(main())
