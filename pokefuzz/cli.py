"""Command-line entry point for exhaustive fuzz runs.

Usage:
    pokefuzz --format=gen7customgame --cycles=2 --seed=1234
    pokefuzz --max-failures=1 --log
    pokefuzz --forever run.data_dir=/path/to/showdown/data
    pokefuzz --print-config showdown.timeout_seconds=60
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from loguru import logger

from .core import FuzzConfig, configure_logging, load_config, print_config
from .data.dex import Dex
from .engine.showdown import ShowdownMatchRunner
from .errors import ConfigurationError
from .fuzz.prng import PRNG
from .fuzz.runner import FailureRecord, RunnerOptions, run_formats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run randomly generated teams until every legal entity has been used",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--format", type=str, help="Format id; all custom-game formats if omitted")
    parser.add_argument("--cycles", type=int, help="Full coverage cycles to complete")
    parser.add_argument("--seed", type=int, help="Seed to replay a run")
    parser.add_argument("--max-games", type=int, help="Stop after this many games")
    parser.add_argument("--max-failures", type=int, help="Stop after this many failures")
    parser.add_argument("--log", action="store_true", help="Report progress after every match")
    parser.add_argument("--dual", nargs="?", const="true", choices=["true", "debug"],
                        help="Replay each match with sides swapped")
    parser.add_argument("--data-dir", type=str, help="Directory with exported Showdown data")
    parser.add_argument("--forever", action="store_true", help="Repeat the format list")
    parser.add_argument("--config", type=str, default="default", help="Config name")
    parser.add_argument("--print-config", action="store_true", help="Print the resolved config and exit")
    parser.add_argument("overrides", nargs="*", help="Hydra overrides, e.g. showdown.timeout_seconds=60")
    return parser


def to_overrides(args: argparse.Namespace) -> List[str]:
    """Translate command-line flags into Hydra overrides."""
    overrides = list(args.overrides)
    flags = {
        "run.format": args.format,
        "run.cycles": args.cycles,
        "run.seed": args.seed,
        "run.max_games": args.max_games,
        "run.max_failures": args.max_failures,
        "run.data_dir": args.data_dir,
    }
    overrides.extend(f"{key}={value}" for key, value in flags.items() if value is not None)
    if args.log:
        overrides.append("run.log=true")
    if args.forever:
        overrides.append("run.forever=true")
    if args.dual:
        overrides.append("run.dual=true")
        if args.dual == "debug":
            overrides.append("run.dual_debug=true")
    return overrides


def run(cfg: FuzzConfig) -> int:
    """Run the configured formats and return the total failure count."""
    run_cfg = cfg.run
    dex = Dex.from_directory(run_cfg.data_dir)
    prng = PRNG(run_cfg.seed)
    options = RunnerOptions(
        format=run_cfg.format or "",
        cycles=run_cfg.cycles,
        prng=prng,
        log=run_cfg.log,
        max_games=run_cfg.max_games,
        max_failures=run_cfg.max_failures,
        dual="debug" if run_cfg.dual_debug else run_cfg.dual,
        combo_chance=cfg.generator.combo_chance,
        shiny_chance=(cfg.generator.shiny_numerator, cfg.generator.shiny_denominator),
    )
    match_runner = ShowdownMatchRunner(
        server_url=cfg.showdown.server_url,
        authentication_url=cfg.showdown.authentication_url,
        timeout_seconds=cfg.showdown.timeout_seconds,
    )

    formats = [run_cfg.format] if run_cfg.format else None
    records: List[FailureRecord] = []
    logger.info(f"Seed: {prng.seed}")
    failures = asyncio.run(run_formats(
        formats, options, dex, match_runner, forever=run_cfg.forever, records=records,
    ))
    for record in records:
        logger.error(f"[{record.format}] game {record.game}: {record.error}. Run `{record.command}`")
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config, overrides=to_overrides(args))
    if args.print_config:
        print_config(cfg)
        return 0
    configure_logging(cfg.logging)

    try:
        failures = run(cfg)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    if failures:
        logger.error(f"{failures} failed matches")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
