"""Exhaustive-coverage sampling and the run loop."""

from .prng import PRNG
from .pool import Pool, Pools
from .signatures import Combo, build_signatures
from .team_generator import MemberSet, StatSpread, Team, TeamGenerator
from .runner import (
    ExhaustiveRunner,
    FailureRecord,
    MatchRunner,
    RunnerOptions,
    create_pools,
    run_formats,
)

__all__ = [
    "PRNG",
    "Pool",
    "Pools",
    "Combo",
    "build_signatures",
    "MemberSet",
    "StatSpread",
    "Team",
    "TeamGenerator",
    "ExhaustiveRunner",
    "FailureRecord",
    "MatchRunner",
    "RunnerOptions",
    "create_pools",
    "run_formats",
]
