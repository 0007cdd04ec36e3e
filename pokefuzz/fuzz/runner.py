"""Exhaustive runner: keeps playing randomly generated teams until full coverage.

Every species, item, ability and move legal in the format is drawn at
least ``cycles`` times (or the game/failure budget runs out). Matches are
run strictly one after another: the team generator and the players share
the run's pools, and interleaving matches would break the one-use-per-cycle
guarantee.

Example:
    dex = Dex.from_directory("data/showdown")
    runner = ExhaustiveRunner(
        RunnerOptions(format="gen7customgame", seed=42),
        dex,
        ShowdownMatchRunner(),
    )
    failures = runner.run_sync()
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Union, runtime_checkable

from loguru import logger

from ..data.dex import Dex, Entry
from ..data.formats import FORMATS, FormatInfo, RulesetCapabilities
from ..errors import ConfigurationError, MatchFailure
from .pool import Pool, Pools
from .prng import PRNG
from .signatures import Signatures, build_signatures
from .team_generator import TEAM_SIZE, Team, TeamGenerator


DualMode = Union[bool, str]


@runtime_checkable
class MatchRunner(Protocol):
    """Executes one battle between generated teams.

    Raising any exception signals a failed match. ``pools`` is handed over
    so players can steer their choices towards entities not yet used in the
    current cycle.
    """

    max_players: int

    async def run(
        self,
        teams: Sequence[Team],
        format_id: str,
        prng: PRNG,
        dual: DualMode = False,
        pools: Optional[Pools] = None,
    ) -> None:
        ...


class ProgressReporter(Protocol):
    """Observer called after every completed match. Must not touch the pools."""

    def __call__(self, format_id: str, games: int, pools: Pools) -> None:
        ...


def log_progress(format_id: str, games: int, pools: Pools) -> None:
    """Default progress reporter: one INFO line per completed match."""
    logger.info(f"[{format_id}] {pools} = {games}")


@dataclass
class RunnerOptions:
    """Options for a single exhaustive run.

    ``cycles`` and ``max_failures`` fall back to their defaults when falsy;
    ``max_games`` unset means no game ceiling.
    """
    format: str
    cycles: int = 1
    seed: Optional[int] = None
    prng: Optional[PRNG] = None
    log: bool = False
    max_games: Optional[int] = None
    max_failures: Optional[int] = 10
    dual: DualMode = False
    combo_chance: Optional[float] = None
    shiny_chance: Optional[tuple] = None


@dataclass
class FailureRecord:
    """Everything needed to reproduce a failed match."""
    game: int
    format: str
    seed: int
    cycles: int
    exhausted: int
    error: str
    detail: str = ""
    teams: List[Dict[str, Any]] = field(default_factory=list)
    pastes: List[str] = field(default_factory=list)

    @property
    def command(self) -> str:
        return f"pokefuzz --cycles={self.cycles} --format={self.format} --seed={self.seed}"

    def describe(self) -> str:
        """Reproduction command followed by every team in Showdown paste format."""
        lines = [f"Run `{self.command}` (game {self.game})"]
        for i, paste in enumerate(self.pastes, 1):
            lines.append(f"--- Team {i} ---\n{paste}")
        if self.detail:
            lines.append(f"--- Detail ---\n{self.detail}")
        return "\n".join(lines)


def _valid_species(_: str, species: Entry) -> bool:
    return species.name != "Pichu-Spiky-eared" and not species.name.startswith("Pikachu-")


def _valid_move(key: str, _: Entry) -> bool:
    return key != "struggle" and (key == "hiddenpower" or not key.startswith("hiddenpower"))


def create_pools(dex: Dex, prng: PRNG) -> Pools:
    """Build the four pools of entities legal under ``dex.gen``.

    Cosmetic Pikachu/Pichu formes, Struggle and the typed Hidden Power
    variants are left out.
    """
    return Pools(
        species=Pool(dex.only_valid("species", _valid_species), prng),
        items=Pool(dex.only_valid("items"), prng),
        abilities=Pool(dex.only_valid("abilities"), prng),
        moves=Pool(dex.only_valid("moves", _valid_move), prng),
    )


class ExhaustiveRunner:
    """Drives generated teams through a match runner until coverage is reached."""

    DEFAULT_CYCLES = 1
    MAX_FAILURES = 10

    def __init__(
        self,
        options: RunnerOptions,
        dex: Dex,
        match_runner: MatchRunner,
        reporter: Optional[ProgressReporter] = None,
    ):
        """Initialize runner.

        Args:
            options: Run options
            dex: Rules database; narrowed to the format's generation
            match_runner: Collaborator executing battles
            reporter: Progress observer, used when ``options.log`` is set
                (defaults to ``log_progress``)
        """
        self.format = options.format
        self.format_info = FormatInfo.from_id(options.format)
        self.cycles = options.cycles or self.DEFAULT_CYCLES
        self.prng = options.prng or PRNG(options.seed)
        self.log = bool(options.log)
        self.max_games = options.max_games
        self.max_failures = options.max_failures or self.MAX_FAILURES
        self.dual = options.dual or False
        self.combo_chance = options.combo_chance
        self.shiny_chance = options.shiny_chance

        self.dex = dex.for_gen(self.format_info.gen)
        self.capabilities = RulesetCapabilities.from_gen(self.format_info.gen)
        self.match_runner = match_runner
        self.reporter = reporter or log_progress

        self.games = 0
        self.failures = 0
        self.failure_records: List[FailureRecord] = []
        self.pools: Optional[Pools] = None
        self.generator: Optional[TeamGenerator] = None

    async def run(self) -> int:
        """Run until a ceiling or the cycle target is reached.

        Returns:
            Number of failed matches

        Raises:
            ConfigurationError: If the format cannot be run at all
        """
        # Captured before any draw so the whole run replays from it
        seed = self.prng.seed
        self.pools = create_pools(self.dex, self.prng)
        self._validate(self.pools)
        signatures = build_signatures(self.pools.items.possible, self.dex)
        self.generator = TeamGenerator(
            self.dex,
            self.prng,
            self.pools,
            signatures,
            capabilities=self.capabilities,
            combo_chance=self.combo_chance,
            shiny_chance=self.shiny_chance,
        )

        logger.info(
            f"Starting exhaustive run: format={self.format} seed={seed} cycles={self.cycles} "
            f"pools=({len(self.pools.species)} species, {len(self.pools.items)} items, "
            f"{len(self.pools.abilities)} abilities, {len(self.pools.moves)} moves) "
            f"signatures={len(signatures)}"
        )

        while True:
            self.games += 1
            teams = [self.generator.generate() for _ in range(self.format_info.players)]
            # Battles draw from their own stream; team generation stays replayable
            battle_prng = self.prng.child()
            try:
                await self.match_runner.run(
                    teams, self.format, battle_prng, dual=self.dual, pools=self.pools
                )
            except Exception as e:
                self.failures += 1
                record = FailureRecord(
                    game=self.games,
                    format=self.format,
                    seed=seed,
                    cycles=self.cycles,
                    exhausted=self.generator.exhausted,
                    error=repr(e),
                    detail=e.detail if isinstance(e, MatchFailure) else "",
                    teams=[team.to_dict() for team in teams],
                    pastes=[team.to_showdown_paste() for team in teams],
                )
                self.failure_records.append(record)
                logger.opt(exception=e).error(
                    f"Match {self.games} failed ({self.failures} failures, "
                    f"{record.exhausted} cycles complete). {record.describe()}"
                )
            else:
                if self.log:
                    self._report()

            if not self._should_continue():
                break

        logger.info(
            f"Finished {self.format}: {self.games} games, {self.failures} failures, "
            f"{self.generator.exhausted} cycles complete"
        )
        return self.failures

    def run_sync(self) -> int:
        """Synchronous wrapper for ``run``."""
        return asyncio.run(self.run())

    @property
    def exhausted(self) -> int:
        return self.generator.exhausted if self.generator else 0

    def _report(self) -> None:
        try:
            self.reporter(self.format, self.games, self.pools)
        except Exception as e:
            logger.opt(exception=e).warning(f"Progress reporter failed after game {self.games}")

    def _should_continue(self) -> bool:
        return (
            (not self.max_games or self.games < self.max_games)
            and (not self.max_failures or self.failures < self.max_failures)
            and self.generator.exhausted < self.cycles
        )

    def _validate(self, pools: Pools) -> None:
        gen = self.format_info.gen
        if len(pools.species) < TEAM_SIZE:
            raise ConfigurationError(
                f"{self.format}: need at least {TEAM_SIZE} legal species, found {len(pools.species)}"
            )
        if not pools.moves.possible:
            raise ConfigurationError(f"{self.format}: no legal moves for gen {gen}")
        if self.capabilities.has_items and not pools.items.possible:
            raise ConfigurationError(f"{self.format}: no legal items for gen {gen}")
        if self.capabilities.has_abilities and not pools.abilities.possible:
            raise ConfigurationError(f"{self.format}: no legal abilities for gen {gen}")
        if not self.dex.natures:
            raise ConfigurationError(f"{self.format}: dex has no natures")
        max_players = getattr(self.match_runner, "max_players", 2)
        if self.format_info.players > max_players:
            raise ConfigurationError(
                f"{self.format}: needs {self.format_info.players} players, "
                f"match runner supports {max_players}"
            )


async def run_formats(
    formats: Optional[Iterable[str]],
    options: RunnerOptions,
    dex: Dex,
    match_runner: MatchRunner,
    forever: bool = False,
    reporter: Optional[ProgressReporter] = None,
    records: Optional[List[FailureRecord]] = None,
) -> int:
    """Run one exhaustive pass per format.

    A single pass over a single format uses the given stream directly.
    Otherwise every pass gets a child stream with its own seed, so the
    reproduction command of any failure replays just that format. Stops as
    soon as the failures summed over formats reach the failure ceiling.
    ``forever`` repeats the format list until then.

    Args:
        records: If given, every pass's failure records are appended to it

    Returns:
        Total number of failed matches
    """
    formats = list(formats or FORMATS)
    prng = options.prng or PRNG(options.seed)
    max_failures = options.max_failures or ExhaustiveRunner.MAX_FAILURES
    single = len(formats) == 1 and not forever

    failures = 0
    while True:
        for format_id in formats:
            run_options = RunnerOptions(
                format=format_id,
                cycles=options.cycles,
                prng=prng if single else prng.child(),
                log=options.log,
                max_games=options.max_games,
                max_failures=max_failures - failures,
                dual=options.dual,
                combo_chance=options.combo_chance,
                shiny_chance=options.shiny_chance,
            )
            runner = ExhaustiveRunner(run_options, dex, match_runner, reporter=reporter)
            failures += await runner.run()
            if records is not None:
                records.extend(runner.failure_records)
            if failures >= max_failures:
                return failures
        if not forever:
            return failures
