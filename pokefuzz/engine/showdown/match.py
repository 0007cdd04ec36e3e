"""Match execution against a Pokemon Showdown server."""

import asyncio
import uuid
from typing import List, Optional, Sequence

from poke_env import AccountConfiguration, LocalhostServerConfiguration, ServerConfiguration
from loguru import logger

from ...errors import MatchFailure
from ...fuzz.pool import Pools
from ...fuzz.prng import PRNG
from ...fuzz.team_generator import Team
from .player import CoordinatedPlayer


class ShowdownMatchRunner:
    """Plays generated teams against each other on a Showdown server.

    A battle that raises, times out or does not finish is a failed match.
    With ``dual`` set, the same teams are replayed with sides swapped as a
    cross-check; ``"debug"`` also logs both outcomes.
    """

    max_players = 2  # poke-env has no multi battle support

    def __init__(
        self,
        server_url: Optional[str] = None,
        authentication_url: str = "https://play.pokemonshowdown.com/action.php?",
        timeout_seconds: float = 120.0,
    ):
        """Initialize match runner.

        Args:
            server_url: Server websocket URL; poke-env's localhost
                configuration when None
            authentication_url: Login endpoint for the server
            timeout_seconds: Time limit for a single battle
        """
        if server_url is None:
            self.server_configuration = LocalhostServerConfiguration
        else:
            self.server_configuration = ServerConfiguration(server_url, authentication_url)
        self.timeout_seconds = timeout_seconds

    async def run(
        self,
        teams: Sequence[Team],
        format_id: str,
        prng: PRNG,
        dual=False,
        pools: Optional[Pools] = None,
    ) -> None:
        if len(teams) != 2:
            raise MatchFailure(f"Expected 2 teams, got {len(teams)}")

        first = await self._battle(teams[0], teams[1], format_id, prng, pools)
        if not dual:
            return

        second = await self._battle(teams[1], teams[0], format_id, prng, pools)
        if dual == "debug":
            logger.info(f"[{format_id}] dual results: p1 won={first}, swapped p1 won={second}")

    async def _battle(
        self,
        team_a: Team,
        team_b: Team,
        format_id: str,
        prng: PRNG,
        pools: Optional[Pools],
    ) -> Optional[bool]:
        """Play one battle and return whether the first player won (None on a tie)."""
        moves = pools.moves if pools is not None else None
        players: List[CoordinatedPlayer] = [
            CoordinatedPlayer(
                prng,
                moves,
                account_configuration=AccountConfiguration(f"Fuzz{uuid.uuid4().hex[:12]}", None),
                battle_format=format_id,
                server_configuration=self.server_configuration,
                team=team.to_showdown_paste(),
                max_concurrent_battles=1,
            )
            for team in (team_a, team_b)
        ]

        try:
            await asyncio.wait_for(
                players[0].battle_against(players[1], n_battles=1),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise MatchFailure(
                f"Battle timed out after {self.timeout_seconds}s",
                detail=team_a.to_showdown_paste() + "\n\n---\n\n" + team_b.to_showdown_paste(),
            ) from None
        finally:
            for player in players:
                await player.ps_client.stop_listening()

        battles = list(players[0].battles.values())
        if len(battles) != 1 or not battles[0].finished:
            raise MatchFailure(
                f"Battle did not finish ({players[0].n_finished_battles} finished)",
                detail=team_a.to_showdown_paste() + "\n\n---\n\n" + team_b.to_showdown_paste(),
            )
        return battles[0].won
