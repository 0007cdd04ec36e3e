"""Player that coordinates its choices with the run's move pool."""

from typing import Optional

from poke_env.player import Player
from poke_env.battle import AbstractBattle, DoubleBattle
from loguru import logger

from ...fuzz.pool import Pool
from ...fuzz.prng import PRNG


class CoordinatedPlayer(Player):
    """Random player that prefers moves not yet used this cycle.

    Every move it picks is marked used in the move pool, so moves that
    were already exercised in battle are not needed from the team
    generator again before the cycle completes.
    """

    def __init__(
        self,
        prng: PRNG,
        move_pool: Optional[Pool] = None,
        **kwargs
    ):
        """Initialize player.

        Args:
            prng: The run's random source
            move_pool: Move pool to coordinate with; plain random play without it
            **kwargs: Additional arguments passed to Player
        """
        super().__init__(**kwargs)
        self.prng = prng
        self.move_pool = move_pool

    def choose_move(self, battle: AbstractBattle):
        if isinstance(battle, DoubleBattle):
            return self.choose_random_doubles_move(battle)

        if battle.available_moves:
            options = battle.available_moves
            if self.move_pool is not None:
                options = [m for m in options if not self.move_pool.was_used(m.id)] or options
            move = self.prng.sample(options)
            if self.move_pool is not None:
                self.move_pool.mark_used(move.id)
            logger.debug(f"{self.username} uses {move.id} on turn {battle.turn}")
            return self.create_order(move)

        if battle.available_switches:
            return self.create_order(self.prng.sample(battle.available_switches))

        return self.choose_random_move(battle)
