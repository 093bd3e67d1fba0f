"""Trial driver: runs many showdowns and aggregates the results."""

import logging
import random
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from typing import Callable, List, Optional, Tuple

from showdown_sim.models.simulation import SimulationConfig, SimulationResult
from showdown_sim.simulation.engine import ShowdownSimulator

logger = logging.getLogger(__name__)

BatchResult = Tuple[List[int], Counter]


def run_batch(num_players: int, num_games: int, seed: int) -> BatchResult:
    """Play ``num_games`` showdowns with a private generator.

    Runs inside worker processes; nothing here touches shared state.

    Returns:
        Tuple of (wins per seat, category label -> count).
    """
    simulator = ShowdownSimulator(num_players, random.Random(seed))
    wins = [0] * num_players
    counts: Counter = Counter()
    for _ in range(num_games):
        winner = simulator.simulate_game(counts)
        wins[winner] += 1
    return wins, counts


def _run_batch_args(args: Tuple[int, int, int]) -> BatchResult:
    return run_batch(*args)


class TrialRunner:
    """Runs independent showdown trials, sequentially or on a process pool."""

    def __init__(self, config: SimulationConfig,
                 on_batch_complete: Optional[Callable[[int], None]] = None):
        config.validate()
        self.config = config
        self.on_batch_complete = on_batch_complete

    def batch_sizes(self) -> List[int]:
        """Split the run into batches of at most ``batch_size`` games."""
        full, rest = divmod(self.config.num_games, self.config.batch_size)
        sizes = [self.config.batch_size] * full
        if rest:
            sizes.append(rest)
        return sizes

    def batch_seeds(self, count: int) -> List[int]:
        """Independent seed per batch; reproducible when the config has a seed."""
        if self.config.seed is None:
            source = random.SystemRandom()
        else:
            source = random.Random(self.config.seed)
        return [source.getrandbits(64) for _ in range(count)]

    def run(self) -> SimulationResult:
        """Run every trial and return the merged totals."""
        config = self.config
        sizes = self.batch_sizes()
        seeds = self.batch_seeds(len(sizes))
        tasks = [(config.num_players, size, seed) for size, seed in zip(sizes, seeds)]

        logger.info("Simulating %d games for %d players (%d batches, %d workers)",
                    config.num_games, config.num_players, len(tasks), config.workers)

        result = SimulationResult(num_games=config.num_games, num_players=config.num_players)
        games_done = 0

        if config.workers > 1 and len(tasks) > 1:
            with ProcessPoolExecutor(max_workers=config.workers) as executor:
                for size, (wins, counts) in zip(sizes, executor.map(_run_batch_args, tasks)):
                    games_done = self._merge(result, wins, counts, size, games_done)
        else:
            for size, task in zip(sizes, tasks):
                wins, counts = run_batch(*task)
                games_done = self._merge(result, wins, counts, size, games_done)

        logger.info("Finished %d games, %d hands observed",
                    games_done, sum(result.hand_rank_counts.values()))
        return result

    def _merge(self, result: SimulationResult, wins: List[int], counts: Counter,
               size: int, games_done: int) -> int:
        result.merge(wins, counts)
        games_done += size
        logger.debug("Merged batch of %d games (%d/%d)",
                     size, games_done, self.config.num_games)
        if self.on_batch_complete is not None:
            self.on_batch_complete(games_done)
        return games_done


def run_simulation(num_games: int = 1_000_000, num_players: int = 6,
                   workers: int = 1, batch_size: int = 10_000,
                   seed: Optional[int] = None) -> SimulationResult:
    """Convenience wrapper around TrialRunner."""
    config = SimulationConfig(
        num_games=num_games,
        num_players=num_players,
        workers=workers,
        batch_size=batch_size,
        seed=seed,
    )
    return TrialRunner(config).run()
