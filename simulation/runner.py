"""Parallel Monte Carlo sampling of 5-card hand categories."""

import logging
import os
from collections import Counter
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from typing import Iterable

import numpy as np
from tqdm import tqdm

from config.settings import SamplingConfig
from poker.cards import HANDS_PER_DECK, Deck
from poker.hand_evaluator import HandValue, classify

logger = logging.getLogger(__name__)

# (number of deck shuffles, seed stream) for one unit of work
Task = tuple[int, np.random.SeedSequence]


def simulate_chunk(task: Task) -> Counter[HandValue]:
    """Shuffle a fresh deck ``shuffles`` times and classify every hand dealt.

    Runs inside a worker process; owns its deck, generator and counter.
    """
    shuffles, seed = task
    deck = Deck.standard(seed)
    counts: Counter[HandValue] = Counter()

    for _ in range(shuffles):
        deck.reset()
        deck.shuffle()
        for hand in deck.hands():
            counts[classify(hand)] += 1

    return counts


def merge_counts(results: Iterable[Counter[HandValue]]) -> Counter[HandValue]:
    """Pointwise sum of per-worker histograms."""
    total: Counter[HandValue] = Counter()
    for counts in results:
        total.update(counts)
    return total


def split_shuffles(shuffles: int, chunk_size: int) -> list[int]:
    """Split ``shuffles`` into chunks of at most ``chunk_size``."""
    full, rest = divmod(shuffles, chunk_size)
    chunks = [chunk_size] * full
    if rest:
        chunks.append(rest)
    return chunks


class HandSimulator:
    """Estimate the distribution of hand categories by repeated dealing."""

    def __init__(
        self,
        config: SamplingConfig | None = None,
        show_progress: bool = False,
    ) -> None:
        self.config = config or SamplingConfig()
        self.show_progress = show_progress

        if self.config.workers is not None and self.config.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.config.workers}")
        if self.config.chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {self.config.chunk_size}")

    @staticmethod
    def hands_for(num_hands: int) -> int:
        """Number of hands actually dealt for a requested sample size."""
        if num_hands < 0:
            raise ValueError(f"num_hands must be non-negative, got {num_hands}")
        return (num_hands // HANDS_PER_DECK) * HANDS_PER_DECK

    def make_tasks(self, num_hands: int) -> list[Task]:
        """Partition the required shuffles into independently seeded tasks."""
        shuffles = self.hands_for(num_hands) // HANDS_PER_DECK
        chunks = split_shuffles(shuffles, self.config.chunk_size)
        seeds = np.random.SeedSequence(self.config.seed).spawn(len(chunks))
        return list(zip(chunks, seeds))

    def run(self, num_hands: int | None = None) -> Counter[HandValue]:
        """Deal and classify roughly ``num_hands`` hands.

        Args:
            num_hands: Requested sample size (defaults to config). Rounded
                down to a multiple of the hands dealt per deck.

        Returns:
            Counter mapping each HandValue to the number of hands seen
        """
        if num_hands is None:
            num_hands = self.config.num_hands

        tasks = self.make_tasks(num_hands)
        if not tasks:
            logger.info("Requested %d hands, fewer than one deck; nothing to do", num_hands)
            return Counter()

        workers = min(self.config.workers or os.cpu_count() or 1, len(tasks))
        shuffles = sum(size for size, _ in tasks)
        logger.info(
            "Simulating %d hands: %d shuffles in %d tasks on %d workers",
            shuffles * HANDS_PER_DECK,
            shuffles,
            len(tasks),
            workers,
        )

        progress = None
        if self.show_progress:
            progress = tqdm(total=shuffles, desc="Simulating", unit="decks")

        try:
            if workers == 1:
                results = self._run_serial(tasks, progress)
            else:
                results = self._run_parallel(tasks, workers, progress)
        finally:
            if progress is not None:
                progress.close()

        counts = merge_counts(results)
        logger.info("Finished %d hands", sum(counts.values()))
        return counts

    def _run_serial(self, tasks: list[Task], progress: tqdm | None) -> list[Counter[HandValue]]:
        results = []
        for i, task in enumerate(tasks):
            results.append(simulate_chunk(task))
            logger.debug("Task %d/%d done (%d shuffles)", i + 1, len(tasks), task[0])
            if progress is not None:
                progress.update(task[0])
        return results

    def _run_parallel(
        self,
        tasks: list[Task],
        workers: int,
        progress: tqdm | None,
    ) -> list[Counter[HandValue]]:
        results = []
        pool = ProcessPoolExecutor(max_workers=workers)
        try:
            futures: dict[Future, int] = {
                pool.submit(simulate_chunk, task): task[0] for task in tasks
            }
            for future in as_completed(futures):
                results.append(future.result())
                logger.debug("Task done (%d shuffles), %d/%d", futures[future], len(results), len(tasks))
                if progress is not None:
                    progress.update(futures[future])
        except BaseException:
            # Pending chunks are dropped; running ones finish in the background
            pool.shutdown(wait=False, cancel_futures=True)
            raise
        pool.shutdown(wait=True)
        return results


def simulate_hands(
    num_hands: int,
    workers: int | None = None,
    seed: int | None = None,
    chunk_size: int = SamplingConfig.chunk_size,
    show_progress: bool = False,
) -> Counter[HandValue]:
    """Classify roughly ``num_hands`` randomly dealt hands.

    The number actually dealt is ``num_hands`` rounded down to a multiple of
    10 (ten 5-card hands per 52-card deck); read it back as
    ``sum(result.values())``.
    """
    config = SamplingConfig(
        num_hands=num_hands,
        workers=workers,
        chunk_size=chunk_size,
        seed=seed,
    )
    return HandSimulator(config, show_progress=show_progress).run()
