"""Tests for the sampling engine (simulation/runner.py)."""

from collections import Counter

import numpy as np
import pytest

from config.settings import SamplingConfig
from poker.hand_evaluator import HandValue
from simulation.runner import (
    HandSimulator,
    merge_counts,
    simulate_chunk,
    simulate_hands,
    split_shuffles,
)
from simulation.statistics import EXPECTED_PROBABILITIES


class TestSampleSize:
    """Test rounding of the requested sample size."""

    @pytest.mark.parametrize(
        "requested,actual",
        [(0, 0), (9, 0), (10, 10), (19, 10), (1_005, 1_000), (12_345, 12_340)],
    )
    def test_hands_for(self, requested, actual):
        assert HandSimulator.hands_for(requested) == actual

    @pytest.mark.parametrize("requested", [0, 1, 9])
    def test_degenerate_request_is_empty(self, requested):
        """Fewer than one deck's worth of hands deals nothing."""
        counts = simulate_hands(requested, workers=1, seed=0)
        assert counts == Counter()
        assert sum(counts.values()) == 0

    @pytest.mark.parametrize("requested", [10, 55, 1_000, 2_499])
    def test_total_is_multiple_of_ten(self, requested):
        counts = simulate_hands(requested, workers=1, seed=0)
        total = sum(counts.values())
        assert total == (requested // 10) * 10
        assert total > 0
        assert total % 10 == 0

    def test_negative_request_rejected(self):
        with pytest.raises(ValueError):
            simulate_hands(-10, workers=1)


class TestConfigValidation:
    """Test simulator argument checks."""

    def test_zero_workers_rejected(self):
        with pytest.raises(ValueError):
            HandSimulator(SamplingConfig(workers=0))

    def test_zero_chunk_size_rejected(self):
        with pytest.raises(ValueError):
            HandSimulator(SamplingConfig(chunk_size=0))


class TestPartitioning:
    """Test splitting shuffles into seeded tasks."""

    @pytest.mark.parametrize(
        "shuffles,chunk,expected",
        [
            (0, 10, []),
            (10, 10, [10]),
            (25, 10, [10, 10, 5]),
            (3, 10, [3]),
        ],
    )
    def test_split_shuffles(self, shuffles, chunk, expected):
        assert split_shuffles(shuffles, chunk) == expected

    def test_tasks_cover_all_shuffles(self, sampling_config, chunk_size):
        sampling_config.chunk_size = chunk_size
        simulator = HandSimulator(sampling_config)
        tasks = simulator.make_tasks(1_000)

        assert sum(size for size, _ in tasks) == 100
        assert all(0 < size <= chunk_size for size, _ in tasks)

    def test_tasks_have_independent_seeds(self, sampling_config):
        simulator = HandSimulator(sampling_config)
        tasks = simulator.make_tasks(1_000)
        states = {tuple(seed.generate_state(4)) for _, seed in tasks}
        assert len(states) == len(tasks)


class TestChunk:
    """Test a single worker task."""

    def test_chunk_counts_ten_hands_per_shuffle(self):
        counts = simulate_chunk((37, np.random.SeedSequence(5)))
        assert sum(counts.values()) == 370
        assert HandValue.ROYAL_STRAIGHT not in counts

    def test_chunk_is_reproducible(self):
        a = simulate_chunk((20, np.random.SeedSequence(11)))
        b = simulate_chunk((20, np.random.SeedSequence(11)))
        assert a == b

    def test_merge_counts_is_pointwise_sum(self):
        a = Counter({HandValue.ONE_PAIR: 3, HandValue.HIGH_CARD: 2})
        b = Counter({HandValue.ONE_PAIR: 1, HandValue.FLUSH: 4})

        merged = merge_counts([a, b])

        assert merged == Counter({HandValue.ONE_PAIR: 4, HandValue.HIGH_CARD: 2, HandValue.FLUSH: 4})
        assert merged == merge_counts([b, a])
        assert merge_counts([]) == Counter()


class TestReproducibility:
    """Test seeding behaviour."""

    def test_same_seed_same_histogram(self, sampling_config):
        a = HandSimulator(sampling_config).run()
        b = HandSimulator(sampling_config).run()
        assert a == b

    def test_different_seed_different_histogram(self):
        a = simulate_hands(5_000, workers=1, seed=1)
        b = simulate_hands(5_000, workers=1, seed=2)
        assert a != b
        assert sum(a.values()) == sum(b.values())

    def test_parallel_matches_serial(self):
        """Seeds are per task, so the worker count doesn't change results."""
        serial = simulate_hands(4_000, workers=1, seed=3, chunk_size=40)
        parallel = simulate_hands(4_000, workers=2, seed=3, chunk_size=40)

        assert parallel == serial
        assert sum(parallel.values()) == 4_000

    def test_progress_bar_does_not_change_counts(self, sampling_config):
        quiet = HandSimulator(sampling_config).run()
        noisy = HandSimulator(sampling_config, show_progress=True).run()
        assert quiet == noisy


class TestConvergence:
    """Statistical regression checks against the known distribution."""

    NUM_HANDS = 200_000

    TOLERANCES: dict[HandValue, float] = {
        HandValue.HIGH_CARD: 0.006,
        HandValue.ONE_PAIR: 0.006,
        HandValue.TWO_PAIR: 0.003,
        HandValue.THREE_OF_A_KIND: 0.002,
        HandValue.STRAIGHT: 0.001,
        HandValue.FLUSH: 0.001,
        HandValue.FULL_HOUSE: 0.0007,
        HandValue.FOUR_OF_A_KIND: 0.0002,
        HandValue.STRAIGHT_FLUSH: 0.00005,
        HandValue.FIVE_OF_A_KIND: 0.0,
    }

    @pytest.fixture(scope="class")
    def distribution(self):
        """Run the simulation once and share the results."""
        return simulate_hands(self.NUM_HANDS, workers=1, seed=2024)

    def test_total(self, distribution):
        assert sum(distribution.values()) == self.NUM_HANDS

    @pytest.mark.parametrize("value", list(TOLERANCES), ids=lambda v: v.name)
    def test_category_probability(self, distribution, value):
        observed = distribution[value] / self.NUM_HANDS
        expected = EXPECTED_PROBABILITIES[value]
        diff = abs(observed - expected)
        assert diff <= self.TOLERANCES[value], (
            f"{value.name}: observed {observed:.6f} vs expected {expected:.6f}"
        )

    def test_one_pair_near_0_4226(self, distribution):
        assert distribution[HandValue.ONE_PAIR] / self.NUM_HANDS == pytest.approx(0.4226, abs=0.006)


@pytest.mark.slow
class TestLargeSampleConvergence:
    """Rare categories only settle with millions of hands (run with ``-m slow``)."""

    NUM_HANDS = 10_000_000

    @pytest.fixture(scope="class")
    def distribution(self):
        return simulate_hands(self.NUM_HANDS, seed=7, chunk_size=50_000)

    def test_total(self, distribution):
        assert sum(distribution.values()) == self.NUM_HANDS

    def test_royal_flush_rate(self, distribution):
        # ~15.4 expected hits, std ~3.9
        observed = distribution[HandValue.ROYAL_FLUSH] / self.NUM_HANDS
        assert observed == pytest.approx(1.54e-6, abs=1.2e-6)

    def test_straight_flush_rate(self, distribution):
        observed = distribution[HandValue.STRAIGHT_FLUSH] / self.NUM_HANDS
        assert observed == pytest.approx(EXPECTED_PROBABILITIES[HandValue.STRAIGHT_FLUSH], abs=4e-6)

    def test_one_pair_rate(self, distribution):
        observed = distribution[HandValue.ONE_PAIR] / self.NUM_HANDS
        assert observed == pytest.approx(0.4226, abs=0.001)
