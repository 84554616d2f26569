"""Monte Carlo estimation of 5-card hand probabilities."""

from simulation.runner import HandSimulator, simulate_hands
from simulation.statistics import EXPECTED_PROBABILITIES, HandStatistics

__all__ = ["EXPECTED_PROBABILITIES", "HandSimulator", "HandStatistics", "simulate_hands"]
