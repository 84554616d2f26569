"""Frequencies, reference probabilities and plots for simulated hands."""

import csv
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from poker.hand_evaluator import REPORTED_VALUES, HandValue

# Number of distinct 5-card hands in each category out of C(52, 5)
TOTAL_FIVE_CARD_HANDS = 2_598_960
HAND_COMBINATIONS: dict[HandValue, int] = {
    HandValue.HIGH_CARD: 1_302_540,
    HandValue.ONE_PAIR: 1_098_240,
    HandValue.TWO_PAIR: 123_552,
    HandValue.THREE_OF_A_KIND: 54_912,
    HandValue.STRAIGHT: 10_200,
    HandValue.FLUSH: 5_108,
    HandValue.FULL_HOUSE: 3_744,
    HandValue.FOUR_OF_A_KIND: 624,
    HandValue.STRAIGHT_FLUSH: 36,
    HandValue.ROYAL_FLUSH: 4,
    HandValue.FIVE_OF_A_KIND: 0,
}

EXPECTED_PROBABILITIES: dict[HandValue, float] = {
    value: combos / TOTAL_FIVE_CARD_HANDS for value, combos in HAND_COMBINATIONS.items()
}


@dataclass
class HandStatistics:
    """Histogram of hand categories from a single simulation run."""

    counts: Counter[HandValue] = field(default_factory=Counter)
    elapsed: float = 0.0  # Seconds
    output_dir: str = "plots"

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def hands_per_second(self) -> float:
        return self.total / self.elapsed if self.elapsed > 0 else 0.0

    def count(self, value: HandValue) -> int:
        return self.counts.get(value, 0)

    def frequency(self, value: HandValue) -> float:
        """Observed fraction of hands in ``value`` (0.0 when nothing was dealt)."""
        total = self.total
        return self.count(value) / total if total > 0 else 0.0

    def deviation(self, value: HandValue) -> float:
        """Observed minus expected frequency."""
        return self.frequency(value) - EXPECTED_PROBABILITIES.get(value, 0.0)

    def percentages(self) -> list[tuple[HandValue, int, float]]:
        """(category, count, percent) rows, most common first.

        Every reported category is listed, including those never seen.
        """
        rows = [(value, self.count(value), 100.0 * self.frequency(value)) for value in REPORTED_VALUES]
        # Stable sort keeps the weaker category first among equal counts
        rows.sort(key=lambda row: row[1], reverse=True)
        return rows

    def get_summary(self) -> dict:
        """Get summary statistics."""
        if self.total == 0:
            return {}

        return {
            "total_hands": self.total,
            "elapsed": self.elapsed,
            "hands_per_second": self.hands_per_second,
            "most_common": max(REPORTED_VALUES, key=self.count).name,
            "max_abs_deviation": max(abs(self.deviation(v)) for v in REPORTED_VALUES),
        }

    def to_csv(self, path: str | Path) -> Path:
        """Write one row per category: name, count, frequency, expected."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=["category", "count", "frequency", "expected"])
            writer.writeheader()
            for value in REPORTED_VALUES:
                writer.writerow(
                    {
                        "category": value.name,
                        "count": self.count(value),
                        "frequency": self.frequency(value),
                        "expected": EXPECTED_PROBABILITIES.get(value, 0.0),
                    }
                )
        return path

    def plot_distribution(
        self,
        save_path: str | None = None,
        show: bool = False,
    ) -> Path | None:
        """Plot observed vs expected frequency per category on a log scale."""
        if self.total == 0:
            print("No hands to plot")
            return None

        values = [v for v in REPORTED_VALUES if EXPECTED_PROBABILITIES[v] > 0]
        labels = [str(v) for v in values]
        observed = np.array([self.frequency(v) for v in values])
        expected = np.array([EXPECTED_PROBABILITIES[v] for v in values])
        x = np.arange(len(values))
        width = 0.4

        fig, ax = plt.subplots(figsize=(12, 6))

        ax.bar(x - width / 2, observed, width, label="Observed", color="steelblue")
        ax.bar(x + width / 2, expected, width, label="Expected", color="gray", alpha=0.6)

        ax.set_yscale("log")
        ax.set_xticks(x)
        ax.set_xticklabels(labels, rotation=30, ha="right")
        ax.set_ylabel("Frequency")
        ax.set_title(f"5-Card Hand Distribution ({self.total:,} hands)")
        ax.legend(loc="upper right")
        ax.grid(True, axis="y", alpha=0.3)

        plt.tight_layout()

        path = None
        if save_path:
            path = Path(save_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            plt.savefig(path, dpi=150, bbox_inches="tight")
        elif show:
            plt.show()
        else:
            Path(self.output_dir).mkdir(parents=True, exist_ok=True)
            path = Path(self.output_dir) / "hand_distribution.png"
            plt.savefig(path, dpi=150, bbox_inches="tight")

        plt.close(fig)
        return path
