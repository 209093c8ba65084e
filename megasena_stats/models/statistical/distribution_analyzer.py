"""
megasena_stats/models/statistical/distribution_analyzer.py
Per-draw shape distributions: even/odd, low/high, decades,
consecutive pairs and sums.
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import Any

import numpy as np

from megasena_stats.models.types import (
    NUMBER_RANGE,
    PICK_COUNT,
    DecadeDistribution,
    Draw,
    SplitCount,
    SumDistribution,
    valid_draws,
)

DEFAULT_SUM_BIN = 30


class DistributionAnalyzer:
    """Aggregate counts of categorical draw features."""

    def __init__(
        self,
        number_range: tuple[int, int] = NUMBER_RANGE,
        pick_count: int = PICK_COUNT,
        low_high_split: int = 30,
        default_bin_size: int = DEFAULT_SUM_BIN,
    ):
        self.lo, self.hi = number_range
        self.pick_count = pick_count
        self.low_high_split = low_high_split
        self.default_bin_size = default_bin_size

    def _valid(self, draws: Iterable[Any]) -> list[Draw]:
        return valid_draws(draws, (self.lo, self.hi), self.pick_count)

    # ── Two-way splits ────────────────────────────────────────────

    def get_even_odd(self, draws: Iterable[Any]) -> dict[SplitCount, int]:
        """{SplitCount(even, odd): draws}"""
        dist: Counter = Counter()
        for draw in self._valid(draws):
            even = sum(1 for n in draw.numbers if n % 2 == 0)
            dist[SplitCount(even, self.pick_count - even)] += 1
        return dict(dist)

    def get_low_high(self, draws: Iterable[Any]) -> dict[SplitCount, int]:
        """{SplitCount(low, high): draws}, low meaning <= low_high_split."""
        dist: Counter = Counter()
        for draw in self._valid(draws):
            low = sum(1 for n in draw.numbers if n <= self.low_high_split)
            dist[SplitCount(low, self.pick_count - low)] += 1
        return dict(dist)

    # ── Decades ───────────────────────────────────────────────────

    def decade_labels(self) -> list[str]:
        labels = []
        start = self.lo
        while start <= self.hi:
            end = min(start + 9, self.hi)
            labels.append(f"{start:02d}-{end:02d}")
            start += 10
        return labels

    def get_decades(self, draws: Iterable[Any]) -> DecadeDistribution:
        """Counts every drawn number into its 10-wide bucket."""
        labels = self.decade_labels()
        decades = {label: 0 for label in labels}
        total = 0
        for draw in self._valid(draws):
            for num in draw.numbers:
                decades[labels[(num - self.lo) // 10]] += 1
                total += 1
        return DecadeDistribution(decades=decades, total=total)

    # ── Consecutive pairs ─────────────────────────────────────────

    def get_consecutive(self, draws: Iterable[Any]) -> dict[int, int]:
        """{pairs_per_draw: draws}; keys 0..pick_count-1 always present."""
        patterns = {k: 0 for k in range(self.pick_count)}
        for draw in self._valid(draws):
            nums = draw.numbers
            pairs = sum(1 for a, b in zip(nums, nums[1:]) if b - a == 1)
            patterns[pairs] += 1
        return patterns

    # ── Sums ──────────────────────────────────────────────────────

    def get_sums(self, draws: Iterable[Any], bin_size: int | None = None) -> SumDistribution:
        """
        Sum of each draw plus a histogram keyed "start-end".
        Bins are aligned to multiples of bin_size.
        """
        if not bin_size or bin_size <= 0:
            bin_size = self.default_bin_size

        sums = [sum(draw.numbers) for draw in self._valid(draws)]
        if not sums:
            return SumDistribution(min=0, max=0, avg=0.0, sums=[], distribution={})

        bins: Counter = Counter((s // bin_size) * bin_size for s in sums)
        distribution = {
            f"{start}-{start + bin_size - 1}": bins[start] for start in sorted(bins)
        }
        return SumDistribution(
            min=min(sums),
            max=max(sums),
            avg=float(np.mean(sums)),
            sums=sums,
            distribution=distribution,
        )
