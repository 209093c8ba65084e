"""
megasena_stats/models/statistical/frequency_analyzer.py
Occurrence counts per number and hot/cold ranking.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from megasena_stats.models.types import NUMBER_RANGE, PICK_COUNT, HotCold, NumberCount, valid_draws
from megasena_stats.utils.logger import get_logger

log = get_logger("model.frequency")


class FrequencyAnalyzer:
    """Count how often each number appears across all draws."""

    def __init__(self, number_range: tuple[int, int] = NUMBER_RANGE, pick_count: int = PICK_COUNT):
        self.lo, self.hi = number_range
        self.pick_count = pick_count

    def get_frequency(self, draws: Iterable[Any]) -> dict[int, int]:
        """
        Returns {number: count} with every number in range present.
        Malformed draws are skipped.
        """
        counts: dict[int, int] = {n: 0 for n in range(self.lo, self.hi + 1)}
        draws = list(draws or ())
        valid = valid_draws(draws, (self.lo, self.hi), self.pick_count)
        if len(valid) != len(draws):
            log.debug(f"Skipped {len(draws) - len(valid)} malformed draws")

        for draw in valid:
            for num in draw.numbers:
                counts[num] += 1
        return counts

    def get_hot_cold(self, frequency: dict[int, int], k: int = 10) -> HotCold:
        """
        hot: top-k by count, ties in ascending number order.
        cold: the last k of that ordering, reversed (least frequent first).
        """
        if k <= 0:
            return HotCold(hot=[], cold=[])
        ranked = sorted(
            (NumberCount(n, c) for n, c in sorted(frequency.items())),
            key=lambda item: item.count,
            reverse=True,
        )
        # equal counts stay in ascending number order
        return HotCold(hot=ranked[:k], cold=list(reversed(ranked[-k:])))
