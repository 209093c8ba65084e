"""
megasena_stats/models/statistics_aggregator.py
One-call summary over a draw history.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from megasena_stats.models.statistical.distribution_analyzer import DistributionAnalyzer
from megasena_stats.models.statistical.frequency_analyzer import FrequencyAnalyzer
from megasena_stats.models.statistical.gap_analyzer import GapAnalyzer
from megasena_stats.models.types import NUMBER_RANGE, PICK_COUNT, StatisticsSummary, valid_draws


class StatisticsAggregator:
    """Compose the frequency, distribution and gap analyzers."""

    def __init__(
        self,
        number_range: tuple[int, int] = NUMBER_RANGE,
        pick_count: int = PICK_COUNT,
        low_high_split: int = 30,
    ):
        self.number_range = number_range
        self.pick_count = pick_count
        self.frequency = FrequencyAnalyzer(number_range=number_range, pick_count=pick_count)
        self.distribution = DistributionAnalyzer(
            number_range=number_range,
            pick_count=pick_count,
            low_high_split=low_high_split,
        )
        self.gaps = GapAnalyzer(number_range=number_range, pick_count=pick_count)

    def summarize(self, draws: Iterable[Any], hot_cold_count: int = 10, sum_bin_size: int = 30) -> StatisticsSummary:
        draws = list(draws or ())
        frequency = self.frequency.get_frequency(draws)
        return StatisticsSummary(
            total_draws=len(valid_draws(draws, self.number_range, self.pick_count)),
            frequency=frequency,
            hot_cold=self.frequency.get_hot_cold(frequency, hot_cold_count),
            even_odd=self.distribution.get_even_odd(draws),
            low_high=self.distribution.get_low_high(draws),
            gaps=self.gaps.get_gap_stats(draws),
            consecutive=self.distribution.get_consecutive(draws),
            sums=self.distribution.get_sums(draws, bin_size=sum_bin_size),
            decades=self.distribution.get_decades(draws),
        )
