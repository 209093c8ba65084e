"""
megasena_stats/models/statistical/gap_analyzer.py
Inter-occurrence gap statistics per number.
A number whose current gap exceeds its average gap is "overdue".
"""
from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any

import numpy as np

from megasena_stats.models.types import NUMBER_RANGE, PICK_COUNT, Draw, GapStat, valid_draws


def chronological_order(draws: list[Draw]) -> list[Draw]:
    """Oldest first; draws sharing a date are ordered by draw number."""
    return sorted(draws, key=lambda d: (d.draw_date or date.min, d.draw_number))


class GapAnalyzer:
    """Gap = draws between two successive appearances of the same number."""

    def __init__(self, number_range: tuple[int, int] = NUMBER_RANGE, pick_count: int = PICK_COUNT):
        self.lo, self.hi = number_range
        self.pick_count = pick_count

    def get_gap_stats(self, draws: Iterable[Any], chronological: bool = True) -> dict[int, GapStat]:
        """
        Returns {number: GapStat} for every number in range.

        chronological=True sorts by date first; pass False when the input is
        already ordered oldest to newest.
        """
        valid = valid_draws(draws, (self.lo, self.hi), self.pick_count)
        ordered = chronological_order(valid) if chronological else valid
        total = len(ordered)

        gaps: dict[int, list[int]] = {n: [] for n in range(self.lo, self.hi + 1)}
        last_seen: dict[int, int] = {}

        for idx, draw in enumerate(ordered):
            for num in draw.numbers:
                if num in last_seen:
                    gaps[num].append(idx - last_seen[num])
                last_seen[num] = idx

        stats: dict[int, GapStat] = {}
        for num, num_gaps in gaps.items():
            avg_gap = float(np.mean(num_gaps)) if num_gaps else float(total)
            current_gap = total - 1 - last_seen[num] if num in last_seen else total
            stats[num] = GapStat(
                average_gap=avg_gap,
                current_gap=current_gap,
                max_gap=max(num_gaps) if num_gaps else total,
                min_gap=min(num_gaps) if num_gaps else 0,
                is_overdue=current_gap > avg_gap,
            )
        return stats

    @staticmethod
    def overdue_ratio(stat: GapStat) -> float:
        return stat.current_gap / stat.average_gap if stat.average_gap else 0.0

    def get_overdue_numbers(self, stats: dict[int, GapStat], top_n: int | None = None) -> list[tuple[int, float]]:
        """Overdue numbers with their current/average ratio, most overdue first."""
        overdue = [(n, self.overdue_ratio(s)) for n, s in sorted(stats.items()) if s.is_overdue]
        overdue.sort(key=lambda item: item[1], reverse=True)
        return overdue if top_n is None else overdue[:top_n]
