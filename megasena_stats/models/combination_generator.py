"""
megasena_stats/models/combination_generator.py
Three strategies for suggesting 6-number combinations:
frequency-weighted Monte Carlo, balanced rejection sampling and
overdue-number selection.

Every random decision goes through the injected numpy Generator, so a
fixed seed reproduces the same output sequence.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np

from megasena_stats.models.statistical.gap_analyzer import GapAnalyzer
from megasena_stats.models.types import (
    NUMBER_RANGE,
    PICK_COUNT,
    Combination,
    GapStat,
    GenerationMethod,
    SplitCount,
)
from megasena_stats.utils.logger import get_logger

log = get_logger("model.generator")

MAX_ATTEMPTS = 10_000


def make_rng(seed: int | None = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def _pair(value: Any) -> tuple[int, int] | None:
    if isinstance(value, (str, bytes)):
        return None
    try:
        a, b = value
        return int(a), int(b)
    except (TypeError, ValueError):
        return None


def _round_half_up(value: float, places: int = 0) -> float:
    """Round halves away from zero for non-negative values (2.5 -> 3, 1.125 -> 1.13)."""
    scale = 10 ** places
    return float(np.floor(value * scale + 0.5) / scale)


class CombinationGenerator:
    """Build candidate combinations from frequency and gap statistics."""

    def __init__(
        self,
        number_range: tuple[int, int] = NUMBER_RANGE,
        pick_count: int = PICK_COUNT,
        rng: np.random.Generator | None = None,
        low_high_split: int = 30,
    ):
        self.lo, self.hi = number_range
        self.pick_count = pick_count
        self.low_high_split = low_high_split
        self.rng = rng if rng is not None else make_rng()
        self.domain = list(range(self.lo, self.hi + 1))
        self._gaps = GapAnalyzer(number_range=number_range, pick_count=pick_count)

    # ── Monte Carlo ───────────────────────────────────────────────

    def monte_carlo(
        self,
        frequency: Mapping[int, int],
        num_simulations: int = 10_000,
        num_combinations: int = 5,
    ) -> list[Combination]:
        """
        Sample combinations weighted by historical frequency until
        num_combinations unique ones are found or num_simulations runs out.
        """
        counts = {n: max(0, int(frequency.get(n, 0))) for n in self.domain}
        total = sum(counts.values())
        if total > 0:
            weights = {n: c / total for n, c in counts.items()}
        else:
            log.warning("Empty frequency table — Monte Carlo falls back to uniform weights.")
            weights = {n: 1.0 / len(self.domain) for n in self.domain}

        results: list[Combination] = []
        seen: set[tuple[int, ...]] = set()

        for _ in range(max(0, num_simulations)):
            if len(results) >= num_combinations:
                break
            key = tuple(sorted(self._weighted_selection(weights)))
            if key in seen:
                continue
            seen.add(key)
            results.append(Combination(
                numbers=key,
                method=GenerationMethod.MONTE_CARLO,
                metadata={"confidence": self._confidence(key, counts, total)},
            ))

        if len(results) < num_combinations:
            log.info(f"Monte Carlo found {len(results)}/{num_combinations} unique combinations")
        return results

    def _weighted_selection(self, weights: Mapping[int, float]) -> list[int]:
        """Cumulative-weight draw without replacement, in ascending number order."""
        available = dict(weights)
        selected: list[int] = []

        while len(selected) < self.pick_count and available:
            remaining = sum(available.values())
            if remaining <= 0:
                choice = int(self.rng.choice(list(available)))
            else:
                r = self.rng.random() * remaining
                choice = None
                last_positive = None
                for num, weight in available.items():
                    if weight <= 0:
                        continue
                    last_positive = num
                    r -= weight
                    if r <= 0:
                        choice = num
                        break
                if choice is None:
                    # float rounding left a sliver past the last weight
                    choice = last_positive
            selected.append(choice)
            del available[choice]

        return selected

    def _confidence(self, combo: Iterable[int], counts: Mapping[int, int], total: int) -> int:
        """Average of count / mean count over the combo, as a 0-100 score."""
        if total <= 0:
            return 0
        avg_freq = total / len(self.domain)
        score = sum(counts[n] / avg_freq for n in combo)
        return min(100, int(_round_half_up(score / self.pick_count * 100)))

    # ── Balanced constraints ──────────────────────────────────────

    def balanced(
        self,
        even_odd: Any = (3, 3),
        low_high: Any = (3, 3),
        sum_range: Any = (150, 220),
        exclude_numbers: Iterable[int] = (),
        prefer_numbers: Iterable[int] = (),
        max_attempts: int = MAX_ATTEMPTS,
    ) -> Combination:
        """
        Rejection sampling: accept the first candidate with the requested
        even count, low count and a sum inside sum_range (inclusive).
        After max_attempts an unconstrained combination is returned with
        method BALANCED_FALLBACK.
        """
        exclude = set(exclude_numbers or ())
        prefer = list(prefer_numbers or ())
        available = [n for n in self.domain if n not in exclude]
        if len(available) < self.pick_count:
            log.warning(f"Exclusions leave {len(available)} numbers — ignoring exclusions.")
            available = list(self.domain)

        eo, lh, sr = _pair(even_odd), _pair(low_high), _pair(sum_range)
        feasible = (
            eo is not None and lh is not None and sr is not None
            and min(eo) >= 0 and sum(eo) == self.pick_count
            and min(lh) >= 0 and sum(lh) == self.pick_count
            and sr[0] <= sr[1]
        )

        attempts = 0
        if feasible:
            even_target, low_target = eo[0], lh[0]
            sum_lo, sum_hi = sr
            while attempts < max_attempts:
                attempts += 1
                combo = self._random_combination(available, prefer)
                if sum(1 for n in combo if n % 2 == 0) != even_target:
                    continue
                if sum(1 for n in combo if n <= self.low_high_split) != low_target:
                    continue
                total = sum(combo)
                if total < sum_lo or total > sum_hi:
                    continue
                return Combination(
                    numbers=tuple(sorted(combo)),
                    method=GenerationMethod.BALANCED,
                    metadata={
                        "constraints": {
                            "even_odd": SplitCount(*eo),
                            "low_high": SplitCount(*lh),
                            "sum": total,
                        },
                        "attempts": attempts,
                    },
                )
            log.warning(f"No combination met the constraints in {max_attempts} attempts — using random fallback.")
        else:
            log.warning(f"Infeasible constraints even_odd={even_odd} low_high={low_high} sum_range={sum_range}")

        combo = self._random_combination(available, prefer)
        return Combination(
            numbers=tuple(sorted(combo)),
            method=GenerationMethod.BALANCED_FALLBACK,
            metadata={"constraints": None, "attempts": attempts},
        )

    def _random_combination(self, available: list[int], prefer: list[int]) -> list[int]:
        """Preferred numbers first (while still available), then uniform fill."""
        pool = list(available)
        combo: list[int] = []
        for num in prefer:
            if len(combo) >= self.pick_count:
                break
            if num in pool:
                combo.append(num)
                pool.remove(num)
        while len(combo) < self.pick_count:
            idx = int(self.rng.integers(len(pool)))
            combo.append(pool.pop(idx))
        return combo

    # ── Overdue ───────────────────────────────────────────────────

    def overdue(self, gap_stats: Mapping[int, GapStat], count: int = PICK_COUNT) -> Combination:
        """
        Most overdue numbers by current_gap / average_gap, padded with
        random numbers (ratio 0) when fewer than `count` are overdue.
        """
        count = max(0, min(int(count), len(self.domain)))
        in_range = {n: s for n, s in gap_stats.items() if self.lo <= n <= self.hi}
        selected = self._gaps.get_overdue_numbers(in_range, top_n=count)

        chosen = {n for n, _ in selected}
        while len(selected) < count:
            num = int(self.rng.integers(self.lo, self.hi + 1))
            if num not in chosen:
                chosen.add(num)
                selected.append((num, 0.0))

        return Combination(
            numbers=tuple(sorted(chosen)),
            method=GenerationMethod.OVERDUE,
            metadata={
                "details": [
                    {"number": n, "overdue_ratio": _round_half_up(ratio, 2)} for n, ratio in selected
                ],
            },
        )
