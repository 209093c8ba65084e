"""
megasena_stats/models/types.py
Value types shared by the analyzers, the generator and the pipeline.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from numbers import Integral
from typing import Any, NamedTuple

NUMBER_RANGE: tuple[int, int] = (1, 60)
PICK_COUNT = 6


@dataclass(frozen=True)
class Draw:
    """One historical result: sequence id, date and 6 sorted distinct numbers."""

    draw_number: int
    draw_date: date | None
    numbers: tuple[int, ...]

    def to_record(self) -> dict[str, Any]:
        """Row shape used by the draw store."""
        return {
            "draw_number": self.draw_number,
            "draw_date": self.draw_date.isoformat() if self.draw_date else None,
            "numbers": list(self.numbers),
        }


def _parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def coerce_draw(
    raw: Any,
    number_range: tuple[int, int] = NUMBER_RANGE,
    pick_count: int = PICK_COUNT,
) -> Draw | None:
    """
    Turn a Draw or a store row into a validated Draw.
    Returns None for anything malformed (missing numbers, wrong count,
    duplicates, out of range, non-integers).
    """
    if isinstance(raw, Draw):
        draw_number, draw_date, numbers = raw.draw_number, raw.draw_date, raw.numbers
    elif isinstance(raw, Mapping):
        draw_number = raw.get("draw_number", 0)
        draw_date = raw.get("draw_date")
        numbers = raw.get("numbers")
    else:
        return None

    if numbers is None or isinstance(numbers, (str, bytes)) or not isinstance(numbers, Iterable):
        return None
    numbers = list(numbers)
    if any(isinstance(n, bool) or not isinstance(n, Integral) for n in numbers):
        return None
    numbers = [int(n) for n in numbers]

    lo, hi = number_range
    if len(numbers) != pick_count or len(set(numbers)) != pick_count:
        return None
    if not all(lo <= n <= hi for n in numbers):
        return None

    try:
        parsed_number = int(draw_number or 0)
    except (TypeError, ValueError):
        parsed_number = 0

    return Draw(
        draw_number=parsed_number,
        draw_date=_parse_date(draw_date),
        numbers=tuple(sorted(numbers)),
    )


def valid_draws(
    draws: Iterable[Any],
    number_range: tuple[int, int] = NUMBER_RANGE,
    pick_count: int = PICK_COUNT,
) -> list[Draw]:
    """Validated draws in input order; malformed entries are dropped."""
    result = []
    for raw in draws or ():
        draw = coerce_draw(raw, number_range, pick_count)
        if draw is not None:
            result.append(draw)
    return result


class SplitCount(NamedTuple):
    """Two-way split of a draw's numbers, e.g. 3 even / 3 odd."""

    first: int
    second: int

    def label(self, first_tag: str, second_tag: str) -> str:
        return f"{self.first}{first_tag}/{self.second}{second_tag}"


def format_splits(dist: Mapping[SplitCount, int], first_tag: str, second_tag: str) -> dict[str, int]:
    """Render a split distribution with string keys such as '3E/3O'."""
    return {key.label(first_tag, second_tag): count for key, count in dist.items()}


class NumberCount(NamedTuple):
    number: int
    count: int


@dataclass(frozen=True)
class HotCold:
    hot: list[NumberCount]
    cold: list[NumberCount]


@dataclass(frozen=True)
class GapStat:
    average_gap: float
    current_gap: int
    max_gap: int
    min_gap: int
    is_overdue: bool


@dataclass(frozen=True)
class DecadeDistribution:
    decades: dict[str, int]
    total: int


@dataclass(frozen=True)
class SumDistribution:
    min: int
    max: int
    avg: float
    sums: list[int]
    distribution: dict[str, int]


class GenerationMethod(str, Enum):
    MONTE_CARLO = "monte_carlo"
    BALANCED = "balanced"
    BALANCED_FALLBACK = "balanced_fallback"
    OVERDUE = "overdue"


@dataclass(frozen=True)
class Combination:
    numbers: tuple[int, ...]
    method: GenerationMethod
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_fallback(self) -> bool:
        return self.method is GenerationMethod.BALANCED_FALLBACK


@dataclass(frozen=True)
class StatisticsSummary:
    total_draws: int
    frequency: dict[int, int]
    hot_cold: HotCold
    even_odd: dict[SplitCount, int]
    low_high: dict[SplitCount, int]
    gaps: dict[int, GapStat]
    consecutive: dict[int, int]
    sums: SumDistribution
    decades: DecadeDistribution
