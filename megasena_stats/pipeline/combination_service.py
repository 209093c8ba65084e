"""
megasena_stats/pipeline/combination_service.py
Generator configuration surface: pick a strategy, validate the options,
run the generator and shape results for display.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from megasena_stats.models.combination_generator import CombinationGenerator, make_rng
from megasena_stats.models.statistical.combination_metrics import describe_combination
from megasena_stats.models.statistical.frequency_analyzer import FrequencyAnalyzer
from megasena_stats.models.statistical.gap_analyzer import GapAnalyzer
from megasena_stats.models.types import Combination, Draw, GenerationMethod, SplitCount, valid_draws
from megasena_stats.pipeline.data_manager import load_draws
from megasena_stats.utils.config import (
    METHOD_LABELS,
    get_low_high_split,
    get_number_range,
    get_pick_count,
    get_section,
)
from megasena_stats.utils.logger import get_logger

log = get_logger("pipeline.combinations")

METHOD_ALIASES: dict[str, str] = {
    "balanced": "balanced",
    "montecarlo": "monte_carlo",
    "monte_carlo": "monte_carlo",
    "monte-carlo": "monte_carlo",
    "overdue": "overdue",
}


@dataclass
class GeneratorOptions:
    method: str = "balanced"
    count: int = 5
    even_odd: Any = (3, 3)
    low_high: Any = (3, 3)
    sum_range: Any = (150, 220)
    exclude_numbers: list[int] = field(default_factory=list)
    prefer_numbers: list[int] = field(default_factory=list)
    seed: int | None = None


def resolve_method(name: str | None) -> str:
    method = METHOD_ALIASES.get((name or "").strip().lower())
    if method is None:
        log.warning(f"Unknown generation method {name!r}, using balanced")
        return "balanced"
    return method


def _clamp_count(count: Any) -> int:
    max_count = get_section("generator").get("max_combinations", 10)
    try:
        count = int(count)
    except (TypeError, ValueError):
        return get_section("generator").get("default_count", 5)
    return max(1, min(count, max_count))


def _display_metadata(metadata: dict) -> dict:
    constraints = metadata.get("constraints")
    if not constraints:
        return dict(metadata)
    shown = dict(metadata)
    shown["constraints"] = {
        "even_odd": SplitCount(*constraints["even_odd"]).label("E", "O"),
        "low_high": SplitCount(*constraints["low_high"]).label("L", "H"),
        "sum": constraints["sum"],
    }
    return shown


def to_display(combo: Combination, index: int) -> dict:
    return {
        "id": index,
        "numbers": list(combo.numbers),
        "method": combo.method.value,
        "label": METHOD_LABELS.get(combo.method.value, combo.method.value),
        **describe_combination(combo.numbers, get_low_high_split()),
        "metadata": _display_metadata(combo.metadata),
    }


def generate_combinations(draws: list[Draw] | None = None, options: GeneratorOptions | None = None) -> list[dict]:
    """
    1. Load history (unless given)
    2. Build the statistics the chosen strategy needs
    3. Generate `count` combinations
    """
    options = options or GeneratorOptions()
    if draws is None:
        draws = load_draws()
    number_range = get_number_range()
    pick_count = get_pick_count()
    draws = valid_draws(draws, number_range, pick_count)

    method = resolve_method(options.method)
    count = _clamp_count(options.count)
    generator = CombinationGenerator(
        number_range=number_range,
        pick_count=pick_count,
        rng=make_rng(options.seed),
        low_high_split=get_low_high_split(),
    )
    log.info(f"[GENERATE] {method} × {count} over {len(draws)} draws (seed={options.seed})")

    combos: list[Combination]
    if method == "monte_carlo":
        mc = get_section("monte_carlo")
        frequency = FrequencyAnalyzer(number_range, pick_count).get_frequency(draws)
        combos = generator.monte_carlo(
            frequency,
            num_simulations=mc.get("num_simulations", 10_000),
            num_combinations=count,
        )
    elif method == "overdue":
        gap_stats = GapAnalyzer(number_range, pick_count).get_gap_stats(draws)
        combos = [generator.overdue(gap_stats, count=pick_count) for _ in range(count)]
    else:
        max_attempts = get_section("balanced").get("max_attempts", 10_000)
        combos = [
            generator.balanced(
                even_odd=options.even_odd,
                low_high=options.low_high,
                sum_range=options.sum_range,
                exclude_numbers=options.exclude_numbers,
                prefer_numbers=options.prefer_numbers,
                max_attempts=max_attempts,
            )
            for _ in range(count)
        ]

    fallbacks = sum(1 for c in combos if c.method is GenerationMethod.BALANCED_FALLBACK)
    if fallbacks:
        log.warning(f"{fallbacks}/{len(combos)} combinations used the unconstrained fallback")

    return [to_display(combo, i + 1) for i, combo in enumerate(combos)]
