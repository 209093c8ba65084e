"""
megasena_stats/pipeline/statistics_report.py
Turn a draw history into a JSON-ready statistics report.
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import date

from megasena_stats.models.statistics_aggregator import StatisticsAggregator
from megasena_stats.models.types import Draw, StatisticsSummary, format_splits, valid_draws
from megasena_stats.pipeline.data_manager import load_draws
from megasena_stats.utils.config import (
    get_analysis_config,
    get_low_high_split,
    get_number_range,
    get_pick_count,
    get_sum_bin_sizes,
)
from megasena_stats.utils.logger import get_logger

log = get_logger("pipeline.report")


def summary_to_dict(summary: StatisticsSummary) -> dict:
    """Presentation shape: string keys such as '3E/3O' and plain containers."""
    return {
        "total_draws": summary.total_draws,
        "frequency": dict(summary.frequency),
        "hot_cold": {
            "hot": [n._asdict() for n in summary.hot_cold.hot],
            "cold": [n._asdict() for n in summary.hot_cold.cold],
        },
        "even_odd": format_splits(summary.even_odd, "E", "O"),
        "low_high": format_splits(summary.low_high, "L", "H"),
        "gaps": {n: asdict(stat) for n, stat in summary.gaps.items()},
        "consecutive": dict(summary.consecutive),
        "sums": asdict(summary.sums),
        "decades": asdict(summary.decades),
    }


def _coverage(draws: list[Draw]) -> dict:
    dated = [d for d in draws if d.draw_date]
    by_date = sorted(dated, key=lambda d: (d.draw_date, d.draw_number))

    def _ref(draw: Draw | None) -> dict | None:
        if draw is None:
            return None
        return {"draw_number": draw.draw_number, "draw_date": draw.draw_date.isoformat()}

    seen = {n for d in draws for n in d.numbers}
    lo, hi = get_number_range()
    return {
        "first_draw": _ref(by_date[0] if by_date else None),
        "latest_draw": _ref(by_date[-1] if by_date else None),
        "numbers_seen": len(seen),
        "numbers_possible": hi - lo + 1,
    }


def build_report(draws: list[Draw] | None = None) -> dict:
    """
    Full report flow:
    1. Load draws from the store (unless given)
    2. Summarise with the configured bin size
    3. Add the finer sum histogram and pool coverage
    """
    if draws is None:
        draws = load_draws()
    draws = valid_draws(draws, get_number_range(), get_pick_count())

    bins = get_sum_bin_sizes()
    aggregator = StatisticsAggregator(
        number_range=get_number_range(),
        pick_count=get_pick_count(),
        low_high_split=get_low_high_split(),
    )
    summary = aggregator.summarize(
        draws,
        hot_cold_count=get_analysis_config().get("hot_cold_count", 10),
        sum_bin_size=bins.get("summary", 30),
    )
    histogram = aggregator.distribution.get_sums(draws, bin_size=bins.get("histogram", 15))

    report = summary_to_dict(summary)
    report["sum_histogram"] = histogram.distribution
    report["coverage"] = _coverage(draws)
    report["generated_on"] = date.today().isoformat()
    log.info(f"[REPORT] {summary.total_draws} draws summarised")
    return report
