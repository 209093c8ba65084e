"""tests/test_models.py"""
import pytest
from megasena_stats.models.statistical.combination_metrics import calculate_entropy, calculate_variance
from megasena_stats.models.statistical.distribution_analyzer import DistributionAnalyzer
from megasena_stats.models.statistical.frequency_analyzer import FrequencyAnalyzer
from megasena_stats.models.statistical.gap_analyzer import GapAnalyzer
from megasena_stats.models.statistics_aggregator import StatisticsAggregator
from megasena_stats.models.types import Draw, SplitCount, coerce_draw


HISTORY = [
    {"draw_number": 1, "draw_date": "2025-01-04", "numbers": [4, 12, 23, 34, 45, 58]},
    {"draw_number": 2, "draw_date": "2025-01-08", "numbers": [7, 15, 28, 39, 42, 55]},
    {"draw_number": 3, "draw_date": "2025-01-11", "numbers": [3, 11, 22, 33, 44, 59]},
    {"draw_number": 4, "draw_date": "2025-01-15", "numbers": [4, 15, 22, 30, 41, 60]},
    {"draw_number": 5, "draw_date": "2025-01-18", "numbers": [1, 2, 3, 40, 50, 58]},
]

MALFORMED = [
    {"draw_number": 90, "draw_date": "2025-02-01"},
    {"draw_number": 91, "draw_date": "2025-02-02", "numbers": [1, 2, 3, 4, 5]},
    {"draw_number": 92, "draw_date": "2025-02-03", "numbers": [1, 1, 2, 3, 4, 5]},
    {"draw_number": 93, "draw_date": "2025-02-04", "numbers": [0, 2, 3, 4, 5, 61]},
    {"draw_number": 94, "draw_date": "2025-02-05", "numbers": "1,2,3,4,5,6"},
    None,
]


class TestCoerceDraw:
    def test_sorts_numbers_and_parses_date(self):
        draw = coerce_draw({"draw_number": "7", "draw_date": "2025-01-04", "numbers": [9, 1, 5, 3, 60, 20]})
        assert draw.numbers == (1, 3, 5, 9, 20, 60)
        assert draw.draw_number == 7
        assert draw.draw_date.isoformat() == "2025-01-04"

    def test_malformed_rows_return_none(self):
        assert all(coerce_draw(row) is None for row in MALFORMED)

    def test_accepts_draw_instances(self):
        draw = Draw(1, None, (1, 2, 3, 4, 5, 6))
        assert coerce_draw(draw) == draw


class TestFrequencyAnalyzer:
    def setup_method(self):
        self.fa = FrequencyAnalyzer()

    def test_returns_all_numbers(self):
        freq = self.fa.get_frequency(HISTORY)
        assert sorted(freq) == list(range(1, 61))

    def test_total_is_six_per_valid_draw(self):
        freq = self.fa.get_frequency(HISTORY + MALFORMED)
        assert sum(freq.values()) == 6 * len(HISTORY)

    def test_counts_repeated_numbers(self):
        freq = self.fa.get_frequency(HISTORY)
        assert freq[4] == 2
        assert freq[58] == 2
        assert freq[6] == 0

    def test_empty_history(self):
        freq = self.fa.get_frequency([])
        assert len(freq) == 60
        assert sum(freq.values()) == 0

    def test_hot_cold_order(self):
        table = {n: 0 for n in range(1, 61)}
        table.update({7: 5, 3: 5, 10: 4})
        result = self.fa.get_hot_cold(table, k=3)
        assert [(h.number, h.count) for h in result.hot] == [(3, 5), (7, 5), (10, 4)]
        assert [(c.number, c.count) for c in result.cold] == [(60, 0), (59, 0), (58, 0)]

    def test_hot_cold_default_size(self):
        result = self.fa.get_hot_cold(self.fa.get_frequency(HISTORY))
        assert len(result.hot) == 10
        assert len(result.cold) == 10

    def test_hot_cold_non_positive_k(self):
        result = self.fa.get_hot_cold(self.fa.get_frequency(HISTORY), k=0)
        assert result.hot == [] and result.cold == []

    def test_idempotent(self):
        assert self.fa.get_frequency(HISTORY) == self.fa.get_frequency(HISTORY)


class TestDistributionAnalyzer:
    DRAWS = [
        {"draw_number": 1, "draw_date": "2025-01-01", "numbers": [2, 4, 6, 31, 33, 35]},
        {"draw_number": 2, "draw_date": "2025-01-02", "numbers": [1, 2, 3, 40, 50, 60]},
    ]

    def setup_method(self):
        self.da = DistributionAnalyzer()

    def test_even_odd(self):
        dist = self.da.get_even_odd(self.DRAWS)
        assert dist == {SplitCount(3, 3): 1, SplitCount(4, 2): 1}

    def test_split_label(self):
        assert SplitCount(4, 2).label("E", "O") == "4E/2O"

    def test_low_high(self):
        assert self.da.get_low_high(self.DRAWS) == {SplitCount(3, 3): 2}

    def test_decades(self):
        result = self.da.get_decades(self.DRAWS)
        assert result.total == 12
        assert result.decades == {
            "01-10": 6, "11-20": 0, "21-30": 0, "31-40": 4, "41-50": 1, "51-60": 1,
        }

    def test_consecutive(self):
        assert self.da.get_consecutive(self.DRAWS) == {0: 1, 1: 0, 2: 1, 3: 0, 4: 0, 5: 0}

    def test_sums_default_bins(self):
        result = self.da.get_sums(self.DRAWS)
        assert result.sums == [111, 156]
        assert result.min == 111
        assert result.max == 156
        assert result.avg == pytest.approx(133.5)
        assert result.distribution == {"90-119": 1, "150-179": 1}

    def test_sums_histogram_bins(self):
        result = self.da.get_sums(self.DRAWS, bin_size=15)
        assert result.distribution == {"105-119": 1, "150-164": 1}

    def test_empty_history(self):
        assert self.da.get_even_odd([]) == {}
        assert self.da.get_consecutive([]) == {k: 0 for k in range(6)}
        sums = self.da.get_sums([])
        assert (sums.min, sums.max, sums.avg, sums.sums, sums.distribution) == (0, 0, 0.0, [], {})
        assert self.da.get_decades([]).total == 0

    def test_malformed_draws_skipped(self):
        assert self.da.get_even_odd(self.DRAWS + MALFORMED) == self.da.get_even_odd(self.DRAWS)


def _draw(idx, numbers):
    return {"draw_number": idx + 1, "draw_date": f"2025-01-{idx + 1:02d}", "numbers": numbers}


class TestGapAnalyzer:
    THREE = [
        _draw(0, [7, 1, 2, 3, 4, 5]),
        _draw(1, [8, 9, 10, 11, 12, 13]),
        _draw(2, [7, 14, 15, 16, 17, 18]),
    ]

    def setup_method(self):
        self.ga = GapAnalyzer()

    def test_has_all_numbers(self):
        assert len(self.ga.get_gap_stats(HISTORY)) == 60

    def test_repeated_number(self):
        stat = self.ga.get_gap_stats(self.THREE)[7]
        assert stat.average_gap == 2
        assert stat.current_gap == 0
        assert stat.is_overdue is False

    def test_absent_number(self):
        stat = self.ga.get_gap_stats(self.THREE)[60]
        assert stat.average_gap == 3
        assert stat.current_gap == 3
        assert stat.max_gap == 3
        assert stat.min_gap == 0
        assert stat.is_overdue is False

    def test_single_appearance(self):
        stat = self.ga.get_gap_stats(self.THREE)[1]
        assert stat.average_gap == 3
        assert stat.current_gap == 2
        assert stat.is_overdue is False

    def test_sorts_by_date(self):
        shuffled = list(reversed(self.THREE))
        assert self.ga.get_gap_stats(shuffled) == self.ga.get_gap_stats(self.THREE)

    def test_presorted_input_kept_as_is(self):
        reversed_stats = self.ga.get_gap_stats(list(reversed(self.THREE)), chronological=False)
        assert reversed_stats[1].current_gap == 0

    def test_overdue_number(self):
        draws = [
            _draw(0, [5, 1, 2, 3, 4, 6]),
            _draw(1, [5, 7, 8, 9, 10, 11]),
            _draw(2, [12, 13, 14, 15, 16, 17]),
            _draw(3, [18, 19, 20, 21, 22, 23]),
            _draw(4, [24, 25, 26, 27, 28, 29]),
        ]
        stats = self.ga.get_gap_stats(draws)
        assert stats[5].average_gap == 1
        assert stats[5].current_gap == 3
        assert stats[5].is_overdue is True
        assert self.ga.get_overdue_numbers(stats) == [(5, 3.0)]

    def test_empty_history(self):
        stats = self.ga.get_gap_stats([])
        assert len(stats) == 60
        for stat in stats.values():
            assert stat.average_gap == 0
            assert stat.current_gap == 0
            assert stat.is_overdue is False

    def test_idempotent(self):
        assert self.ga.get_gap_stats(HISTORY) == self.ga.get_gap_stats(HISTORY)


class TestStatisticsAggregator:
    def setup_method(self):
        self.agg = StatisticsAggregator()

    def test_summary_fields(self):
        summary = self.agg.summarize(HISTORY + MALFORMED)
        assert summary.total_draws == len(HISTORY)
        assert sum(summary.frequency.values()) == 6 * len(HISTORY)
        assert len(summary.gaps) == 60
        assert sum(summary.even_odd.values()) == len(HISTORY)
        assert sum(summary.consecutive.values()) == len(HISTORY)
        assert summary.decades.total == 6 * len(HISTORY)
        assert len(summary.sums.sums) == len(HISTORY)

    def test_summary_is_repeatable(self):
        assert self.agg.summarize(HISTORY) == self.agg.summarize(HISTORY)

    def test_empty_history(self):
        summary = self.agg.summarize([])
        assert summary.total_draws == 0
        assert summary.sums.distribution == {}


class TestCombinationMetrics:
    def test_entropy_of_distinct_numbers(self):
        assert calculate_entropy([1, 2, 3, 4]) == pytest.approx(2.0)

    def test_entropy_empty(self):
        assert calculate_entropy([]) == 0.0

    def test_variance(self):
        assert calculate_variance([1, 2, 3, 4, 5, 6]) == pytest.approx(35 / 12)
