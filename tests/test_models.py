"""tests/test_models.py"""
import math
from collections import Counter

import pytest

from src.models.draw import Draw, DuplicateEntry
from src.models.statistical.aggregator import AggregateState, aggregate, fold_draw
from src.models.statistical.distribution_analyzer import DistributionAnalyzer
from src.models.statistical.duplicate_detector import DuplicateDetector, canonical_key, find_duplicates
from src.models.statistics_engine import (
    InsufficientDataError,
    average_repeats,
    bottom_numbers,
    compute_statistics,
    top_numbers,
)

FIRST_15 = list(range(1, 16))                 # sum 120, 7 even / 8 odd
SWAP_16 = list(range(1, 15)) + [16]           # sum 121

HISTORY = [
    Draw(3001, "01/01/2024", FIRST_15),
    Draw(3002, "02/01/2024", SWAP_16),
    Draw(3003, "03/01/2024", [2, 4, 5, 6, 8, 10, 12, 13, 15, 17, 19, 20, 22, 24, 25]),
    Draw(3004, "04/01/2024", list(reversed(FIRST_15))),
    Draw(3005, "05/01/2024", [3, 5, 6, 7, 9, 11, 12, 14, 16, 18, 20, 21, 23, 24, 25]),
]


class TestAggregator:
    def test_empty_input_has_zero_frequency_table(self):
        state = aggregate([])
        assert state.frequency == {n: 0 for n in range(1, 26)}
        assert state.sums == []
        assert state.repeats == []
        assert state.prime_count == {}

    def test_fold_step_by_step(self):
        state = AggregateState()
        state = fold_draw(state, Draw(1, "", FIRST_15), 0)
        assert state.sums == [120]
        assert state.repeats == []
        state = fold_draw(state, Draw(2, "", SWAP_16), 1)
        assert state.sums == [120, 121]
        assert state.repeats == [14]
        assert state.total_even + state.total_odd == 30

    def test_fresh_state_per_aggregation(self):
        first = aggregate(HISTORY)
        second = aggregate(HISTORY)
        assert first is not second
        assert first.sums == second.sums


class TestDistributionAnalyzer:
    def test_median_odd_count(self):
        assert DistributionAnalyzer([180, 190, 180]).median() == 180

    def test_median_even_count(self):
        assert DistributionAnalyzer([190, 180, 200, 170]).median() == 185

    def test_mode_single(self):
        assert DistributionAnalyzer([180, 190, 180]).mode() == (180,)

    def test_mode_reports_all_ties_ascending(self):
        assert DistributionAnalyzer([200, 190, 190, 200, 185]).mode() == (190, 200)

    def test_population_std_dev(self):
        dist = DistributionAnalyzer([120, 121, 120]).describe()
        assert dist.mean == pytest.approx(361 / 3)
        assert dist.std_dev == pytest.approx(math.sqrt(2 / 9))

    def test_empty_series_rejected(self):
        with pytest.raises(InsufficientDataError):
            DistributionAnalyzer([])


class TestDuplicateDetector:
    def test_canonical_key_does_not_touch_input(self):
        nums = [15, 3, 9]
        assert canonical_key(nums) == (3, 9, 15)
        assert nums == [15, 3, 9]

    def test_reordered_draws_match(self):
        draws = [Draw(10, "", FIRST_15), Draw(20, "", list(reversed(FIRST_15)))]
        assert find_duplicates(draws) == (
            DuplicateEntry(numbers=tuple(FIRST_15), contests=(10, 20)),
        )

    def test_singletons_discarded(self):
        detector = DuplicateDetector()
        detector.observe(Draw(1, "", FIRST_15))
        detector.observe(Draw(2, "", SWAP_16))
        assert detector.duplicates() == ()


class TestStatisticsEngine:
    def setup_method(self):
        self.report = compute_statistics(HISTORY)

    def test_empty_input_raises(self):
        with pytest.raises(InsufficientDataError):
            compute_statistics([])

    def test_frequency_total(self):
        assert sum(self.report.frequency.values()) == 15 * len(HISTORY)
        assert set(self.report.frequency) == set(range(1, 26))

    def test_parity_total(self):
        assert self.report.parity.even + self.report.parity.odd == 15

    def test_repeats_length_and_range(self):
        repeats = self.report.repeats_from_previous
        assert len(repeats) == len(HISTORY) - 1
        assert all(0 <= r <= 15 for r in repeats)
        assert repeats[0] == 14

    def test_mode_values_have_max_frequency(self):
        counts = Counter(aggregate(HISTORY).sums)
        assert len(self.report.sum_mode) >= 1
        assert all(counts[s] == max(counts.values()) for s in self.report.sum_mode)

    def test_duplicates_ignore_order_and_date(self):
        assert self.report.duplicates == (
            DuplicateEntry(numbers=tuple(FIRST_15), contests=(3001, 3004)),
        )

    def test_input_order_preserved(self):
        assert HISTORY[3].numbers == tuple(reversed(FIRST_15))

    def test_report_is_read_only(self):
        with pytest.raises(TypeError):
            self.report.frequency[1] = 999
        with pytest.raises(TypeError):
            self.report.prime_count[0] = 1
        assert self.report.frequency[1] == 3

    def test_report_is_hashable(self):
        assert hash(compute_statistics(HISTORY)) == hash(self.report)

    def test_idempotent(self):
        assert compute_statistics(HISTORY) == self.report
        assert compute_statistics(HISTORY).to_dict() == self.report.to_dict()

    def test_two_draws_differing_by_one(self):
        report = compute_statistics([Draw(1, "", FIRST_15), Draw(2, "", SWAP_16)])
        assert report.repeats_from_previous == (14,)
        assert report.duplicates == ()
        assert report.sum_median == 120.5
        assert report.sum_mode == (120, 121)

    def test_single_draw(self):
        report = compute_statistics([Draw(1, "", FIRST_15)])
        assert report.repeats_from_previous == ()
        assert report.duplicates == ()
        assert report.sum_std_dev == 0.0
        assert report.parity.even == 7
        assert report.parity.odd == 8

    def test_prime_histogram(self):
        odds = [1, 3, 5, 7, 9, 11, 13, 15, 17]
        evens = [4, 6, 8, 10, 12, 14]
        report = compute_statistics([Draw(1, "", odds + evens)])
        # primes present: 3, 5, 7, 11, 13, 17
        assert report.prime_count[6] == 1
        assert all(v == 0 for k, v in report.prime_count.items() if k != 6)
        assert set(report.prime_count) == set(range(10))

    def test_sum_median_and_mode(self):
        draws = [Draw(1, "", FIRST_15), Draw(2, "", SWAP_16), Draw(3, "", FIRST_15)]
        report = compute_statistics(draws)
        assert report.sum_median == 120
        assert report.sum_mode == (120,)

    def test_average_repeats(self):
        assert average_repeats(self.report) == pytest.approx(
            sum(self.report.repeats_from_previous) / 4
        )
        assert average_repeats(compute_statistics([Draw(1, "", FIRST_15)])) == 0.0

    def test_top_and_bottom_numbers(self):
        report = compute_statistics([Draw(1, "", FIRST_15)])
        assert top_numbers(report, 3) == [1, 2, 3]
        assert bottom_numbers(report, 3) == [16, 17, 18]
