"""
Test Suite: Chart series of historical and projected max IDs
"""

import pytest

from overflow_watch.overflow_estimator import INT32_MAX
from overflow_watch.series_generator import (
    DEFAULT_FLOOR_VALUE,
    SeriesGenerator,
    format_axis_value,
)


class TestSeriesGenerator:
    """Shape, ordering and clamping of generated samples"""

    @pytest.fixture
    def generator(self):
        return SeriesGenerator()

    @pytest.fixture
    def growth_rates(self):
        return [-1e9, -5_000_000.0, 0.0, 160_000_000 / 30, 1e8, 5e9]

    def test_always_fourteen_samples(self, generator, growth_rates):
        for rate in growth_rates:
            assert len(generator.generate_series(2_000_000_000, rate)) == 14

    def test_day_offsets(self, generator):
        series = generator.generate_series(2_000_000_000, 1_000_000.0)
        assert [s.offset_days for s in series] == [
            -30, -24, -18, -12, -6, 0, 0, 5, 10, 15, 20, 25, 30, 35
        ]

    def test_offsets_never_decrease(self, generator, growth_rates):
        for rate in growth_rates:
            offsets = [s.offset_days for s in generator.generate_series(2_000_000_000, rate)]
            assert offsets == sorted(offsets)

    def test_single_today_point_holds_current_value(self, generator):
        series = generator.generate_series(2_000_000_000, 5_000_000.0)
        today = [s for s in series if s.label == "Today"]

        assert len(today) == 1
        assert today[0].offset_days == 0
        assert today[0].is_projected is False
        assert today[0].value == 2_000_000_000

    def test_projection_flags(self, generator):
        series = generator.generate_series(2_000_000_000, 5_000_000.0)
        assert [s.is_projected for s in series] == [False] * 7 + [True] * 7
        assert all(s.kind == "Historical" for s in series[:7])
        assert all(s.kind == "Projected" for s in series[7:])

    def test_labels(self, generator):
        series = generator.generate_series(2_000_000_000, 5_000_000.0)
        assert [s.label for s in series] == [
            "Day -30", "Day -24", "Day -18", "Day -12", "Day -6", "Day 0", "Today",
            "Day 5", "Day 10", "Day 15", "Day 20", "Day 25", "Day 30", "Day 35",
        ]

    def test_past_values_follow_growth_rate(self, generator):
        series = generator.generate_series(2_000_000_000, 1_000_000.0)
        assert [s.value for s in series[:6]] == [
            1_970_000_000, 1_976_000_000, 1_982_000_000,
            1_988_000_000, 1_994_000_000, 2_000_000_000,
        ]

    def test_future_values_follow_growth_rate(self, generator):
        series = generator.generate_series(2_000_000_000, 1_000_000.0)
        assert [s.value for s in series[7:]] == [
            2_005_000_000, 2_010_000_000, 2_015_000_000, 2_020_000_000,
            2_025_000_000, 2_030_000_000, 2_035_000_000,
        ]

    def test_past_values_never_below_floor(self, generator, growth_rates):
        for rate in growth_rates:
            past = generator.generate_series(2_000_000_000, rate)[:6]
            assert all(s.value >= DEFAULT_FLOOR_VALUE for s in past)

    def test_steep_growth_clamps_history_to_floor(self, generator):
        series = generator.generate_series(2_000_000_000, 1e8)
        assert series[0].value == DEFAULT_FLOOR_VALUE
        assert series[4].value == 2_000_000_000 - 1e8 * 6

    def test_shrinking_ids_keep_history_above_current(self, generator):
        series = generator.generate_series(2_000_000_000, -1e9)
        assert series[0].value == 2_000_000_000 + 3e10
        assert series[-1].value == 2_000_000_000 - 35e9

    def test_future_values_are_not_clamped(self, generator):
        series = generator.generate_series(2_000_000_000, 160_000_000 / 30)
        assert series[-1].value > INT32_MAX

    def test_custom_floor(self):
        generator = SeriesGenerator(floor_value=1_990_000_000)
        series = generator.generate_series(2_000_000_000, 1_000_000.0)
        assert [s.value for s in series[:4]] == [1_990_000_000] * 4
        assert series[4].value == 1_994_000_000

    def test_fresh_list_per_call(self, generator):
        first = generator.generate_series(2_000_000_000, 1.0)
        second = generator.generate_series(2_000_000_000, 1.0)
        assert first == second
        assert first is not second

    def test_sample_to_dict(self, generator):
        sample = generator.generate_series(2_000_000_000, 1_000_000.0)[7]
        assert sample.to_dict() == {
            "name": "Day 5",
            "max_id": 2_005_000_000,
            "days_from_now": 5,
            "projected": True,
            "kind": "Projected",
            "axis_label": "2.0B",
        }


class TestAxisFormatting:

    @pytest.mark.parametrize("value,expected", [
        (2_000_000_000, "2.0B"),
        (INT32_MAX, "2.1B"),
        (1_500_000, "1.5M"),
        (999_999, "999999"),
        (0, "0"),
    ])
    def test_format_axis_value(self, value, expected):
        assert format_axis_value(value) == expected
