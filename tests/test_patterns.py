import pytest

from lotto_ai.errors import InvalidInputError
from lotto_ai.patterns import (
    decade_spread,
    high_low_distribution,
    odd_even_distribution,
    pattern_summary,
    sum_range_analysis,
)


def test_odd_even_distribution(scenario_draws):
    # (1..6): 3 odd, (1,2,7,8,9,10): 3 odd, (1,11..15): 4 odd
    oe = odd_even_distribution(scenario_draws)
    assert oe["distribution"][(3, 3)] == 2
    assert oe["distribution"][(4, 2)] == 1
    assert oe["distribution"][(6, 0)] == 0
    assert len(oe["distribution"]) == 7
    assert oe["most_common"] == (3, 3)
    assert oe["even_ratio"] == pytest.approx(8 / 18, abs=1e-4)
    assert sum(oe["percentages"].values()) == pytest.approx(100.0, abs=0.05)
    assert list(oe["dataframe"].columns) == ["odd", "even", "count", "pct"]


def test_high_low_distribution(scenario_draws):
    hl = high_low_distribution(scenario_draws, max_number=37)
    assert hl["low_bound"] == 18
    assert hl["distribution"][(6, 0)] == 3
    assert hl["most_common"] == (6, 0)


def test_sum_range_analysis(scenario_draws):
    sr = sum_range_analysis(scenario_draws)
    assert sr["sums_series"].tolist() == [21, 37, 66]
    assert sr["stats"]["min"] == 21
    assert sr["stats"]["max"] == 66
    assert sr["stats"]["mean"] == pytest.approx(41.33, abs=0.01)
    assert sr["zone_50"][0] <= sr["zone_50"][1]
    assert sr["zone_70"][0] <= sr["zone_50"][0]


def test_decade_spread(scenario_draws):
    ds = decade_spread(scenario_draws, max_number=37)
    assert list(ds["group_counts"]) == ["1-9", "10-19", "20-29", "30-37"]
    assert ds["group_counts"]["1-9"] == 6 + 5 + 1
    assert ds["group_counts"]["10-19"] == 1 + 5
    assert sum(ds["group_counts"].values()) == 18


def test_pattern_summary_keys(history):
    summary = pattern_summary(history)
    assert set(summary) == {"odd_even", "high_low", "sum_range", "decade_spread"}
    assert sum(summary["odd_even"]["distribution"].values()) == len(history)


def test_empty_input_rejected():
    with pytest.raises(InvalidInputError):
        odd_even_distribution([])
