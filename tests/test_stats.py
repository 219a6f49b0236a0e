import dataclasses
import math

import pytest

from conftest import make_draws
from lotto_ai.errors import ConfigurationError, InvalidInputError
from lotto_ai.stats import DrawRecord, StatsConfig, chi_square_score, compute, uniform_baseline


def test_scenario_counts_recency_and_pairs(scenario_draws):
    digest = compute(scenario_draws, StatsConfig(max_number=15, recent_window_size=2))

    assert digest.total_draws == 3
    assert digest.window_size == 2
    assert digest.frequency_all[1] == 3
    assert digest.frequency_all[2] == 2
    assert digest.frequency_all[11] == 1
    assert digest.frequency_recent[1] == 2
    assert digest.recency[1] == 0
    assert digest.recency[11] == 2

    pairs = {(p.a, p.b): p.count for p in digest.top_pairs}
    assert pairs[(1, 2)] == 2
    assert digest.top_pairs[0].a == 1 and digest.top_pairs[0].b == 2


def test_count_conservation(history):
    digest = compute(history)
    assert sum(digest.frequency_all.values()) == digest.total_draws * 6
    assert sum(digest.frequency_strong.values()) == digest.total_draws


def test_window_is_a_subset(history):
    digest = compute(history, StatsConfig(recent_window_size=40))
    assert digest.window_size == 40
    assert sum(digest.frequency_recent.values()) == 40 * 6
    for num in range(1, 38):
        assert digest.frequency_recent[num] <= digest.frequency_all[num]


def test_window_is_clamped(scenario_draws):
    assert compute(scenario_draws, StatsConfig(recent_window_size=500)).window_size == 3
    assert compute(scenario_draws, StatsConfig(recent_window_size=0)).window_size == 1


@pytest.mark.parametrize("ranking,sign", [("hot_all", -1), ("cold_all", 1),
                                          ("hot_recent", -1), ("cold_recent", 1)])
def test_rankings_are_ordered(history, ranking, sign):
    digest = compute(history, StatsConfig(recent_window_size=30))
    items = getattr(digest, ranking)
    assert len(items) == 37
    for prev, cur in zip(items, items[1:]):
        assert (sign * prev.count, prev.number) < (sign * cur.count, cur.number)


def test_ties_break_by_ascending_number(scenario_draws):
    digest = compute(scenario_draws, StatsConfig(max_number=15))
    assert [s.number for s in digest.hot_all[:2]] == [1, 2]
    # every count-1 number after 1 and 2, in ascending order
    assert [s.number for s in digest.hot_all[2:]] == list(range(3, 16))
    assert digest.cold_all[0].number == 3


def test_baseline_uses_independent_draw_approximation(history):
    digest = compute(history)
    p = 6 / 37
    assert digest.expected_per_number == pytest.approx(250 * p)
    assert digest.std_dev_per_number == pytest.approx(math.sqrt(250 * p * (1 - p)))
    assert digest.degrees_of_freedom == 36
    assert digest.z_scores[5] == pytest.approx(
        (digest.frequency_all[5] - digest.expected_per_number) / digest.std_dev_per_number)


def test_chi_square_matches_formula(history):
    digest = compute(history)
    expected = digest.expected_per_number
    manual = sum((c - expected) ** 2 / expected for c in digest.frequency_all.values())
    assert digest.chi_square == pytest.approx(manual)
    assert digest.chi_square > 0


def test_chi_square_zero_when_perfectly_uniform():
    # 37 draws covering every number exactly 6 times: shift a 6-window around the cycle
    draws = []
    for i in range(37):
        main = tuple(((i * 6 + k) % 37) + 1 for k in range(6))
        draws.append(DrawRecord(37 - i, main, 1))
    digest = compute(draws)
    assert set(digest.frequency_all.values()) == {6}
    assert digest.expected_per_number == 6
    assert digest.chi_square == 0


def test_chi_square_helpers():
    expected, sd = uniform_baseline(10, 1, 5)
    assert expected == 2
    assert sd == pytest.approx(math.sqrt(10 * 0.2 * 0.8))
    assert chi_square_score([2, 2, 2, 2, 2], expected) == 0
    assert chi_square_score([4, 0, 2, 2, 2], expected) == pytest.approx(4.0)


def test_overdue_unseen_first(scenario_draws):
    digest = compute(scenario_draws, StatsConfig(max_number=20))
    unseen = [s.number for s in digest.overdue if math.isinf(s.recency)]
    assert unseen == [16, 17, 18, 19, 20]
    assert [s.number for s in digest.overdue[:5]] == unseen
    assert digest.recency[20] == math.inf
    # after the unseen block, recency is non-increasing
    seen = [s.recency for s in digest.overdue[5:]]
    assert seen == sorted(seen, reverse=True)
    assert digest.overdue[5].recency == 2


def test_overdue_can_exclude_unseen(scenario_draws):
    digest = compute(scenario_draws, StatsConfig(max_number=20, include_unseen_overdue=False))
    assert all(not math.isinf(s.recency) for s in digest.overdue)
    assert len(digest.overdue) == 15


def test_pairs_ignore_order_within_draw():
    draws = [
        DrawRecord(2, (9, 3, 20, 1, 5, 7), 1),
        DrawRecord(1, (3, 9, 2, 4, 6, 8), 1),
    ]
    digest = compute(draws, StatsConfig(top_pair_count=100))
    pairs = {(p.a, p.b): p.count for p in digest.top_pairs}
    assert pairs[(3, 9)] == 2
    assert (9, 3) not in pairs
    assert all(p.a < p.b for p in digest.top_pairs)
    assert len(digest.top_pairs) == 15 + 15 - 1


def test_pairs_are_capped_and_ordered(history):
    digest = compute(history, StatsConfig(top_pair_count=5))
    assert len(digest.top_pairs) == 5
    keys = [(-p.count, p.a, p.b) for p in digest.top_pairs]
    assert keys == sorted(keys)


def test_pairs_can_be_disabled(history):
    digest = compute(history, StatsConfig(include_pairs=False))
    assert digest.top_pairs == ()


def test_strong_number_block(scenario_draws):
    digest = compute(scenario_draws, StatsConfig(max_number=15))
    assert digest.frequency_strong[2] == 2
    assert digest.recency_strong[1] == 0
    assert digest.recency_strong[2] == 1
    assert math.isinf(digest.recency_strong[7])
    assert digest.hot_strong[0].number == 2
    assert digest.expected_per_strong == pytest.approx(3 / 7)
    assert digest.degrees_of_freedom_strong == 6


def test_latest_is_first_draw(scenario_draws):
    assert compute(scenario_draws, StatsConfig(max_number=15)).latest.sequence_id == 3


def test_digest_is_immutable(scenario_draws):
    digest = compute(scenario_draws, StatsConfig(max_number=15))
    with pytest.raises(dataclasses.FrozenInstanceError):
        digest.chi_square = 0
    with pytest.raises(TypeError):
        digest.frequency_all[1] = 99


def test_deterministic(history):
    a = compute(history)
    b = compute(history)
    assert a.to_dict() == b.to_dict()


def test_empty_draws_rejected():
    with pytest.raises(InvalidInputError):
        compute([])


@pytest.mark.parametrize("main,strong", [
    ((1, 2, 3, 4, 5), 1),
    ((1, 2, 3, 4, 5, 5), 1),
    ((1, 2, 3, 4, 5, 38), 1),
    ((0, 2, 3, 4, 5, 6), 1),
    ((1, 2, 3, 4, 5, 6), 8),
    ((1.5, 2, 3, 4, 5, 6), 1),
    (("1", "2", "3", "4", "5", "6"), 1),
    ((True, 2, 3, 4, 5, 6), 1),
    ((1, 2, 3, 4, 5, 6), "1"),
])
def test_malformed_draw_fails_fast(main, strong):
    draws = [DrawRecord(1, main, strong)]
    with pytest.raises(InvalidInputError, match="#1"):
        compute(draws)


@pytest.mark.parametrize("config", [
    StatsConfig(max_number=0),
    StatsConfig(max_number=5),
    StatsConfig(strong_max=0),
    StatsConfig(top_pair_count=-1),
    StatsConfig(recent_window_size=2.5),
])
def test_bad_config_rejected(scenario_draws, config):
    with pytest.raises(ConfigurationError):
        compute(scenario_draws, config)


def test_frequency_frame_and_dict(history):
    digest = compute(history, StatsConfig(recent_window_size=50))
    df = digest.frequency_frame()
    assert list(df.columns) == ["number", "count", "pct", "z", "recency", "recent_count"]
    assert len(df) == 37
    assert df["count"].sum() == 250 * 6
    assert df["pct"].sum() == pytest.approx(100.0, abs=0.01)

    data = digest.to_dict()
    assert data["meta"]["totalDraws"] == 250
    assert data["meta"]["df"] == 36
    assert len(data["highlights"]["hotAll"]) == 37


def test_to_dict_encodes_unseen_as_none(scenario_draws):
    data = compute(scenario_draws, StatsConfig(max_number=20)).to_dict()
    assert data["highlights"]["overdue"][0]["overdue"] is None


def test_make_draws_helper_is_valid():
    assert compute(make_draws(5, seed=1)).total_draws == 5
