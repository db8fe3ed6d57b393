from datetime import date

import pytest

from kondate.core.reselection import WeightedDish, dish_weight, select_weighted, weigh_candidates
from kondate.db.models import CookingHistoryRecord

TODAY = date(2026, 3, 31)


class StubRng:
    """Returns the queued values from random() in order."""

    def __init__(self, *values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


def _cooked(dish, cooked_date, repeat=None, rank=None):
    return CookingHistoryRecord(dish_name=dish, cooked_date=cooked_date, repeat_desire=repeat, rank=rank)


def test_never_cooked_gets_novelty_bonus():
    assert dish_weight("カレーライス", [], False, TODAY) == pytest.approx(1.1)


def test_repeat_desire_and_recency():
    history = [_cooked("カレーライス", "2026-03-28", repeat=5)]
    # 3 days ago: 3.5 * 0.3
    assert dish_weight("カレーライス", history, False, TODAY) == pytest.approx(1.05)


def test_rank_used_when_no_repeat_desire():
    history = [_cooked("餃子", "2026-03-20", rank="A")]
    # 11 days ago: 3.0 * 0.6
    assert dish_weight("餃子", history, False, TODAY) == pytest.approx(1.8)


def test_long_gap_and_favorite_boost():
    history = [_cooked("親子丼", "2026-01-01", rank="D")]
    assert dish_weight("親子丼", history, True, TODAY) == pytest.approx(0.3 * 1.3 * 2.0)


def test_latest_record_wins():
    history = [
        _cooked("親子丼", "2026-01-01", repeat=1),
        _cooked("親子丼", "2026-03-10", repeat=5),
    ]
    # 21 days ago: neutral recency
    assert dish_weight("親子丼", history, False, TODAY) == pytest.approx(3.5)


def test_roulette_respects_cumulative_weights():
    candidates = [WeightedDish("A", 1.0), WeightedDish("B", 3.0)]
    assert select_weighted(candidates, rng=StubRng(0.2)) == "A"
    assert select_weighted(candidates, rng=StubRng(0.5)) == "B"


def test_current_dish_is_excluded():
    candidates = [WeightedDish("A", 100.0), WeightedDish("B", 0.01)]
    assert select_weighted(candidates, exclude=["A"], rng=StubRng(0.0)) == "B"


def test_rounding_sliver_falls_through_to_last_available():
    # 0.1 + 0.2 sums to 0.30000000000000004, so the running total never reaches zero
    candidates = [WeightedDish("A", 0.1), WeightedDish("B", 0.2), WeightedDish("C", 5.0)]
    assert select_weighted(candidates, exclude=["C"], rng=StubRng(1.0)) == "B"


def test_exclusion_fallback_when_nothing_left():
    candidates = [WeightedDish("A", 1.0)]
    assert select_weighted(candidates, exclude=["A"], rng=StubRng(0.9)) == "A"


def test_empty_candidates_raise():
    with pytest.raises(ValueError):
        select_weighted([], rng=StubRng(0.5))


def test_weigh_candidates_marks_favorites():
    weighted = weigh_candidates(["A", "B"], [], {"B"}, TODAY)
    assert [w.name for w in weighted] == ["A", "B"]
    assert weighted[1].weight == pytest.approx(weighted[0].weight * 2)
