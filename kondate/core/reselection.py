"""History-aware weighting for the "pick another dish for this day" action.

dish_weight() turns the latest cooking record of a dish into a multiplicative
weight: high repeat desire or a good rank boosts it, a very recent cook
suppresses it, a long gap boosts it again, favourites double it.
select_weighted() then draws one dish by roulette.

Only single-day refreshes use this; whole-range generation uses the
rank-cycling selector in core/scoring.py.
"""

import random
from dataclasses import dataclass
from datetime import date
from typing import Optional

REPEAT_DESIRE_FACTORS = {5: 3.5, 4: 2.0, 3: 1.2, 2: 0.5, 1: 0.2}
RANK_FACTORS = {"A": 3.0, "B": 1.5, "C": 1.0, "D": 0.3}
NOVELTY_FACTOR = 1.1
FAVORITE_FACTOR = 2.0


@dataclass
class WeightedDish:
    name: str
    weight: float


def _recency_factor(days_since: int) -> float:
    if days_since < 7:
        return 0.3
    if days_since < 14:
        return 0.6
    if days_since > 30:
        return 1.3
    return 1.0


def latest_record(dish_name: str, history):
    """Most recent CookingHistoryRecord for the dish by cooked_date, or None."""
    records = [h for h in history if h.dish_name == dish_name]
    if not records:
        return None
    return max(records, key=lambda h: h.cooked_date)


def dish_weight(dish_name: str, history, is_favorite: bool, today: Optional[date] = None) -> float:
    """Selection weight for one dish, always > 0."""
    today = today or date.today()
    weight = 1.0

    record = latest_record(dish_name, history)
    if record is None:
        weight *= NOVELTY_FACTOR
    else:
        if record.repeat_desire:
            weight *= REPEAT_DESIRE_FACTORS.get(record.repeat_desire, 1.0)
        elif record.rank:
            weight *= RANK_FACTORS.get(record.rank, 1.0)
        days_since = (today - date.fromisoformat(record.cooked_date)).days
        weight *= _recency_factor(days_since)

    if is_favorite:
        weight *= FAVORITE_FACTOR
    return weight


def weigh_candidates(names, history, favorites, today: Optional[date] = None) -> list[WeightedDish]:
    """dish_weight() for every name; favorites is a set of dish names."""
    return [WeightedDish(n, dish_weight(n, history, n in favorites, today)) for n in names]


def select_weighted(candidates: list[WeightedDish], exclude=(), rng: random.Random = None) -> str:
    """Draw one dish name by cumulative-weight roulette.

    Names in exclude are skipped.  When that leaves nothing, fall back to a
    uniform pick over all candidates so a reshuffle always returns a dish.
    """
    if not candidates:
        raise ValueError("No candidate dishes to choose from")
    rng = rng or random.Random()
    excluded = set(exclude)
    available = [c for c in candidates if c.name not in excluded]
    if not available:
        return candidates[int(rng.random() * len(candidates))].name

    total = sum(c.weight for c in available)
    remaining = rng.random() * total
    for candidate in available:
        remaining -= candidate.weight
        if remaining <= 0:
            return candidate.name
    # float rounding left a sliver above zero
    return available[-1].name
