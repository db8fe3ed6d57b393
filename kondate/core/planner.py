"""Menu plan generation and in-place edits.

Everything here is pure: callers fetch settings, members, inventory and
history first, call these functions, and only then write the returned
PlanData.  Every function that changes the menu returns a plan whose shopping
list has been re-derived from the new menu.
"""

import logging
import random
from dataclasses import replace
from datetime import date, timedelta
from typing import Optional

from kondate.core.catalog import get_pool
from kondate.core.composer import compose
from kondate.core.reselection import select_weighted, weigh_candidates
from kondate.core.scoring import rank_recipes, select_for_range
from kondate.core.shopping_list import build_shopping_list
from kondate.db.models import FullMenu, HouseholdSettings, MenuItem, PlanData
from kondate.errors import ValidationError

logger = logging.getLogger(__name__)

MIN_HOUSEHOLD = 1
MAX_HOUSEHOLD = 6
MAX_RANGE_DAYS = 30
DAY_NAMES = ["月曜日", "火曜日", "水曜日", "木曜日", "金曜日", "土曜日", "日曜日"]


def day_label(d: date) -> str:
    return DAY_NAMES[d.weekday()]


def validate_household_size(size: int) -> None:
    if not MIN_HOUSEHOLD <= size <= MAX_HOUSEHOLD:
        raise ValidationError(
            f"Household size must be between {MIN_HOUSEHOLD} and {MAX_HOUSEHOLD}, got {size}"
        )


def validate_request(household_size: int, start: date, end: date) -> int:
    """Check a generation request and return the number of days it covers."""
    validate_household_size(household_size)
    if start is None or end is None:
        raise ValidationError("Start and end dates are required")
    if start > end:
        raise ValidationError("Start date must not be after end date")
    days = (end - start).days + 1
    if days > MAX_RANGE_DAYS:
        raise ValidationError(f"Date range is limited to {MAX_RANGE_DAYS} days, got {days}")
    return days


def generate_plan(settings: HouseholdSettings, members, inventory, start: date, end: date,
                  rng: Optional[random.Random] = None) -> PlanData:
    """Build a plan covering start..end inclusive.

    Raises ValidationError for a bad request and NoEligibleRecipeError when
    dislikes veto the whole pool; nothing is returned in either case.
    """
    size = len(members)
    days = validate_request(size, start, end)
    ranked = rank_recipes(get_pool(settings.family_mode), settings.preferred_types, members)
    recipes = select_for_range(ranked, days, rng)

    menu = []
    for offset, recipe in enumerate(recipes):
        d = start + timedelta(days=offset)
        menu.append(MenuItem(
            day=day_label(d),
            date=d.isoformat(),
            dish=recipe.name,
            menu=compose(recipe.name, recipe.scaled(size), size),
        ))

    logger.info("Generated %d-day plan (%s, %d eligible recipes)", days, settings.family_mode, len(ranked))
    return PlanData(menu=menu, shopping_list=build_shopping_list(menu, inventory))


def recompute(plan: PlanData, inventory) -> PlanData:
    """The same menu with a freshly derived shopping list."""
    return PlanData(menu=list(plan.menu), shopping_list=build_shopping_list(plan.menu, inventory))


def reselect_dish(settings: HouseholdSettings, members, history, favorites, current_dish: Optional[str],
                  today: Optional[date] = None, rng: Optional[random.Random] = None) -> tuple[str, FullMenu]:
    """Pick a replacement main dish by history weighting and compose its menu.

    Candidates are the household pool minus anything a member dislikes.  The
    current dish is excluded unless it is the only candidate.
    """
    size = len(members)
    validate_household_size(size)
    ranked = rank_recipes(get_pool(settings.family_mode), settings.preferred_types, members)
    recipes = {s.recipe.name: s.recipe for s in ranked}
    candidates = weigh_candidates(list(recipes), history, favorites, today)
    exclude = [current_dish] if current_dish else []
    name = select_weighted(candidates, exclude, rng)
    recipe = recipes[name]
    return name, compose(name, recipe.scaled(size), size)


def _check_index(plan: PlanData, index: int) -> None:
    if not 0 <= index < len(plan.menu):
        raise ValidationError(f"Day index {index} is out of range")


def refresh_day(plan: PlanData, index: int, settings: HouseholdSettings, members, inventory,
                history, favorites, today: Optional[date] = None,
                rng: Optional[random.Random] = None) -> PlanData:
    """Replace one day's dish with a history-weighted pick."""
    _check_index(plan, index)
    current = plan.menu[index]
    dish, full_menu = reselect_dish(settings, members, history, favorites, current.dish, today, rng)
    menu = list(plan.menu)
    menu[index] = replace(current, dish=dish, menu=full_menu)
    return PlanData(menu=menu, shopping_list=build_shopping_list(menu, inventory))


def swap_days(plan: PlanData, first: int, second: int, inventory) -> PlanData:
    """Exchange the dishes of two days.  Each day keeps its own date and label."""
    _check_index(plan, first)
    _check_index(plan, second)
    menu = list(plan.menu)
    a, b = menu[first], menu[second]
    menu[first] = replace(a, dish=b.dish, menu=b.menu)
    menu[second] = replace(b, dish=a.dish, menu=a.menu)
    return PlanData(menu=menu, shopping_list=build_shopping_list(menu, inventory))
