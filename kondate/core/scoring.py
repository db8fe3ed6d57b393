"""Recipe scoring and whole-range selection.

score() rewards preferred cuisines and family likes and vetoes any recipe a
family member dislikes.  select_for_range() walks the ranked list once before
any dish repeats, then picks randomly among the top five.

Scoring is deterministic; the only randomness is the rng passed to
select_for_range(), used once the ranked list is exhausted.
"""

import random
from dataclasses import dataclass

from kondate.core.catalog import Recipe
from kondate.db.models import FamilyMember
from kondate.errors import NoEligibleRecipeError

PREFERRED_TYPE_BONUS = 10
LIKE_BONUS = 5
DISLIKE_PENALTY = 100
VETO_THRESHOLD = -100
TOP_PICK_WINDOW = 5


@dataclass
class ScoredRecipe:
    recipe: Recipe
    score: int


def _matches(recipe: Recipe, text: str) -> bool:
    """True when text mentions a principal ingredient or names the dish.

    text must already be lower-cased and non-empty.
    """
    name = recipe.name.lower()
    return any(ing.lower() in text or text in name for ing in recipe.principal_ingredients)


def score(recipe: Recipe, preferred_types, members) -> int:
    """Integer preference score for one recipe.  <= -100 means vetoed.

    Each dislike subtracts 100, and a vetoed recipe is capped at -100 so that
    bonuses from likes and cuisine can never lift it back into eligibility.
    """
    total = 0
    vetoed = False
    if preferred_types and set(recipe.cuisine) & set(preferred_types):
        total += PREFERRED_TYPE_BONUS

    for member in members:
        likes = (member.likes or "").lower()
        dislikes = (member.dislikes or "").lower()
        if likes and _matches(recipe, likes):
            total += LIKE_BONUS
        if dislikes and _matches(recipe, dislikes):
            total -= DISLIKE_PENALTY
            vetoed = True
    return min(total, VETO_THRESHOLD) if vetoed else total


def is_eligible(score_value: int) -> bool:
    return score_value > VETO_THRESHOLD


def rank_recipes(recipes, preferred_types, members: list[FamilyMember]) -> list[ScoredRecipe]:
    """Eligible recipes, best first.  Ties keep catalog order.

    Raises NoEligibleRecipeError when every recipe is vetoed.
    """
    scored = [ScoredRecipe(r, score(r, preferred_types, members)) for r in recipes]
    eligible = [s for s in scored if is_eligible(s.score)]
    if not eligible:
        raise NoEligibleRecipeError()
    eligible.sort(key=lambda s: s.score, reverse=True)
    return eligible


def select_for_range(ranked: list[ScoredRecipe], days: int, rng: random.Random = None) -> list[Recipe]:
    """Pick one recipe per day.

    Days 0..E-1 (E = number of eligible recipes) take the ranked list in
    order, so the top recipes appear once each before anything repeats.  Later
    days draw uniformly from the top min(E, 5).
    """
    if not ranked:
        raise NoEligibleRecipeError()
    rng = rng or random.Random()
    count = len(ranked)
    picks = []
    for i in range(days):
        if i < count:
            index = i % count
        else:
            index = rng.randrange(min(count, TOP_PICK_WINDOW))
        picks.append(ranked[index].recipe)
    return picks
