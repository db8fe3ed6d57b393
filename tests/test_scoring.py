import random

import pytest

from kondate.core.catalog import NORMAL, get_pool, get_recipe
from kondate.core.scoring import rank_recipes, score, select_for_range
from kondate.db.models import FamilyMember
from kondate.errors import NoEligibleRecipeError


def _member(likes="", dislikes=""):
    return FamilyMember(id=None, name="太郎", likes=likes, dislikes=dislikes)


def test_preferred_cuisine_and_likes_add_up():
    curry = get_recipe("カレーライス")
    members = [_member(likes="じゃがいも"), _member(likes="豚肉")]
    assert score(curry, ["japanese"], members) == 10 + 5 + 5


def test_dislike_is_an_absolute_veto():
    curry = get_recipe("カレーライス")
    # preferred cuisine plus several likes still cannot outweigh one dislike
    members = [_member(likes="玉ねぎ"), _member(likes="豚肉"), _member(dislikes="にんじん")]
    ranked = rank_recipes([curry, get_recipe("餃子")], ["japanese"], members)
    assert [s.recipe.name for s in ranked] == ["餃子"]


def test_like_and_dislike_same_ingredient_excludes_recipe():
    members = [_member(likes="トマト"), _member(dislikes="トマト")]
    assert score(get_recipe("サラダチキンボウル"), ["healthy"], members) == -100
    ranked = rank_recipes(get_pool(NORMAL), [], members)
    assert "サラダチキンボウル" not in [s.recipe.name for s in ranked]


def test_all_vetoed_raises():
    with pytest.raises(NoEligibleRecipeError):
        rank_recipes([get_recipe("カレーライス")], [], [_member(dislikes="玉ねぎ")])


def test_ranking_is_deterministic_and_stable():
    pool = get_pool(NORMAL)
    members = [_member(likes="鶏肉")]
    first = [s.recipe.name for s in rank_recipes(pool, ["chinese"], members)]
    second = [s.recipe.name for s in rank_recipes(pool, ["chinese"], members)]
    assert first == second
    # no preferences at all: catalog order is kept
    plain = [s.recipe.name for s in rank_recipes(pool, [], [_member()])]
    assert plain == [r.name for r in pool]


def test_rank_cycling_covers_every_eligible_recipe_first():
    ranked = rank_recipes(get_pool(NORMAL), [], [_member()])
    picks = select_for_range(ranked, len(ranked), random.Random(1))
    assert [r.name for r in picks] == [s.recipe.name for s in ranked]


def test_days_beyond_pool_come_from_top_five():
    ranked = rank_recipes(get_pool(NORMAL), ["western"], [_member()])
    picks = select_for_range(ranked, 30, random.Random(7))
    top_five = {s.recipe.name for s in ranked[:5]}
    assert len(picks) == 30
    assert all(r.name in top_five for r in picks[len(ranked):])


def test_small_pool_repeats_within_pool():
    ranked = rank_recipes([get_recipe("カレーライス"), get_recipe("餃子")], [], [_member()])
    picks = select_for_range(ranked, 5, random.Random(3))
    assert [r.name for r in picks[:2]] == ["カレーライス", "餃子"]
    assert {r.name for r in picks} <= {"カレーライス", "餃子"}
