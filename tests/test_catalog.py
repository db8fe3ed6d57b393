import pytest

from kondate.core.catalog import (
    CEIL, DIET, MUSCLE, NORMAL, POOL_MEMBERS, RECIPES, CatalogError, IngredientFormula, Recipe,
    get_pool, get_recipe, validate_catalog,
)


def test_every_pool_resolves():
    for mode in (NORMAL, DIET, MUSCLE):
        pool = get_pool(mode)
        assert [r.name for r in pool] == list(POOL_MEMBERS[mode])


def test_borrowed_dishes_are_the_same_recipe():
    diet_names = {r.name for r in get_pool(DIET)}
    muscle_names = {r.name for r in get_pool(MUSCLE)}
    assert {"焼き魚定食", "サラダチキンボウル", "野菜炒め"} <= diet_names
    assert {"鶏の唐揚げ", "焼き魚定食"} <= muscle_names
    assert "カレーライス" not in diet_names
    assert next(r for r in get_pool(DIET) if r.name == "焼き魚定食") is get_recipe("焼き魚定食")


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        get_pool("keto")


def test_get_recipe_missing_returns_none():
    assert get_recipe("存在しない料理") is None


def test_validate_rejects_dangling_pool_name():
    with pytest.raises(CatalogError):
        validate_catalog(RECIPES, {NORMAL: ("カレーライス", "ラーメン")})


def test_validate_rejects_duplicate_pool_entry():
    with pytest.raises(CatalogError):
        validate_catalog(RECIPES, {NORMAL: ("カレーライス", "カレーライス")})


def test_validate_rejects_duplicate_recipe_name():
    curry = get_recipe("カレーライス")
    with pytest.raises(CatalogError):
        validate_catalog((curry, curry), {})


def test_curry_scales_linearly():
    ingredients = {i.name: i for i in get_recipe("カレーライス").scaled(3)}
    assert ingredients["玉ねぎ"].qty == 3
    assert ingredients["じゃがいも"].qty == 6
    assert ingredients["豚肉"].qty == 450
    assert ingredients["豚肉"].unit == "g"


def test_ceil_formula_never_rounds_to_zero():
    half_onion = IngredientFormula("玉ねぎ", 0.5, "個", CEIL)
    assert half_onion.evaluate(1).qty == 1
    assert half_onion.evaluate(3).qty == 2
    assert half_onion.evaluate(4).qty == 2


def test_scaled_rejects_empty_household():
    recipe = Recipe("テスト", ("japanese",), ("米",), (IngredientFormula("米", 150, "g"),))
    with pytest.raises(ValueError):
        recipe.scaled(0)


def test_scaled_quantities_are_whole_numbers():
    # whole quantities keep shopping-list sums additive across menus
    for recipe in RECIPES:
        for n in range(1, 7):
            assert all(isinstance(i.qty, int) for i in recipe.scaled(n)), recipe.name
