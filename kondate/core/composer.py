"""Expand a main dish into a full day's menu: staple, main, side and soup.

Rules are fixed name lists.  A dish that is on none of them gets the
Japanese-style defaults (rice, simmered spinach, miso soup), so compose()
never fails.
"""

import math

from kondate.db.models import MAIN, SIDE, SOUP, STAPLE, DishItem, FullMenu, Ingredient

RICE_DISHES = frozenset(["オムライス", "チャーハン", "カレーライス", "ドリア", "親子丼", "牛丼", "天丼", "豚キムチ"])
NOODLE_DISHES = frozenset(["パスタカルボナーラ"])
WESTERN_DISHES = frozenset(["ハンバーグ", "グラタン", "ステーキ", "パスタカルボナーラ", "オムライス"])


def _staple(n: int, western: bool) -> DishItem:
    if western:
        return DishItem(STAPLE, "パン", [Ingredient("パン", n * 1, "個")])
    return DishItem(STAPLE, "ご飯", [Ingredient("米", n * 150, "g")])


def _side(n: int, western: bool) -> DishItem:
    if western:
        return DishItem(SIDE, "グリーンサラダ", [
            Ingredient("レタス", math.ceil(n * 0.25), "個"),
            Ingredient("トマト", math.ceil(n * 0.5), "個"),
            Ingredient("きゅうり", math.ceil(n * 0.3), "本"),
            Ingredient("ドレッシング", n * 15, "ml"),
        ])
    return DishItem(SIDE, "ほうれん草のおひたし", [
        Ingredient("ほうれん草", math.ceil(n * 0.5), "束"),
        Ingredient("かつお節", n * 2, "g"),
        Ingredient("醤油", n * 5, "ml"),
    ])


def _soup(n: int, western: bool) -> DishItem:
    if western:
        return DishItem(SOUP, "コンソメスープ", [
            Ingredient("コンソメ", math.ceil(n * 0.5), "個"),
            Ingredient("玉ねぎ", math.ceil(n * 0.3), "個"),
            Ingredient("にんじん", math.ceil(n * 0.3), "本"),
        ])
    return DishItem(SOUP, "味噌汁", [
        Ingredient("味噌", n * 15, "g"),
        Ingredient("木綿豆腐", math.ceil(n * 0.5), "丁"),
        Ingredient("わかめ", n * 5, "g"),
    ])


def needs_staple(main_dish: str) -> bool:
    return main_dish not in RICE_DISHES and main_dish not in NOODLE_DISHES


def compose(main_dish: str, main_ingredients: list[Ingredient], household_size: int) -> FullMenu:
    """Build the FullMenu served around main_dish.

    main_ingredients are used as given; side dishes and soup are scaled to
    household_size here.
    """
    western = main_dish in WESTERN_DISHES
    dishes = []
    if needs_staple(main_dish):
        dishes.append(_staple(household_size, western))
    dishes.append(DishItem(MAIN, main_dish, list(main_ingredients)))
    dishes.append(_side(household_size, western))
    dishes.append(_soup(household_size, western))
    return FullMenu(dishes=dishes)


def all_ingredients(menu: FullMenu) -> list[Ingredient]:
    """Every ingredient line of every course, in course order."""
    return [ing for dish in menu.dishes for ing in dish.ingredients]


def course_ingredients(menu: FullMenu) -> list[tuple[str, str, Ingredient]]:
    """(category, dish name, ingredient) for every ingredient line."""
    return [(dish.category, dish.name, ing) for dish in menu.dishes for ing in dish.ingredients]


def main_dish(menu: FullMenu):
    """The main-course DishItem, or None for a malformed menu."""
    return next((d for d in menu.dishes if d.category == MAIN), None)
