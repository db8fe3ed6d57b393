"""Compiled-in recipe catalog and the household-mode pools that draw from it.

Quantities are formulas of the household size n: LINEAR lines are
n * per_person, CEIL lines are ceil(n * per_person) so that fractional
per-person items (half an onion for two people) never round down to zero.

Pools are an explicit table of recipe names.  A normal-pool dish shows up in
the diet or muscle pool only when it is listed there by name;
validate_catalog() runs at import time and rejects dangling or duplicated
names.
"""

import math
from dataclasses import dataclass, field

from kondate.db.models import Ingredient

LINEAR = "linear"
CEIL = "ceil"

NORMAL = "normal"
DIET = "diet"
MUSCLE = "muscle"
FAMILY_MODES = (NORMAL, DIET, MUSCLE)

CUISINE_TYPES = ("japanese", "western", "chinese", "healthy", "spicy")


class CatalogError(Exception):
    """The pool table references a recipe that doesn't exist, or lists one twice."""


@dataclass(frozen=True)
class IngredientFormula:
    name: str
    per_person: float
    unit: str
    rounding: str = LINEAR

    def evaluate(self, household_size: int) -> Ingredient:
        qty = household_size * self.per_person
        if self.rounding == CEIL:
            qty = math.ceil(qty)
        elif qty == int(qty):
            qty = int(qty)
        return Ingredient(name=self.name, qty=qty, unit=self.unit)


@dataclass(frozen=True)
class Recipe:
    name: str
    cuisine: tuple
    principal_ingredients: tuple
    formulas: tuple = field(default_factory=tuple)

    def scaled(self, household_size: int) -> list[Ingredient]:
        """Concrete ingredient list for a household of the given size."""
        if household_size < 1:
            raise ValueError(f"Household size must be at least 1, got {household_size}")
        return [f.evaluate(household_size) for f in self.formulas]


def _lin(name: str, per_person: float, unit: str) -> IngredientFormula:
    return IngredientFormula(name, per_person, unit, LINEAR)


def _ceil(name: str, per_person: float, unit: str) -> IngredientFormula:
    return IngredientFormula(name, per_person, unit, CEIL)


RECIPES: tuple = (
    # ── Normal ─────────────────────────────────────────────────────────────────
    Recipe("カレーライス", ("japanese",), ("玉ねぎ", "じゃがいも", "にんじん", "豚肉"), (
        _lin("玉ねぎ", 1, "個"),
        _lin("じゃがいも", 2, "個"),
        _lin("にんじん", 1, "本"),
        _lin("豚肉", 150, "g"),
        _lin("カレールー", 25, "g"),
        _lin("米", 150, "g"),
    )),
    Recipe("ハンバーグ", ("western",), ("合いびき肉", "玉ねぎ", "卵"), (
        _lin("合いびき肉", 100, "g"),
        _ceil("玉ねぎ", 0.5, "個"),
        _lin("パン粉", 10, "g"),
        _ceil("卵", 0.3, "個"),
        _ceil("レタス", 0.25, "個"),
    )),
    Recipe("餃子", ("chinese",), ("豚ひき肉", "キャベツ", "ニラ"), (
        _lin("豚ひき肉", 100, "g"),
        _ceil("キャベツ", 0.25, "個"),
        _ceil("ニラ", 0.5, "束"),
        _lin("餃子の皮", 12, "枚"),
        _lin("ごま油", 5, "ml"),
    )),
    Recipe("麻婆豆腐", ("chinese", "spicy"), ("木綿豆腐", "豚ひき肉", "長ねぎ", "豆板醤"), (
        _lin("木綿豆腐", 1, "丁"),
        _lin("豚ひき肉", 80, "g"),
        _ceil("長ねぎ", 0.5, "本"),
        _ceil("にんにく", 0.5, "片"),
        _lin("豆板醤", 5, "g"),
    )),
    Recipe("オムライス", ("western",), ("卵", "鶏肉", "玉ねぎ"), (
        _lin("卵", 2, "個"),
        _lin("米", 150, "g"),
        _lin("鶏肉", 80, "g"),
        _ceil("玉ねぎ", 0.3, "個"),
        _lin("ケチャップ", 30, "g"),
    )),
    Recipe("チャーハン", ("chinese",), ("卵", "長ねぎ", "ハム"), (
        _lin("米", 150, "g"),
        _lin("卵", 1, "個"),
        _ceil("長ねぎ", 0.5, "本"),
        _lin("ハム", 50, "g"),
        _lin("ごま油", 10, "ml"),
    )),
    Recipe("シチュー", ("western",), ("鶏肉", "じゃがいも", "にんじん", "玉ねぎ"), (
        _lin("鶏肉", 120, "g"),
        _lin("じゃがいも", 2, "個"),
        _lin("にんじん", 1, "本"),
        _lin("玉ねぎ", 1, "個"),
        _lin("シチューのルー", 25, "g"),
        _lin("牛乳", 100, "ml"),
    )),
    Recipe("焼き魚定食", ("japanese", "healthy"), ("鮭", "大根", "ほうれん草"), (
        _lin("鮭", 1, "切れ"),
        _ceil("大根", 0.3, "本"),
        _ceil("ほうれん草", 0.5, "束"),
        _lin("米", 150, "g"),
        _lin("味噌", 15, "g"),
    )),
    Recipe("サラダチキンボウル", ("healthy",), ("鶏胸肉", "レタス", "トマト", "アボカド"), (
        _lin("鶏胸肉", 120, "g"),
        _ceil("レタス", 0.3, "個"),
        _lin("トマト", 1, "個"),
        _ceil("アボカド", 0.5, "個"),
        _lin("オリーブオイル", 10, "ml"),
    )),
    Recipe("豚キムチ", ("spicy",), ("豚肉", "キムチ", "玉ねぎ"), (
        _lin("豚肉", 150, "g"),
        _lin("キムチ", 100, "g"),
        _ceil("玉ねぎ", 0.5, "個"),
        _lin("ごま油", 10, "ml"),
        _lin("米", 150, "g"),
    )),
    Recipe("親子丼", ("japanese",), ("鶏肉", "卵", "玉ねぎ"), (
        _lin("鶏肉", 100, "g"),
        _lin("卵", 2, "個"),
        _ceil("玉ねぎ", 0.5, "個"),
        _lin("米", 150, "g"),
        _lin("みりん", 15, "ml"),
    )),
    Recipe("パスタカルボナーラ", ("western",), ("パスタ", "ベーコン", "卵", "チーズ"), (
        _lin("パスタ", 100, "g"),
        _lin("ベーコン", 50, "g"),
        _lin("卵", 1, "個"),
        _lin("パルメザンチーズ", 20, "g"),
        _ceil("にんにく", 0.3, "片"),
    )),
    Recipe("鶏の唐揚げ", ("japanese",), ("鶏もも肉", "にんにく", "生姜"), (
        _lin("鶏もも肉", 150, "g"),
        _ceil("にんにく", 0.5, "片"),
        _ceil("生姜", 0.3, "片"),
        _lin("片栗粉", 30, "g"),
        _ceil("レタス", 0.25, "個"),
    )),
    Recipe("野菜炒め", ("chinese", "healthy"), ("キャベツ", "にんじん", "もやし", "豚肉"), (
        _ceil("キャベツ", 0.25, "個"),
        _ceil("にんじん", 0.5, "本"),
        _lin("もやし", 100, "g"),
        _lin("豚肉", 100, "g"),
        _lin("ごま油", 10, "ml"),
    )),
    Recipe("生姜焼き", ("japanese",), ("豚肉", "玉ねぎ", "生姜"), (
        _lin("豚肉", 150, "g"),
        _ceil("玉ねぎ", 0.5, "個"),
        _ceil("生姜", 0.5, "片"),
        _lin("醤油", 15, "ml"),
        _lin("みりん", 15, "ml"),
    )),
    # ── Calorie-conscious ──────────────────────────────────────────────────────
    Recipe("豆腐ハンバーグ", ("healthy",), ("木綿豆腐", "鶏ひき肉", "玉ねぎ"), (
        _ceil("木綿豆腐", 0.5, "丁"),
        _lin("鶏ひき肉", 80, "g"),
        _ceil("玉ねぎ", 0.3, "個"),
        _lin("パン粉", 10, "g"),
        _ceil("レタス", 0.3, "個"),
    )),
    Recipe("鶏胸肉のソテー", ("healthy",), ("鶏胸肉", "ブロッコリー", "トマト"), (
        _lin("鶏胸肉", 100, "g"),
        _ceil("ブロッコリー", 0.3, "株"),
        _lin("トマト", 1, "個"),
        _lin("オリーブオイル", 5, "ml"),
        _ceil("レモン", 0.3, "個"),
    )),
    Recipe("野菜たっぷり鍋", ("healthy", "japanese"), ("白菜", "豆腐", "しいたけ", "鶏肉"), (
        _ceil("白菜", 0.25, "個"),
        _ceil("木綿豆腐", 0.5, "丁"),
        _lin("しいたけ", 3, "個"),
        _lin("鶏もも肉", 80, "g"),
        _lin("ポン酢", 30, "ml"),
    )),
    Recipe("蒸し鶏のサラダ", ("healthy",), ("鶏胸肉", "レタス", "トマト", "きゅうり"), (
        _lin("鶏胸肉", 100, "g"),
        _ceil("レタス", 0.3, "個"),
        _lin("トマト", 1, "個"),
        _lin("きゅうり", 1, "本"),
        _lin("ドレッシング", 20, "ml"),
    )),
    Recipe("白身魚の蒸し物", ("healthy", "japanese"), ("白身魚", "野菜"), (
        _lin("白身魚", 1, "切れ"),
        _ceil("ほうれん草", 0.5, "束"),
        _lin("えのき", 50, "g"),
        _lin("ポン酢", 20, "ml"),
        _lin("米", 100, "g"),
    )),
    Recipe("こんにゃくステーキ", ("healthy",), ("こんにゃく", "ピーマン"), (
        _lin("こんにゃく", 1, "枚"),
        _lin("ピーマン", 2, "個"),
        _ceil("にんにく", 0.3, "片"),
        _lin("醤油", 10, "ml"),
        _lin("米", 100, "g"),
    )),
    # ── Muscle-building ────────────────────────────────────────────────────────
    Recipe("鶏胸肉のステーキ", ("healthy",), ("鶏胸肉", "ブロッコリー"), (
        _lin("鶏胸肉", 200, "g"),
        _ceil("ブロッコリー", 0.5, "株"),
        _lin("オリーブオイル", 10, "ml"),
        _ceil("にんにく", 0.5, "片"),
        _lin("米", 180, "g"),
    )),
    Recipe("サーモンのグリル", ("healthy",), ("サーモン", "アスパラガス"), (
        _lin("サーモン", 2, "切れ"),
        _lin("アスパラガス", 3, "本"),
        _ceil("レモン", 0.3, "個"),
        _lin("オリーブオイル", 10, "ml"),
        _lin("米", 180, "g"),
    )),
    Recipe("牛赤身肉のステーキ", ("western",), ("牛赤身肉", "ブロッコリー"), (
        _lin("牛赤身肉", 180, "g"),
        _ceil("ブロッコリー", 0.5, "株"),
        _ceil("にんにく", 0.5, "片"),
        _lin("オリーブオイル", 10, "ml"),
        _lin("米", 180, "g"),
    )),
    Recipe("プロテインオムレツ", ("western",), ("卵", "鶏胸肉", "チーズ"), (
        _lin("卵", 3, "個"),
        _lin("鶏胸肉", 80, "g"),
        _lin("チーズ", 30, "g"),
        _lin("トマト", 1, "個"),
        _lin("パン", 1, "枚"),
    )),
    Recipe("まぐろの刺身", ("japanese",), ("まぐろ", "卵"), (
        _lin("まぐろ", 150, "g"),
        _lin("卵", 2, "個"),
        _ceil("アボカド", 0.5, "個"),
        _lin("醤油", 15, "ml"),
        _lin("米", 180, "g"),
    )),
    Recipe("豚ヒレ肉のソテー", ("western",), ("豚ヒレ肉", "ほうれん草"), (
        _lin("豚ヒレ肉", 150, "g"),
        _ceil("ほうれん草", 0.5, "束"),
        _ceil("にんにく", 0.5, "片"),
        _lin("オリーブオイル", 10, "ml"),
        _lin("米", 180, "g"),
    )),
    Recipe("卵とブロッコリー炒め", ("healthy", "chinese"), ("卵", "ブロッコリー", "鶏胸肉"), (
        _lin("卵", 3, "個"),
        _ceil("ブロッコリー", 0.5, "株"),
        _lin("鶏胸肉", 120, "g"),
        _lin("ごま油", 10, "ml"),
        _lin("米", 180, "g"),
    )),
)

POOL_MEMBERS: dict[str, tuple] = {
    NORMAL: (
        "カレーライス", "ハンバーグ", "餃子", "麻婆豆腐", "オムライス",
        "チャーハン", "シチュー", "焼き魚定食", "サラダチキンボウル", "豚キムチ",
        "親子丼", "パスタカルボナーラ", "鶏の唐揚げ", "野菜炒め", "生姜焼き",
    ),
    DIET: (
        "豆腐ハンバーグ", "鶏胸肉のソテー", "野菜たっぷり鍋", "蒸し鶏のサラダ",
        "白身魚の蒸し物", "こんにゃくステーキ",
        # borrowed from the normal pool
        "焼き魚定食", "サラダチキンボウル", "野菜炒め",
    ),
    MUSCLE: (
        "鶏胸肉のステーキ", "サーモンのグリル", "牛赤身肉のステーキ", "プロテインオムレツ",
        "まぐろの刺身", "豚ヒレ肉のソテー", "卵とブロッコリー炒め",
        # borrowed from the normal pool
        "鶏の唐揚げ", "焼き魚定食",
    ),
}


def validate_catalog(recipes=RECIPES, pools=POOL_MEMBERS) -> dict:
    """Check recipe names are unique and every pool entry resolves.

    Returns the name -> Recipe index.  Raises CatalogError on the first problem.
    """
    index = {}
    for recipe in recipes:
        if recipe.name in index:
            raise CatalogError(f"Duplicate recipe name: {recipe.name}")
        index[recipe.name] = recipe
    for mode, names in pools.items():
        seen = set()
        for name in names:
            if name not in index:
                raise CatalogError(f"Pool {mode!r} references unknown recipe {name!r}")
            if name in seen:
                raise CatalogError(f"Pool {mode!r} lists {name!r} more than once")
            seen.add(name)
    return index


_INDEX = validate_catalog()


def get_recipe(name: str):
    """Return the Recipe with this name, or None."""
    return _INDEX.get(name)


def get_pool(mode: str) -> list[Recipe]:
    """Return the recipes of a household mode's pool, in pool order."""
    if mode not in POOL_MEMBERS:
        raise ValueError(f"Unknown family mode: {mode!r}")
    return [_INDEX[name] for name in POOL_MEMBERS[mode]]
