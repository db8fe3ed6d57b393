"""Dataclass models for menu planning entities.

Most classes map 1:1 to a database table; Ingredient, DishItem, FullMenu,
MenuItem and PlanData are stored as JSON inside menu rows.  These are plain
data containers with no business logic.
"""

from dataclasses import dataclass, field
from typing import Optional

# Course categories of a DishItem.  Mutually exclusive labels, not a hierarchy.
STAPLE = "staple"
MAIN = "main"
SIDE = "side"
SOUP = "soup"


@dataclass
class Ingredient:
    """A single ingredient line, e.g. 玉ねぎ 2 個.

    Unit is free-form; two lines are interchangeable only when both name and
    unit match exactly.
    """

    name: str
    qty: float
    unit: str


@dataclass
class DishItem:
    """One course of a menu."""

    category: str  # staple, main, side, soup
    name: str
    ingredients: list = field(default_factory=list)  # list[Ingredient]


@dataclass
class FullMenu:
    """All courses served on one day, in serving order."""

    dishes: list = field(default_factory=list)  # list[DishItem]


@dataclass
class MenuItem:
    """One planned day within a plan."""

    day: str  # weekday label, e.g. 月曜日
    dish: str  # name of the main dish
    menu: FullMenu
    date: Optional[str] = None  # ISO YYYY-MM-DD


@dataclass
class ShoppingListItem:
    name: str
    qty: int
    unit: str


@dataclass
class PlanData:
    """A generated plan.  shopping_list is always derived from menu + inventory."""

    menu: list = field(default_factory=list)  # list[MenuItem]
    shopping_list: list = field(default_factory=list)  # list[ShoppingListItem]


@dataclass
class InventoryItem:
    """On-hand stock, keyed by (name, unit).  Rows are deleted when qty reaches 0."""

    name: str
    unit: str
    qty: float


@dataclass
class FamilyMember:
    id: Optional[int]
    name: str
    birth_date: Optional[str] = None  # ISO YYYY-MM-DD
    gender: Optional[str] = None
    appetite_level: int = 3  # 1 (light) .. 5 (big eater)
    likes: str = ""
    dislikes: str = ""


@dataclass
class HouseholdSettings:
    """Per-household preferences.

    family_mode is one of 'normal', 'diet' (calorie-conscious) or 'muscle'
    (muscle-building) and selects the recipe pool.
    """

    family_mode: str = "normal"
    preferred_types: list = field(default_factory=list)  # list[str] of cuisine tags


@dataclass
class CookingHistoryRecord:
    """A dish cooked on a given date, optionally rated.

    Ratings are 1-5.  overall_score and rank are derived from the ratings by
    core/history.py and are None for a dish that was marked cooked but not rated.
    """

    dish_name: str
    cooked_date: str  # ISO YYYY-MM-DD
    id: Optional[int] = None
    taste_rating: Optional[int] = None
    time_rating: Optional[int] = None
    repeat_desire: Optional[int] = None
    overall_score: Optional[float] = None
    rank: Optional[str] = None  # A, B, C, D
    notes: str = ""


@dataclass
class DailyMenu:
    """A persisted day of the calendar: one row per household per date."""

    id: Optional[int]
    menu_date: str  # ISO YYYY-MM-DD
    dish: str
    menu: FullMenu
