"""JSON encoding of menus and plans stored in TEXT columns.

A stored menu is a tagged variant: the kind column says whether the JSON is a
full structured menu or a bare ingredient list (older rows, favourite
snapshots).  decode_menu_payload() dispatches on that tag and normalize()
upgrades either variant to a FullMenu, so the rest of the code only ever sees
FullMenu.
"""

import json
from dataclasses import asdict, dataclass, field

from kondate.db.models import (
    MAIN, DishItem, FullMenu, Ingredient, MenuItem, PlanData, ShoppingListItem,
)

STRUCTURED = "structured"
FLAT = "flat"


@dataclass
class StructuredMenu:
    menu: FullMenu
    kind: str = STRUCTURED

    def normalize(self, dish_name: str) -> FullMenu:
        return self.menu


@dataclass
class FlatIngredientList:
    ingredients: list = field(default_factory=list)  # list[Ingredient]
    kind: str = FLAT

    def normalize(self, dish_name: str) -> FullMenu:
        """A flat list becomes a single main course named after the dish."""
        return FullMenu(dishes=[DishItem(category=MAIN, name=dish_name, ingredients=list(self.ingredients))])


def ingredient_from_dict(data: dict) -> Ingredient:
    return Ingredient(name=data["name"], qty=data["qty"], unit=data["unit"])


def menu_from_dict(data: dict) -> FullMenu:
    return FullMenu(dishes=[
        DishItem(
            category=d["category"],
            name=d["name"],
            ingredients=[ingredient_from_dict(i) for i in d.get("ingredients", [])],
        )
        for d in data.get("dishes", [])
    ])


def encode_menu(menu: FullMenu) -> tuple[str, str]:
    """Return (kind, json) for a structured menu column pair."""
    return STRUCTURED, json.dumps(asdict(menu), ensure_ascii=False)


def decode_menu_payload(kind: str, raw: str):
    """Build the payload variant named by kind.  Raises ValueError on an unknown kind."""
    data = json.loads(raw)
    if kind == STRUCTURED:
        return StructuredMenu(menu=menu_from_dict(data))
    if kind == FLAT:
        return FlatIngredientList(ingredients=[ingredient_from_dict(i) for i in data])
    raise ValueError(f"Unknown menu payload kind: {kind!r}")


def decode_menu(kind: str, raw: str, dish_name: str) -> FullMenu:
    return decode_menu_payload(kind, raw).normalize(dish_name)


def menu_item_to_dict(item: MenuItem) -> dict:
    return {"day": item.day, "date": item.date, "dish": item.dish, "menu": asdict(item.menu)}


def menu_item_from_dict(data: dict) -> MenuItem:
    return MenuItem(
        day=data["day"],
        date=data.get("date"),
        dish=data["dish"],
        menu=menu_from_dict(data["menu"]),
    )


def plan_to_dict(plan: PlanData) -> dict:
    return {
        "menu": [menu_item_to_dict(m) for m in plan.menu],
        "shopping_list": [asdict(s) for s in plan.shopping_list],
    }


def plan_to_json(plan: PlanData) -> tuple[str, str]:
    """Return (menu_data, shopping_list) JSON strings for the weekly_menus row."""
    data = plan_to_dict(plan)
    return (
        json.dumps(data["menu"], ensure_ascii=False),
        json.dumps(data["shopping_list"], ensure_ascii=False),
    )


def plan_from_json(menu_data: str, shopping_list: str) -> PlanData:
    return PlanData(
        menu=[menu_item_from_dict(m) for m in json.loads(menu_data)],
        shopping_list=[ShoppingListItem(**s) for s in json.loads(shopping_list)],
    )
