"""Shopping list generation — aggregate menu ingredients, subtract inventory, track checks.

aggregate() sums ingredient quantities across menus grouped by the exact
(name, unit) pair; no unit conversion is ever attempted.  reconcile()
subtracts on-hand inventory, clamps at zero and drops lines that are already
covered.  The list is never stored on its own: callers recompute it whenever
the menus, the inventory or "today" changes.

Checked-off items are kept per household per ISO week.  Checking an item
means it was bought, so its quantity is added to the inventory.
"""

import math
from collections import defaultdict
from datetime import date
from typing import Optional

from kondate.core import inventory as inventory_core
from kondate.core.composer import all_ingredients, course_ingredients
from kondate.db.database import connect
from kondate.db.models import InventoryItem, ShoppingListItem


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def aggregate(menus) -> dict[tuple[str, str], int]:
    """Sum ingredient demand over FullMenus.  Returns {(name, unit): qty}."""
    totals: dict[tuple[str, str], float] = defaultdict(float)
    for menu in menus:
        for ing in all_ingredients(menu):
            totals[(ing.name, ing.unit)] += ing.qty
    return {key: _round_half_up(qty) for key, qty in totals.items()}


def reconcile(demand: dict[tuple[str, str], int], inventory: list[InventoryItem]) -> list[ShoppingListItem]:
    """Net demand against inventory.  Only lines with something left to buy are returned.

    Stock may be fractional; the shortfall is rounded up to a whole quantity.
    """
    on_hand = {(item.name, item.unit): item.qty for item in inventory}
    items = []
    for (name, unit), needed in demand.items():
        stock = on_hand.get((name, unit))
        remaining = needed if stock is None else max(0, math.ceil(needed - stock))
        if remaining > 0:
            items.append(ShoppingListItem(name=name, qty=remaining, unit=unit))
    return items


def build_shopping_list(menu_items, inventory: list[InventoryItem]) -> list[ShoppingListItem]:
    """Shopping list for a plan's MenuItems."""
    return reconcile(aggregate(m.menu for m in menu_items), inventory)


def shopping_list_from_daily_menus(daily_menus, inventory: list[InventoryItem],
                                   today: Optional[date] = None) -> list[ShoppingListItem]:
    """Shopping list for persisted DailyMenus, counting only today and later."""
    today_str = (today or date.today()).isoformat()
    upcoming = [m.menu for m in daily_menus if m.menu_date >= today_str]
    return reconcile(aggregate(upcoming), inventory)


def ingredient_breakdown(menu_items, name: str, unit: str) -> list[dict]:
    """Where one shopping line comes from: one entry per day and course that uses it."""
    sources = []
    for item in menu_items:
        for category, dish_name, ing in course_ingredients(item.menu):
            if ing.name == name and ing.unit == unit:
                sources.append({
                    "day": item.day,
                    "date": item.date,
                    "category": category,
                    "dish": dish_name,
                    "qty": ing.qty,
                })
    return sources


def format_shopping_list(items: list[ShoppingListItem], checked: set = frozenset()) -> str:
    """Format the shopping list as plain text for export/clipboard.

    checked holds (name, unit) pairs; those lines go last.
    """
    if not items:
        return "No items needed."
    ordered = sorted(items, key=lambda i: (i.name, i.unit) in checked)
    lines = []
    for item in ordered:
        box = "[x]" if (item.name, item.unit) in checked else "[ ]"
        lines.append(f"{box} {item.name} — {item.qty:g} {item.unit}".rstrip())
    return "\n".join(lines)


# ── Checks ───────────────────────────────────────────────────────────────────

def week_identifier(for_date: Optional[date] = None) -> str:
    """ISO week label such as 2026-W42."""
    year, week, _ = (for_date or date.today()).isocalendar()
    return f"{year}-W{week:02d}"


def get_checked(household_id: str, week_id: str) -> set[tuple[str, str]]:
    """(name, unit) pairs checked off in the given week."""
    with connect() as conn:
        rows = conn.execute(
            """SELECT item_name, unit FROM shopping_list_checks
               WHERE household_id = ? AND week_identifier = ? AND is_checked = 1""",
            (household_id, week_id),
        ).fetchall()
        return {(row["item_name"], row["unit"]) for row in rows}


def set_checked(household_id: str, week_id: str, item: ShoppingListItem, checked: bool) -> None:
    """Record the check state of an item.  Checking it adds its quantity to inventory."""
    with connect() as conn:
        conn.execute(
            """INSERT INTO shopping_list_checks (household_id, week_identifier, item_name, unit, is_checked, updated_at)
               VALUES (?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
               ON CONFLICT(household_id, week_identifier, item_name, unit)
               DO UPDATE SET is_checked = excluded.is_checked, updated_at = excluded.updated_at""",
            (household_id, week_id, item.name, item.unit, int(checked)),
        )
        conn.commit()
    if checked:
        inventory_core.add_stock(household_id, InventoryItem(name=item.name, unit=item.unit, qty=item.qty))
