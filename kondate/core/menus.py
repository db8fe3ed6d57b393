"""Persisted menus — the weekly plan snapshot and the per-day calendar rows.

A generated plan is stored twice: once as a whole in weekly_menus (one row per
household per Monday-started week) and once per day in daily_menus (one row
per household per date).  Multi-row writes are not wrapped in a single
transaction; save_daily_menus() is an idempotent upsert that re-reads its
rows afterwards and raises PartialWriteError naming the dates that didn't land.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from kondate.core import history as history_core, inventory as inventory_core
from kondate.core.composer import all_ingredients
from kondate.db.database import connect
from kondate.db.models import DailyMenu, FullMenu, PlanData
from kondate.db.payloads import decode_menu, encode_menu, plan_from_json, plan_to_json
from kondate.errors import PartialWriteError, ValidationError

logger = logging.getLogger(__name__)


def week_start(for_date: date = None) -> date:
    """Returns the Monday of the week containing for_date."""
    if for_date is None:
        for_date = date.today()
    return for_date - timedelta(days=for_date.weekday())


# ── Weekly plan ──────────────────────────────────────────────────────────────

def save_weekly_plan(household_id: str, plan: PlanData, for_date: date = None) -> None:
    """Upsert the plan snapshot for the week containing for_date (default today)."""
    menu_data, shopping_list = plan_to_json(plan)
    with connect() as conn:
        conn.execute(
            """INSERT INTO weekly_menus (household_id, week_start, menu_data, shopping_list, updated_at)
               VALUES (?, ?, ?, ?, CURRENT_TIMESTAMP)
               ON CONFLICT(household_id, week_start) DO UPDATE SET
                 menu_data=excluded.menu_data, shopping_list=excluded.shopping_list,
                 updated_at=excluded.updated_at""",
            (household_id, week_start(for_date).isoformat(), menu_data, shopping_list),
        )
        conn.commit()


def load_weekly_plan(household_id: str, for_date: date = None) -> Optional[PlanData]:
    """Return the plan saved for the week containing for_date, or None if there is none."""
    with connect() as conn:
        row = conn.execute(
            "SELECT menu_data, shopping_list FROM weekly_menus WHERE household_id = ? AND week_start = ?",
            (household_id, week_start(for_date).isoformat()),
        ).fetchone()
    return plan_from_json(row["menu_data"], row["shopping_list"]) if row else None


# ── Daily menus ──────────────────────────────────────────────────────────────

def _row_to_daily(row) -> DailyMenu:
    return DailyMenu(
        id=row["id"],
        menu_date=row["menu_date"],
        dish=row["dish"],
        menu=decode_menu(row["menu_kind"], row["menu_json"], row["dish"]),
    )


def get_daily_menus(household_id: str, start: str = None, end: str = None) -> list[DailyMenu]:
    """Daily menus ordered by date, optionally limited to start..end inclusive."""
    query = "SELECT id, menu_date, dish, menu_kind, menu_json FROM daily_menus WHERE household_id = ?"
    params = [household_id]
    if start:
        query += " AND menu_date >= ?"
        params.append(start)
    if end:
        query += " AND menu_date <= ?"
        params.append(end)
    query += " ORDER BY menu_date"
    with connect() as conn:
        rows = conn.execute(query, params).fetchall()
        return [_row_to_daily(row) for row in rows]


def get_daily_menu(household_id: str, menu_id: int) -> Optional[DailyMenu]:
    with connect() as conn:
        row = conn.execute(
            "SELECT id, menu_date, dish, menu_kind, menu_json FROM daily_menus WHERE household_id = ? AND id = ?",
            (household_id, menu_id),
        ).fetchone()
        return _row_to_daily(row) if row else None


def _upsert_daily(conn, household_id: str, menu_date: str, dish: str, menu: FullMenu) -> None:
    kind, payload = encode_menu(menu)
    conn.execute(
        """INSERT INTO daily_menus (household_id, menu_date, dish, menu_kind, menu_json, updated_at)
           VALUES (?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
           ON CONFLICT(household_id, menu_date) DO UPDATE SET
             dish=excluded.dish, menu_kind=excluded.menu_kind,
             menu_json=excluded.menu_json, updated_at=excluded.updated_at""",
        (household_id, menu_date, dish, kind, payload),
    )


def save_daily_menus(household_id: str, plan: PlanData) -> list[DailyMenu]:
    """Write one row per dated plan day, then verify by re-reading.

    Each day is committed on its own, so re-running after a failure is safe.
    Raises PartialWriteError if any day doesn't read back with its dish.
    """
    dated = [m for m in plan.menu if m.date]
    if not dated:
        return []
    with connect() as conn:
        for item in dated:
            _upsert_daily(conn, household_id, item.date, item.dish, item.menu)
            conn.commit()

    stored = {d.menu_date: d for d in get_daily_menus(household_id, dated[0].date, dated[-1].date)}
    missing = [m.date for m in dated if m.date not in stored or stored[m.date].dish != m.dish]
    if missing:
        logger.error("Daily menu write incomplete for household %s: %s", household_id, missing)
        raise PartialWriteError(missing)
    return [stored[m.date] for m in dated]


def update_daily_menu(household_id: str, menu_id: int, dish: str, menu: FullMenu) -> None:
    kind, payload = encode_menu(menu)
    with connect() as conn:
        conn.execute(
            """UPDATE daily_menus SET dish=?, menu_kind=?, menu_json=?, updated_at=CURRENT_TIMESTAMP
               WHERE household_id=? AND id=?""",
            (dish, kind, payload, household_id, menu_id),
        )
        conn.commit()


def swap_daily_menus(household_id: str, first_id: int, second_id: int) -> None:
    """Exchange dish and menu between two calendar days."""
    first = get_daily_menu(household_id, first_id)
    second = get_daily_menu(household_id, second_id)
    if first is None or second is None:
        raise ValidationError("Both days must exist to swap them")
    update_daily_menu(household_id, first.id, second.dish, second.menu)
    update_daily_menu(household_id, second.id, first.dish, first.menu)


def mark_cooked(household_id: str, menu_id: int) -> bool:
    """Record a calendar day's dish as cooked and deduct its ingredients from inventory.

    Returns False (and deducts nothing) when the dish was already recorded
    for that date.
    """
    daily = get_daily_menu(household_id, menu_id)
    if daily is None:
        raise ValidationError(f"No daily menu with id {menu_id}")
    if not history_core.record_cooked(household_id, daily.dish, daily.menu_date):
        return False
    inventory_core.consume(household_id, all_ingredients(daily.menu))
    return True
