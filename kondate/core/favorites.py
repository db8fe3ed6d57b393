"""Favourite dishes — a set of dish names per household."""

from kondate.db.database import connect
from kondate.errors import ValidationError


def get_names(household_id: str) -> set[str]:
    with connect() as conn:
        rows = conn.execute(
            "SELECT dish_name FROM favorite_dishes WHERE household_id = ? ORDER BY created_at DESC",
            (household_id,),
        ).fetchall()
        return {row["dish_name"] for row in rows}


def is_favorite(household_id: str, dish_name: str) -> bool:
    with connect() as conn:
        row = conn.execute(
            "SELECT 1 FROM favorite_dishes WHERE household_id = ? AND dish_name = ?",
            (household_id, dish_name),
        ).fetchone()
        return row is not None


def add(household_id: str, dish_name: str) -> None:
    """Mark a dish as favourite.  Adding an existing favourite is a no-op."""
    if not dish_name or not dish_name.strip():
        raise ValidationError("Dish name is required")
    with connect() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO favorite_dishes (household_id, dish_name) VALUES (?, ?)",
            (household_id, dish_name),
        )
        conn.commit()


def remove(household_id: str, dish_name: str) -> None:
    with connect() as conn:
        conn.execute(
            "DELETE FROM favorite_dishes WHERE household_id = ? AND dish_name = ?",
            (household_id, dish_name),
        )
        conn.commit()


def toggle(household_id: str, dish_name: str) -> bool:
    """Flip favourite membership.  Returns True if the dish is now a favourite."""
    if is_favorite(household_id, dish_name):
        remove(household_id, dish_name)
        return False
    add(household_id, dish_name)
    return True
