"""Inventory management — on-hand stock keyed by (name, unit).

Quantities never go negative and a row is removed as soon as its quantity
reaches zero, so "present in the table" always means "some on hand".
"""

from typing import Optional

from kondate.db.database import connect
from kondate.db.models import InventoryItem
from kondate.errors import ValidationError


def _row_to_item(row) -> InventoryItem:
    return InventoryItem(name=row["name"], unit=row["unit"], qty=row["qty"])


def _validate(name: str, unit: str) -> None:
    if not name or not name.strip():
        raise ValidationError("Item name is required")
    if unit is None or not unit.strip():
        raise ValidationError("Unit is required")


def get_all(household_id: str) -> list[InventoryItem]:
    """Return all inventory items sorted by name."""
    with connect() as conn:
        rows = conn.execute(
            "SELECT name, unit, qty FROM inventory WHERE household_id = ? ORDER BY name, unit",
            (household_id,),
        ).fetchall()
        return [_row_to_item(row) for row in rows]


def get(household_id: str, name: str, unit: str) -> Optional[InventoryItem]:
    """Return the item with this exact name and unit, or None if not found."""
    with connect() as conn:
        row = conn.execute(
            "SELECT name, unit, qty FROM inventory WHERE household_id = ? AND name = ? AND unit = ?",
            (household_id, name, unit),
        ).fetchone()
        return _row_to_item(row) if row else None


def set_quantity(household_id: str, name: str, unit: str, qty: float) -> None:
    """Upsert the on-hand quantity.  A quantity of zero or less deletes the row."""
    _validate(name, unit)
    with connect() as conn:
        if qty <= 0:
            conn.execute(
                "DELETE FROM inventory WHERE household_id = ? AND name = ? AND unit = ?",
                (household_id, name, unit),
            )
        else:
            conn.execute(
                """INSERT INTO inventory (household_id, name, unit, qty, updated_at)
                   VALUES (?, ?, ?, ?, CURRENT_TIMESTAMP)
                   ON CONFLICT(household_id, name, unit)
                   DO UPDATE SET qty = excluded.qty, updated_at = excluded.updated_at""",
                (household_id, name, unit, qty),
            )
        conn.commit()


def add_stock(household_id: str, item: InventoryItem) -> InventoryItem:
    """Add item.qty to whatever is on hand for (name, unit).  Returns the new line."""
    if item.qty <= 0:
        raise ValidationError("Quantity must be greater than 0")
    existing = get(household_id, item.name, item.unit)
    total = item.qty + (existing.qty if existing else 0)
    set_quantity(household_id, item.name, item.unit, total)
    return InventoryItem(name=item.name, unit=item.unit, qty=total)


def adjust(household_id: str, name: str, unit: str, delta: float) -> Optional[InventoryItem]:
    """Change the quantity by delta, clamped at zero.

    Returns the updated item, or None if it ran out (and was deleted) or
    never existed.
    """
    existing = get(household_id, name, unit)
    if existing is None:
        return None
    new_qty = max(0, existing.qty + delta)
    set_quantity(household_id, name, unit, new_qty)
    return InventoryItem(name=name, unit=unit, qty=new_qty) if new_qty > 0 else None


def delete(household_id: str, name: str, unit: str) -> None:
    """Delete an inventory line."""
    with connect() as conn:
        conn.execute(
            "DELETE FROM inventory WHERE household_id = ? AND name = ? AND unit = ?",
            (household_id, name, unit),
        )
        conn.commit()


def consume(household_id: str, ingredients) -> None:
    """Deduct cooked ingredients from stock.  Lines not in stock are ignored."""
    for ing in ingredients:
        adjust(household_id, ing.name, ing.unit, -ing.qty)
