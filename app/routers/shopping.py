from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import PlainTextResponse

from app.dependencies import current_household
from kondate.core import inventory as inventory_core, menus as menus_core
from kondate.db.models import ShoppingListItem
from kondate.core.shopping_list import (
    format_shopping_list, get_checked, ingredient_breakdown, set_checked,
    shopping_list_from_daily_menus, week_identifier,
)

router = APIRouter(prefix="/shopping", tags=["shopping"])


def _current_list(household: str):
    """Shopping list for every calendar day from today on, net of inventory."""
    today = date.today()
    return shopping_list_from_daily_menus(
        menus_core.get_daily_menus(household, start=today.isoformat()),
        inventory_core.get_all(household),
        today,
    )


@router.get("")
def shopping_list(household: str = Depends(current_household)):
    week_id = week_identifier()
    checked = get_checked(household, week_id)
    return {
        "week": week_id,
        "items": [{**asdict(item), "checked": (item.name, item.unit) in checked} for item in _current_list(household)],
    }


@router.get("/export")
def shopping_export(household: str = Depends(current_household)):
    text = format_shopping_list(_current_list(household), get_checked(household, week_identifier()))
    return PlainTextResponse(text, headers={
        "Content-Disposition": "attachment; filename=shopping_list.txt",
    })


@router.get("/breakdown")
def shopping_breakdown(name: str, unit: str, household: str = Depends(current_household)):
    """Which days and courses of the current plan use an ingredient."""
    plan = menus_core.load_weekly_plan(household)
    return ingredient_breakdown(plan.menu if plan else [], name, unit)


@router.post("/check")
def shopping_check(
    name: str = Form(...),
    unit: str = Form(...),
    checked: bool = Form(True),
    household: str = Depends(current_household),
):
    items = {(item.name, item.unit): item for item in _current_list(household)}
    item = items.get((name, unit))
    if item is None:
        if checked:
            raise HTTPException(status_code=404, detail="Item is not on the shopping list")
        # once bought, the line is usually covered by inventory and drops off the list
        item = ShoppingListItem(name=name, qty=0, unit=unit)
    set_checked(household, week_identifier(), item, checked)
    return {"name": name, "unit": unit, "checked": checked}
