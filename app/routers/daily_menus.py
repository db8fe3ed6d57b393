import random
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException

from app.dependencies import current_household
from kondate.config import get_settings
from kondate.core import (
    family as family_core, favorites as favorites_core, history as history_core,
    menus as menus_core, planner,
)

router = APIRouter(prefix="/daily-menus", tags=["daily-menus"])


def _get_or_404(household: str, menu_id: int):
    daily = menus_core.get_daily_menu(household, menu_id)
    if daily is None:
        raise HTTPException(status_code=404, detail="Daily menu not found")
    return daily


@router.get("")
def daily_list(start: str = "", end: str = "", household: str = Depends(current_household)):
    return [asdict(d) for d in menus_core.get_daily_menus(household, start or None, end or None)]


@router.post("/swap")
def daily_swap(first_id: int = Form(...), second_id: int = Form(...),
               household: str = Depends(current_household)):
    menus_core.swap_daily_menus(household, first_id, second_id)
    return [asdict(_get_or_404(household, first_id)), asdict(_get_or_404(household, second_id))]


@router.post("/{menu_id}/refresh")
def daily_refresh(menu_id: int, seed: Optional[int] = Form(None), household: str = Depends(current_household)):
    daily = _get_or_404(household, menu_id)
    dish, menu = planner.reselect_dish(
        get_settings(household),
        family_core.get_all(household),
        history_core.get_all(household),
        favorites_core.get_names(household),
        daily.dish,
        rng=random.Random(seed) if seed is not None else None,
    )
    menus_core.update_daily_menu(household, menu_id, dish, menu)
    return asdict(_get_or_404(household, menu_id))


@router.post("/{menu_id}/cooked")
def daily_cooked(menu_id: int, household: str = Depends(current_household)):
    daily = _get_or_404(household, menu_id)
    recorded = menus_core.mark_cooked(household, menu_id)
    return {"dish": daily.dish, "cooked_date": daily.menu_date, "recorded": recorded}
