from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, Form

from app.dependencies import current_household
from kondate.core import favorites as favorites_core, history as history_core

router = APIRouter(tags=["history"])


# ── Cooking history ──────────────────────────────────────────────────────────

@router.get("/history")
def history_list(start: str = "", end: str = "", household: str = Depends(current_household)):
    if start and end:
        records = history_core.get_in_range(household, start, end)
    else:
        records = history_core.get_all(household)
    return [asdict(r) for r in records]


@router.post("/history/rate")
def history_rate(
    dish_name: str = Form(...),
    cooked_date: str = Form(""),
    taste_rating: int = Form(...),
    time_rating: int = Form(...),
    repeat_desire: int = Form(...),
    notes: str = Form(""),
    household: str = Depends(current_household),
):
    record = history_core.rate(
        household,
        dish_name.strip(),
        cooked_date or date.today().isoformat(),
        taste_rating,
        time_rating,
        repeat_desire,
        notes,
    )
    return asdict(record)


@router.get("/history/rank/{rank}")
def history_by_rank(rank: str, household: str = Depends(current_household)):
    favorites = favorites_core.get_names(household)
    return [
        {**asdict(r), "favorite": r.dish_name in favorites}
        for r in history_core.dishes_by_rank(household, rank.upper())
    ]


# ── Favourites ───────────────────────────────────────────────────────────────

@router.get("/favorites")
def favorites_list(household: str = Depends(current_household)):
    return sorted(favorites_core.get_names(household))


@router.post("/favorites/toggle")
def favorites_toggle(dish_name: str = Form(...), household: str = Depends(current_household)):
    return {"dish_name": dish_name, "favorite": favorites_core.toggle(household, dish_name.strip())}
