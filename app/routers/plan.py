import random
from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException

from app.dependencies import current_household
from kondate.config import get_settings
from kondate.core import (
    family as family_core, favorites as favorites_core, history as history_core,
    inventory as inventory_core, menus as menus_core, planner,
)
from kondate.db.payloads import plan_to_dict
from kondate.errors import ValidationError

router = APIRouter(prefix="/plan", tags=["plan"])


def _parse_date(value: str, label: str) -> date:
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError):
        raise ValidationError(f"{label} must be an ISO date (YYYY-MM-DD)")


def _rng(seed: Optional[int]):
    return random.Random(seed) if seed is not None else None


def _save(household: str, plan) -> dict:
    """Persist a plan (weekly snapshot, then one row per day) and return it as JSON."""
    menus_core.save_weekly_plan(household, plan)
    menus_core.save_daily_menus(household, plan)
    return plan_to_dict(plan)


def _load_or_404(household: str):
    plan = menus_core.load_weekly_plan(household)
    if plan is None:
        raise HTTPException(status_code=404, detail="No plan for this week")
    return plan


# ── Generate ───────────────────────────────────────────────────────────────────

@router.post("/generate")
def plan_generate(
    start_date: str = Form(""),
    end_date: str = Form(""),
    seed: Optional[int] = Form(None),
    household: str = Depends(current_household),
):
    start = _parse_date(start_date, "Start date") if start_date else date.today()
    end = _parse_date(end_date, "End date") if end_date else start + timedelta(days=6)
    plan = planner.generate_plan(
        get_settings(household),
        family_core.get_all(household),
        inventory_core.get_all(household),
        start,
        end,
        _rng(seed),
    )
    return _save(household, plan)


@router.get("")
def plan_current(household: str = Depends(current_household)):
    plan = _load_or_404(household)
    # inventory may have changed since the plan was saved
    return plan_to_dict(planner.recompute(plan, inventory_core.get_all(household)))


# ── Edit ───────────────────────────────────────────────────────────────────────

@router.post("/days/{index}/refresh")
def plan_refresh_day(index: int, seed: Optional[int] = Form(None), household: str = Depends(current_household)):
    plan = _load_or_404(household)
    updated = planner.refresh_day(
        plan,
        index,
        get_settings(household),
        family_core.get_all(household),
        inventory_core.get_all(household),
        history_core.get_all(household),
        favorites_core.get_names(household),
        rng=_rng(seed),
    )
    return _save(household, updated)


@router.post("/swap")
def plan_swap(first: int = Form(...), second: int = Form(...), household: str = Depends(current_household)):
    plan = _load_or_404(household)
    updated = planner.swap_days(plan, first, second, inventory_core.get_all(household))
    return _save(household, updated)
