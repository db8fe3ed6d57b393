from dataclasses import asdict

from fastapi import APIRouter, Body, Depends

from app.dependencies import current_household
from kondate.config import get_settings, save_settings
from kondate.core.catalog import CUISINE_TYPES, FAMILY_MODES
from kondate.db.models import HouseholdSettings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
def settings_get(household: str = Depends(current_household)):
    return {
        **asdict(get_settings(household)),
        "family_modes": list(FAMILY_MODES),
        "cuisine_types": list(CUISINE_TYPES),
    }


@router.put("")
def settings_save(
    family_mode: str = Body("normal"),
    preferred_types: list[str] = Body(None),
    household: str = Depends(current_household),
):
    settings = HouseholdSettings(family_mode=family_mode, preferred_types=preferred_types or [])
    save_settings(household, settings)
    return asdict(settings)
