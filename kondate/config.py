"""Household settings storage backed by the household_settings table.

Fields:
    family_mode      — 'normal', 'diet' or 'muscle'; selects the recipe pool.
    preferred_types  — cuisine tags (see core/catalog.CUISINE_TYPES), stored as JSON.
"""

import json

from kondate.core.catalog import CUISINE_TYPES, FAMILY_MODES
from kondate.db.database import connect
from kondate.db.models import HouseholdSettings
from kondate.errors import ValidationError


def get_settings(household_id: str) -> HouseholdSettings:
    """Return the household's settings, or defaults if none were saved yet."""
    with connect() as conn:
        row = conn.execute(
            "SELECT family_mode, preferred_types FROM household_settings WHERE household_id = ?",
            (household_id,),
        ).fetchone()
    if not row:
        return HouseholdSettings()
    return HouseholdSettings(
        family_mode=row["family_mode"] or "normal",
        preferred_types=json.loads(row["preferred_types"] or "[]"),
    )


def save_settings(household_id: str, settings: HouseholdSettings) -> None:
    """Validate and upsert the household's settings."""
    if settings.family_mode not in FAMILY_MODES:
        raise ValidationError(f"Family mode must be one of {', '.join(FAMILY_MODES)}")
    unknown = [t for t in settings.preferred_types if t not in CUISINE_TYPES]
    if unknown:
        raise ValidationError(f"Unknown cuisine types: {', '.join(unknown)}")
    with connect() as conn:
        conn.execute(
            """INSERT INTO household_settings (household_id, family_mode, preferred_types, updated_at)
               VALUES (?, ?, ?, CURRENT_TIMESTAMP)
               ON CONFLICT(household_id) DO UPDATE SET family_mode=excluded.family_mode,
               preferred_types=excluded.preferred_types, updated_at=excluded.updated_at""",
            (household_id, settings.family_mode, json.dumps(list(settings.preferred_types))),
        )
        conn.commit()
