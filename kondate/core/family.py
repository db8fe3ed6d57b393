"""Family member management — CRUD for the family_members table.

The number of members is the household size used to scale recipes, and each
member's likes/dislikes feed the recipe scorer.
"""

from typing import Optional

from kondate.db.database import connect
from kondate.db.models import FamilyMember
from kondate.errors import ValidationError

_COLUMNS = "id, name, birth_date, gender, appetite_level, likes, dislikes"


def _validate(member: FamilyMember) -> None:
    if not member.name or not member.name.strip():
        raise ValidationError("Member name is required")
    if not 1 <= member.appetite_level <= 5:
        raise ValidationError("Appetite level must be between 1 and 5")


def _row_to_member(row) -> FamilyMember:
    member = FamilyMember(**dict(row))
    member.likes = member.likes or ""
    member.dislikes = member.dislikes or ""
    return member


def get_all(household_id: str) -> list[FamilyMember]:
    """Return all members in the order they were added."""
    with connect() as conn:
        rows = conn.execute(
            f"SELECT {_COLUMNS} FROM family_members WHERE household_id = ? ORDER BY created_at, id",
            (household_id,),
        ).fetchall()
        return [_row_to_member(row) for row in rows]


def get(household_id: str, member_id: int) -> Optional[FamilyMember]:
    """Return a single member by ID, or None if not found."""
    with connect() as conn:
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM family_members WHERE household_id = ? AND id = ?",
            (household_id, member_id),
        ).fetchone()
        return _row_to_member(row) if row else None


def add(household_id: str, member: FamilyMember) -> int:
    """Insert a new member and return its ID."""
    _validate(member)
    with connect() as conn:
        cursor = conn.execute(
            """INSERT INTO family_members
               (household_id, name, birth_date, gender, appetite_level, likes, dislikes)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (household_id, member.name.strip(), member.birth_date, member.gender,
             member.appetite_level, member.likes, member.dislikes),
        )
        conn.commit()
        return cursor.lastrowid


def update(household_id: str, member: FamilyMember) -> None:
    """Update an existing member by its ID."""
    _validate(member)
    with connect() as conn:
        conn.execute(
            """UPDATE family_members SET name=?, birth_date=?, gender=?, appetite_level=?,
               likes=?, dislikes=? WHERE household_id=? AND id=?""",
            (member.name.strip(), member.birth_date, member.gender, member.appetite_level,
             member.likes, member.dislikes, household_id, member.id),
        )
        conn.commit()


def delete(household_id: str, member_id: int) -> None:
    """Delete a member by ID."""
    with connect() as conn:
        conn.execute(
            "DELETE FROM family_members WHERE household_id = ? AND id = ?",
            (household_id, member_id),
        )
        conn.commit()
