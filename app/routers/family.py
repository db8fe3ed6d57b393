from dataclasses import asdict

from fastapi import APIRouter, Depends, Form, HTTPException

from app.dependencies import current_household
from kondate.core import family as family_core
from kondate.db.models import FamilyMember

router = APIRouter(prefix="/family", tags=["family"])


def _members(household: str) -> list[dict]:
    return [asdict(m) for m in family_core.get_all(household)]


@router.get("")
def family_list(household: str = Depends(current_household)):
    return _members(household)


@router.post("")
def family_add(
    name: str = Form(...),
    birth_date: str = Form(""),
    gender: str = Form(""),
    appetite_level: int = Form(3),
    likes: str = Form(""),
    dislikes: str = Form(""),
    household: str = Depends(current_household),
):
    member = FamilyMember(
        id=None,
        name=name,
        birth_date=birth_date or None,
        gender=gender or None,
        appetite_level=appetite_level,
        likes=likes.strip(),
        dislikes=dislikes.strip(),
    )
    family_core.add(household, member)
    return _members(household)


@router.put("/{member_id}")
def family_edit(
    member_id: int,
    name: str = Form(...),
    birth_date: str = Form(""),
    gender: str = Form(""),
    appetite_level: int = Form(3),
    likes: str = Form(""),
    dislikes: str = Form(""),
    household: str = Depends(current_household),
):
    member = family_core.get(household, member_id)
    if member is None:
        raise HTTPException(status_code=404, detail="Member not found")
    member.name = name
    member.birth_date = birth_date or None
    member.gender = gender or None
    member.appetite_level = appetite_level
    member.likes = likes.strip()
    member.dislikes = dislikes.strip()
    family_core.update(household, member)
    return _members(household)


@router.delete("/{member_id}")
def family_delete(member_id: int, household: str = Depends(current_household)):
    family_core.delete(household, member_id)
    return _members(household)
