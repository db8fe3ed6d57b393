from dataclasses import asdict

from fastapi import APIRouter, Depends, Form

from app.dependencies import current_household
from kondate.core import inventory as inventory_core
from kondate.db.models import InventoryItem

router = APIRouter(prefix="/inventory", tags=["inventory"])


def _items(household: str) -> list[dict]:
    return [asdict(i) for i in inventory_core.get_all(household)]


@router.get("")
def inventory_list(household: str = Depends(current_household)):
    return _items(household)


@router.post("")
def inventory_add(
    name: str = Form(...),
    unit: str = Form(...),
    qty: float = Form(...),
    household: str = Depends(current_household),
):
    inventory_core.add_stock(household, InventoryItem(name=name.strip(), unit=unit.strip(), qty=qty))
    return _items(household)


@router.post("/adjust")
def inventory_adjust(
    name: str = Form(...),
    unit: str = Form(...),
    delta: float = Form(...),
    household: str = Depends(current_household),
):
    inventory_core.adjust(household, name, unit, delta)
    return _items(household)


@router.delete("")
def inventory_delete(name: str, unit: str, household: str = Depends(current_household)):
    inventory_core.delete(household, name, unit)
    return _items(household)
