from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from scubarent.database import get_db
from scubarent.exceptions import NotFound
from scubarent.models.equipment import ItemStatus
from scubarent.schemas.equipment import (
    EquipmentItemCreate, EquipmentItemUpdate, EquipmentItemResponse, HoldRequest, ItemAssignmentHistory,
)
from scubarent.schemas.pagination import Page
import scubarent.services.equipment_service as svc

router = APIRouter(prefix="/api/equipment-items", tags=["equipment-items"])


@router.get("", response_model=Page[EquipmentItemResponse])
def list_items(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=200),
    equipment_id: int | None = Query(None),
    status: ItemStatus | None = Query(None, description="Available, Rented, Maintenance, Lost, Retired"),
    search: str = Query(""),
    db: Session = Depends(get_db),
):
    return svc.get_items(db, page=page, size=size, equipment_id=equipment_id, status=status, search=search)


@router.post("", response_model=EquipmentItemResponse, status_code=201)
def create_item(data: EquipmentItemCreate, db: Session = Depends(get_db)):
    return svc.create_item(db, data)


@router.get("/by-code/{code}", response_model=EquipmentItemResponse)
def get_item_by_code(code: str, db: Session = Depends(get_db)):
    item = svc.get_item_by_code(db, code)
    if not item:
        raise NotFound("Položka vybavení nenalezena", inventory_code=code)
    return item


@router.get("/{item_id}", response_model=EquipmentItemResponse)
def get_item(item_id: int, db: Session = Depends(get_db)):
    return svc.get_item(db, item_id)


@router.put("/{item_id}", response_model=EquipmentItemResponse)
def update_item(item_id: int, data: EquipmentItemUpdate, db: Session = Depends(get_db)):
    return svc.update_item(db, item_id, data)


@router.delete("/{item_id}", response_model=EquipmentItemResponse)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    return svc.delete_item(db, item_id)


@router.put("/{item_id}/hold", response_model=EquipmentItemResponse)
def set_hold(item_id: int, data: HoldRequest, db: Session = Depends(get_db)):
    """Servis nebo vyřazení; ``hold_status: null`` blokaci zruší."""
    return svc.set_item_hold(db, item_id, data)


@router.get("/{item_id}/assignments", response_model=ItemAssignmentHistory)
def item_assignments(item_id: int, db: Session = Depends(get_db)):
    return svc.get_item_assignments(db, item_id)
