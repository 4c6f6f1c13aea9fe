from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from scubarent.database import get_db
from scubarent.schemas.equipment import EquipmentCreate, EquipmentUpdate, EquipmentResponse
from scubarent.schemas.pagination import Page
import scubarent.services.equipment_service as svc

router = APIRouter(prefix="/api/equipment", tags=["equipment"])


@router.get("", response_model=Page[EquipmentResponse])
def list_equipment(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=200),
    category: str = Query(""),
    db: Session = Depends(get_db),
):
    return svc.get_equipment_types(db, page=page, size=size, category=category)


@router.post("", response_model=EquipmentResponse, status_code=201)
def create_equipment(data: EquipmentCreate, db: Session = Depends(get_db)):
    return svc.create_equipment(db, data)


@router.get("/{equipment_id}", response_model=EquipmentResponse)
def get_equipment(equipment_id: int, db: Session = Depends(get_db)):
    return svc.get_equipment(db, equipment_id)


@router.put("/{equipment_id}", response_model=EquipmentResponse)
def update_equipment(equipment_id: int, data: EquipmentUpdate, db: Session = Depends(get_db)):
    return svc.update_equipment(db, equipment_id, data)


@router.delete("/{equipment_id}", response_model=EquipmentResponse)
def delete_equipment(equipment_id: int, db: Session = Depends(get_db)):
    return svc.delete_equipment(db, equipment_id)
