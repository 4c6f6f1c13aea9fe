from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from scubarent.database import get_db
from scubarent.schemas.pagination import Page
from scubarent.schemas.service_history import (
    ServiceRecordCreate, ServiceRecordUpdate, ServiceRecordResponse, BulkServiceRequest, BulkServiceResponse,
)
import scubarent.services.service_history_service as svc

router = APIRouter(prefix="/api/equipment-items", tags=["service-history"])


@router.post("/bulk-service", response_model=BulkServiceResponse, status_code=201)
def bulk_service(data: BulkServiceRequest, db: Session = Depends(get_db)):
    return svc.bulk_create_service_records(db, data)


@router.get("/{item_id}/service-history", response_model=Page[ServiceRecordResponse])
def list_service_history(
    item_id: int,
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=200),
    db: Session = Depends(get_db),
):
    return svc.get_service_history(db, item_id, page=page, size=size)


@router.post("/{item_id}/service-history", response_model=ServiceRecordResponse, status_code=201)
def create_service_record(item_id: int, data: ServiceRecordCreate, db: Session = Depends(get_db)):
    """Zapíše servis; ``release_hold: true`` zároveň zruší blokaci Maintenance."""
    return svc.create_service_record(db, item_id, data)


@router.get("/{item_id}/service-history/{record_id}", response_model=ServiceRecordResponse)
def get_service_record(item_id: int, record_id: int, db: Session = Depends(get_db)):
    return svc.get_service_record(db, item_id, record_id)


@router.put("/{item_id}/service-history/{record_id}", response_model=ServiceRecordResponse)
def update_service_record(item_id: int, record_id: int, data: ServiceRecordUpdate, db: Session = Depends(get_db)):
    return svc.update_service_record(db, item_id, record_id, data)


@router.delete("/{item_id}/service-history/{record_id}", status_code=204)
def delete_service_record(item_id: int, record_id: int, db: Session = Depends(get_db)):
    svc.delete_service_record(db, item_id, record_id)
    return Response(status_code=204)
