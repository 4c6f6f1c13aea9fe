from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from scubarent.database import get_db
from scubarent.models.booking_equipment import AssignmentStatus
from scubarent.schemas.booking_equipment import (
    BookingEquipmentCreate, BookingEquipmentUpdate, BookingEquipmentResponse,
    BulkCreateRequest, BulkCreateResponse,
    CheckAvailabilityRequest, BulkCheckAvailabilityRequest, AvailabilityResponse,
    ReturnRequest, LostRequest, BulkReturnByIdsRequest, BulkReturnResponse,
)
from scubarent.schemas.pagination import Page
import scubarent.services.assignment_service as svc
import scubarent.services.availability_service as availability_svc
import scubarent.services.return_service as return_svc

router = APIRouter(prefix="/api/booking-equipment", tags=["booking-equipment"])


@router.get("", response_model=Page[BookingEquipmentResponse])
def list_assignments(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=200),
    basket_id: int | None = Query(None),
    booking_id: int | None = Query(None),
    equipment_item_id: int | None = Query(None),
    status: AssignmentStatus | None = Query(None, description="Pending, Checked Out, Returned, Lost"),
    db: Session = Depends(get_db),
):
    return svc.get_assignments(
        db, page=page, size=size, basket_id=basket_id, booking_id=booking_id,
        equipment_item_id=equipment_item_id, status=status,
    )


@router.post("", response_model=BookingEquipmentResponse, status_code=201)
def create_assignment(data: BookingEquipmentCreate, db: Session = Depends(get_db)):
    return svc.create_assignment(db, data)


@router.post("/bulk", response_model=BulkCreateResponse)
def create_assignments_bulk(data: BulkCreateRequest, db: Session = Depends(get_db)):
    return svc.create_assignments_bulk(db, data)


@router.post("/check-availability", response_model=AvailabilityResponse)
def check_availability(data: CheckAvailabilityRequest, db: Session = Depends(get_db)):
    return availability_svc.check_availability(db, data)


@router.post("/bulk-check-availability", response_model=list[AvailabilityResponse])
def bulk_check_availability(data: BulkCheckAvailabilityRequest, db: Session = Depends(get_db)):
    return availability_svc.bulk_check_availability(db, data)


@router.post("/bulk-return", response_model=BulkReturnResponse)
def bulk_return(data: BulkReturnByIdsRequest, db: Session = Depends(get_db)):
    return return_svc.bulk_return(db, data)


@router.get("/{assignment_id}", response_model=BookingEquipmentResponse)
def get_assignment(assignment_id: int, db: Session = Depends(get_db)):
    return svc.get_assignment(db, assignment_id)


@router.put("/{assignment_id}", response_model=BookingEquipmentResponse)
def update_assignment(assignment_id: int, data: BookingEquipmentUpdate, db: Session = Depends(get_db)):
    return svc.update_assignment(db, assignment_id, data)


@router.delete("/{assignment_id}", status_code=204)
def delete_assignment(assignment_id: int, db: Session = Depends(get_db)):
    svc.delete_assignment(db, assignment_id)
    return Response(status_code=204)


@router.put("/{assignment_id}/checkout", response_model=BookingEquipmentResponse)
def checkout_assignment(assignment_id: int, db: Session = Depends(get_db)):
    return svc.checkout_assignment(db, assignment_id)


@router.put("/{assignment_id}/return", response_model=BookingEquipmentResponse)
def return_assignment(assignment_id: int, data: ReturnRequest, db: Session = Depends(get_db)):
    return svc.return_assignment(db, assignment_id, data)


@router.put("/{assignment_id}/lost", response_model=BookingEquipmentResponse)
def mark_lost(assignment_id: int, data: LostRequest, db: Session = Depends(get_db)):
    return svc.mark_assignment_lost(db, assignment_id, data)
