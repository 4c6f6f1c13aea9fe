from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from scubarent.database import get_db
from scubarent.schemas.customer import CustomerCreate, CustomerResponse, BookingCreate, BookingResponse
from scubarent.schemas.pagination import Page
import scubarent.services.customer_service as svc

router = APIRouter(prefix="/api", tags=["customers"])


@router.get("/customers", response_model=Page[CustomerResponse])
def list_customers(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=200),
    search: str = Query(""),
    db: Session = Depends(get_db),
):
    return svc.get_customers(db, page=page, size=size, search=search)


@router.post("/customers", response_model=CustomerResponse, status_code=201)
def create_customer(data: CustomerCreate, db: Session = Depends(get_db)):
    return svc.create_customer(db, data)


@router.get("/customers/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    return svc.get_customer(db, customer_id)


@router.post("/bookings", response_model=BookingResponse, status_code=201)
def create_booking(data: BookingCreate, db: Session = Depends(get_db)):
    return svc.create_booking(db, data)


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
def get_booking(booking_id: int, db: Session = Depends(get_db)):
    return svc.get_booking(db, booking_id)
