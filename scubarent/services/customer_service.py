from sqlalchemy.orm import Session
from sqlalchemy import select, func
from scubarent.exceptions import NotFound
from scubarent.models.customer import Customer
from scubarent.models.booking import Booking
from scubarent.schemas.customer import CustomerCreate, BookingCreate
from scubarent.schemas.pagination import Page
import math


def get_customers(db: Session, page: int = 1, size: int = 50, search: str = "") -> Page:
    query = select(Customer)
    if search:
        query = query.where(Customer.full_name.ilike(f"%{search}%") | Customer.email.ilike(f"%{search}%"))
    query = query.order_by(Customer.full_name)
    total = db.scalar(select(func.count()).select_from(query.subquery()))
    customers = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    return Page(items=customers, total=total, page=page, pages=math.ceil(total / size) if total else 1, size=size)


def get_customer(db: Session, customer_id: int) -> Customer:
    customer = db.get(Customer, customer_id)
    if not customer:
        raise NotFound("Zákazník nenalezen", customer_id=customer_id)
    return customer


def create_customer(db: Session, data: CustomerCreate) -> Customer:
    customer = Customer(**data.model_dump())
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def get_booking(db: Session, booking_id: int) -> Booking:
    booking = db.get(Booking, booking_id)
    if not booking:
        raise NotFound("Rezervace nenalezena", booking_id=booking_id)
    return booking


def create_booking(db: Session, data: BookingCreate) -> Booking:
    get_customer(db, data.customer_id)
    booking = Booking(**data.model_dump())
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking
