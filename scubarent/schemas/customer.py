from datetime import datetime, date
from pydantic import BaseModel, Field


class CustomerCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    email: str | None = None
    phone: str | None = None


class CustomerResponse(CustomerCreate):
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class BookingCreate(BaseModel):
    customer_id: int
    booking_date: date
    notes: str | None = None


class BookingResponse(BookingCreate):
    id: int
    customer_name: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
