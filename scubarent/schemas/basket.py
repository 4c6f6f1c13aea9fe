from datetime import datetime, date
from pydantic import BaseModel, model_validator
from scubarent.models.basket import BasketStatus
from scubarent.schemas.booking_equipment import BookingEquipmentResponse


class BasketCreate(BaseModel):
    customer_id: int
    booking_id: int | None = None
    center_bucket_no: str | None = None
    checkout_date: date | None = None  # defaults to today in service
    expected_return_date: date | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _check_dates(self):
        if self.checkout_date and self.expected_return_date and self.expected_return_date < self.checkout_date:
            raise ValueError("expected_return_date nesmí předcházet checkout_date")
        return self


class BasketUpdate(BaseModel):
    center_bucket_no: str | None = None
    expected_return_date: date | None = None
    notes: str | None = None


class BasketResponse(BaseModel):
    id: int
    customer_id: int
    customer_name: str | None = None
    booking_id: int | None
    basket_no: str
    center_bucket_no: str | None
    checkout_date: date
    expected_return_date: date | None
    actual_return_date: date | None
    status: BasketStatus
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BasketDetailResponse(BasketResponse):
    assignments: list[BookingEquipmentResponse] = []


class BasketCheckoutResponse(BaseModel):
    basket: BasketDetailResponse
    checked_out_ids: list[int]
