from datetime import datetime, date
from decimal import Decimal
from pydantic import BaseModel, Field


class ServiceRecordBase(BaseModel):
    service_type: str | None = Field(None, max_length=255)
    technician: str | None = Field(None, max_length=255)
    service_provider: str | None = Field(None, max_length=255)
    cost: Decimal | None = Field(None, ge=0)
    notes: str | None = None
    parts_replaced: str | None = None
    warranty_info: str | None = None
    next_service_due_date: date | None = None


class ServiceRecordCreate(ServiceRecordBase):
    service_date: date
    # Po servisu lze rovnou zrušit blokaci Maintenance
    release_hold: bool = False


class ServiceRecordUpdate(ServiceRecordBase):
    service_date: date | None = None


class ServiceRecordResponse(ServiceRecordBase):
    id: int
    equipment_item_id: int
    equipment_label: str | None = None
    service_date: date
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BulkServiceRequest(ServiceRecordCreate):
    equipment_item_ids: list[int] = Field(..., min_length=1)


class BulkServiceError(BaseModel):
    equipment_item_id: int
    error: str


class BulkServiceResponse(BaseModel):
    created_count: int
    records: list[ServiceRecordResponse]
    errors: list[BulkServiceError]
