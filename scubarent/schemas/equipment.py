from datetime import datetime, date
from pydantic import BaseModel, Field
from scubarent.models.equipment import ItemStatus, ItemHold
from scubarent.schemas.booking_equipment import BookingEquipmentResponse


class EquipmentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = None
    description: str | None = None
    is_active: bool = True


class EquipmentCreate(EquipmentBase):
    pass


class EquipmentUpdate(BaseModel):
    name: str | None = None
    category: str | None = None
    description: str | None = None


class EquipmentResponse(EquipmentBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class EquipmentItemBase(BaseModel):
    equipment_id: int
    serial_no: str | None = None
    inventory_code: str | None = Field(None, max_length=64)
    size: str | None = None
    brand: str | None = None
    color: str | None = None
    purchase_date: date | None = None
    requires_service: bool = False
    service_interval_days: int | None = Field(None, ge=1)
    last_service_date: date | None = None
    next_service_date: date | None = None


class EquipmentItemCreate(EquipmentItemBase):
    hold_status: ItemHold | None = None


class EquipmentItemUpdate(BaseModel):
    # status se nenastavuje, odvozuje se z výpůjček a hold_status
    equipment_id: int | None = None
    serial_no: str | None = None
    inventory_code: str | None = None
    size: str | None = None
    brand: str | None = None
    color: str | None = None
    purchase_date: date | None = None
    requires_service: bool | None = None
    service_interval_days: int | None = Field(None, ge=1)
    last_service_date: date | None = None
    next_service_date: date | None = None


class HoldRequest(BaseModel):
    hold_status: ItemHold | None = None


class EquipmentItemResponse(EquipmentItemBase):
    id: int
    status: ItemStatus
    hold_status: ItemHold | None
    label: str
    equipment_name: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ItemAssignmentHistory(BaseModel):
    equipment_item: EquipmentItemResponse
    assignments: list[BookingEquipmentResponse]
    total_assignments: int
    active_assignments: int
