from datetime import datetime, date
from decimal import Decimal
from pydantic import BaseModel, Field, model_validator
from scubarent.models.booking_equipment import EquipmentSource, AssignmentStatus
from scubarent.models.equipment import ItemStatus


class EquipmentSelection(BaseModel):
    """Výběr vybavení do košíku: buď kus z půjčovny, nebo vlastní vybavení zákazníka."""

    equipment_source: EquipmentSource = EquipmentSource.center
    equipment_item_id: int | None = None
    price: Decimal | None = Field(None, ge=0)
    checkout_date: date | None = None
    return_date: date | None = None
    customer_equipment_type: str | None = Field(None, max_length=255)
    customer_equipment_brand: str | None = Field(None, max_length=255)
    customer_equipment_model: str | None = Field(None, max_length=255)
    customer_equipment_serial: str | None = Field(None, max_length=255)
    customer_equipment_notes: str | None = None

    @model_validator(mode="after")
    def _check_source(self):
        if self.equipment_source == EquipmentSource.center and self.equipment_item_id is None:
            raise ValueError("equipment_item_id je povinné pro vybavení půjčovny")
        if self.equipment_source == EquipmentSource.customer_own:
            self.equipment_item_id = None
        if self.checkout_date and self.return_date and self.return_date < self.checkout_date:
            raise ValueError("return_date nesmí předcházet checkout_date")
        return self


class BookingEquipmentCreate(EquipmentSelection):
    booking_id: int | None = None
    basket_id: int | None = None

    @model_validator(mode="after")
    def _check_owner(self):
        if self.booking_id is None and self.basket_id is None:
            raise ValueError("Zadejte booking_id nebo basket_id")
        return self


class BulkCreateRequest(BaseModel):
    items: list[BookingEquipmentCreate] = Field(..., min_length=1)


class DamageInfo(BaseModel):
    damage_reported: bool = False
    damage_description: str | None = None
    damage_cost: Decimal | None = Field(None, ge=0)
    charge_customer: bool = False
    damage_charge_amount: Decimal | None = Field(None, ge=0)


class BookingEquipmentUpdate(BaseModel):
    price: Decimal | None = Field(None, ge=0)
    checkout_date: date | None = None
    return_date: date | None = None
    customer_equipment_type: str | None = None
    customer_equipment_brand: str | None = None
    customer_equipment_model: str | None = None
    customer_equipment_serial: str | None = None
    customer_equipment_notes: str | None = None
    damage_description: str | None = None
    damage_cost: Decimal | None = Field(None, ge=0)
    charge_customer: bool | None = None
    damage_charge_amount: Decimal | None = Field(None, ge=0)
    # Změna stavu prochází stavovým automatem stejně jako akční endpointy
    assignment_status: AssignmentStatus | None = None
    actual_return_date: date | None = None

    @model_validator(mode="after")
    def _check_dates(self):
        # Termín výpůjčky jde posunout, ne vymazat
        for field in ("checkout_date", "return_date"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} nelze vymazat")
        if self.checkout_date and self.return_date and self.return_date < self.checkout_date:
            raise ValueError("return_date nesmí předcházet checkout_date")
        return self


class ReturnRequest(DamageInfo):
    actual_return_date: date | None = None  # defaults to today in service


class LostRequest(BaseModel):
    note: str | None = None


class BulkReturnRequest(BaseModel):
    equipment_ids: list[int] = []
    lost_ids: list[int] = []
    actual_return_date: date | None = None
    damage_info: dict[int, DamageInfo] = {}


class BulkReturnByIdsRequest(BulkReturnRequest):
    @model_validator(mode="after")
    def _check_ids(self):
        if not self.equipment_ids and not self.lost_ids:
            raise ValueError("Zadejte alespoň jedno equipment_ids nebo lost_ids")
        return self


class ReturnFailure(BaseModel):
    assignment_id: int
    reason: str


class BulkReturnResponse(BaseModel):
    returned_count: int
    lost_count: int
    skipped_lost_count: int
    skipped_returned_count: int
    failures: list[ReturnFailure]
    closed_basket_ids: list[int]


class CheckAvailabilityRequest(BaseModel):
    """Dotaz na konkrétní kus (equipment_item_id) nebo na typ a množství (equipment_id)."""

    equipment_item_id: int | None = None
    equipment_id: int | None = None
    quantity: int = Field(1, ge=1)
    checkout_date: date
    return_date: date

    @model_validator(mode="after")
    def _check(self):
        if (self.equipment_item_id is None) == (self.equipment_id is None):
            raise ValueError("Zadejte právě jedno z equipment_item_id / equipment_id")
        if self.return_date < self.checkout_date:
            raise ValueError("return_date nesmí předcházet checkout_date")
        return self


class BulkCheckAvailabilityRequest(BaseModel):
    items: list[CheckAvailabilityRequest] = Field(..., min_length=1)


class AvailableItem(BaseModel):
    id: int
    label: str
    size: str | None = None

    model_config = {"from_attributes": True}


class ConflictResponse(BaseModel):
    id: int
    customer_name: str | None
    checkout_date: date | None
    return_date: date | None
    basket_no: str | None
    assignment_status: AssignmentStatus

    model_config = {"from_attributes": True}


class BookingEquipmentResponse(BaseModel):
    id: int
    booking_id: int | None
    basket_id: int | None
    basket_no: str | None = None
    customer_name: str | None = None
    equipment_source: EquipmentSource
    equipment_item_id: int | None
    equipment_label: str
    price: Decimal
    checkout_date: date | None
    return_date: date | None
    actual_return_date: date | None
    customer_equipment_type: str | None
    customer_equipment_brand: str | None
    customer_equipment_model: str | None
    customer_equipment_serial: str | None
    customer_equipment_notes: str | None
    assignment_status: AssignmentStatus
    damage_reported: bool
    damage_description: str | None
    damage_cost: Decimal | None
    charge_customer: bool
    damage_charge_amount: Decimal | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BulkCreateFailure(BaseModel):
    index: int
    kind: str
    message: str
    conflicting_assignments: list[ConflictResponse] = []


class BulkCreateResponse(BaseModel):
    success_count: int
    failed_count: int
    success: list[BookingEquipmentResponse]
    failed: list[BulkCreateFailure]


class AvailabilityResponse(BaseModel):
    available: bool
    checkout_date: date
    return_date: date
    # dotaz na konkrétní kus
    equipment_item_id: int | None = None
    item_status: ItemStatus | None = None
    conflicting_assignments: list[ConflictResponse] = []
    # dotaz na typ a množství
    equipment_id: int | None = None
    quantity: int | None = None
    available_items: list[AvailableItem] = []
    message: str | None = None
