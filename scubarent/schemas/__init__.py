from scubarent.schemas.customer import CustomerCreate, CustomerResponse, BookingCreate, BookingResponse
from scubarent.schemas.equipment import (
    EquipmentCreate, EquipmentUpdate, EquipmentResponse,
    EquipmentItemCreate, EquipmentItemUpdate, EquipmentItemResponse, HoldRequest,
)
from scubarent.schemas.booking_equipment import (
    BookingEquipmentCreate, BookingEquipmentUpdate, BookingEquipmentResponse,
    ReturnRequest, BulkReturnRequest, BulkReturnResponse, CheckAvailabilityRequest,
)
from scubarent.schemas.basket import BasketCreate, BasketUpdate, BasketResponse, BasketDetailResponse
from scubarent.schemas.pagination import Page

__all__ = [
    "CustomerCreate", "CustomerResponse", "BookingCreate", "BookingResponse",
    "EquipmentCreate", "EquipmentUpdate", "EquipmentResponse",
    "EquipmentItemCreate", "EquipmentItemUpdate", "EquipmentItemResponse", "HoldRequest",
    "BookingEquipmentCreate", "BookingEquipmentUpdate", "BookingEquipmentResponse",
    "ReturnRequest", "BulkReturnRequest", "BulkReturnResponse", "CheckAvailabilityRequest",
    "BasketCreate", "BasketUpdate", "BasketResponse", "BasketDetailResponse",
    "Page",
]
