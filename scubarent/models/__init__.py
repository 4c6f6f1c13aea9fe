from scubarent.models.customer import Customer
from scubarent.models.booking import Booking
from scubarent.models.equipment import Equipment, EquipmentItem, ItemStatus, ItemHold
from scubarent.models.service_history import EquipmentServiceHistory
from scubarent.models.basket import EquipmentBasket, BasketStatus
from scubarent.models.booking_equipment import BookingEquipment, EquipmentSource, AssignmentStatus

__all__ = [
    "Customer", "Booking",
    "Equipment", "EquipmentItem", "ItemStatus", "ItemHold",
    "EquipmentServiceHistory",
    "EquipmentBasket", "BasketStatus",
    "BookingEquipment", "EquipmentSource", "AssignmentStatus",
]
