"""Dostupnost vybavení v daném období.

Období jsou uzavřené intervaly: výpůjčka [checkout_date, return_date] koliduje
s dotazem [start, end], pokud ``checkout_date <= end`` a ``return_date >= start``.
Vrácení a nové vydání téhož dne je tedy kolize.
"""
from datetime import date

from sqlalchemy.orm import Session
from sqlalchemy import select

from scubarent.exceptions import InsufficientAvailability, InvalidDateRange, NotFound, RentalError
from scubarent.models.equipment import EquipmentItem, ItemStatus
from scubarent.models.booking_equipment import BookingEquipment, EquipmentSource, OPEN_STATUSES
from scubarent.schemas.booking_equipment import CheckAvailabilityRequest, BulkCheckAvailabilityRequest
from scubarent.services.equipment_service import get_equipment, get_item

# Položky v těchto stavech nelze rezervovat bez ohledu na termín
BLOCKED_STATUSES = (ItemStatus.maintenance, ItemStatus.lost, ItemStatus.retired)


def _overlapping(start: date, end: date):
    return (
        (BookingEquipment.equipment_source == EquipmentSource.center)
        & BookingEquipment.assignment_status.in_(OPEN_STATUSES)
        & BookingEquipment.checkout_date.is_not(None)
        & BookingEquipment.return_date.is_not(None)
        & (BookingEquipment.checkout_date <= end)
        & (BookingEquipment.return_date >= start)
    )


def _check_range(start: date, end: date) -> None:
    if end < start:
        raise InvalidDateRange(start, end)


def get_conflicts(
    db: Session,
    item_id: int,
    start: date,
    end: date,
    exclude_id: int | None = None,
) -> list[BookingEquipment]:
    _check_range(start, end)
    query = select(BookingEquipment).where(
        BookingEquipment.equipment_item_id == item_id,
        _overlapping(start, end),
    )
    if exclude_id is not None:
        query = query.where(BookingEquipment.id != exclude_id)
    return db.scalars(query.order_by(BookingEquipment.checkout_date)).all()


def conflict_details(conflicts: list[BookingEquipment]) -> list[dict]:
    return [
        {
            "id": c.id,
            "customer_name": c.customer_name or "Unknown",
            "checkout_date": c.checkout_date.isoformat() if c.checkout_date else None,
            "return_date": c.return_date.isoformat() if c.return_date else None,
            "basket_no": c.basket_no,
            "assignment_status": c.assignment_status.value,
        }
        for c in conflicts
    ]


def check_item_available(db: Session, item_id: int, start: date, end: date) -> dict:
    item = get_item(db, item_id)
    conflicts = get_conflicts(db, item_id, start, end)
    return {
        "equipment_item_id": item_id,
        "checkout_date": start,
        "return_date": end,
        "item_status": item.status,
        "available": item.status not in BLOCKED_STATUSES and not conflicts,
        "conflicting_assignments": conflict_details(conflicts),
    }


def find_available_items(
    db: Session,
    equipment_id: int,
    quantity: int,
    start: date,
    end: date,
) -> list[EquipmentItem]:
    """Volné kusy daného typu. Nic nerezervuje; při nedostatku vyhodí InsufficientAvailability."""
    _check_range(start, end)
    equipment = get_equipment(db, equipment_id)
    if not equipment.is_active:
        # vyřazený typ se už nepůjčuje
        raise NotFound("Typ vybavení není aktivní", equipment_id=equipment_id)
    busy = select(BookingEquipment.equipment_item_id).where(
        BookingEquipment.equipment_item_id.is_not(None),
        _overlapping(start, end),
    )
    items = db.scalars(
        select(EquipmentItem)
        .where(
            EquipmentItem.equipment_id == equipment_id,
            EquipmentItem.status == ItemStatus.available,
            EquipmentItem.id.not_in(busy),
        )
        .order_by(EquipmentItem.id)
    ).all()
    if len(items) < quantity:
        raise InsufficientAvailability(equipment_id, quantity, len(items))
    return items


def check_availability(db: Session, data: CheckAvailabilityRequest) -> dict:
    """Jeden dotaz z API: buď konkrétní kus, nebo typ a počet kusů."""
    if data.equipment_item_id is not None:
        return check_item_available(db, data.equipment_item_id, data.checkout_date, data.return_date)
    items = find_available_items(db, data.equipment_id, data.quantity, data.checkout_date, data.return_date)
    return {
        "available": True,
        "checkout_date": data.checkout_date,
        "return_date": data.return_date,
        "equipment_id": data.equipment_id,
        "quantity": data.quantity,
        "available_items": items,
    }


def bulk_check_availability(db: Session, data: BulkCheckAvailabilityRequest) -> list[dict]:
    results = []
    for entry in data.items:
        try:
            results.append(check_availability(db, entry))
        except RentalError as exc:
            results.append({
                "available": False,
                "checkout_date": entry.checkout_date,
                "return_date": entry.return_date,
                "equipment_item_id": entry.equipment_item_id,
                "equipment_id": entry.equipment_id,
                "quantity": entry.quantity,
                "message": exc.message,
            })
    return results
