import logging
import math

from sqlalchemy.orm import Session
from sqlalchemy import select, func, update

from scubarent.exceptions import NotFound, DuplicateCode, InvalidStateTransition
from scubarent.models.equipment import Equipment, EquipmentItem, ItemStatus, ItemHold
from scubarent.models.booking_equipment import BookingEquipment, AssignmentStatus, OPEN_STATUSES
from scubarent.schemas.equipment import (
    EquipmentCreate, EquipmentUpdate, EquipmentItemCreate, EquipmentItemUpdate, HoldRequest,
)
from scubarent.schemas.pagination import Page

logger = logging.getLogger(__name__)

_SERVICE_FIELDS = {"purchase_date", "requires_service", "service_interval_days", "last_service_date"}


# ── Typy vybavení ───────────────────────────────────────────────────────────

def get_equipment_types(db: Session, page: int = 1, size: int = 50, category: str = "") -> Page:
    query = select(Equipment).where(Equipment.is_active == True)
    if category:
        query = query.where(Equipment.category == category)
    query = query.order_by(Equipment.name)
    total = db.scalar(select(func.count()).select_from(query.subquery()))
    rows = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    return Page(items=rows, total=total, page=page, pages=math.ceil(total / size) if total else 1, size=size)


def get_equipment(db: Session, equipment_id: int) -> Equipment:
    equipment = db.get(Equipment, equipment_id)
    if not equipment:
        raise NotFound("Typ vybavení nenalezen", equipment_id=equipment_id)
    return equipment


def create_equipment(db: Session, data: EquipmentCreate) -> Equipment:
    equipment = Equipment(**data.model_dump())
    db.add(equipment)
    db.commit()
    db.refresh(equipment)
    return equipment


def update_equipment(db: Session, equipment_id: int, data: EquipmentUpdate) -> Equipment:
    equipment = get_equipment(db, equipment_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(equipment, field, value)
    db.commit()
    db.refresh(equipment)
    return equipment


def delete_equipment(db: Session, equipment_id: int) -> Equipment:
    equipment = get_equipment(db, equipment_id)
    equipment.is_active = False
    db.commit()
    db.refresh(equipment)
    return equipment


# ── Kusy vybavení ───────────────────────────────────────────────────────────

def get_items(
    db: Session,
    page: int = 1,
    size: int = 50,
    equipment_id: int | None = None,
    status: ItemStatus | None = None,
    search: str = "",
) -> Page:
    query = select(EquipmentItem)
    if equipment_id is not None:
        query = query.where(EquipmentItem.equipment_id == equipment_id)
    if status is not None:
        query = query.where(EquipmentItem.status == status)
    if search:
        query = query.where(
            EquipmentItem.inventory_code.ilike(f"%{search}%")
            | EquipmentItem.serial_no.ilike(f"%{search}%")
            | EquipmentItem.brand.ilike(f"%{search}%")
        )
    query = query.order_by(EquipmentItem.id)
    total = db.scalar(select(func.count()).select_from(query.subquery()))
    rows = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    return Page(items=rows, total=total, page=page, pages=math.ceil(total / size) if total else 1, size=size)


def get_item(db: Session, item_id: int) -> EquipmentItem:
    item = db.get(EquipmentItem, item_id)
    if not item:
        raise NotFound("Položka vybavení nenalezena", equipment_item_id=item_id)
    return item


def get_item_by_code(db: Session, code: str) -> EquipmentItem | None:
    return db.scalar(select(EquipmentItem).where(EquipmentItem.inventory_code == code))


def create_item(db: Session, data: EquipmentItemCreate) -> EquipmentItem:
    get_equipment(db, data.equipment_id)
    if data.inventory_code and get_item_by_code(db, data.inventory_code):
        raise DuplicateCode("Inventární kód již existuje", inventory_code=data.inventory_code)
    item = EquipmentItem(**data.model_dump())
    item.status = ItemStatus(item.hold_status.value) if item.hold_status else ItemStatus.available
    if item.next_service_date is None:
        item.next_service_date = item.calculate_next_service_date()
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_item(db: Session, item_id: int, data: EquipmentItemUpdate) -> EquipmentItem:
    item = get_item(db, item_id)
    update_data = data.model_dump(exclude_unset=True)
    if "equipment_id" in update_data:
        get_equipment(db, update_data["equipment_id"])
    if update_data.get("requires_service", False) is None:
        del update_data["requires_service"]
    code = update_data.get("inventory_code")
    if code and code != item.inventory_code and get_item_by_code(db, code):
        raise DuplicateCode("Inventární kód již existuje", inventory_code=code)
    for field, value in update_data.items():
        setattr(item, field, value)
    if "next_service_date" not in update_data and _SERVICE_FIELDS & update_data.keys():
        item.next_service_date = item.calculate_next_service_date()
    db.commit()
    db.refresh(item)
    return item


def delete_item(db: Session, item_id: int) -> EquipmentItem:
    """Soft delete: položka se vyřadí (Retired), historie výpůjček zůstává."""
    return set_item_hold(db, item_id, HoldRequest(hold_status=ItemHold.retired))


def set_item_hold(db: Session, item_id: int, data: HoldRequest) -> EquipmentItem:
    item = lock_item(db, item_id)
    if data.hold_status is not None and item.status in (ItemStatus.rented, ItemStatus.lost):
        raise InvalidStateTransition(
            item.status.value,
            data.hold_status.value,
            f"Položku {item.label} ve stavu '{item.status.value}' nelze blokovat",
        )
    item.hold_status = data.hold_status
    refresh_item_status(db, item)
    db.commit()
    db.refresh(item)
    return item


def get_item_assignments(db: Session, item_id: int) -> dict:
    item = get_item(db, item_id)
    assignments = db.scalars(
        select(BookingEquipment)
        .where(BookingEquipment.equipment_item_id == item_id)
        .order_by(BookingEquipment.checkout_date.desc(), BookingEquipment.id.desc())
    ).all()
    return {
        "equipment_item": item,
        "assignments": assignments,
        "total_assignments": len(assignments),
        "active_assignments": sum(1 for a in assignments if a.assignment_status in OPEN_STATUSES),
    }


# ── Zámek a odvozený stav ───────────────────────────────────────────────────

def lock_item(db: Session, item_id: int) -> EquipmentItem:
    """Zamkne řádek položky do konce transakce a vrátí její aktuální stav.

    UPDATE bere zámek řádku (PostgreSQL) resp. zápisový zámek databáze (SQLite)
    dřív, než proběhne kontrola kolizí, takže dvě souběžné výpůjčky stejné položky
    se seřadí za sebe.
    """
    result = db.execute(
        update(EquipmentItem)
        .where(EquipmentItem.id == item_id)
        .values(lock_version=EquipmentItem.lock_version + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise NotFound("Položka vybavení nenalezena", equipment_item_id=item_id)
    return db.get(EquipmentItem, item_id, populate_existing=True)


def derive_item_status(db: Session, item: EquipmentItem) -> ItemStatus:
    def _count(status: AssignmentStatus) -> int:
        return db.scalar(
            select(func.count())
            .select_from(BookingEquipment)
            .where(
                BookingEquipment.equipment_item_id == item.id,
                BookingEquipment.assignment_status == status,
            )
        )

    if _count(AssignmentStatus.checked_out):
        return ItemStatus.rented
    if _count(AssignmentStatus.lost):
        return ItemStatus.lost
    if item.hold_status is not None:
        return ItemStatus(item.hold_status.value)
    return ItemStatus.available


def refresh_item_status(db: Session, item: EquipmentItem) -> EquipmentItem:
    status = derive_item_status(db, item)
    if item.status != status:
        logger.info("Položka %s: %s → %s", item.label, item.status.value, status.value)
        item.status = status
    return item
