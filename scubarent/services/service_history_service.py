"""Servisní historie vybavení.

Každý zápis, úprava nebo smazání záznamu přepočítá ``last_service_date`` a
``next_service_date`` položky podle jejího nejnovějšího servisu.
"""
import logging
import math
from datetime import date, timedelta

from sqlalchemy.orm import Session
from sqlalchemy import select, func

from scubarent.exceptions import NotFound
from scubarent.models.equipment import EquipmentItem, ItemHold
from scubarent.models.service_history import EquipmentServiceHistory
from scubarent.schemas.service_history import ServiceRecordCreate, ServiceRecordUpdate, BulkServiceRequest
from scubarent.schemas.pagination import Page
from scubarent.services.equipment_service import get_item, refresh_item_status

logger = logging.getLogger(__name__)

_RECORD_FIELDS = {
    "service_date",
    "service_type",
    "technician",
    "service_provider",
    "cost",
    "notes",
    "parts_replaced",
    "warranty_info",
    "next_service_due_date",
}


def _due_date(item: EquipmentItem, service_date: date, given: date | None) -> date | None:
    if given is not None:
        return given
    if item.requires_service and item.service_interval_days:
        return service_date + timedelta(days=item.service_interval_days)
    return None


def _sync_item_service_dates(db: Session, item: EquipmentItem) -> None:
    latest = db.scalar(
        select(EquipmentServiceHistory)
        .where(EquipmentServiceHistory.equipment_item_id == item.id)
        .order_by(EquipmentServiceHistory.service_date.desc(), EquipmentServiceHistory.id.desc())
        .limit(1)
    )
    item.last_service_date = latest.service_date if latest else None
    if latest and latest.next_service_due_date:
        item.next_service_date = latest.next_service_due_date
    else:
        item.next_service_date = item.calculate_next_service_date()


def _release_hold(db: Session, item: EquipmentItem) -> None:
    if item.hold_status == ItemHold.maintenance:
        item.hold_status = None
        refresh_item_status(db, item)
        logger.info("Položka %s: servis dokončen, blokace zrušena", item.label)


def get_service_history(db: Session, item_id: int, page: int = 1, size: int = 20) -> Page:
    get_item(db, item_id)
    query = (
        select(EquipmentServiceHistory)
        .where(EquipmentServiceHistory.equipment_item_id == item_id)
        .order_by(EquipmentServiceHistory.service_date.desc(), EquipmentServiceHistory.id.desc())
    )
    total = db.scalar(select(func.count()).select_from(query.subquery()))
    rows = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    return Page(items=rows, total=total, page=page, pages=math.ceil(total / size) if total else 1, size=size)


def get_service_record(db: Session, item_id: int, record_id: int) -> EquipmentServiceHistory:
    record = db.get(EquipmentServiceHistory, record_id)
    if not record or record.equipment_item_id != item_id:
        raise NotFound("Servisní záznam nenalezen", equipment_item_id=item_id, record_id=record_id)
    return record


def _add_record(db: Session, item: EquipmentItem, data: ServiceRecordCreate) -> EquipmentServiceHistory:
    values = data.model_dump(include=_RECORD_FIELDS)
    values["next_service_due_date"] = _due_date(item, data.service_date, data.next_service_due_date)
    record = EquipmentServiceHistory(equipment_item_id=item.id, **values)
    db.add(record)
    db.flush()
    _sync_item_service_dates(db, item)
    if data.release_hold:
        _release_hold(db, item)
    return record


def create_service_record(db: Session, item_id: int, data: ServiceRecordCreate) -> EquipmentServiceHistory:
    item = get_item(db, item_id)
    record = _add_record(db, item, data)
    db.commit()
    db.refresh(record)
    logger.info("Servis položky %s zapsán (%s)", item.label, record.service_date)
    return record


def update_service_record(
    db: Session, item_id: int, record_id: int, data: ServiceRecordUpdate
) -> EquipmentServiceHistory:
    record = get_service_record(db, item_id, record_id)
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("service_date") is None:
        update_data.pop("service_date", None)
    if "service_date" in update_data and "next_service_due_date" not in update_data:
        update_data["next_service_due_date"] = _due_date(record.equipment_item, update_data["service_date"], None)
    for field, value in update_data.items():
        setattr(record, field, value)
    db.flush()
    _sync_item_service_dates(db, record.equipment_item)
    db.commit()
    db.refresh(record)
    return record


def delete_service_record(db: Session, item_id: int, record_id: int) -> None:
    record = get_service_record(db, item_id, record_id)
    item = record.equipment_item
    db.delete(record)
    db.flush()
    _sync_item_service_dates(db, item)
    db.commit()
    logger.info("Servisní záznam %d položky %s smazán", record_id, item.label)


def bulk_create_service_records(db: Session, data: BulkServiceRequest) -> dict:
    """Stejný servis pro více kusů najednou. Neexistující položky se jen zapíšou do ``errors``."""
    records = []
    errors = []
    for item_id in dict.fromkeys(data.equipment_item_ids):
        item = db.get(EquipmentItem, item_id)
        if not item:
            errors.append({"equipment_item_id": item_id, "error": "Položka vybavení nenalezena"})
            continue
        records.append(_add_record(db, item, data))

    db.commit()
    for r in records:
        db.refresh(r)
    logger.info("Hromadný servis: zapsáno %d, chyb %d", len(records), len(errors))
    return {"created_count": len(records), "records": records, "errors": errors}
