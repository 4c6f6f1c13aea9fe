import logging
import math
from datetime import date

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func

from scubarent.config import settings
from scubarent.exceptions import NotFound, InvalidStateTransition, InvalidDateRange
from scubarent.models.basket import EquipmentBasket, BasketStatus
from scubarent.models.booking_equipment import BookingEquipment, AssignmentStatus
from scubarent.schemas.basket import BasketCreate, BasketUpdate
from scubarent.schemas.booking_equipment import EquipmentSelection, BulkReturnRequest
from scubarent.schemas.pagination import Page
from scubarent.services import assignment_service, return_service
from scubarent.services.customer_service import get_customer, get_booking

logger = logging.getLogger(__name__)

_NUMBER_ATTEMPTS = 3


def generate_basket_number(db: Session, year: int | None = None) -> str:
    """Další volné číslo košíku ve tvaru BASK-2026-007 (řada se čísluje po letech)."""
    prefix = f"{settings.BASKET_NUMBER_PREFIX}-{year or date.today().year}-"
    existing = db.scalars(
        select(EquipmentBasket.basket_no).where(EquipmentBasket.basket_no.like(f"{prefix}%"))
    ).all()
    last = 0
    for number in existing:
        suffix = number[len(prefix):]
        if suffix.isdigit():
            last = max(last, int(suffix))
    return f"{prefix}{last + 1:03d}"


def get_baskets(
    db: Session,
    page: int = 1,
    size: int = 50,
    status: BasketStatus | None = None,
    customer_id: int | None = None,
    search: str = "",
) -> Page:
    query = select(EquipmentBasket)
    if status is not None:
        query = query.where(EquipmentBasket.status == status)
    if customer_id is not None:
        query = query.where(EquipmentBasket.customer_id == customer_id)
    if search:
        query = query.where(
            EquipmentBasket.basket_no.ilike(f"%{search}%")
            | EquipmentBasket.center_bucket_no.ilike(f"%{search}%")
        )
    query = query.order_by(EquipmentBasket.checkout_date.desc(), EquipmentBasket.id.desc())
    total = db.scalar(select(func.count()).select_from(query.subquery()))
    baskets = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    return Page(items=baskets, total=total, page=page, pages=math.ceil(total / size) if total else 1, size=size)


def get_basket(db: Session, basket_id: int) -> EquipmentBasket:
    basket = db.get(EquipmentBasket, basket_id)
    if not basket:
        raise NotFound("Košík nenalezen", basket_id=basket_id)
    return basket


def create_basket(db: Session, data: BasketCreate) -> EquipmentBasket:
    get_customer(db, data.customer_id)
    if data.booking_id is not None:
        get_booking(db, data.booking_id)
    values = data.model_dump()
    values["checkout_date"] = data.checkout_date or date.today()

    # Dva souběžné požadavky můžou dostat stejné číslo, unikátní index to
    # zachytí a zkusíme další.
    for attempt in range(1, _NUMBER_ATTEMPTS + 1):
        basket_no = generate_basket_number(db)
        basket = EquipmentBasket(**values, basket_no=basket_no, status=BasketStatus.active)
        db.add(basket)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning("Číslo košíku %s je obsazené (pokus %d)", basket_no, attempt)
            if attempt == _NUMBER_ATTEMPTS:
                raise
            continue
        db.refresh(basket)
        logger.info("Košík %s založen pro zákazníka %d", basket.basket_no, basket.customer_id)
        return basket


def update_basket(db: Session, basket_id: int, data: BasketUpdate) -> EquipmentBasket:
    basket = get_basket(db, basket_id)
    update_data = data.model_dump(exclude_unset=True)
    expected = update_data.get("expected_return_date")
    if expected and expected < basket.checkout_date:
        raise InvalidDateRange(basket.checkout_date, expected)
    for field, value in update_data.items():
        setattr(basket, field, value)
    db.commit()
    db.refresh(basket)
    return basket


def delete_basket(db: Session, basket_id: int) -> None:
    basket = get_basket(db, basket_id)
    if any(a.assignment_status != AssignmentStatus.pending for a in basket.assignments):
        raise InvalidStateTransition(
            basket.status.value,
            "Deleted",
            "Košík s vydaným nebo vráceným vybavením nelze smazat",
        )
    db.delete(basket)
    db.commit()
    logger.info("Košík %s smazán", basket.basket_no)


def add_assignment(db: Session, basket_id: int, selection: EquipmentSelection) -> BookingEquipment:
    basket = get_basket(db, basket_id)
    assignment = assignment_service.reserve(db, selection, basket=basket)
    return assignment_service.commit_reservation(db, assignment)


def checkout_basket(db: Session, basket_id: int) -> dict:
    """Vydá všechny čekající výpůjčky košíku najednou: buď všechny, nebo žádnou."""
    basket = get_basket(db, basket_id)
    if basket.status != BasketStatus.active:
        raise InvalidStateTransition(basket.status.value, AssignmentStatus.checked_out.value,
                                     f"Košík {basket.basket_no} je uzavřen")
    pending = [a for a in basket.assignments if a.assignment_status == AssignmentStatus.pending]
    try:
        for assignment in pending:
            assignment_service.transition(db, assignment, AssignmentStatus.checked_out)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(basket)
    logger.info("Košík %s vydán (%d položek)", basket.basket_no, len(pending))
    return {"basket": basket, "checked_out_ids": [a.id for a in pending]}


def return_basket(db: Session, basket_id: int, data: BulkReturnRequest) -> dict:
    """Hromadné vrácení omezené na jeden košík.

    Bez ``equipment_ids`` se zpracují všechny výpůjčky košíku kromě ``lost_ids``.
    """
    basket = get_basket(db, basket_id)
    if not data.equipment_ids:
        lost = set(data.lost_ids)
        ids = [a.id for a in basket.assignments if a.id not in lost]
        data = data.model_copy(update={"equipment_ids": ids})
    return return_service.bulk_return(db, data, basket=basket)
