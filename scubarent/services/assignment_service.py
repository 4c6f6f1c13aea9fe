"""Výpůjčky vybavení a jejich stavový automat.

    Pending ──► Checked Out ──► Returned
                     │
                     └────────► Lost

Každý přechod mění stav položky ve stejné transakci. Funkce ``reserve`` a
``transition`` necommitují, commit dělá volající služba.
"""
import logging
import math
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy import select, func

from scubarent.config import settings
from scubarent.exceptions import (
    NotFound, ItemUnavailable, InvalidStateTransition, InvalidDateRange, RentalError,
)
from scubarent.models.basket import EquipmentBasket, BasketStatus
from scubarent.models.booking_equipment import (
    BookingEquipment, AssignmentStatus, EquipmentSource, TERMINAL_STATUSES,
)
from scubarent.models.equipment import ItemHold, ItemStatus
from scubarent.schemas.booking_equipment import (
    EquipmentSelection, BookingEquipmentCreate, BookingEquipmentUpdate, BulkCreateRequest,
    DamageInfo, ReturnRequest, LostRequest,
)
from scubarent.schemas.pagination import Page
from scubarent.services.availability_service import BLOCKED_STATUSES, get_conflicts, conflict_details
from scubarent.services.customer_service import get_booking
from scubarent.services.equipment_service import lock_item, refresh_item_status

logger = logging.getLogger(__name__)

_TRANSITIONS = {
    AssignmentStatus.pending: {AssignmentStatus.checked_out},
    AssignmentStatus.checked_out: {AssignmentStatus.returned, AssignmentStatus.lost},
}

_SELECTION_FIELDS = {
    "equipment_source",
    "equipment_item_id",
    "customer_equipment_type",
    "customer_equipment_brand",
    "customer_equipment_model",
    "customer_equipment_serial",
    "customer_equipment_notes",
}


# ── Čtení ───────────────────────────────────────────────────────────────────

def get_assignments(
    db: Session,
    page: int = 1,
    size: int = 50,
    basket_id: int | None = None,
    booking_id: int | None = None,
    equipment_item_id: int | None = None,
    status: AssignmentStatus | None = None,
) -> Page:
    query = select(BookingEquipment)
    if basket_id is not None:
        query = query.where(BookingEquipment.basket_id == basket_id)
    if booking_id is not None:
        query = query.where(BookingEquipment.booking_id == booking_id)
    if equipment_item_id is not None:
        query = query.where(BookingEquipment.equipment_item_id == equipment_item_id)
    if status is not None:
        query = query.where(BookingEquipment.assignment_status == status)
    query = query.order_by(BookingEquipment.id.desc())
    total = db.scalar(select(func.count()).select_from(query.subquery()))
    rows = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    return Page(items=rows, total=total, page=page, pages=math.ceil(total / size) if total else 1, size=size)


def get_assignment(db: Session, assignment_id: int) -> BookingEquipment:
    assignment = db.get(BookingEquipment, assignment_id)
    if not assignment:
        raise NotFound("Výpůjčka nenalezena", assignment_id=assignment_id)
    return assignment


def _load_basket(db: Session, basket_id: int) -> EquipmentBasket:
    basket = db.get(EquipmentBasket, basket_id)
    if not basket:
        raise NotFound("Košík nenalezen", basket_id=basket_id)
    return basket


# ── Rezervace ───────────────────────────────────────────────────────────────

def _window(selection: EquipmentSelection, basket: EquipmentBasket | None) -> tuple[date, date]:
    start = selection.checkout_date or (basket.checkout_date if basket else None) or date.today()
    end = selection.return_date or (basket.expected_return_date if basket else None)
    if end is None:
        end = start + timedelta(days=settings.DEFAULT_RENTAL_DAYS)
    if end < start:
        raise InvalidDateRange(start, end)
    return start, end


def reserve(
    db: Session,
    selection: EquipmentSelection,
    basket: EquipmentBasket | None = None,
    booking_id: int | None = None,
) -> BookingEquipment:
    """Založí výpůjčku ve stavu Pending (bez commitu).

    U vybavení půjčovny nejdřív zamkne řádek položky a teprve potom hledá
    kolize, takže souběžná rezervace téže položky počká a kolizi uvidí.
    """
    if basket is not None and basket.status != BasketStatus.active:
        raise InvalidStateTransition(
            basket.status.value,
            AssignmentStatus.pending.value,
            f"Košík {basket.basket_no} je uzavřen ({basket.status.value})",
        )
    start, end = _window(selection, basket)
    if booking_id is None and basket is not None:
        booking_id = basket.booking_id

    if selection.equipment_source == EquipmentSource.center:
        item = lock_item(db, selection.equipment_item_id)
        if item.status in BLOCKED_STATUSES:
            logger.warning("Rezervace %s zamítnuta: stav %s", item.label, item.status.value)
            raise ItemUnavailable(
                f"Položka {item.label} je ve stavu '{item.status.value}'",
                equipment_item_id=item.id,
                item_status=item.status.value,
                checkout_date=start.isoformat(),
                return_date=end.isoformat(),
                conflicting_assignments=[],
            )
        conflicts = get_conflicts(db, item.id, start, end)
        if conflicts:
            logger.warning("Rezervace %s zamítnuta: %d kolizí v %s – %s", item.label, len(conflicts), start, end)
            raise ItemUnavailable(
                f"Položka {item.label} je v termínu {start} – {end} již vypůjčena",
                equipment_item_id=item.id,
                checkout_date=start.isoformat(),
                return_date=end.isoformat(),
                conflicting_assignments=conflict_details(conflicts),
            )

    assignment = BookingEquipment(
        **selection.model_dump(include=_SELECTION_FIELDS),
        booking_id=booking_id,
        basket=basket,
        price=selection.price if selection.price is not None else Decimal("0"),
        checkout_date=start,
        return_date=end,
        assignment_status=AssignmentStatus.pending,
    )
    db.add(assignment)
    return assignment


def commit_reservation(db: Session, assignment: BookingEquipment) -> BookingEquipment:
    item_id = assignment.equipment_item_id
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise ItemUnavailable("Položka byla mezitím změněna jinou transakcí", equipment_item_id=item_id)
    db.refresh(assignment)
    logger.info("Výpůjčka %d založena (%s)", assignment.id, assignment.equipment_label)
    return assignment


def create_assignment(db: Session, data: BookingEquipmentCreate) -> BookingEquipment:
    basket = _load_basket(db, data.basket_id) if data.basket_id is not None else None
    if data.booking_id is not None:
        get_booking(db, data.booking_id)
    assignment = reserve(db, data, basket=basket, booking_id=data.booking_id)
    return commit_reservation(db, assignment)


def create_assignments_bulk(db: Session, data: BulkCreateRequest) -> dict:
    """Každý výběr se zakládá ve vlastní transakci; chyby se sbírají po položkách."""
    success = []
    failed = []
    for index, selection in enumerate(data.items):
        try:
            success.append(create_assignment(db, selection))
        except RentalError as exc:
            db.rollback()
            failed.append({
                "index": index,
                "kind": exc.kind,
                "message": exc.message,
                "conflicting_assignments": exc.extra.get("conflicting_assignments", []),
            })
    return {
        "success_count": len(success),
        "failed_count": len(failed),
        "success": success,
        "failed": failed,
    }


# ── Přechody ────────────────────────────────────────────────────────────────

def _apply_damage(assignment: BookingEquipment, damage: DamageInfo) -> None:
    for field, value in damage.model_dump().items():
        setattr(assignment, field, value)


def _check_returned_on(assignment: BookingEquipment, returned_on: date) -> None:
    if assignment.checkout_date and returned_on < assignment.checkout_date:
        raise InvalidDateRange(assignment.checkout_date, returned_on)


def transition(
    db: Session,
    assignment: BookingEquipment,
    target: AssignmentStatus,
    actual_return_date: date | None = None,
    damage: DamageInfo | None = None,
) -> BookingEquipment:
    current = assignment.assignment_status
    if target not in _TRANSITIONS.get(current, set()):
        raise InvalidStateTransition(current.value, target.value)
    if target == AssignmentStatus.returned and actual_return_date is None:
        raise InvalidStateTransition(current.value, target.value, "Vrácení vyžaduje actual_return_date")
    if target == AssignmentStatus.returned:
        _check_returned_on(assignment, actual_return_date)

    item = None
    if assignment.equipment_source == EquipmentSource.center and assignment.equipment_item_id is not None:
        item = lock_item(db, assignment.equipment_item_id)

    if target == AssignmentStatus.checked_out and item is not None:
        if item.hold_status is not None or item.status == ItemStatus.lost:
            raise ItemUnavailable(
                f"Položku {item.label} ve stavu '{item.status.value}' nelze vydat",
                equipment_item_id=item.id,
                item_status=item.status.value,
            )
        others = db.scalar(
            select(func.count())
            .select_from(BookingEquipment)
            .where(
                BookingEquipment.equipment_item_id == item.id,
                BookingEquipment.assignment_status == AssignmentStatus.checked_out,
                BookingEquipment.id != assignment.id,
            )
        )
        if others:
            raise ItemUnavailable(f"Položka {item.label} je již vydána", equipment_item_id=item.id)

    assignment.assignment_status = target
    if target == AssignmentStatus.returned:
        assignment.actual_return_date = actual_return_date
        if damage is not None:
            _apply_damage(assignment, damage)
            if damage.damage_reported and item is not None:
                item.hold_status = ItemHold.maintenance
    if item is not None:
        refresh_item_status(db, item)
    logger.info("Výpůjčka %d: %s → %s", assignment.id, current.value, target.value)
    return assignment


def refresh_basket_status(
    db: Session,
    basket: EquipmentBasket,
    closed_on: date | None = None,
    allow_empty: bool = False,
) -> bool:
    """Uzavře aktivní košík, pokud jsou všechny jeho výpůjčky ukončené."""
    if basket.status != BasketStatus.active:
        return False
    statuses = db.scalars(
        select(BookingEquipment.assignment_status).where(BookingEquipment.basket_id == basket.id)
    ).all()
    if not statuses and not allow_empty:
        return False
    if any(s not in TERMINAL_STATUSES for s in statuses):
        return False
    lost_only = bool(statuses) and all(s == AssignmentStatus.lost for s in statuses)
    basket.status = BasketStatus.lost if lost_only else BasketStatus.returned
    basket.actual_return_date = closed_on or date.today()
    logger.info("Košík %s uzavřen jako %s", basket.basket_no, basket.status.value)
    return True


def _finish(db: Session, assignment: BookingEquipment, closed_on: date | None = None) -> BookingEquipment:
    if assignment.basket is not None:
        refresh_basket_status(db, assignment.basket, closed_on)
    item_id = assignment.equipment_item_id
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise ItemUnavailable("Položka byla mezitím změněna jinou transakcí", equipment_item_id=item_id)
    db.refresh(assignment)
    return assignment


def checkout_assignment(db: Session, assignment_id: int) -> BookingEquipment:
    assignment = get_assignment(db, assignment_id)
    transition(db, assignment, AssignmentStatus.checked_out)
    return _finish(db, assignment)


def return_assignment(db: Session, assignment_id: int, data: ReturnRequest) -> BookingEquipment:
    assignment = get_assignment(db, assignment_id)
    returned_on = data.actual_return_date or date.today()
    damage = DamageInfo(**data.model_dump(exclude={"actual_return_date"}))
    transition(db, assignment, AssignmentStatus.returned, returned_on, damage)
    return _finish(db, assignment, returned_on)


def mark_assignment_lost(db: Session, assignment_id: int, data: LostRequest) -> BookingEquipment:
    assignment = get_assignment(db, assignment_id)
    transition(db, assignment, AssignmentStatus.lost)
    if data.note:
        assignment.damage_description = data.note
    return _finish(db, assignment)


# ── Úpravy a mazání ─────────────────────────────────────────────────────────

def update_assignment(db: Session, assignment_id: int, data: BookingEquipmentUpdate) -> BookingEquipment:
    assignment = get_assignment(db, assignment_id)
    update_data = data.model_dump(exclude_unset=True)
    target = update_data.pop("assignment_status", None)
    actual_return_date = update_data.pop("actual_return_date", None)

    current = assignment.assignment_status
    if current in TERMINAL_STATUSES and ({"checkout_date", "return_date"} & update_data.keys()):
        raise InvalidStateTransition(current.value, current.value, "Termín ukončené výpůjčky nelze měnit")

    # Oprava data vrácení u již vrácené výpůjčky
    correction = (
        actual_return_date is not None
        and current == AssignmentStatus.returned
        and target in (None, AssignmentStatus.returned)
    )
    if correction:
        _check_returned_on(assignment, actual_return_date)
    elif actual_return_date is not None and target != AssignmentStatus.returned:
        raise InvalidStateTransition(
            current.value,
            current.value,
            "actual_return_date lze zadat jen při vrácení nebo u vrácené výpůjčky",
        )

    start = update_data.get("checkout_date", assignment.checkout_date)
    end = update_data.get("return_date", assignment.return_date)
    dates_set = {"checkout_date", "return_date"} & update_data.keys()
    if dates_set and (start is None or end is None):
        raise InvalidStateTransition(current.value, current.value, "Termín výpůjčky nelze vymazat")
    if start and end and end < start:
        raise InvalidDateRange(start, end)
    dates_changed = start != assignment.checkout_date or end != assignment.return_date
    if dates_changed and assignment.equipment_source == EquipmentSource.center and assignment.equipment_item_id:
        lock_item(db, assignment.equipment_item_id)
        conflicts = get_conflicts(db, assignment.equipment_item_id, start, end, exclude_id=assignment.id)
        if conflicts:
            raise ItemUnavailable(
                "Nový termín koliduje s jinou výpůjčkou",
                equipment_item_id=assignment.equipment_item_id,
                checkout_date=start.isoformat(),
                return_date=end.isoformat(),
                conflicting_assignments=conflict_details(conflicts),
            )

    for field, value in update_data.items():
        setattr(assignment, field, value)
    if correction:
        assignment.actual_return_date = actual_return_date

    closed_on = None
    if target is not None and target != current:
        if target == AssignmentStatus.returned:
            closed_on = actual_return_date or date.today()
        transition(db, assignment, target, closed_on)
    return _finish(db, assignment, closed_on)


def delete_assignment(db: Session, assignment_id: int) -> None:
    assignment = get_assignment(db, assignment_id)
    if assignment.assignment_status != AssignmentStatus.pending:
        raise InvalidStateTransition(
            assignment.assignment_status.value,
            "Deleted",
            "Smazat lze pouze výpůjčku ve stavu Pending",
        )
    basket = assignment.basket
    db.delete(assignment)
    db.flush()
    if basket is not None:
        refresh_basket_status(db, basket)
    db.commit()
    logger.info("Výpůjčka %d smazána", assignment_id)
