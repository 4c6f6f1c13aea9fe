"""Hromadné vrácení vybavení.

Celé volání běží v jedné transakci. Každá výpůjčka se před zápisem ověří,
nezpůsobilé se jen zapíšou do ``failures`` a nic nezmění. Chyba databáze
vrátí celé volání zpět a propadne dál.
"""
import logging
from datetime import date

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select

from scubarent.models.basket import EquipmentBasket
from scubarent.models.booking_equipment import BookingEquipment, AssignmentStatus
from scubarent.schemas.booking_equipment import BulkReturnRequest
from scubarent.services.assignment_service import transition, refresh_basket_status

logger = logging.getLogger(__name__)


def _failure_reason(assignment: BookingEquipment | None, basket: EquipmentBasket | None) -> str | None:
    if assignment is None:
        return "Výpůjčka neexistuje"
    if basket is not None and assignment.basket_id != basket.id:
        return f"Výpůjčka nepatří do košíku {basket.basket_no}"
    if assignment.assignment_status == AssignmentStatus.pending:
        return "Výpůjčka ještě nebyla vydána (Pending)"
    return None


def bulk_return(db: Session, data: BulkReturnRequest, basket: EquipmentBasket | None = None) -> dict:
    returned_on = data.actual_return_date or date.today()
    lost_ids = set(data.lost_ids)
    # Pořadí podle vstupu, bez duplicit
    ids = list(dict.fromkeys([*data.equipment_ids, *data.lost_ids]))

    assignments = {
        a.id: a
        for a in db.scalars(select(BookingEquipment).where(BookingEquipment.id.in_(ids))).all()
    } if ids else {}

    result = {
        "returned_count": 0,
        "lost_count": 0,
        "skipped_lost_count": 0,
        "skipped_returned_count": 0,
        "failures": [],
        "closed_basket_ids": [],
    }
    touched: dict[int, EquipmentBasket] = {}
    if basket is not None:
        touched[basket.id] = basket

    try:
        for assignment_id in ids:
            assignment = assignments.get(assignment_id)
            reason = _failure_reason(assignment, basket)
            if reason:
                result["failures"].append({"assignment_id": assignment_id, "reason": reason})
                continue

            status = assignment.assignment_status
            if status == AssignmentStatus.lost:
                result["skipped_lost_count"] += 1
                continue
            if status == AssignmentStatus.returned:
                result["skipped_returned_count"] += 1
                continue

            if assignment_id not in lost_ids and assignment.checkout_date and returned_on < assignment.checkout_date:
                result["failures"].append({
                    "assignment_id": assignment_id,
                    "reason": f"Datum vrácení {returned_on} předchází datu výdeje {assignment.checkout_date}",
                })
                continue

            if assignment_id in lost_ids:
                transition(db, assignment, AssignmentStatus.lost)
                result["lost_count"] += 1
            else:
                transition(
                    db,
                    assignment,
                    AssignmentStatus.returned,
                    returned_on,
                    data.damage_info.get(assignment_id),
                )
                result["returned_count"] += 1
            if assignment.basket is not None:
                touched[assignment.basket.id] = assignment.basket

        for candidate in touched.values():
            allow_empty = basket is not None and candidate.id == basket.id
            if refresh_basket_status(db, candidate, returned_on, allow_empty=allow_empty):
                result["closed_basket_ids"].append(candidate.id)

        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Hromadné vrácení selhalo, změny vráceny zpět")
        raise

    logger.info(
        "Hromadné vrácení: vráceno %d, ztraceno %d, přeskočeno %d/%d, chyb %d",
        result["returned_count"],
        result["lost_count"],
        result["skipped_returned_count"],
        result["skipped_lost_count"],
        len(result["failures"]),
    )
    return result
