"""Testy kontroly dostupnosti vybavení."""
import pytest
from datetime import date

from scubarent.exceptions import InsufficientAvailability, InvalidDateRange, NotFound
from scubarent.models.booking_equipment import AssignmentStatus, EquipmentSource
from scubarent.models.equipment import ItemHold
from scubarent.schemas.booking_equipment import EquipmentSelection, ReturnRequest, CheckAvailabilityRequest
from scubarent.schemas.equipment import HoldRequest
import scubarent.services.availability_service as svc
import scubarent.services.assignment_service as assignment_svc
import scubarent.services.basket_service as basket_svc
import scubarent.services.equipment_service as equipment_svc


def _reserve(db, basket, item, start=date(2026, 7, 1), end=date(2026, 7, 5)):
    return basket_svc.add_assignment(
        db, basket.id, EquipmentSelection(equipment_item_id=item.id, checkout_date=start, return_date=end)
    )


# ── Konkrétní kus ────────────────────────────────────────────────────────────

def test_free_item_is_available(db, make_item):
    item = make_item("BCD-001")
    result = svc.check_item_available(db, item.id, date(2026, 7, 1), date(2026, 7, 5))
    assert result["available"] is True
    assert result["conflicting_assignments"] == []


def test_overlap_is_conflict(db, make_item, make_basket):
    item = make_item("BCD-001")
    a = _reserve(db, make_basket(), item)

    result = svc.check_item_available(db, item.id, date(2026, 7, 3), date(2026, 7, 10))
    assert result["available"] is False
    conflict = result["conflicting_assignments"][0]
    assert conflict["id"] == a.id
    assert conflict["customer_name"] == "Jana Nováková"
    assert conflict["basket_no"] == a.basket_no
    assert conflict["checkout_date"] == "2026-07-01"
    assert conflict["assignment_status"] == "Pending"


def test_same_day_turnover_is_conflict(db, make_item, make_basket):
    item = make_item("BCD-001")
    _reserve(db, make_basket(), item)

    assert svc.check_item_available(db, item.id, date(2026, 7, 5), date(2026, 7, 8))["available"] is False
    assert svc.check_item_available(db, item.id, date(2026, 6, 28), date(2026, 7, 1))["available"] is False
    assert svc.check_item_available(db, item.id, date(2026, 7, 6), date(2026, 7, 8))["available"] is True


def test_enclosing_window_is_conflict(db, make_item, make_basket):
    item = make_item("BCD-001")
    _reserve(db, make_basket(), item, date(2026, 7, 3), date(2026, 7, 4))
    assert svc.check_item_available(db, item.id, date(2026, 7, 1), date(2026, 7, 10))["available"] is False


def test_returned_assignment_frees_window(db, make_item, make_basket):
    item = make_item("BCD-001")
    a = _reserve(db, make_basket(), item)
    assignment_svc.checkout_assignment(db, a.id)
    assignment_svc.return_assignment(db, a.id, ReturnRequest(actual_return_date=date(2026, 7, 2)))

    assert svc.check_item_available(db, item.id, date(2026, 7, 1), date(2026, 7, 5))["available"] is True


def test_customer_own_never_conflicts(db, make_item, make_basket):
    item = make_item("BCD-001")
    basket = make_basket()
    basket_svc.add_assignment(db, basket.id, EquipmentSelection(
        equipment_source=EquipmentSource.customer_own,
        equipment_item_id=item.id,
        customer_equipment_type="BCD",
    ))
    assert svc.get_conflicts(db, item.id, date(2026, 7, 1), date(2026, 7, 5)) == []


def test_held_item_is_unavailable(db, make_item):
    item = make_item("BCD-001")
    equipment_svc.set_item_hold(db, item.id, HoldRequest(hold_status=ItemHold.maintenance))

    result = svc.check_item_available(db, item.id, date(2026, 7, 1), date(2026, 7, 5))
    assert result["available"] is False
    assert result["conflicting_assignments"] == []


def test_check_is_idempotent(db, make_item, make_basket):
    item = make_item("BCD-001")
    _reserve(db, make_basket(), item)
    first = svc.check_item_available(db, item.id, date(2026, 7, 2), date(2026, 7, 3))
    second = svc.check_item_available(db, item.id, date(2026, 7, 2), date(2026, 7, 3))
    assert first == second


def test_exclude_own_assignment(db, make_item, make_basket):
    item = make_item("BCD-001")
    a = _reserve(db, make_basket(), item)
    assert svc.get_conflicts(db, item.id, date(2026, 7, 1), date(2026, 7, 5), exclude_id=a.id) == []


def test_reversed_range_rejected(db, make_item):
    item = make_item("BCD-001")
    with pytest.raises(InvalidDateRange) as exc:
        svc.check_item_available(db, item.id, date(2026, 7, 5), date(2026, 7, 1))
    assert exc.value.status_code == 422


def test_unknown_item(db):
    with pytest.raises(NotFound):
        svc.check_item_available(db, 999, date(2026, 7, 1), date(2026, 7, 2))


# ── Typ a množství ───────────────────────────────────────────────────────────

def test_find_available_items(db, bcd, make_item, make_basket):
    first = make_item("BCD-001")
    make_item("BCD-002")
    make_item("BCD-003")
    _reserve(db, make_basket(), first)

    items = svc.find_available_items(db, bcd.id, 2, date(2026, 7, 2), date(2026, 7, 3))
    assert [i.inventory_code for i in items] == ["BCD-002", "BCD-003"]


def test_find_available_skips_held_items(db, bcd, make_item):
    make_item("BCD-001")
    held = make_item("BCD-002")
    equipment_svc.set_item_hold(db, held.id, HoldRequest(hold_status=ItemHold.retired))

    items = svc.find_available_items(db, bcd.id, 1, date(2026, 7, 1), date(2026, 7, 2))
    assert [i.inventory_code for i in items] == ["BCD-001"]


def test_insufficient_availability(db, bcd, make_item, make_basket):
    first = make_item("BCD-001")
    make_item("BCD-002")
    _reserve(db, make_basket(), first)

    with pytest.raises(InsufficientAvailability) as exc:
        svc.find_available_items(db, bcd.id, 2, date(2026, 7, 1), date(2026, 7, 5))
    assert exc.value.status_code == 409
    assert exc.value.detail["requested"] == 2
    assert exc.value.detail["available"] == 1


def test_find_available_reserves_nothing(db, bcd, make_item):
    make_item("BCD-001")
    svc.find_available_items(db, bcd.id, 1, date(2026, 7, 1), date(2026, 7, 5))
    again = svc.find_available_items(db, bcd.id, 1, date(2026, 7, 1), date(2026, 7, 5))
    assert len(again) == 1
    assert assignment_svc.get_assignments(db).total == 0


def test_check_availability_by_type(db, bcd, make_item):
    make_item("BCD-001")
    result = svc.check_availability(db, CheckAvailabilityRequest(
        equipment_id=bcd.id, quantity=1, checkout_date=date(2026, 7, 1), return_date=date(2026, 7, 2),
    ))
    assert result["available"] is True
    assert len(result["available_items"]) == 1


def test_pending_blocks_window_until_deleted(db, make_item, make_basket):
    item = make_item("BCD-001")
    a = _reserve(db, make_basket(), item)
    assert a.assignment_status == AssignmentStatus.pending
    assignment_svc.delete_assignment(db, a.id)
    assert svc.check_item_available(db, item.id, date(2026, 7, 1), date(2026, 7, 5))["available"] is True


def test_inactive_type_has_no_available_items(db, bcd, make_item):
    make_item("BCD-001")
    equipment_svc.delete_equipment(db, bcd.id)
    with pytest.raises(NotFound):
        svc.find_available_items(db, bcd.id, 1, date(2026, 7, 1), date(2026, 7, 2))
