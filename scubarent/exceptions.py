"""Chybové stavy výpůjčního procesu.

Všechny výjimky dědí z ``HTTPException``, takže je servisní vrstva může
vyhazovat přímo a FastAPI je vrátí jako ``{"detail": {"kind": ..., "message": ...}}``.
"""
from typing import Any

from fastapi import HTTPException


class RentalError(HTTPException):
    """Base exception for rental workflow errors."""

    kind = "RentalError"
    http_status = 400

    def __init__(self, message: str, **extra: Any) -> None:
        self.message = message
        self.extra = extra
        super().__init__(
            status_code=self.http_status,
            detail={"kind": self.kind, "message": message, **extra},
        )

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class NotFound(RentalError):
    kind = "NotFound"
    http_status = 404


class ItemUnavailable(RentalError):
    """Konkrétní položka je v požadovaném období obsazená nebo mimo provoz."""

    kind = "ItemUnavailable"
    http_status = 409


class InsufficientAvailability(RentalError):
    """Požadované množství převyšuje počet volných položek daného typu."""

    kind = "InsufficientAvailability"
    http_status = 409

    def __init__(self, equipment_id: int, requested: int, available: int) -> None:
        super().__init__(
            f"Požadováno {requested} ks, volných je pouze {available} ks",
            equipment_id=equipment_id,
            requested=requested,
            available=available,
        )


class InvalidStateTransition(RentalError):
    kind = "InvalidStateTransition"
    http_status = 422

    def __init__(self, current: str, target: str, message: str | None = None) -> None:
        super().__init__(
            message or f"Přechod ze stavu '{current}' do '{target}' není povolen",
            current=current,
            target=target,
        )


class InvalidDateRange(RentalError):
    kind = "InvalidDateRange"
    http_status = 422

    def __init__(self, start, end) -> None:
        super().__init__(
            "Datum vrácení nesmí předcházet datu výdeje",
            checkout_date=start.isoformat(),
            return_date=end.isoformat(),
        )


class DuplicateCode(RentalError):
    kind = "DuplicateCode"
    http_status = 409


__all__ = [
    "RentalError",
    "NotFound",
    "ItemUnavailable",
    "InsufficientAvailability",
    "InvalidStateTransition",
    "InvalidDateRange",
    "DuplicateCode",
]
