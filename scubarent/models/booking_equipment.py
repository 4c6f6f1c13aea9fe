import enum
from datetime import datetime, timezone, date
from decimal import Decimal
from sqlalchemy import ForeignKey, String, Boolean, DateTime, Date, Numeric, Enum as SAEnum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from scubarent.database import Base


class EquipmentSource(str, enum.Enum):
    center = "Center"
    customer_own = "Customer Own"


class AssignmentStatus(str, enum.Enum):
    pending = "Pending"
    checked_out = "Checked Out"
    returned = "Returned"
    lost = "Lost"


OPEN_STATUSES = (AssignmentStatus.pending, AssignmentStatus.checked_out)
TERMINAL_STATUSES = (AssignmentStatus.returned, AssignmentStatus.lost)


class BookingEquipment(Base):
    """Přiřazení vybavení ke košíku nebo rezervaci.

    Jakmile výpůjčka opustí stav Pending, záznam se už nemaže, mění se jen stav.
    """

    __tablename__ = "booking_equipment"

    __table_args__ = (
        Index("ix_booking_equipment_availability", "equipment_item_id", "checkout_date", "return_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    booking_id: Mapped[int | None] = mapped_column(ForeignKey("bookings.id"), nullable=True, index=True)
    basket_id: Mapped[int | None] = mapped_column(ForeignKey("equipment_baskets.id"), nullable=True, index=True)
    equipment_item_id: Mapped[int | None] = mapped_column(ForeignKey("equipment_items.id"), nullable=True)
    equipment_source: Mapped[EquipmentSource] = mapped_column(
        SAEnum(EquipmentSource, values_callable=lambda e: [x.value for x in e]),
        default=EquipmentSource.center,
        nullable=False,
    )
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    checkout_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    return_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    actual_return_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Vlastní vybavení zákazníka (volný text)
    customer_equipment_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_equipment_brand: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_equipment_model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_equipment_serial: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_equipment_notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)

    assignment_status: Mapped[AssignmentStatus] = mapped_column(
        SAEnum(AssignmentStatus, values_callable=lambda e: [x.value for x in e]),
        default=AssignmentStatus.pending,
        nullable=False,
        index=True,
    )

    damage_reported: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    damage_description: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    damage_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    charge_customer: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    damage_charge_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    booking: Mapped["Booking | None"] = relationship(back_populates="assignments")
    basket: Mapped["EquipmentBasket | None"] = relationship(back_populates="assignments")
    equipment_item: Mapped["EquipmentItem | None"] = relationship(back_populates="assignments")

    @property
    def customer_name(self) -> str | None:
        if self.basket and self.basket.customer:
            return self.basket.customer.full_name
        if self.booking and self.booking.customer:
            return self.booking.customer.full_name
        return None

    @property
    def basket_no(self) -> str | None:
        return self.basket.basket_no if self.basket else None

    @property
    def equipment_label(self) -> str:
        if self.equipment_source == EquipmentSource.customer_own:
            parts = [self.customer_equipment_type, self.customer_equipment_brand, self.customer_equipment_model]
            return " ".join(p for p in parts if p) or "Vlastní vybavení"
        if self.equipment_item:
            name = self.equipment_item.equipment_name
            return f"{name} {self.equipment_item.label}" if name else self.equipment_item.label
        return "-"
