import enum
from datetime import datetime, timezone, date, timedelta
from sqlalchemy import ForeignKey, Integer, String, Boolean, DateTime, Date, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from scubarent.database import Base


class ItemStatus(str, enum.Enum):
    available = "Available"
    rented = "Rented"
    maintenance = "Maintenance"
    lost = "Lost"
    retired = "Retired"


class ItemHold(str, enum.Enum):
    """Ruční blokace položky, jediný stav, který smí nastavit obsluha."""

    maintenance = "Maintenance"
    retired = "Retired"


class Equipment(Base):
    """Typ vybavení (BCD, regulátor, neopren, ...)."""

    __tablename__ = "equipment"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str | None] = mapped_column(String(128), nullable=True)
    description: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
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

    items: Mapped[list["EquipmentItem"]] = relationship(back_populates="equipment")


class EquipmentItem(Base):
    """Konkrétní kus vybavení.

    ``status`` je materializovaný, přepočítává ho ``equipment_service.refresh_item_status``
    ve stejné transakci jako každý přechod výpůjčky nebo změnu ``hold_status``.
    """

    __tablename__ = "equipment_items"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    equipment_id: Mapped[int] = mapped_column(ForeignKey("equipment.id"), nullable=False, index=True)
    serial_no: Mapped[str | None] = mapped_column(String(128), nullable=True)
    inventory_code: Mapped[str | None] = mapped_column(String(64), unique=True, index=True, nullable=True)
    size: Mapped[str | None] = mapped_column(String(32), nullable=True)
    brand: Mapped[str | None] = mapped_column(String(128), nullable=True)
    color: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[ItemStatus] = mapped_column(
        SAEnum(ItemStatus, values_callable=lambda e: [x.value for x in e]),
        default=ItemStatus.available,
        nullable=False,
        index=True,
    )
    hold_status: Mapped[ItemHold | None] = mapped_column(
        SAEnum(ItemHold, values_callable=lambda e: [x.value for x in e]),
        nullable=True,
    )
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    requires_service: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    service_interval_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_service_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    next_service_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    lock_version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
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

    equipment: Mapped["Equipment"] = relationship(back_populates="items")
    assignments: Mapped[list["BookingEquipment"]] = relationship(
        back_populates="equipment_item", order_by="BookingEquipment.checkout_date"
    )
    service_history: Mapped[list["EquipmentServiceHistory"]] = relationship(
        back_populates="equipment_item",
        order_by="EquipmentServiceHistory.service_date.desc()",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": lock_version}

    @property
    def label(self) -> str:
        return self.inventory_code or self.serial_no or f"#{self.id}"

    @property
    def equipment_name(self) -> str | None:
        return self.equipment.name if self.equipment else None

    def calculate_next_service_date(self) -> date | None:
        """Další servis = poslední servis (nebo nákup) + servisní interval."""
        if not self.requires_service or not self.service_interval_days:
            return None
        base = self.last_service_date or self.purchase_date
        if base is None:
            return None
        return base + timedelta(days=self.service_interval_days)
