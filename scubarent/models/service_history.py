from datetime import datetime, timezone, date
from decimal import Decimal
from sqlalchemy import ForeignKey, String, Text, DateTime, Date, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship
from scubarent.database import Base


class EquipmentServiceHistory(Base):
    """Záznam o servisu jednoho kusu vybavení (revize automatiky, tlaková zkouška, ...)."""

    __tablename__ = "equipment_service_history"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    equipment_item_id: Mapped[int] = mapped_column(
        ForeignKey("equipment_items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    service_date: Mapped[date] = mapped_column(Date, nullable=False)
    service_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    technician: Mapped[str | None] = mapped_column(String(255), nullable=True)
    service_provider: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    parts_replaced: Mapped[str | None] = mapped_column(Text, nullable=True)
    warranty_info: Mapped[str | None] = mapped_column(Text, nullable=True)
    next_service_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
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

    equipment_item: Mapped["EquipmentItem"] = relationship(back_populates="service_history")

    @property
    def equipment_label(self) -> str | None:
        return self.equipment_item.label if self.equipment_item else None
