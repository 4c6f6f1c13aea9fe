import enum
from datetime import datetime, timezone, date
from sqlalchemy import ForeignKey, String, DateTime, Date, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from scubarent.database import Base


class BasketStatus(str, enum.Enum):
    active = "Active"
    returned = "Returned"
    lost = "Lost"


class EquipmentBasket(Base):
    __tablename__ = "equipment_baskets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), nullable=False, index=True)
    booking_id: Mapped[int | None] = mapped_column(ForeignKey("bookings.id"), nullable=True)
    basket_no: Mapped[str] = mapped_column(String(32), unique=True, index=True, nullable=False)
    center_bucket_no: Mapped[str | None] = mapped_column(String(255), nullable=True)
    checkout_date: Mapped[date] = mapped_column(Date, nullable=False)
    expected_return_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    actual_return_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[BasketStatus] = mapped_column(
        SAEnum(BasketStatus, values_callable=lambda e: [x.value for x in e]),
        default=BasketStatus.active,
        nullable=False,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)
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

    customer: Mapped["Customer"] = relationship(back_populates="baskets")
    booking: Mapped["Booking | None"] = relationship()
    assignments: Mapped[list["BookingEquipment"]] = relationship(
        back_populates="basket", order_by="BookingEquipment.id", cascade="all, delete-orphan"
    )

    @property
    def customer_name(self) -> str | None:
        return self.customer.full_name if self.customer else None
