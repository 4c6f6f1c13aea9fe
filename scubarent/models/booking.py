from datetime import datetime, timezone, date
from sqlalchemy import ForeignKey, String, DateTime, Date
from sqlalchemy.orm import Mapped, mapped_column, relationship
from scubarent.database import Base


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), nullable=False, index=True)
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    customer: Mapped["Customer"] = relationship(back_populates="bookings")
    assignments: Mapped[list["BookingEquipment"]] = relationship(back_populates="booking")

    @property
    def customer_name(self) -> str | None:
        return self.customer.full_name if self.customer else None
