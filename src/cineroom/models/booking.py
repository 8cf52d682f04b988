"""Booking slot model: one row per reserved interval of a room."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cineroom.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cineroom.models.room import RoomRecord


class RoomBooking(Base, TimestampMixin):
    """A booking slot (screening block, cleaning or maintenance) of a room."""

    __tablename__ = "room_bookings"

    booking_uid: Mapped[str] = mapped_column(String(100), primary_key=True)

    # Foreign keys
    room_uid: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("rooms.uid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Owning screening; empty for manual cleaning and maintenance
    screening_uid: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)

    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)

    # Relationships
    room: Mapped["RoomRecord"] = relationship(back_populates="bookings")

    def __repr__(self) -> str:
        return (
            f"<RoomBooking(booking_uid={self.booking_uid!r}, "
            f"type={self.type!r}, "
            f"start_time={self.start_time})>"
        )

    def to_domain_data(self) -> dict:
        """Shape expected by `RoomSchedule.hydrate`."""
        return {
            "booking_uid": self.booking_uid,
            "screening_uid": self.screening_uid,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "type": self.type,
        }
