"""Room model: one row per cinema room, seat layout stored as JSONB."""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cineroom.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cineroom.models.booking import RoomBooking


class RoomRecord(Base, TimestampMixin):
    """
    Persisted state of a `Room` aggregate.

    `version` is bumped on every write and checked on replace, so two
    concurrent edits of the same room cannot both succeed.
    """

    __tablename__ = "rooms"

    uid: Mapped[str] = mapped_column(String(100), primary_key=True)
    identifier: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    # Screen
    screen_size: Mapped[int] = mapped_column(Integer, nullable=False)
    screen_type: Mapped[str] = mapped_column(String(10), nullable=False)

    # [{"row_number", "last_column_letter", "preferential_seat_letters"}, ...]
    seat_rows: Mapped[list] = mapped_column(JSONB, nullable=False)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Relationships
    bookings: Mapped[list["RoomBooking"]] = relationship(
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="RoomBooking.start_time",
    )

    def __repr__(self) -> str:
        return f"<RoomRecord(uid={self.uid!r}, identifier={self.identifier}, status={self.status!r})>"
