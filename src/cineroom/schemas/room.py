"""Pydantic schemas for rooms, bookings and free slots."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from cineroom.domain.booking_slot import BookingType
from cineroom.domain.room import Room
from cineroom.domain.seat_layout import SeatRowConfig


class SeatRowRequest(BaseModel):
    """One seat row of a new room."""

    row_number: int
    last_column_letter: str
    preferential_seat_letters: list[str] = Field(default_factory=list)

    def to_config(self) -> SeatRowConfig:
        return SeatRowConfig(
            row_number=self.row_number,
            last_column_letter=self.last_column_letter,
            preferential_seat_letters=tuple(self.preferential_seat_letters),
        )


class RoomCreateRequest(BaseModel):
    """Request body for creating a room. Business rules are checked by the domain."""

    identifier: int
    seat_rows: list[SeatRowRequest] | None = None
    screen_size: int | None = None
    screen_type: str | None = None
    status: str = "AVAILABLE"


class RoomStatusRequest(BaseModel):
    status: str


class ScreeningRequest(BaseModel):
    """A screening to add; entry, exit and cleaning blocks are derived."""

    screening_uid: str
    start_time: datetime
    duration_in_minutes: int


class ActivityRequest(BaseModel):
    """A manual cleaning or maintenance."""

    start_time: datetime
    duration_in_minutes: int


class BookingResponse(BaseModel):
    """Booking slot response schema."""

    model_config = ConfigDict(from_attributes=True)

    booking_uid: str
    screening_uid: str | None = None
    start_time: datetime
    end_time: datetime
    type: BookingType
    duration_in_minutes: float


class SeatRowResponse(BaseModel):
    row_number: int
    seats: int
    preferential_seats: list[str]


class RoomResponse(BaseModel):
    """Room response schema."""

    room_uid: str
    identifier: int
    status: str
    screen_size: int
    screen_type: str
    total_seats: int
    preferential_seats: int
    seat_rows: list[SeatRowResponse]
    bookings: list[BookingResponse]

    @classmethod
    def from_domain(cls, room: Room) -> "RoomResponse":
        layout = room.seat_layout_info
        return cls(
            room_uid=room.room_uid,
            identifier=room.identifier.value,
            status=room.status.value,
            screen_size=room.screen.size,
            screen_type=room.screen.type.value,
            total_seats=layout["total_seats"],
            preferential_seats=layout["preferential_seats"],
            seat_rows=[SeatRowResponse(**row) for row in layout["rows_info"]],
            bookings=[BookingResponse.model_validate(booking) for booking in room.bookings],
        )


class FreeSlotResponse(BaseModel):
    """A free period of a room's day."""

    model_config = ConfigDict(from_attributes=True)

    start_time: datetime
    end_time: datetime
    duration_in_minutes: float


class FreeSlotsResponse(BaseModel):
    identifier: int
    date: date
    min_minutes: int
    slots: list[FreeSlotResponse]
