"""Room scheduling core: value objects, the schedule and the Room aggregate."""

from cineroom.domain.booking_slot import BookingSlot, BookingType
from cineroom.domain.errors import TechnicalError
from cineroom.domain.failures import Failure, FailureCode
from cineroom.domain.identifiers import RoomIdentifier
from cineroom.domain.result import Result, failure, success
from cineroom.domain.room import Room, RoomStatus
from cineroom.domain.room_schedule import FreeSlot, RoomSchedule
from cineroom.domain.screen import Screen, ScreenType
from cineroom.domain.seat_layout import SeatLayout, SeatRow, SeatRowConfig

__all__ = [
    "BookingSlot",
    "BookingType",
    "Failure",
    "FailureCode",
    "FreeSlot",
    "Result",
    "Room",
    "RoomIdentifier",
    "RoomSchedule",
    "RoomStatus",
    "Screen",
    "ScreenType",
    "SeatLayout",
    "SeatRow",
    "SeatRowConfig",
    "TechnicalError",
    "failure",
    "success",
]
