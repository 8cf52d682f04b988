"""Pydantic schemas for API requests and responses."""

from cineroom.schemas.room import (
    ActivityRequest,
    BookingResponse,
    FreeSlotResponse,
    FreeSlotsResponse,
    RoomCreateRequest,
    RoomResponse,
    RoomStatusRequest,
    ScreeningRequest,
    SeatRowRequest,
    SeatRowResponse,
)

__all__ = [
    "ActivityRequest",
    "BookingResponse",
    "FreeSlotResponse",
    "FreeSlotsResponse",
    "RoomCreateRequest",
    "RoomResponse",
    "RoomStatusRequest",
    "ScreeningRequest",
    "SeatRowRequest",
    "SeatRowResponse",
]
