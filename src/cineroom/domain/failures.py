"""Failure codes and records returned by domain validation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FailureCode(str, Enum):
    """Closed set of business failure codes."""

    # Generic input
    MISSING_REQUIRED_DATA = "MISSING_REQUIRED_DATA"
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    VALUE_NOT_INTEGER = "VALUE_NOT_INTEGER"
    INVALID_HYDRATE_DATA = "INVALID_HYDRATE_DATA"

    # Dates
    DATE_CANNOT_BE_PAST = "DATE_CANNOT_BE_PAST"
    DATE_WITH_INVALID_SEQUENCE = "DATE_WITH_INVALID_SEQUENCE"

    # Booking slots
    INVALID_BOOKING_TYPE = "INVALID_BOOKING_TYPE"
    INVALID_SCREENING_DURATION = "INVALID_SCREENING_DURATION"
    INVALID_ENTRY_TIME_DURATION = "INVALID_ENTRY_TIME_DURATION"
    INVALID_EXIT_TIME_DURATION = "INVALID_EXIT_TIME_DURATION"
    INVALID_CLEANING_DURATION = "INVALID_CLEANING_DURATION"
    INVALID_MAINTENANCE_DURATION = "INVALID_MAINTENANCE_DURATION"
    SCREENING_UID_NOT_ALLOWED = "SCREENING_UID_NOT_ALLOWED"

    # Room schedule
    ROOM_OPERATING_HOURS_VIOLATION = "ROOM_OPERATING_HOURS_VIOLATION"
    INVALID_BOOKING_TIME_INTERVAL = "INVALID_BOOKING_TIME_INTERVAL"
    ROOM_NOT_AVAILABLE_FOR_PERIOD = "ROOM_NOT_AVAILABLE_FOR_PERIOD"
    ROOM_PERIOD_UNAVAILABLE = "ROOM_PERIOD_UNAVAILABLE"
    BOOKING_NOT_FOUND_IN_ROOM = "BOOKING_NOT_FOUND_IN_ROOM"
    BOOKING_NOT_FOUND_FOR_SCREENING = "BOOKING_NOT_FOUND_FOR_SCREENING"
    BOOKING_ALREADY_STARTED = "BOOKING_ALREADY_STARTED"
    INVALID_BOOKING_TYPE_FOR_REMOVAL = "INVALID_BOOKING_TYPE_FOR_REMOVAL"
    CLEANING_ASSOCIATED_WITH_SCREENING = "CLEANING_ASSOCIATED_WITH_SCREENING"

    # Room
    ROOM_HAS_FUTURE_BOOKINGS = "ROOM_HAS_FUTURE_BOOKINGS"
    ROOM_CONCURRENT_MODIFICATION = "ROOM_CONCURRENT_MODIFICATION"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_ALREADY_EXISTS = "RESOURCE_ALREADY_EXISTS"

    # Seats and screen
    INVALID_SEAT_COLUMN = "INVALID_SEAT_COLUMN"
    SEAT_COLUMN_OUT_OF_RANGE = "SEAT_COLUMN_OUT_OF_RANGE"
    PREFERENTIAL_SEATS_LIMIT_EXCEEDED = "PREFERENTIAL_SEATS_LIMIT_EXCEEDED"
    PREFERENTIAL_SEAT_NOT_IN_ROW = "PREFERENTIAL_SEAT_NOT_IN_ROW"
    DUPLICATE_PREFERENTIAL_SEAT = "DUPLICATE_PREFERENTIAL_SEAT"
    DUPLICATE_ROW_NUMBER = "DUPLICATE_ROW_NUMBER"
    INVALID_ROW_COUNT = "INVALID_ROW_COUNT"
    ROOM_WITH_INVALID_CAPACITY = "ROOM_WITH_INVALID_CAPACITY"
    ROOM_WITH_INVALID_NUMBER_OF_PREFERENTIAL_SEATS = "ROOM_WITH_INVALID_NUMBER_OF_PREFERENTIAL_SEATS"


_MESSAGES: dict[FailureCode, str] = {
    FailureCode.MISSING_REQUIRED_DATA: "A required field is missing.",
    FailureCode.INVALID_ENUM_VALUE: "The value is not one of the accepted options.",
    FailureCode.VALUE_OUT_OF_RANGE: "The value is outside the accepted range.",
    FailureCode.VALUE_NOT_INTEGER: "The value must be a whole number.",
    FailureCode.INVALID_HYDRATE_DATA: "Stored data is incomplete or corrupt.",
    FailureCode.DATE_CANNOT_BE_PAST: "The date cannot be in the past.",
    FailureCode.DATE_WITH_INVALID_SEQUENCE: "The end time must be after the start time.",
    FailureCode.INVALID_BOOKING_TYPE: "Unknown booking type.",
    FailureCode.INVALID_SCREENING_DURATION: "Screening duration is outside the allowed bounds.",
    FailureCode.INVALID_ENTRY_TIME_DURATION: "Entry time duration is outside the allowed bounds.",
    FailureCode.INVALID_EXIT_TIME_DURATION: "Exit time duration is outside the allowed bounds.",
    FailureCode.INVALID_CLEANING_DURATION: "Cleaning duration is outside the allowed bounds.",
    FailureCode.INVALID_MAINTENANCE_DURATION: "Maintenance duration is outside the allowed bounds.",
    FailureCode.SCREENING_UID_NOT_ALLOWED: "This booking type cannot belong to a screening.",
    FailureCode.ROOM_OPERATING_HOURS_VIOLATION: "Bookings must start within the room operating hours.",
    FailureCode.INVALID_BOOKING_TIME_INTERVAL: "Bookings must start on a 5-minute boundary.",
    FailureCode.ROOM_NOT_AVAILABLE_FOR_PERIOD: "The room already has a booking in this period.",
    FailureCode.ROOM_PERIOD_UNAVAILABLE: "The room is not available for the requested period.",
    FailureCode.BOOKING_NOT_FOUND_IN_ROOM: "The booking does not exist in this room.",
    FailureCode.BOOKING_NOT_FOUND_FOR_SCREENING: "No booking exists for this screening.",
    FailureCode.BOOKING_ALREADY_STARTED: "The booking has already started.",
    FailureCode.INVALID_BOOKING_TYPE_FOR_REMOVAL: "Only cleaning and maintenance bookings can be handled here.",
    FailureCode.CLEANING_ASSOCIATED_WITH_SCREENING: "This cleaning belongs to a screening.",
    FailureCode.ROOM_HAS_FUTURE_BOOKINGS: "The room cannot be closed while it has bookings.",
    FailureCode.ROOM_CONCURRENT_MODIFICATION: "The room was modified by another request.",
    FailureCode.RESOURCE_NOT_FOUND: "Resource not found.",
    FailureCode.RESOURCE_ALREADY_EXISTS: "Resource already exists.",
    FailureCode.INVALID_SEAT_COLUMN: "The seat column letter is invalid.",
    FailureCode.SEAT_COLUMN_OUT_OF_RANGE: "The row has too few or too many seats.",
    FailureCode.PREFERENTIAL_SEATS_LIMIT_EXCEEDED: "Too many preferential seats in the row.",
    FailureCode.PREFERENTIAL_SEAT_NOT_IN_ROW: "The preferential seat does not exist in the row.",
    FailureCode.DUPLICATE_PREFERENTIAL_SEAT: "The preferential seat is listed twice.",
    FailureCode.DUPLICATE_ROW_NUMBER: "The row number is listed twice.",
    FailureCode.INVALID_ROW_COUNT: "The room has too few or too many rows.",
    FailureCode.ROOM_WITH_INVALID_CAPACITY: "The room capacity is outside the allowed bounds.",
    FailureCode.ROOM_WITH_INVALID_NUMBER_OF_PREFERENTIAL_SEATS: "The room has an invalid number of preferential seats.",
}


@dataclass(frozen=True)
class Failure:
    """A single business-rule violation."""

    code: FailureCode
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return _MESSAGES.get(self.code, self.code.value)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code.value, "message": self.message, "details": self.details}


def missing_data(field_name: str) -> Failure:
    return Failure(FailureCode.MISSING_REQUIRED_DATA, {"field": field_name})
