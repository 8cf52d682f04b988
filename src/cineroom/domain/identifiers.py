"""Identifier value objects for rooms and bookings."""

import uuid
from dataclasses import dataclass

from cineroom.domain.errors import TechnicalError
from cineroom.domain.failures import FailureCode
from cineroom.domain.result import Result, failure, success
from cineroom.domain.validation import check_integer_in_range

ROOM_UID_PREFIX = "ROOM"
BOOKING_UID_PREFIX = "BOOKING"


def new_uid(prefix: str) -> str:
    """Generate an opaque identifier such as ``ROOM.3f2b...``."""
    return f"{prefix}.{uuid.uuid4()}"


@dataclass(frozen=True)
class RoomIdentifier:
    """Room number shown to customers, unique within a cinema."""

    MIN_VALUE = 1
    MAX_VALUE = 100

    value: int

    @classmethod
    def create(cls, value: int) -> Result["RoomIdentifier"]:
        failures = check_integer_in_range("identifier", value, cls.MIN_VALUE, cls.MAX_VALUE)
        return failure(failures) if failures else success(cls(value))

    @classmethod
    def hydrate(cls, value: int) -> "RoomIdentifier":
        TechnicalError.validate_required_fields(FailureCode.MISSING_REQUIRED_DATA, identifier=value)
        return cls(value)
