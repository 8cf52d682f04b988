"""A typed, reserved time interval in a room's schedule."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from cineroom.domain.errors import TechnicalError
from cineroom.domain.failures import Failure, FailureCode, missing_data
from cineroom.domain.identifiers import BOOKING_UID_PREFIX, new_uid
from cineroom.domain.result import Result, failure, success
from cineroom.domain.validation import ensure_not_null, parse_enum
from cineroom.utils.dates import as_local, minutes_between, now_local


class BookingType(str, Enum):
    SCREENING = "SCREENING"
    ENTRY_TIME = "ENTRY_TIME"
    EXIT_TIME = "EXIT_TIME"
    CLEANING = "CLEANING"
    MAINTENANCE = "MAINTENANCE"


@dataclass(frozen=True)
class DurationBounds:
    min_minutes: int
    max_minutes: int
    failure_code: FailureCode


BOOKING_DURATION_BOUNDS: dict[BookingType, DurationBounds] = {
    BookingType.SCREENING: DurationBounds(30, 360, FailureCode.INVALID_SCREENING_DURATION),
    BookingType.ENTRY_TIME: DurationBounds(0, 60, FailureCode.INVALID_ENTRY_TIME_DURATION),
    BookingType.EXIT_TIME: DurationBounds(0, 60, FailureCode.INVALID_EXIT_TIME_DURATION),
    BookingType.CLEANING: DurationBounds(0, 120, FailureCode.INVALID_CLEANING_DURATION),
    BookingType.MAINTENANCE: DurationBounds(0, 3 * 24 * 60, FailureCode.INVALID_MAINTENANCE_DURATION),
}

# Types that only exist as part of a screening and must carry its uid
SCREENING_BOUND_TYPES = frozenset({BookingType.SCREENING, BookingType.ENTRY_TIME, BookingType.EXIT_TIME})

# Types that never belong to a screening
STANDALONE_TYPES = frozenset({BookingType.MAINTENANCE})


def screening_uid_failure(screening_uid: str | None, booking_type: BookingType) -> Failure | None:
    """The failure for a screening uid that does not fit the booking type, if any."""
    if booking_type in SCREENING_BOUND_TYPES and screening_uid is None:
        return missing_data("screening_uid")
    if booking_type in STANDALONE_TYPES and screening_uid is not None:
        return Failure(
            FailureCode.SCREENING_UID_NOT_ALLOWED,
            {"type": booking_type.value, "screening_uid": screening_uid},
        )
    return None


def _parse_datetime(field: str, value: datetime | str) -> datetime:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError as e:
            raise TechnicalError(
                Failure(FailureCode.INVALID_HYDRATE_DATA, {"fields": [field], "value": value})
            ) from e
    return as_local(value)


@dataclass(frozen=True)
class BookingSlot:
    """
    One reserved interval ``[start_time, end_time)`` in a room.

    Instances are never mutated; a schedule replaces them instead. Build new
    slots with `create` (full validation) and rebuild stored ones with
    `hydrate` (presence checks only).
    """

    booking_uid: str
    screening_uid: str | None
    start_time: datetime
    end_time: datetime
    type: BookingType

    @classmethod
    def create(
        cls,
        screening_uid: str | None,
        start_time: datetime | None,
        end_time: datetime | None,
        booking_type: BookingType | str | None,
    ) -> Result["BookingSlot"]:
        """
        Validate and build a new booking slot.

        Args:
            screening_uid: Owning screening; required for screening-bound types,
                not allowed for maintenance
            start_time: Start of the interval, must not be in the past
            end_time: End of the interval, must be after start_time
            booking_type: A BookingType member or its string value

        Returns:
            Result with the new slot, or the validation failures
        """
        failures = ensure_not_null(start_time=start_time, end_time=end_time, type=booking_type)
        if failures:
            return failure(failures)

        start = as_local(start_time)
        end = as_local(end_time)
        now = now_local()

        # Sequence is only checked when the start is not in the past
        if start < now:
            failures.append(
                Failure(
                    FailureCode.DATE_CANNOT_BE_PAST,
                    {"field": "start_time", "value": start.isoformat(), "now": now.isoformat()},
                )
            )
        elif end <= start:
            failures.append(
                Failure(
                    FailureCode.DATE_WITH_INVALID_SEQUENCE,
                    {"start_time": start.isoformat(), "end_time": end.isoformat()},
                )
            )

        type_result = parse_enum("type", booking_type, BookingType)
        if type_result.is_invalid:
            failures.append(
                Failure(
                    FailureCode.INVALID_BOOKING_TYPE,
                    {"value": booking_type, "valid_values": [t.value for t in BookingType]},
                )
            )
        else:
            uid_failure = screening_uid_failure(screening_uid, type_result.value)
            if uid_failure is not None:
                failures.append(uid_failure)

        if failures:
            return failure(failures)

        parsed_type = type_result.value
        duration_failure = cls._validate_duration(screening_uid, start, end, parsed_type)
        if duration_failure is not None:
            return failure(duration_failure)

        return success(cls(new_uid(BOOKING_UID_PREFIX), screening_uid, start, end, parsed_type))

    @classmethod
    def hydrate(
        cls,
        booking_uid: str | None,
        screening_uid: str | None,
        start_time: datetime | str | None,
        end_time: datetime | str | None,
        type: BookingType | str | None,
    ) -> "BookingSlot":
        """Rebuild a stored slot. Raises TechnicalError on missing fields."""
        fields = [
            name
            for name, value in (
                ("booking_uid", booking_uid),
                ("start_time", start_time),
                ("end_time", end_time),
                ("type", type),
            )
            if value is None
        ]
        raw_type = type.value if isinstance(type, BookingType) else type
        if raw_type is not None and raw_type not in {t.value for t in BookingType}:
            fields.append("type")
        TechnicalError.raise_if(bool(fields), FailureCode.INVALID_HYDRATE_DATA, {"fields": fields})

        return cls(
            booking_uid,
            screening_uid,
            _parse_datetime("start_time", start_time),
            _parse_datetime("end_time", end_time),
            BookingType(raw_type),
        )

    @property
    def duration_in_minutes(self) -> float:
        return minutes_between(self.start_time, self.end_time)

    def overlaps(self, start_time: datetime, end_time: datetime) -> bool:
        """Half-open overlap: touching endpoints do not overlap."""
        return start_time < self.end_time and end_time > self.start_time

    def belongs_to(self, screening_uid: str) -> bool:
        return self.screening_uid is not None and self.screening_uid == screening_uid

    def to_dict(self) -> dict[str, Any]:
        return {
            "booking_uid": self.booking_uid,
            "screening_uid": self.screening_uid,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "type": self.type.value,
        }

    @staticmethod
    def _validate_duration(
        screening_uid: str | None,
        start: datetime,
        end: datetime,
        booking_type: BookingType,
    ) -> Failure | None:
        duration = minutes_between(start, end)
        bounds = BOOKING_DURATION_BOUNDS[booking_type]
        if bounds.min_minutes <= duration <= bounds.max_minutes:
            return None

        limits: dict[str, Any] = {"provided": duration, "max": bounds.max_minutes}
        if bounds.min_minutes > 0:
            limits["min"] = bounds.min_minutes
        return Failure(
            bounds.failure_code,
            {
                "screening_uid": screening_uid,
                "start_time": start.isoformat(),
                "end_time": end.isoformat(),
                "duration": limits,
            },
        )
