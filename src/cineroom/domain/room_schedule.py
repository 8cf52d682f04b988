"""Time-ordered schedule of a room's bookings."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from cineroom.domain.booking_slot import BookingSlot, BookingType, screening_uid_failure
from cineroom.domain.errors import TechnicalError
from cineroom.domain.failures import Failure, FailureCode
from cineroom.domain.result import Result, failure, success
from cineroom.domain.validation import ensure_not_null, parse_enum
from cineroom.utils.dates import as_local, at_hour, ceil_to_step, floor_to_step, minutes_between


@dataclass(frozen=True)
class FreeSlot:
    """A gap in the schedule where a new booking could go."""

    start_time: datetime
    end_time: datetime

    @property
    def duration_in_minutes(self) -> float:
        return minutes_between(self.start_time, self.end_time)


class RoomSchedule:
    """
    Immutable, start-time ordered collection of `BookingSlot`.

    Responsibilities:
    - Check whether a period is free (ordering, operating hours, 5-minute
      grid, overlap with existing bookings)
    - Add and remove bookings, always returning a new schedule
    - Find the free periods of a day

    No two stored bookings ever overlap; `add_booking` is the only way in
    for new slots and it rejects overlaps.
    """

    OPERATING_START_HOUR = 10
    OPERATING_END_HOUR = 22
    MINUTE_STEP = 5

    def __init__(self, bookings: Iterable[BookingSlot] = ()) -> None:
        self._bookings: tuple[BookingSlot, ...] = tuple(sorted(bookings, key=lambda b: b.start_time))

    def __repr__(self) -> str:
        return f"<RoomSchedule(bookings={len(self._bookings)})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoomSchedule):
            return NotImplemented
        return self._bookings == other._bookings

    def __hash__(self) -> int:
        return hash(self._bookings)

    def __len__(self) -> int:
        return len(self._bookings)

    def __iter__(self) -> Iterator[BookingSlot]:
        return iter(self._bookings)

    @property
    def bookings(self) -> tuple[BookingSlot, ...]:
        return self._bookings

    @classmethod
    def create(cls) -> "RoomSchedule":
        return cls()

    @classmethod
    def hydrate(cls, bookings_data: Iterable[Mapping[str, Any]] | None) -> "RoomSchedule":
        """
        Rebuild a schedule from stored booking dicts.

        Args:
            bookings_data: Items shaped like `BookingSlot.to_dict()`

        Raises:
            TechnicalError: if the list or any booking is incomplete
        """
        TechnicalError.validate_required_fields(bookings_data=bookings_data)
        return cls(
            BookingSlot.hydrate(
                booking_uid=data.get("booking_uid"),
                screening_uid=data.get("screening_uid"),
                start_time=data.get("start_time"),
                end_time=data.get("end_time"),
                type=data.get("type"),
            )
            for data in bookings_data
        )

    def get_all_bookings_data(self) -> list[dict[str, Any]]:
        """Every booking as a dict, in chronological order."""
        return [booking.to_dict() for booking in self._bookings]

    def find_booking_by_uid(self, booking_uid: str) -> BookingSlot | None:
        return next((b for b in self._bookings if b.booking_uid == booking_uid), None)

    def find_screening(self, screening_uid: str) -> BookingSlot | None:
        """The SCREENING slot of a screening, ignoring its derived blocks."""
        return next(
            (
                b
                for b in self._bookings
                if b.type == BookingType.SCREENING and b.belongs_to(screening_uid)
            ),
            None,
        )

    def is_available(self, start_time: datetime | None, end_time: datetime | None) -> Result[bool]:
        """
        Check that ``[start_time, end_time)`` can be booked.

        Stops at the first violated rule:
        1. end_time must be after start_time
        2. start hour must fall within operating hours
        3. start minute must sit on the 5-minute grid
        4. no overlap with an existing booking
        """
        missing = ensure_not_null(start_time=start_time, end_time=end_time)
        if missing:
            return failure(missing)

        start = as_local(start_time)
        end = as_local(end_time)

        return (
            self._validate_time_sequence(start, end)
            .flat_map(lambda _: self._validate_operating_hours(start))
            .flat_map(lambda _: self._validate_minute_interval(start))
            .flat_map(lambda _: self._check_booking_overlap(start, end))
        )

    def add_booking(
        self,
        screening_uid: str | None,
        start_time: datetime | None,
        end_time: datetime | None,
        booking_type: BookingType | str | None,
    ) -> Result["RoomSchedule"]:
        """Return a new schedule with the booking added, or the reasons it cannot be."""
        missing = ensure_not_null(start_time=start_time, end_time=end_time, type=booking_type)
        if missing:
            return failure(missing)

        return (
            self._validate_screening_reference(screening_uid, booking_type)
            .flat_map(lambda _: self.is_available(start_time, end_time))
            .flat_map(lambda _: BookingSlot.create(screening_uid, start_time, end_time, booking_type))
            .map(lambda slot: RoomSchedule((*self._bookings, slot)))
        )

    def remove_booking_by_uid(self, booking_uid: str | None) -> Result["RoomSchedule"]:
        missing = ensure_not_null(booking_uid=booking_uid)
        if missing:
            return failure(missing)

        remaining = [b for b in self._bookings if b.booking_uid != booking_uid]
        if len(remaining) == len(self._bookings):
            return failure(Failure(FailureCode.BOOKING_NOT_FOUND_IN_ROOM, {"booking_uid": booking_uid}))
        return success(RoomSchedule(remaining))

    def remove_screening(self, screening_uid: str | None) -> Result["RoomSchedule"]:
        """Drop every booking owned by a screening, derived blocks included."""
        missing = ensure_not_null(screening_uid=screening_uid)
        if missing:
            return failure(missing)

        remaining = [b for b in self._bookings if not b.belongs_to(screening_uid)]
        if len(remaining) == len(self._bookings):
            return failure(
                Failure(FailureCode.BOOKING_NOT_FOUND_FOR_SCREENING, {"screening_uid": screening_uid})
            )
        return success(RoomSchedule(remaining))

    def get_free_slots_for_date(self, day: date | datetime | None, min_minutes: int | None) -> list[FreeSlot]:
        """
        Find the free periods of a day that last at least `min_minutes`.

        The day is clipped to operating hours, bookings starting that day are
        merged into busy blocks, and each gap between blocks is snapped to the
        5-minute grid (start rounded up, end rounded down).

        Args:
            day: Calendar day to inspect (a datetime's time part is ignored)
            min_minutes: Minimum length of a free period

        Returns:
            Free periods in chronological order; empty for missing or
            non-positive input
        """
        if day is None or min_minutes is None or min_minutes <= 0:
            return []
        if isinstance(day, datetime):
            day = as_local(day).date()

        day_start = at_hour(day, self.OPERATING_START_HOUR)
        day_end = at_hour(day, self.OPERATING_END_HOUR)

        busy = self._busy_intervals(day, day_start, day_end)
        merged = self._merge_intervals(busy)
        return self._find_gaps(merged, day_start, day_end, min_minutes)

    def _busy_intervals(
        self, day: date, day_start: datetime, day_end: datetime
    ) -> list[tuple[datetime, datetime]]:
        intervals = []
        for booking in self._bookings:
            if as_local(booking.start_time).date() != day:
                continue
            start = max(booking.start_time, day_start)
            end = min(booking.end_time, day_end)
            if start < end:
                intervals.append((start, end))
        return sorted(intervals)

    @staticmethod
    def _merge_intervals(intervals: list[tuple[datetime, datetime]]) -> list[tuple[datetime, datetime]]:
        merged: list[tuple[datetime, datetime]] = []
        for start, end in intervals:
            if merged and start <= merged[-1][1]:
                last_start, last_end = merged[-1]
                merged[-1] = (last_start, max(last_end, end))
            else:
                merged.append((start, end))
        return merged

    def _find_gaps(
        self,
        merged: list[tuple[datetime, datetime]],
        day_start: datetime,
        day_end: datetime,
        min_minutes: int,
    ) -> list[FreeSlot]:
        gaps = []
        previous_end = day_start
        for start, end in merged:
            if previous_end < start:
                gaps.append((previous_end, start))
            previous_end = max(previous_end, end)
        if previous_end < day_end:
            gaps.append((previous_end, day_end))

        free_slots = []
        for gap_start, gap_end in gaps:
            start = ceil_to_step(as_local(gap_start), self.MINUTE_STEP)
            end = floor_to_step(as_local(gap_end), self.MINUTE_STEP)
            if start < end and minutes_between(start, end) >= min_minutes:
                free_slots.append(FreeSlot(start, end))
        return free_slots

    @staticmethod
    def _validate_time_sequence(start: datetime, end: datetime) -> Result[bool]:
        if end <= start:
            return failure(
                Failure(
                    FailureCode.DATE_WITH_INVALID_SEQUENCE,
                    {"start_time": start.isoformat(), "end_time": end.isoformat()},
                )
            )
        return success(True)

    def _validate_operating_hours(self, start: datetime) -> Result[bool]:
        if not self.OPERATING_START_HOUR <= start.hour < self.OPERATING_END_HOUR:
            return failure(
                Failure(
                    FailureCode.ROOM_OPERATING_HOURS_VIOLATION,
                    {
                        "start_hour": start.hour,
                        "operating_start_hour": self.OPERATING_START_HOUR,
                        "operating_end_hour": self.OPERATING_END_HOUR,
                    },
                )
            )
        return success(True)

    def _validate_minute_interval(self, start: datetime) -> Result[bool]:
        if start.minute % self.MINUTE_STEP != 0:
            return failure(
                Failure(
                    FailureCode.INVALID_BOOKING_TIME_INTERVAL,
                    {
                        "start_time": start.isoformat(),
                        "allowed_minutes": list(range(0, 60, self.MINUTE_STEP)),
                    },
                )
            )
        return success(True)

    def _check_booking_overlap(self, start: datetime, end: datetime) -> Result[bool]:
        for booking in self._bookings:
            if booking.overlaps(start, end):
                return failure(
                    Failure(
                        FailureCode.ROOM_NOT_AVAILABLE_FOR_PERIOD,
                        {
                            "requested_start_time": start.isoformat(),
                            "requested_end_time": end.isoformat(),
                            "conflicting_booking_uid": booking.booking_uid,
                            "conflicting_booking_type": booking.type.value,
                            "conflicting_start_time": booking.start_time.isoformat(),
                            "conflicting_end_time": booking.end_time.isoformat(),
                        },
                    )
                )
        return success(True)

    @staticmethod
    def _validate_screening_reference(
        screening_uid: str | None, booking_type: BookingType | str
    ) -> Result[bool]:
        parsed = parse_enum("type", booking_type, BookingType)
        # Unknown types are reported by BookingSlot.create
        if parsed.is_invalid:
            return success(True)
        uid_failure = screening_uid_failure(screening_uid, parsed.value)
        if uid_failure is not None:
            return failure(uid_failure)
        return success(True)
