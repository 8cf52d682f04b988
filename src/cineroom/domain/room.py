"""Room aggregate: layout, screen, schedule and administrative status."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Any

from cineroom.domain.booking_slot import BookingSlot, BookingType
from cineroom.domain.errors import TechnicalError
from cineroom.domain.failures import Failure, FailureCode
from cineroom.domain.identifiers import ROOM_UID_PREFIX, RoomIdentifier, new_uid
from cineroom.domain.result import Result, failure, success
from cineroom.domain.room_schedule import FreeSlot, RoomSchedule
from cineroom.domain.screen import Screen
from cineroom.domain.seat_layout import SeatLayout, SeatRow, SeatRowConfig
from cineroom.domain.validation import ensure_not_null, parse_enum
from cineroom.utils.dates import add_minutes


class RoomStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    CLOSED = "CLOSED"


@dataclass(frozen=True)
class Room:
    """
    A cinema room.

    Immutable: every operation returns a new `Room` (or the same instance
    when nothing changes) wrapped in a `Result`. The room cannot be closed
    while its schedule holds any booking.

    A screening occupies four back-to-back blocks: entry, the film itself,
    exit and cleaning.
    """

    ENTRY_TIME_IN_MINUTES = 15
    EXIT_TIME_IN_MINUTES = 15
    CLEANING_TIME_IN_MINUTES = 30

    room_uid: str
    identifier: RoomIdentifier
    layout: SeatLayout
    screen: Screen
    schedule: RoomSchedule
    status: RoomStatus

    @classmethod
    def create(
        cls,
        identifier: int | None,
        seat_config: list[SeatRowConfig] | None,
        screen_size: int | None,
        screen_type: str | None,
        status: RoomStatus | str | None = RoomStatus.AVAILABLE,
    ) -> Result["Room"]:
        """
        Validate every part of a new room, collecting all failures.

        Args:
            identifier: Room number (1-100)
            seat_config: One configuration per seat row
            screen_size: Screen size in metres
            screen_type: "2D", "3D" or "2D_3D"
            status: Initial administrative status

        Returns:
            Result with the room (empty schedule, fresh uid) or the failures
        """
        failures: list[Failure] = []

        status_result = parse_enum("status", status, RoomStatus)
        identifier_result = RoomIdentifier.create(identifier)
        screen_result = Screen.create(screen_size, screen_type)
        layout_result = SeatLayout.create(seat_config)

        for result in (status_result, identifier_result, screen_result, layout_result):
            failures.extend(result.failures)

        if failures:
            return failure(failures)

        return success(
            cls(
                room_uid=new_uid(ROOM_UID_PREFIX),
                identifier=identifier_result.value,
                layout=layout_result.value,
                screen=screen_result.value,
                schedule=RoomSchedule.create(),
                status=status_result.value,
            )
        )

    @classmethod
    def hydrate(cls, data: Mapping[str, Any] | None) -> "Room":
        """Rebuild a stored room; shaped like `to_dict()`. Raises TechnicalError."""
        TechnicalError.validate_required_fields(data=data)
        TechnicalError.validate_required_fields(
            room_uid=data.get("room_uid"),
            identifier=data.get("identifier"),
            seat_rows=data.get("seat_rows"),
            screen_size=data.get("screen_size"),
            screen_type=data.get("screen_type"),
            status=data.get("status"),
        )

        seat_rows = {}
        for row in data["seat_rows"]:
            TechnicalError.validate_required_fields(row_number=row.get("row_number"))
            seat_rows[row["row_number"]] = SeatRow.hydrate(
                row.get("last_column_letter"), row.get("preferential_seat_letters")
            )
        status = str(data["status"].value if isinstance(data["status"], RoomStatus) else data["status"])
        TechnicalError.raise_if(
            status.upper() not in {s.value for s in RoomStatus},
            FailureCode.INVALID_HYDRATE_DATA,
            {"fields": ["status"], "value": status},
        )

        return cls(
            room_uid=data["room_uid"],
            identifier=RoomIdentifier.hydrate(data["identifier"]),
            layout=SeatLayout.hydrate(seat_rows),
            screen=Screen.hydrate(data["screen_size"], data["screen_type"]),
            schedule=RoomSchedule.hydrate(data.get("bookings") or []),
            status=RoomStatus(status.upper()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "room_uid": self.room_uid,
            "identifier": self.identifier.value,
            "seat_rows": self.layout.to_rows(),
            "screen_size": self.screen.size,
            "screen_type": self.screen.type.value,
            "bookings": self.schedule.get_all_bookings_data(),
            "status": self.status.value,
        }

    def change_status(self, status: RoomStatus | str | None) -> Result["Room"]:
        status_result = parse_enum("status", status, RoomStatus)
        if status_result.is_invalid:
            return failure(status_result.failures)

        new_status = status_result.value
        if new_status == self.status:
            return success(self)
        if new_status == RoomStatus.CLOSED and len(self.schedule) > 0:
            return failure(
                Failure(
                    FailureCode.ROOM_HAS_FUTURE_BOOKINGS,
                    {"room_uid": self.room_uid, "bookings": len(self.schedule)},
                )
            )

        return success(replace(self, status=new_status))

    def add_screening(
        self,
        screening_uid: str | None,
        start_time: datetime | None,
        duration_in_minutes: int | None,
    ) -> Result["Room"]:
        """
        Book a screening with its entry, exit and cleaning blocks.

        The whole span is checked first; the four blocks are then added one
        after the other. Nothing is kept if any step fails.
        """
        missing = ensure_not_null(
            screening_uid=screening_uid,
            start_time=start_time,
            duration_in_minutes=duration_in_minutes,
        )
        if missing:
            return failure(missing)

        available = self.is_period_available(start_time, duration_in_minutes)
        if available.is_invalid:
            return failure(available.failures)
        if available.value is False:
            return failure(Failure(FailureCode.ROOM_PERIOD_UNAVAILABLE))

        entry_end = add_minutes(start_time, self.ENTRY_TIME_IN_MINUTES)
        show_end = add_minutes(entry_end, duration_in_minutes)
        exit_end = add_minutes(show_end, self.EXIT_TIME_IN_MINUTES)
        cleaning_end = add_minutes(exit_end, self.CLEANING_TIME_IN_MINUTES)

        schedule = (
            self.schedule.add_booking(screening_uid, start_time, entry_end, BookingType.ENTRY_TIME)
            .flat_map(lambda s: s.add_booking(screening_uid, entry_end, show_end, BookingType.SCREENING))
            .flat_map(lambda s: s.add_booking(screening_uid, show_end, exit_end, BookingType.EXIT_TIME))
            .flat_map(lambda s: s.add_booking(screening_uid, exit_end, cleaning_end, BookingType.CLEANING))
        )
        return schedule.map(self._with_schedule)

    def schedule_maintenance(self, start_time: datetime | None, duration_in_minutes: int | None) -> Result["Room"]:
        return self._schedule_activity(start_time, duration_in_minutes, BookingType.MAINTENANCE)

    def schedule_cleaning(self, start_time: datetime | None, duration_in_minutes: int | None) -> Result["Room"]:
        return self._schedule_activity(start_time, duration_in_minutes, BookingType.CLEANING)

    def remove_booking_by_uid(self, booking_uid: str | None) -> Result["Room"]:
        return self.schedule.remove_booking_by_uid(booking_uid).map(self._with_schedule)

    def remove_screening(self, screening_uid: str | None) -> Result["Room"]:
        return self.schedule.remove_screening(screening_uid).map(self._with_schedule)

    def is_period_available(self, start_time: datetime | None, duration_in_minutes: int | None) -> Result[bool]:
        """Check the full span a screening of this length would occupy."""
        missing = ensure_not_null(start_time=start_time, duration_in_minutes=duration_in_minutes)
        if missing:
            return failure(missing)

        end_time = add_minutes(start_time, self.calculate_total_screening_time(duration_in_minutes))
        return self.schedule.is_available(start_time, end_time)

    def get_free_slots_for_date(self, day: date | datetime | None, min_minutes: int | None) -> list[FreeSlot]:
        return self.schedule.get_free_slots_for_date(day, min_minutes)

    @classmethod
    def calculate_total_screening_time(cls, duration_in_minutes: int) -> int:
        return (
            duration_in_minutes
            + cls.ENTRY_TIME_IN_MINUTES
            + cls.EXIT_TIME_IN_MINUTES
            + cls.CLEANING_TIME_IN_MINUTES
        )

    @property
    def bookings(self) -> tuple[BookingSlot, ...]:
        return self.schedule.bookings

    def find_booking_by_uid(self, booking_uid: str) -> BookingSlot | None:
        return self.schedule.find_booking_by_uid(booking_uid)

    def find_screening(self, screening_uid: str) -> BookingSlot | None:
        return self.schedule.find_screening(screening_uid)

    def has_seat(self, row_number: int, column: str) -> bool:
        return self.layout.has_seat(row_number, column)

    def is_preferential_seat(self, row_number: int, column: str) -> bool:
        return self.layout.is_preferential_seat(row_number, column)

    @property
    def total_seats_capacity(self) -> int:
        return self.layout.total_capacity

    @property
    def preferential_seats_count(self) -> int:
        return self.layout.preferential_seats_count

    @property
    def seat_layout_info(self) -> dict[str, Any]:
        return {
            "rows": len(self.layout.seat_rows),
            "total_seats": self.layout.total_capacity,
            "preferential_seats": self.layout.preferential_seats_count,
            "rows_info": [
                {
                    "row_number": number,
                    "seats": row.capacity,
                    "preferential_seats": list(row.preferential_seat_letters),
                }
                for number, row in self.layout.seat_rows.items()
            ],
        }

    def _schedule_activity(
        self,
        start_time: datetime | None,
        duration_in_minutes: int | None,
        booking_type: BookingType,
    ) -> Result["Room"]:
        missing = ensure_not_null(start_time=start_time, duration_in_minutes=duration_in_minutes)
        if missing:
            return failure(missing)

        end_time = add_minutes(start_time, duration_in_minutes)
        return self.schedule.add_booking(None, start_time, end_time, booking_type).map(self._with_schedule)

    def _with_schedule(self, schedule: RoomSchedule) -> "Room":
        return replace(self, schedule=schedule)
