"""Unit tests for the Room aggregate."""

from datetime import timedelta

import pytest

from cineroom.domain.booking_slot import BookingType
from cineroom.domain.errors import TechnicalError
from cineroom.domain.failures import FailureCode
from cineroom.domain.room import Room, RoomStatus
from cineroom.domain.room_schedule import FreeSlot
from cineroom.domain.screen import ScreenType
from cineroom.domain.seat_layout import SeatRowConfig
from cineroom.utils.dates import now_local


class TestCreate:
    def test_creates_available_room(self, room: Room) -> None:
        assert room.room_uid.startswith("ROOM.")
        assert room.identifier.value == 7
        assert room.status == RoomStatus.AVAILABLE
        assert room.screen.type == ScreenType.TWO_D
        assert room.total_seats_capacity == 50
        assert room.preferential_seats_count == 4
        assert len(room.schedule) == 0

    def test_accepts_initial_status(self, seat_config) -> None:
        result = Room.create(7, seat_config, 20, "3D", "closed")

        assert result.value.status == RoomStatus.CLOSED

    def test_collects_failures_from_every_part(self) -> None:
        result = Room.create(0, None, 60, "4D", "OPEN")

        codes = set(result.codes)
        assert FailureCode.VALUE_OUT_OF_RANGE.value in codes
        assert FailureCode.INVALID_ENUM_VALUE.value in codes
        assert FailureCode.MISSING_REQUIRED_DATA.value in codes
        assert len(result.failures) == 5

    def test_rejects_invalid_layout(self) -> None:
        rows = [SeatRowConfig(n, "D") for n in range(1, 5)]

        result = Room.create(7, rows, 20, "2D")

        # 16 seats is below the minimum capacity
        assert FailureCode.ROOM_WITH_INVALID_CAPACITY.value in result.codes


class TestHydrate:
    def test_round_trip_through_to_dict(self, room: Room, at) -> None:
        room = room.add_screening("SCREENING.1", at(14), 120).value

        rebuilt = Room.hydrate(room.to_dict())

        assert rebuilt == room
        assert rebuilt.to_dict() == room.to_dict()

    def test_to_dict_shape(self, room: Room) -> None:
        data = room.to_dict()

        assert data["identifier"] == 7
        assert data["screen_type"] == "2D"
        assert data["status"] == "AVAILABLE"
        assert data["bookings"] == []
        assert data["seat_rows"][0] == {
            "row_number": 1,
            "last_column_letter": "J",
            "preferential_seat_letters": ["A", "B"],
        }

    def test_missing_data(self) -> None:
        with pytest.raises(TechnicalError):
            Room.hydrate(None)

    def test_missing_field(self, room: Room) -> None:
        data = room.to_dict()
        del data["screen_size"]

        with pytest.raises(TechnicalError) as exc_info:
            Room.hydrate(data)

        assert exc_info.value.failure.details["fields"] == ["screen_size"]

    def test_unknown_status(self, room: Room) -> None:
        data = {**room.to_dict(), "status": "DEMOLISHED"}

        with pytest.raises(TechnicalError):
            Room.hydrate(data)

    def test_seat_row_without_number(self, room: Room) -> None:
        data = room.to_dict()
        del data["seat_rows"][0]["row_number"]

        with pytest.raises(TechnicalError) as exc_info:
            Room.hydrate(data)

        assert exc_info.value.failure.code == FailureCode.INVALID_HYDRATE_DATA
        assert exc_info.value.failure.details["fields"] == ["row_number"]


class TestAddScreening:
    def test_books_four_consecutive_blocks(self, room: Room, at) -> None:
        result = room.add_screening("SCREENING.1", at(14), 120)

        assert result.is_valid
        blocks = [(b.type, b.start_time, b.end_time) for b in result.value.bookings]
        assert blocks == [
            (BookingType.ENTRY_TIME, at(14), at(14, 15)),
            (BookingType.SCREENING, at(14, 15), at(16, 15)),
            (BookingType.EXIT_TIME, at(16, 15), at(16, 30)),
            (BookingType.CLEANING, at(16, 30), at(17)),
        ]
        assert all(b.screening_uid == "SCREENING.1" for b in result.value.bookings)

    def test_leaves_room_untouched(self, room: Room, at) -> None:
        room.add_screening("SCREENING.1", at(14), 120)

        assert len(room.schedule) == 0

    def test_back_to_back_screenings(self, room: Room, at) -> None:
        room = room.add_screening("SCREENING.1", at(10), 120).value

        # The first screening holds the room until 13:00
        result = room.add_screening("SCREENING.2", at(13), 90)

        assert result.is_valid
        assert len(result.value.bookings) == 8

    def test_overlap_leaves_room_unchanged(self, room: Room, at) -> None:
        room = room.add_screening("SCREENING.1", at(14), 120).value

        result = room.add_screening("SCREENING.2", at(16, 55), 90)

        assert result.codes == [FailureCode.ROOM_NOT_AVAILABLE_FOR_PERIOD.value]
        assert len(room.bookings) == 4

    def test_missing_input(self, room: Room, at) -> None:
        result = room.add_screening(None, at(14), None)

        assert result.codes == [FailureCode.MISSING_REQUIRED_DATA.value] * 2

    def test_period_checks_come_first(self, room: Room, at) -> None:
        result = room.add_screening("SCREENING.1", at(9), 120)

        assert result.codes == [FailureCode.ROOM_OPERATING_HOURS_VIOLATION.value]

    def test_screening_duration_is_checked(self, room: Room, at) -> None:
        result = room.add_screening("SCREENING.1", at(14), 20)

        assert result.codes == [FailureCode.INVALID_SCREENING_DURATION.value]
        assert len(room.bookings) == 0

    def test_off_grid_duration_fails_without_partial_booking(self, room: Room, at) -> None:
        # The exit block would start at 16:17
        result = room.add_screening("SCREENING.1", at(14), 122)

        assert result.codes == [FailureCode.INVALID_BOOKING_TIME_INTERVAL.value]

    def test_past_start(self, room: Room) -> None:
        yesterday = (now_local() - timedelta(days=1)).replace(hour=14, minute=0, second=0, microsecond=0)

        result = room.add_screening("SCREENING.1", yesterday, 120)

        assert result.codes == [FailureCode.DATE_CANNOT_BE_PAST.value]


class TestActivities:
    def test_schedule_maintenance(self, room: Room, at) -> None:
        result = room.schedule_maintenance(at(10), 180)

        booking = result.value.bookings[0]
        assert booking.type == BookingType.MAINTENANCE
        assert booking.screening_uid is None
        assert booking.end_time == at(13)

    def test_schedule_cleaning(self, room: Room, at) -> None:
        result = room.schedule_cleaning(at(12), 45)

        assert result.value.bookings[0].type == BookingType.CLEANING

    def test_cleaning_too_long(self, room: Room, at) -> None:
        result = room.schedule_cleaning(at(12), 150)

        assert result.codes == [FailureCode.INVALID_CLEANING_DURATION.value]

    def test_activity_missing_input(self, room: Room) -> None:
        assert room.schedule_maintenance(None, None).codes == [FailureCode.MISSING_REQUIRED_DATA.value] * 2

    def test_remove_screening(self, room: Room, at) -> None:
        room = room.add_screening("SCREENING.1", at(14), 120).value
        room = room.schedule_maintenance(at(18), 60).value

        result = room.remove_screening("SCREENING.1")

        assert [b.type for b in result.value.bookings] == [BookingType.MAINTENANCE]

    def test_remove_booking_by_uid(self, room: Room, at) -> None:
        room = room.schedule_maintenance(at(18), 60).value
        booking_uid = room.bookings[0].booking_uid

        result = room.remove_booking_by_uid(booking_uid)

        assert result.value.bookings == ()

    def test_remove_unknown_booking(self, room: Room) -> None:
        assert room.remove_booking_by_uid("BOOKING.x").codes == [FailureCode.BOOKING_NOT_FOUND_IN_ROOM.value]


class TestStatus:
    def test_close_empty_room(self, room: Room) -> None:
        result = room.change_status("CLOSED")

        assert result.value.status == RoomStatus.CLOSED
        assert room.status == RoomStatus.AVAILABLE

    def test_same_status_returns_same_instance(self, room: Room) -> None:
        assert room.change_status(RoomStatus.AVAILABLE).value is room

    def test_cannot_close_with_bookings(self, room: Room, at) -> None:
        room = room.schedule_maintenance(at(10), 60).value

        result = room.change_status("CLOSED")

        assert result.codes == [FailureCode.ROOM_HAS_FUTURE_BOOKINGS.value]

    def test_closing_a_closed_room_with_bookings_is_a_no_op(self, seat_config, at) -> None:
        closed = Room.create(7, seat_config, 20, "2D", status="CLOSED").value
        closed = closed.add_screening("SCREENING.1", at(13), 120).value

        assert closed.change_status("CLOSED").value is closed

    def test_invalid_token(self, room: Room) -> None:
        result = room.change_status("OPEN")

        assert result.codes == [FailureCode.INVALID_ENUM_VALUE.value]
        assert result.failures[0].details["valid_values"] == ["AVAILABLE", "CLOSED"]

    def test_missing_token(self, room: Room) -> None:
        assert room.change_status(None).codes == [FailureCode.MISSING_REQUIRED_DATA.value]


class TestQueries:
    def test_total_screening_time(self) -> None:
        assert Room.calculate_total_screening_time(120) == 180

    def test_is_period_available(self, room: Room, at) -> None:
        room = room.add_screening("SCREENING.1", at(14), 120).value

        assert room.is_period_available(at(10), 120).value is True
        assert room.is_period_available(at(12), 120).codes == [FailureCode.ROOM_NOT_AVAILABLE_FOR_PERIOD.value]

    def test_free_slots_after_screening(self, room: Room, day, at) -> None:
        room = room.add_screening("SCREENING.1", at(14), 120).value

        assert room.get_free_slots_for_date(day, 60) == [
            FreeSlot(at(10), at(14)),
            FreeSlot(at(17), at(22)),
        ]

    def test_find_screening(self, room: Room, at) -> None:
        room = room.add_screening("SCREENING.1", at(14), 120).value

        assert room.find_screening("SCREENING.1").start_time == at(14, 15)

    def test_seat_queries(self, room: Room) -> None:
        assert room.has_seat(1, "J")
        assert room.has_seat(5, "a")
        assert not room.has_seat(1, "K")
        assert not room.has_seat(9, "A")
        assert room.is_preferential_seat(2, "b")
        assert not room.is_preferential_seat(3, "A")

    def test_seat_layout_info(self, room: Room) -> None:
        info = room.seat_layout_info

        assert info["rows"] == 5
        assert info["total_seats"] == 50
        assert info["preferential_seats"] == 4
        assert info["rows_info"][0] == {"row_number": 1, "seats": 10, "preferential_seats": ["A", "B"]}
