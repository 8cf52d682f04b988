"""Unit tests for RoomSchedule."""

from datetime import datetime, time, timedelta, timezone

import pytest

from cineroom.domain.booking_slot import BookingType
from cineroom.domain.errors import TechnicalError
from cineroom.domain.failures import FailureCode
from cineroom.domain.room_schedule import FreeSlot, RoomSchedule


def add(schedule: RoomSchedule, start: datetime, end: datetime, booking_type: str = "CLEANING", screening_uid=None):
    result = schedule.add_booking(screening_uid, start, end, booking_type)
    assert result.is_valid, result.codes
    return result.value


class TestIsAvailable:
    def test_empty_schedule_is_available(self, at) -> None:
        result = RoomSchedule.create().is_available(at(14), at(16))

        assert result.is_valid
        assert result.value is True

    def test_missing_bounds(self, at) -> None:
        result = RoomSchedule.create().is_available(None, at(16))

        assert result.codes == [FailureCode.MISSING_REQUIRED_DATA.value]

    def test_rejects_reversed_interval(self, at) -> None:
        result = RoomSchedule.create().is_available(at(16), at(14))

        assert result.codes == [FailureCode.DATE_WITH_INVALID_SEQUENCE.value]

    @pytest.mark.parametrize("hour", [0, 9, 22, 23])
    def test_rejects_start_outside_operating_hours(self, at, hour: int) -> None:
        result = RoomSchedule.create().is_available(at(hour), at(hour, 30))

        assert result.codes == [FailureCode.ROOM_OPERATING_HOURS_VIOLATION.value]

    @pytest.mark.parametrize("hour", [10, 21])
    def test_accepts_start_within_operating_hours(self, at, hour: int) -> None:
        assert RoomSchedule.create().is_available(at(hour), at(hour, 30)).is_valid

    def test_end_may_pass_closing_time(self, at) -> None:
        assert RoomSchedule.create().is_available(at(21, 55), at(23, 30)).is_valid

    def test_rejects_start_off_the_five_minute_grid(self, at) -> None:
        result = RoomSchedule.create().is_available(at(14, 7), at(15))

        assert result.codes == [FailureCode.INVALID_BOOKING_TIME_INTERVAL.value]

    def test_stops_at_first_violated_rule(self, at) -> None:
        # Off-grid and out of hours: only the hours violation is reported
        result = RoomSchedule.create().is_available(at(8, 3), at(9))

        assert result.codes == [FailureCode.ROOM_OPERATING_HOURS_VIOLATION.value]

    def test_aware_datetimes_use_local_wall_clock(self, day) -> None:
        # 12:00 UTC is 09:00 in Sao Paulo, before opening; 23:00 UTC is 20:00
        early_utc = datetime.combine(day, time(12, 0), tzinfo=timezone.utc)
        late_utc = datetime.combine(day, time(23, 0), tzinfo=timezone.utc)

        early = RoomSchedule.create().is_available(early_utc, early_utc + timedelta(hours=1))
        late = RoomSchedule.create().is_available(late_utc, late_utc + timedelta(hours=1))

        assert early.codes == [FailureCode.ROOM_OPERATING_HOURS_VIOLATION.value]
        assert late.is_valid

    def test_reports_conflicting_booking(self, at) -> None:
        schedule = add(RoomSchedule.create(), at(14), at(15))
        existing = schedule.bookings[0]

        result = schedule.is_available(at(14, 30), at(15, 30))

        assert result.codes == [FailureCode.ROOM_NOT_AVAILABLE_FOR_PERIOD.value]
        details = result.failures[0].details
        assert details["conflicting_booking_uid"] == existing.booking_uid
        assert details["conflicting_booking_type"] == "CLEANING"

    def test_touching_bookings_are_available(self, at) -> None:
        schedule = add(RoomSchedule.create(), at(14), at(15))

        assert schedule.is_available(at(15), at(16)).is_valid
        assert schedule.is_available(at(13), at(14)).is_valid


class TestAddBooking:
    def test_returns_new_schedule(self, at) -> None:
        empty = RoomSchedule.create()

        updated = add(empty, at(14), at(15))

        assert len(empty) == 0
        assert len(updated) == 1

    def test_keeps_bookings_sorted(self, at) -> None:
        schedule = add(RoomSchedule.create(), at(18), at(19))
        schedule = add(schedule, at(12), at(13), "MAINTENANCE")
        schedule = add(schedule, at(15), at(16))

        starts = [b.start_time for b in schedule]
        assert starts == [at(12), at(15), at(18)]

    def test_rejects_overlap(self, at) -> None:
        schedule = add(RoomSchedule.create(), at(14), at(15))

        result = schedule.add_booking(None, at(14, 30), at(15, 30), "MAINTENANCE")

        assert result.codes == [FailureCode.ROOM_NOT_AVAILABLE_FOR_PERIOD.value]
        assert len(schedule) == 1

    def test_missing_type(self, at) -> None:
        result = RoomSchedule.create().add_booking(None, at(14), at(15), None)

        assert result.codes == [FailureCode.MISSING_REQUIRED_DATA.value]

    def test_screening_without_uid(self, at) -> None:
        result = RoomSchedule.create().add_booking(None, at(14), at(16), BookingType.SCREENING)

        assert result.codes == [FailureCode.MISSING_REQUIRED_DATA.value]

    def test_maintenance_cannot_belong_to_a_screening(self, at) -> None:
        result = RoomSchedule.create().add_booking("SCREENING.1", at(13), at(14), "MAINTENANCE")

        assert result.codes == [FailureCode.SCREENING_UID_NOT_ALLOWED.value]

    def test_slot_validation_applies(self, at) -> None:
        result = RoomSchedule.create().add_booking("SCREENING.1", at(14), at(14, 10), "SCREENING")

        assert result.codes == [FailureCode.INVALID_SCREENING_DURATION.value]

    def test_unknown_type(self, at) -> None:
        result = RoomSchedule.create().add_booking(None, at(14), at(15), "PARTY")

        assert result.codes == [FailureCode.INVALID_BOOKING_TYPE.value]


class TestRemoval:
    def test_remove_booking_by_uid(self, at) -> None:
        schedule = add(RoomSchedule.create(), at(14), at(15))
        schedule = add(schedule, at(16), at(17))
        target = schedule.bookings[0]

        result = schedule.remove_booking_by_uid(target.booking_uid)

        assert result.is_valid
        assert len(result.value) == 1
        assert result.value.find_booking_by_uid(target.booking_uid) is None
        assert len(schedule) == 2

    def test_remove_unknown_booking(self) -> None:
        result = RoomSchedule.create().remove_booking_by_uid("BOOKING.missing")

        assert result.codes == [FailureCode.BOOKING_NOT_FOUND_IN_ROOM.value]

    def test_remove_screening_drops_all_its_blocks(self, at) -> None:
        schedule = add(RoomSchedule.create(), at(14), at(14, 15), "ENTRY_TIME", "SCREENING.1")
        schedule = add(schedule, at(14, 15), at(16, 15), "SCREENING", "SCREENING.1")
        schedule = add(schedule, at(16, 15), at(16, 30), "EXIT_TIME", "SCREENING.1")
        schedule = add(schedule, at(16, 30), at(17), "CLEANING", "SCREENING.1")
        schedule = add(schedule, at(18), at(19), "MAINTENANCE")

        result = schedule.remove_screening("SCREENING.1")

        assert result.is_valid
        assert [b.type for b in result.value] == [BookingType.MAINTENANCE]

    def test_remove_unknown_screening(self) -> None:
        result = RoomSchedule.create().remove_screening("SCREENING.missing")

        assert result.codes == [FailureCode.BOOKING_NOT_FOUND_FOR_SCREENING.value]

    def test_remove_requires_uid(self) -> None:
        assert RoomSchedule.create().remove_screening(None).codes == [FailureCode.MISSING_REQUIRED_DATA.value]
        assert RoomSchedule.create().remove_booking_by_uid(None).codes == [FailureCode.MISSING_REQUIRED_DATA.value]


class TestFreeSlots:
    def test_empty_day_is_one_slot(self, day, at) -> None:
        slots = RoomSchedule.create().get_free_slots_for_date(day, 30)

        assert slots == [FreeSlot(at(10), at(22))]
        assert slots[0].duration_in_minutes == 720

    def test_gaps_around_bookings(self, day, at) -> None:
        schedule = add(RoomSchedule.create(), at(12), at(14))
        schedule = add(schedule, at(16), at(17))

        slots = schedule.get_free_slots_for_date(day, 30)

        assert slots == [
            FreeSlot(at(10), at(12)),
            FreeSlot(at(14), at(16)),
            FreeSlot(at(17), at(22)),
        ]

    def test_adjacent_bookings_merge(self, day, at) -> None:
        schedule = add(RoomSchedule.create(), at(12), at(13))
        schedule = add(schedule, at(13), at(14), "MAINTENANCE")

        slots = schedule.get_free_slots_for_date(day, 30)

        assert slots == [FreeSlot(at(10), at(12)), FreeSlot(at(14), at(22))]

    def test_short_gaps_are_dropped(self, day, at) -> None:
        schedule = add(RoomSchedule.create(), at(10), at(12))
        schedule = add(schedule, at(12, 20), at(21, 45), "MAINTENANCE")

        slots = schedule.get_free_slots_for_date(day, 30)

        assert slots == []

    def test_minimum_is_inclusive(self, day, at) -> None:
        schedule = add(RoomSchedule.create(), at(10, 30), at(21, 30), "MAINTENANCE")

        slots = schedule.get_free_slots_for_date(day, 30)

        assert slots == [FreeSlot(at(10), at(10, 30)), FreeSlot(at(21, 30), at(22))]

    def test_gap_edges_snap_to_grid(self, day, at) -> None:
        # An off-grid end can only come from stored data
        stored = add(RoomSchedule.create(), at(12), at(13))
        data = stored.get_all_bookings_data()
        data[0]["end_time"] = at(13, 2)
        schedule = RoomSchedule.hydrate(data)

        slots = schedule.get_free_slots_for_date(day, 30)

        assert slots[1].start_time == at(13, 5)

    def test_booking_past_closing_is_clipped(self, day, at) -> None:
        schedule = add(RoomSchedule.create(), at(21), at(23), "MAINTENANCE")

        slots = schedule.get_free_slots_for_date(day, 30)

        assert slots == [FreeSlot(at(10), at(21))]

    def test_other_days_are_ignored(self, day, at) -> None:
        schedule = add(RoomSchedule.create(), at(14) + timedelta(days=1), at(15) + timedelta(days=1))

        assert schedule.get_free_slots_for_date(day, 30) == [FreeSlot(at(10), at(22))]

    def test_accepts_datetime_as_day(self, day, at) -> None:
        assert RoomSchedule.create().get_free_slots_for_date(at(15), 30) == [FreeSlot(at(10), at(22))]

    @pytest.mark.parametrize("min_minutes", [None, 0, -5])
    def test_invalid_minimum_gives_nothing(self, day, min_minutes) -> None:
        assert RoomSchedule.create().get_free_slots_for_date(day, min_minutes) == []

    def test_missing_day_gives_nothing(self) -> None:
        assert RoomSchedule.create().get_free_slots_for_date(None, 30) == []


class TestHydrate:
    def test_round_trip(self, at) -> None:
        schedule = add(RoomSchedule.create(), at(14), at(15))
        schedule = add(schedule, at(11), at(12), "MAINTENANCE")

        rebuilt = RoomSchedule.hydrate(schedule.get_all_bookings_data())

        assert rebuilt == schedule
        assert [b["type"] for b in rebuilt.get_all_bookings_data()] == ["MAINTENANCE", "CLEANING"]

    def test_missing_list(self) -> None:
        with pytest.raises(TechnicalError):
            RoomSchedule.hydrate(None)

    def test_incomplete_booking(self) -> None:
        with pytest.raises(TechnicalError):
            RoomSchedule.hydrate([{"booking_uid": "BOOKING.1", "type": "CLEANING"}])

    def test_find_screening_returns_screening_slot(self, at) -> None:
        schedule = add(RoomSchedule.create(), at(14), at(14, 15), "ENTRY_TIME", "SCREENING.1")
        schedule = add(schedule, at(14, 15), at(16, 15), "SCREENING", "SCREENING.1")

        found = schedule.find_screening("SCREENING.1")

        assert found is not None
        assert found.type == BookingType.SCREENING
        assert schedule.find_screening("SCREENING.2") is None
