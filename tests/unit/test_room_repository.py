"""Unit tests for RoomRepository against a mocked AsyncSession."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from cineroom.domain.errors import TechnicalError
from cineroom.domain.room import Room
from cineroom.models.booking import RoomBooking
from cineroom.models.room import RoomRecord
from cineroom.repositories.room_repository import RoomRepository


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_db(*, record: RoomRecord | None = None, rowcount: int = 1) -> AsyncMock:
    db = AsyncMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = record
    result.rowcount = rowcount
    db.execute = AsyncMock(return_value=result)
    db.add = MagicMock()
    db.add_all = MagicMock()
    db.flush = AsyncMock()
    db.rollback = AsyncMock()
    return db


def make_record(room: Room, version: int = 2) -> RoomRecord:
    data = room.to_dict()
    return RoomRecord(
        uid=data["room_uid"],
        identifier=data["identifier"],
        status=data["status"],
        screen_size=data["screen_size"],
        screen_type=data["screen_type"],
        seat_rows=data["seat_rows"],
        version=version,
        bookings=[
            RoomBooking(
                booking_uid=b["booking_uid"],
                room_uid=data["room_uid"],
                screening_uid=b["screening_uid"],
                start_time=b["start_time"],
                end_time=b["end_time"],
                type=b["type"],
            )
            for b in data["bookings"]
        ],
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestGet:
    async def test_rebuilds_room_with_bookings(self, room: Room, at) -> None:
        room = room.add_screening("SCREENING.1", at(14), 120).value
        repository = RoomRepository(make_db(record=make_record(room, version=5)))

        stored = await repository.get(7)

        assert stored.version == 5
        assert stored.room == room

    async def test_missing_room(self) -> None:
        assert await RoomRepository(make_db()).get(7) is None

    async def test_corrupt_row_raises(self, room: Room) -> None:
        record = make_record(room)
        record.screen_type = None

        with pytest.raises(TechnicalError):
            await RoomRepository(make_db(record=record)).get(7)


class TestAdd:
    async def test_inserts_room(self, room: Room) -> None:
        db = make_db()

        stored = await RoomRepository(db).add(room)

        assert stored.version == 1
        inserted = db.add.call_args.args[0]
        assert inserted.identifier == 7
        assert inserted.seat_rows == room.layout.to_rows()
        db.flush.assert_awaited_once()

    async def test_duplicate_identifier(self, room: Room) -> None:
        db = make_db()
        db.flush = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("duplicate key")))

        stored = await RoomRepository(db).add(room)

        assert stored is None
        db.rollback.assert_awaited_once()


class TestReplace:
    async def test_bumps_version_and_rewrites_bookings(self, room: Room, at) -> None:
        room = room.add_screening("SCREENING.1", at(14), 120).value
        db = make_db(rowcount=1)

        new_version = await RoomRepository(db).replace(room, expected_version=4)

        assert new_version == 5
        # version update, then booking delete
        assert db.execute.await_count == 2
        written = db.add_all.call_args.args[0]
        assert [b.type for b in written] == ["ENTRY_TIME", "SCREENING", "EXIT_TIME", "CLEANING"]

    async def test_stale_version(self, room: Room) -> None:
        db = make_db(rowcount=0)

        new_version = await RoomRepository(db).replace(room, expected_version=4)

        assert new_version is None
        assert db.execute.await_count == 1
        db.add_all.assert_not_called()


class TestDelete:
    async def test_delete(self) -> None:
        assert await RoomRepository(make_db(rowcount=1)).delete(7) is True
        assert await RoomRepository(make_db(rowcount=0)).delete(7) is False
