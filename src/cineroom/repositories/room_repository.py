"""Load and save whole `Room` aggregates."""

import logging
from dataclasses import dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cineroom.domain.room import Room
from cineroom.models.booking import RoomBooking
from cineroom.models.room import RoomRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredRoom:
    """A room as loaded from storage, with the version it was read at."""

    room: Room
    version: int


class RoomRepository:
    """
    Repository for the `Room` aggregate.

    A room is always read with all of its bookings and written back as a
    whole. Writes are guarded by the `version` column: `replace` only
    succeeds if nobody else wrote the room since it was read.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, identifier: int) -> StoredRoom | None:
        """
        Load a room by its identifier.

        Raises:
            TechnicalError: if the stored row cannot be turned back into a Room
        """
        query = (
            select(RoomRecord)
            .where(RoomRecord.identifier == identifier)
            .options(selectinload(RoomRecord.bookings))
        )
        result = await self.db.execute(query)
        record = result.scalar_one_or_none()
        if record is None:
            return None
        return StoredRoom(room=Room.hydrate(_record_to_data(record)), version=record.version)

    async def exists(self, identifier: int) -> bool:
        query = select(RoomRecord.uid).where(RoomRecord.identifier == identifier)
        result = await self.db.execute(query)
        return result.scalar_one_or_none() is not None

    async def add(self, room: Room) -> StoredRoom | None:
        """Insert a new room. Returns None if the identifier is already taken."""
        record = RoomRecord(
            uid=room.room_uid,
            identifier=room.identifier.value,
            status=room.status.value,
            screen_size=room.screen.size,
            screen_type=room.screen.type.value,
            seat_rows=room.layout.to_rows(),
            version=1,
            bookings=[_booking_record(room.room_uid, data) for data in room.schedule.get_all_bookings_data()],
        )

        try:
            self.db.add(record)
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Room {room.identifier.value} already exists, not inserted")
            return None

        return StoredRoom(room=room, version=1)

    async def replace(self, room: Room, expected_version: int) -> int | None:
        """
        Overwrite a stored room with a new state of the same aggregate.

        The version bump is a compare-and-set; bookings are rewritten only
        once it succeeds.

        Args:
            room: New state of the room
            expected_version: Version the caller read the room at

        Returns:
            The new version, or None if the room changed in the meantime
        """
        new_version = expected_version + 1
        stmt = (
            update(RoomRecord)
            .where(RoomRecord.uid == room.room_uid, RoomRecord.version == expected_version)
            .values(status=room.status.value, version=new_version)
        )
        result = await self.db.execute(stmt)
        if result.rowcount != 1:
            logger.warning(
                f"Version conflict on room {room.identifier.value} "
                f"(expected version {expected_version})"
            )
            return None

        await self.db.execute(delete(RoomBooking).where(RoomBooking.room_uid == room.room_uid))
        self.db.add_all(
            [_booking_record(room.room_uid, data) for data in room.schedule.get_all_bookings_data()]
        )
        await self.db.flush()
        return new_version

    async def delete(self, identifier: int) -> bool:
        """Delete a room and, through the cascade, all of its bookings."""
        result = await self.db.execute(delete(RoomRecord).where(RoomRecord.identifier == identifier))
        return result.rowcount > 0


def _record_to_data(record: RoomRecord) -> dict:
    return {
        "room_uid": record.uid,
        "identifier": record.identifier,
        "seat_rows": record.seat_rows,
        "screen_size": record.screen_size,
        "screen_type": record.screen_type,
        "status": record.status,
        "bookings": [booking.to_domain_data() for booking in record.bookings],
    }


def _booking_record(room_uid: str, data: dict) -> RoomBooking:
    return RoomBooking(
        booking_uid=data["booking_uid"],
        room_uid=room_uid,
        screening_uid=data["screening_uid"],
        start_time=data["start_time"],
        end_time=data["end_time"],
        type=data["type"],
    )
