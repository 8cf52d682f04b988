"""Room application service: loads rooms, calls the domain, saves the result."""

import logging
from collections.abc import Callable
from datetime import date, datetime

from cineroom.domain.booking_slot import BookingType
from cineroom.domain.failures import Failure, FailureCode
from cineroom.domain.result import Result, failure, success
from cineroom.domain.room import Room, RoomStatus
from cineroom.domain.room_schedule import FreeSlot
from cineroom.domain.seat_layout import SeatRowConfig
from cineroom.domain.validation import ensure_not_null
from cineroom.repositories.room_repository import RoomRepository, StoredRoom
from cineroom.utils.dates import now_local

logger = logging.getLogger(__name__)

REMOVABLE_BOOKING_TYPES = (BookingType.CLEANING, BookingType.MAINTENANCE)


class RoomService:
    """
    Use cases over the `Room` aggregate.

    Every mutation follows the same steps: load the room and its version,
    apply one domain operation, then replace the stored room if the
    operation succeeded. Business failures come back as a failed `Result`;
    nothing here raises for them.
    """

    def __init__(self, repository: RoomRepository) -> None:
        self.repository = repository

    async def find_by_id(self, identifier: int | None) -> Result[Room]:
        return (await self._load(identifier)).map(lambda stored: stored.room)

    async def create(
        self,
        identifier: int | None,
        seat_config: list[SeatRowConfig] | None,
        screen_size: int | None,
        screen_type: str | None,
        status: str | None = RoomStatus.AVAILABLE,
    ) -> Result[Room]:
        """
        Create and store a new room.

        Args:
            identifier: Room number, must not be in use
            seat_config: Row configurations of the seat layout
            screen_size: Screen size in metres
            screen_type: Screen type token
            status: Initial status (AVAILABLE when omitted)

        Returns:
            Result with the stored room, or the validation failures
        """
        if identifier is not None and await self.repository.exists(identifier):
            return self._rejected(
                "create", identifier, failure(Failure(FailureCode.RESOURCE_ALREADY_EXISTS, {"identifier": identifier}))
            )

        room_result = Room.create(identifier, seat_config, screen_size, screen_type, status)
        if room_result.is_invalid:
            return self._rejected("create", identifier, room_result)

        stored = await self.repository.add(room_result.value)
        if stored is None:
            return self._rejected(
                "create", identifier, failure(Failure(FailureCode.RESOURCE_ALREADY_EXISTS, {"identifier": identifier}))
            )

        logger.info(f"Created room {identifier} ({stored.room.total_seats_capacity} seats)")
        return success(stored.room)

    async def delete(self, identifier: int | None) -> Result[None]:
        loaded = await self._load(identifier)
        if loaded.is_invalid:
            return failure(loaded.failures)

        await self.repository.delete(identifier)
        logger.info(f"Deleted room {identifier}")
        return success(None)

    async def close_room(self, identifier: int | None) -> Result[Room]:
        return await self._mutate("close", identifier, lambda room: room.change_status(RoomStatus.CLOSED))

    async def reopen_room(self, identifier: int | None) -> Result[Room]:
        return await self._mutate("reopen", identifier, lambda room: room.change_status(RoomStatus.AVAILABLE))

    async def change_status(self, identifier: int | None, status: str | None) -> Result[Room]:
        return await self._mutate("change status of", identifier, lambda room: room.change_status(status))

    async def add_screening(
        self,
        identifier: int | None,
        screening_uid: str | None,
        start_time: datetime | None,
        duration_in_minutes: int | None,
    ) -> Result[Room]:
        return await self._mutate(
            "add screening to",
            identifier,
            lambda room: room.add_screening(screening_uid, start_time, duration_in_minutes),
        )

    async def remove_screening(self, identifier: int | None, screening_uid: str | None) -> Result[Room]:
        return await self._mutate("remove screening from", identifier, lambda room: room.remove_screening(screening_uid))

    async def schedule_cleaning(
        self, identifier: int | None, start_time: datetime | None, duration_in_minutes: int | None
    ) -> Result[Room]:
        return await self._mutate(
            "schedule cleaning in",
            identifier,
            lambda room: room.schedule_cleaning(start_time, duration_in_minutes),
        )

    async def schedule_maintenance(
        self, identifier: int | None, start_time: datetime | None, duration_in_minutes: int | None
    ) -> Result[Room]:
        return await self._mutate(
            "schedule maintenance in",
            identifier,
            lambda room: room.schedule_maintenance(start_time, duration_in_minutes),
        )

    async def remove_scheduled_activity(self, identifier: int | None, booking_uid: str | None) -> Result[Room]:
        """
        Cancel a manual cleaning or a maintenance.

        Screening blocks, and cleanings that belong to a screening, can only
        go away together with their screening. Bookings that already started
        cannot be removed.
        """
        missing = ensure_not_null(identifier=identifier, booking_uid=booking_uid)
        if missing:
            return failure(missing)

        return await self._mutate(
            "remove activity from",
            identifier,
            lambda room: self._check_removable(room, booking_uid).flat_map(
                lambda _: room.remove_booking_by_uid(booking_uid)
            ),
        )

    async def get_free_slots(
        self, identifier: int | None, day: date | None, min_minutes: int | None
    ) -> Result[list[FreeSlot]]:
        return (await self.find_by_id(identifier)).map(lambda room: room.get_free_slots_for_date(day, min_minutes))

    @staticmethod
    def _check_removable(room: Room, booking_uid: str) -> Result[bool]:
        booking = room.find_booking_by_uid(booking_uid)
        if booking is None:
            return failure(Failure(FailureCode.BOOKING_NOT_FOUND_IN_ROOM, {"booking_uid": booking_uid}))

        now = now_local()
        if booking.start_time <= now:
            return failure(
                Failure(
                    FailureCode.BOOKING_ALREADY_STARTED,
                    {"booking_start_time": booking.start_time.isoformat(), "now": now.isoformat()},
                )
            )

        if booking.type not in REMOVABLE_BOOKING_TYPES:
            return failure(
                Failure(
                    FailureCode.INVALID_BOOKING_TYPE_FOR_REMOVAL,
                    {
                        "booking_type": booking.type.value,
                        "allowed_types": [t.value for t in REMOVABLE_BOOKING_TYPES],
                    },
                )
            )

        if booking.type == BookingType.CLEANING and booking.screening_uid is not None:
            return failure(
                Failure(
                    FailureCode.CLEANING_ASSOCIATED_WITH_SCREENING,
                    {"booking_uid": booking_uid, "screening_uid": booking.screening_uid},
                )
            )

        return success(True)

    async def _load(self, identifier: int | None) -> Result[StoredRoom]:
        missing = ensure_not_null(identifier=identifier)
        if missing:
            return failure(missing)

        stored = await self.repository.get(identifier)
        if stored is None:
            return failure(Failure(FailureCode.RESOURCE_NOT_FOUND, {"identifier": identifier}))
        return success(stored)

    async def _mutate(
        self,
        action: str,
        identifier: int | None,
        operation: Callable[[Room], Result[Room]],
    ) -> Result[Room]:
        loaded = await self._load(identifier)
        if loaded.is_invalid:
            return self._rejected(action, identifier, loaded)

        stored = loaded.value
        updated = operation(stored.room)
        if updated.is_invalid:
            return self._rejected(action, identifier, updated)

        # Operations that change nothing hand back the same instance
        if updated.value is stored.room:
            return success(stored.room)

        new_version = await self.repository.replace(updated.value, stored.version)
        if new_version is None:
            return self._rejected(
                action,
                identifier,
                failure(
                    Failure(
                        FailureCode.ROOM_CONCURRENT_MODIFICATION,
                        {"identifier": identifier, "expected_version": stored.version},
                    )
                ),
            )

        logger.info(f"Room {identifier}: {action} done (version {new_version})")
        return updated

    @staticmethod
    def _rejected(action: str, identifier: int | None, result: Result) -> Result:
        logger.warning(f"Could not {action} room {identifier}: {', '.join(result.codes)}")
        return failure(result.failures)
