"""Room API endpoints."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from cineroom.api.errors import unwrap
from cineroom.database import get_db
from cineroom.repositories.room_repository import RoomRepository
from cineroom.schemas import (
    ActivityRequest,
    FreeSlotResponse,
    FreeSlotsResponse,
    RoomCreateRequest,
    RoomResponse,
    RoomStatusRequest,
    ScreeningRequest,
)
from cineroom.services.room_service import RoomService

logger = logging.getLogger(__name__)
router = APIRouter()


async def get_room_service(db: AsyncSession = Depends(get_db)) -> RoomService:
    return RoomService(RoomRepository(db))


@router.post("/rooms", response_model=RoomResponse, status_code=201)
async def create_room(
    request: RoomCreateRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """
    Create a room with its seat layout and screen.

    Returns:
        The new room, with an empty schedule
    """
    seat_config = [row.to_config() for row in request.seat_rows] if request.seat_rows is not None else None
    result = await service.create(
        request.identifier,
        seat_config,
        request.screen_size,
        request.screen_type,
        request.status,
    )
    return RoomResponse.from_domain(unwrap(result))


@router.get("/rooms/{identifier}", response_model=RoomResponse)
async def get_room(identifier: int, service: RoomService = Depends(get_room_service)) -> RoomResponse:
    return RoomResponse.from_domain(unwrap(await service.find_by_id(identifier)))


@router.delete("/rooms/{identifier}", status_code=204)
async def delete_room(identifier: int, service: RoomService = Depends(get_room_service)) -> Response:
    unwrap(await service.delete(identifier))
    return Response(status_code=204)


@router.patch("/rooms/{identifier}/status", response_model=RoomResponse)
async def change_room_status(
    identifier: int,
    request: RoomStatusRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """Open or close a room. A room with bookings cannot be closed."""
    return RoomResponse.from_domain(unwrap(await service.change_status(identifier, request.status)))


@router.post("/rooms/{identifier}/screenings", response_model=RoomResponse, status_code=201)
async def add_screening(
    identifier: int,
    request: ScreeningRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """
    Book a screening in a room.

    The room is held for entry (15 min), the film, exit (15 min) and
    cleaning (30 min), all starting at `start_time`.
    """
    result = await service.add_screening(
        identifier, request.screening_uid, request.start_time, request.duration_in_minutes
    )
    return RoomResponse.from_domain(unwrap(result))


@router.delete("/rooms/{identifier}/screenings/{screening_uid}", response_model=RoomResponse)
async def remove_screening(
    identifier: int,
    screening_uid: str,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    return RoomResponse.from_domain(unwrap(await service.remove_screening(identifier, screening_uid)))


@router.post("/rooms/{identifier}/cleanings", response_model=RoomResponse, status_code=201)
async def schedule_cleaning(
    identifier: int,
    request: ActivityRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    result = await service.schedule_cleaning(identifier, request.start_time, request.duration_in_minutes)
    return RoomResponse.from_domain(unwrap(result))


@router.post("/rooms/{identifier}/maintenances", response_model=RoomResponse, status_code=201)
async def schedule_maintenance(
    identifier: int,
    request: ActivityRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    result = await service.schedule_maintenance(identifier, request.start_time, request.duration_in_minutes)
    return RoomResponse.from_domain(unwrap(result))


@router.delete("/rooms/{identifier}/bookings/{booking_uid}", response_model=RoomResponse)
async def remove_scheduled_activity(
    identifier: int,
    booking_uid: str,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """Cancel a manual cleaning or a maintenance."""
    return RoomResponse.from_domain(unwrap(await service.remove_scheduled_activity(identifier, booking_uid)))


@router.get("/rooms/{identifier}/free-slots", response_model=FreeSlotsResponse)
async def get_free_slots(
    identifier: int,
    date_param: date = Query(..., alias="date", description="Day to inspect (YYYY-MM-DD)"),
    min_minutes: int = Query(30, description="Minimum length of a free period in minutes"),
    service: RoomService = Depends(get_room_service),
) -> FreeSlotsResponse:
    """
    List the free periods of a room's day.

    Args:
        identifier: Room number
        date_param: Calendar day, read in the configured timezone
        min_minutes: Shortest period worth returning

    Returns:
        Free periods within operating hours, in chronological order
    """
    slots = unwrap(await service.get_free_slots(identifier, date_param, min_minutes))
    logger.info(f"Room {identifier}: {len(slots)} free slots on {date_param}")
    return FreeSlotsResponse(
        identifier=identifier,
        date=date_param,
        min_minutes=min_minutes,
        slots=[FreeSlotResponse.model_validate(slot) for slot in slots],
    )
