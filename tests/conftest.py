"""Shared test fixtures."""

from datetime import date, datetime, time, timedelta

import pytest
from fastapi import FastAPI

from cineroom.api.routes import health, rooms
from cineroom.domain.room import Room
from cineroom.domain.seat_layout import SeatRowConfig
from cineroom.utils.dates import LOCAL_TZ, now_local


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app with the public routers, for API tests."""
    app = FastAPI()
    app.include_router(health.router)
    app.include_router(rooms.router, prefix="/api")
    return app


@pytest.fixture
def day() -> date:
    """A calendar day safely in the future."""
    return now_local().date() + timedelta(days=7)


@pytest.fixture
def at(day: date):
    """Local datetime on the test day: ``at(14, 30)``."""

    def _at(hour: int, minute: int = 0) -> datetime:
        return datetime.combine(day, time(hour, minute), tzinfo=LOCAL_TZ)

    return _at


@pytest.fixture
def seat_config() -> list[SeatRowConfig]:
    """Five rows of ten seats (A-J), four preferential seats in total."""
    return [
        SeatRowConfig(1, "J", ("A", "B")),
        SeatRowConfig(2, "J", ("A", "B")),
        SeatRowConfig(3, "J"),
        SeatRowConfig(4, "J"),
        SeatRowConfig(5, "J"),
    ]


@pytest.fixture
def room(seat_config: list[SeatRowConfig]) -> Room:
    return Room.create(7, seat_config, 20, "2D").value
