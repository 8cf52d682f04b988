"""SQLAlchemy ORM models."""

from cineroom.models.base import Base
from cineroom.models.booking import RoomBooking
from cineroom.models.room import RoomRecord

__all__ = ["Base", "RoomBooking", "RoomRecord"]
