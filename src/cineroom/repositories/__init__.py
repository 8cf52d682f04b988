"""Persistence of domain aggregates."""

from cineroom.repositories.room_repository import RoomRepository, StoredRoom

__all__ = ["RoomRepository", "StoredRoom"]
