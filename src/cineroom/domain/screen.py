"""Projection screen of a room."""

from dataclasses import dataclass
from enum import Enum

from cineroom.domain.errors import TechnicalError
from cineroom.domain.failures import Failure
from cineroom.domain.result import Result, failure, success
from cineroom.domain.validation import check_integer_in_range, ensure_not_null, parse_enum


class ScreenType(str, Enum):
    TWO_D = "2D"
    THREE_D = "3D"
    TWO_D_THREE_D = "2D_3D"


@dataclass(frozen=True)
class Screen:
    """Screen size in metres and the projection type it supports."""

    MIN_SIZE_IN_METERS = 10
    MAX_SIZE_IN_METERS = 50

    size: int
    type: ScreenType

    @classmethod
    def create(cls, size: int | None, screen_type: str | None) -> Result["Screen"]:
        missing = ensure_not_null(size=size, screen_type=screen_type)
        if missing:
            return failure(missing)

        failures: list[Failure] = check_integer_in_range(
            "size", size, cls.MIN_SIZE_IN_METERS, cls.MAX_SIZE_IN_METERS
        )
        type_result = parse_enum("screen_type", screen_type, ScreenType)
        if type_result.is_invalid:
            failures.extend(type_result.failures)

        return failure(failures) if failures else success(cls(size, type_result.value))

    @classmethod
    def hydrate(cls, size: int | None, screen_type: str | None) -> "Screen":
        TechnicalError.validate_required_fields(size=size, screen_type=screen_type)
        return cls(size, ScreenType(str(screen_type).strip().upper()))
