"""Translate failed domain results into HTTP errors."""

from fastapi import HTTPException

from cineroom.domain.failures import FailureCode
from cineroom.domain.result import Result

NOT_FOUND_CODES = frozenset(
    {
        FailureCode.RESOURCE_NOT_FOUND,
        FailureCode.BOOKING_NOT_FOUND_IN_ROOM,
        FailureCode.BOOKING_NOT_FOUND_FOR_SCREENING,
    }
)

CONFLICT_CODES = frozenset(
    {
        FailureCode.RESOURCE_ALREADY_EXISTS,
        FailureCode.ROOM_NOT_AVAILABLE_FOR_PERIOD,
        FailureCode.ROOM_PERIOD_UNAVAILABLE,
        FailureCode.ROOM_HAS_FUTURE_BOOKINGS,
        FailureCode.ROOM_CONCURRENT_MODIFICATION,
        FailureCode.BOOKING_ALREADY_STARTED,
        FailureCode.CLEANING_ASSOCIATED_WITH_SCREENING,
    }
)


def status_code_for(code: FailureCode) -> int:
    if code in NOT_FOUND_CODES:
        return 404
    if code in CONFLICT_CODES:
        return 409
    return 422


def failure_to_http_exception(result: Result) -> HTTPException:
    """
    Build the HTTPException for a failed result.

    The status code follows the first failure; every failure is listed in
    the body under ``detail.errors``.
    """
    return HTTPException(
        status_code=status_code_for(result.failures[0].code),
        detail={"errors": [f.to_dict() for f in result.failures]},
    )


def unwrap(result: Result):
    """Return the value of a successful result, raise the HTTP error otherwise."""
    if result.is_invalid:
        raise failure_to_http_exception(result)
    return result.value
