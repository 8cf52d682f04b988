"""Small validators shared by the value objects."""

from enum import Enum
from typing import Any, TypeVar

from cineroom.domain.failures import Failure, FailureCode, missing_data
from cineroom.domain.result import Result, failure, success

E = TypeVar("E", bound=Enum)


def ensure_not_null(**fields: Any) -> list[Failure]:
    """Return one MISSING_REQUIRED_DATA failure per keyword that is None."""
    return [missing_data(name) for name, value in fields.items() if value is None]


def parse_enum(field_name: str, token: Any, enum_cls: type[E]) -> Result[E]:
    """
    Strictly parse a token into a member of `enum_cls`.

    Accepts an existing member or a string matching a member value
    (surrounding whitespace and case are ignored). Never falls back to a
    default.
    """
    if token is None:
        return failure(missing_data(field_name))
    if isinstance(token, enum_cls):
        return success(token)

    if isinstance(token, str):
        normalised = token.strip().upper()
        for member in enum_cls:
            if str(member.value).upper() == normalised:
                return success(member)

    return failure(
        Failure(
            FailureCode.INVALID_ENUM_VALUE,
            {
                "field": field_name,
                "value": token,
                "valid_values": [m.value for m in enum_cls],
            },
        )
    )


def check_integer_in_range(field_name: str, value: Any, minimum: int, maximum: int) -> list[Failure]:
    if value is None:
        return [missing_data(field_name)]
    if isinstance(value, bool) or not isinstance(value, int):
        return [Failure(FailureCode.VALUE_NOT_INTEGER, {"field": field_name, "value": value})]
    if value < minimum or value > maximum:
        return [
            Failure(
                FailureCode.VALUE_OUT_OF_RANGE,
                {"field": field_name, "value": value, "min": minimum, "max": maximum},
            )
        ]
    return []
