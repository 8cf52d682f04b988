"""Seat rows and the seat layout of a room."""

import math
import string
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from cineroom.domain.errors import TechnicalError
from cineroom.domain.failures import Failure, FailureCode
from cineroom.domain.result import Result, failure, success
from cineroom.domain.validation import ensure_not_null

# Column letter -> position in the row (A=1 ... Z=26)
COLUMN_LETTERS: dict[str, int] = {letter: i for i, letter in enumerate(string.ascii_uppercase, start=1)}


@dataclass(frozen=True)
class SeatRowConfig:
    """Input describing one row when a layout is created."""

    row_number: int
    last_column_letter: str
    preferential_seat_letters: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SeatRowConfig":
        return cls(
            row_number=data.get("row_number"),
            last_column_letter=data.get("last_column_letter"),
            preferential_seat_letters=tuple(data.get("preferential_seat_letters") or ()),
        )


@dataclass(frozen=True)
class SeatRow:
    """
    One row of seats.

    The last column letter defines the capacity: a row ending in "D" has
    seats A, B, C and D.
    """

    MIN_SEATS_PER_ROW = 4
    MAX_SEATS_PER_ROW = 26
    MAX_PREFERENTIAL_SEATS_PER_ROW = 4

    last_column_letter: str
    preferential_seat_letters: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        row_number: int,
        last_column_letter: str | None,
        preferential_seat_letters: tuple[str, ...] | list[str] | None = None,
    ) -> Result["SeatRow"]:
        column_result = cls._validate_column(row_number, last_column_letter)
        if column_result.is_invalid:
            return failure(column_result.failures)

        preferential_result = cls._validate_preferential_seats(
            row_number, list(preferential_seat_letters or []), column_result.value
        )
        if preferential_result.is_invalid:
            return failure(preferential_result.failures)

        return success(cls(last_column_letter.strip().upper(), preferential_result.value))

    @classmethod
    def hydrate(
        cls,
        last_column_letter: str,
        preferential_seat_letters: tuple[str, ...] | list[str] | None = None,
    ) -> "SeatRow":
        TechnicalError.raise_if(
            not last_column_letter,
            FailureCode.INVALID_HYDRATE_DATA,
            {"fields": ["last_column_letter"]},
        )
        return cls(
            last_column_letter.upper(),
            tuple(seat.upper() for seat in preferential_seat_letters or ()),
        )

    @property
    def capacity(self) -> int:
        return COLUMN_LETTERS.get(self.last_column_letter, 0)

    @property
    def columns(self) -> list[str]:
        """All seat letters of this row in order."""
        return [letter for letter, position in COLUMN_LETTERS.items() if position <= self.capacity]

    def has_seat(self, column: str) -> bool:
        position = COLUMN_LETTERS.get(column.upper())
        return position is not None and position <= self.capacity

    def is_preferential_seat(self, column: str) -> bool:
        return column.upper() in self.preferential_seat_letters

    @classmethod
    def _validate_column(cls, row_number: int, column: str | None) -> Result[int]:
        normalised = column.strip().upper() if isinstance(column, str) else column
        if normalised not in COLUMN_LETTERS:
            return failure(
                Failure(
                    FailureCode.INVALID_SEAT_COLUMN,
                    {"value": column, "row_number": row_number, "valid_values": list(COLUMN_LETTERS)},
                )
            )

        count = COLUMN_LETTERS[normalised]
        if count < cls.MIN_SEATS_PER_ROW or count > cls.MAX_SEATS_PER_ROW:
            return failure(
                Failure(
                    FailureCode.SEAT_COLUMN_OUT_OF_RANGE,
                    {
                        "value": column,
                        "row_number": row_number,
                        "min_seats_per_row": cls.MIN_SEATS_PER_ROW,
                        "max_seats_per_row": cls.MAX_SEATS_PER_ROW,
                    },
                )
            )
        return success(count)

    @classmethod
    def _validate_preferential_seats(
        cls, row_number: int, seats: list[str], max_position: int
    ) -> Result[tuple[str, ...]]:
        if not seats:
            return success(())

        if len(seats) > cls.MAX_PREFERENTIAL_SEATS_PER_ROW:
            return failure(
                Failure(
                    FailureCode.PREFERENTIAL_SEATS_LIMIT_EXCEEDED,
                    {"row_number": row_number, "max_preferential_seats_per_row": cls.MAX_PREFERENTIAL_SEATS_PER_ROW},
                )
            )

        valid_columns = [letter for letter, position in COLUMN_LETTERS.items() if position <= max_position]
        failures: list[Failure] = []
        validated: list[str] = []

        for seat in seats:
            upper = str(seat).strip().upper()
            if upper not in valid_columns:
                failures.append(
                    Failure(
                        FailureCode.PREFERENTIAL_SEAT_NOT_IN_ROW,
                        {"row_number": row_number, "value": seat, "valid_values": valid_columns},
                    )
                )
                continue
            if upper in validated:
                failures.append(
                    Failure(FailureCode.DUPLICATE_PREFERENTIAL_SEAT, {"row_number": row_number, "value": upper})
                )
                continue
            validated.append(upper)

        return failure(failures) if failures else success(tuple(validated))


@dataclass(frozen=True)
class SeatLayout:
    """
    Immutable mapping of row number to `SeatRow`.

    `create` enforces the room-level rules (row count, capacity and the share
    of preferential seats). `hydrate` trusts its input.
    """

    MIN_ROW_COUNT = 4
    MAX_ROW_COUNT = 20
    MIN_ROOM_CAPACITY = 20
    MAX_ROOM_CAPACITY = 250
    MIN_PREFERENTIAL_PERCENTAGE = 5
    MAX_PREFERENTIAL_PERCENTAGE = 20

    seat_rows: Mapping[int, SeatRow] = field(default_factory=dict)

    @classmethod
    def create(cls, row_configurations: list[SeatRowConfig] | None) -> Result["SeatLayout"]:
        failures = ensure_not_null(seat_config=row_configurations)
        if failures:
            return failure(failures)

        if not cls.MIN_ROW_COUNT <= len(row_configurations) <= cls.MAX_ROW_COUNT:
            return failure(
                Failure(
                    FailureCode.INVALID_ROW_COUNT,
                    {"provided": len(row_configurations), "min": cls.MIN_ROW_COUNT, "max": cls.MAX_ROW_COUNT},
                )
            )

        rows: dict[int, SeatRow] = {}
        for config in row_configurations:
            if config.row_number in rows:
                failures.append(Failure(FailureCode.DUPLICATE_ROW_NUMBER, {"row_number": config.row_number}))
                continue

            row_result = SeatRow.create(
                config.row_number, config.last_column_letter, config.preferential_seat_letters
            )
            if row_result.is_invalid:
                failures.extend(row_result.failures)
                continue
            rows[config.row_number] = row_result.value

        # Room-level checks run only when every row is valid
        if failures:
            return failure(failures)

        capacity = sum(row.capacity for row in rows.values())
        if capacity < cls.MIN_ROOM_CAPACITY or capacity > cls.MAX_ROOM_CAPACITY:
            failures.append(
                Failure(
                    FailureCode.ROOM_WITH_INVALID_CAPACITY,
                    {"provided": capacity, "min": cls.MIN_ROOM_CAPACITY, "max": cls.MAX_ROOM_CAPACITY},
                )
            )

        preferential = sum(len(row.preferential_seat_letters) for row in rows.values())
        min_preferential = math.ceil(capacity * cls.MIN_PREFERENTIAL_PERCENTAGE / 100)
        max_preferential = math.floor(capacity * cls.MAX_PREFERENTIAL_PERCENTAGE / 100)
        if preferential < min_preferential or preferential > max_preferential:
            failures.append(
                Failure(
                    FailureCode.ROOM_WITH_INVALID_NUMBER_OF_PREFERENTIAL_SEATS,
                    {"provided": preferential, "min": min_preferential, "max": max_preferential},
                )
            )

        return failure(failures) if failures else success(cls(dict(sorted(rows.items()))))

    @classmethod
    def hydrate(cls, seat_rows: Mapping[int, SeatRow] | None) -> "SeatLayout":
        TechnicalError.validate_required_fields(seat_rows=seat_rows)
        return cls(dict(sorted(seat_rows.items())))

    @property
    def total_capacity(self) -> int:
        return sum(row.capacity for row in self.seat_rows.values())

    @property
    def preferential_seats_by_row(self) -> dict[int, tuple[str, ...]]:
        return {
            number: row.preferential_seat_letters
            for number, row in self.seat_rows.items()
            if row.preferential_seat_letters
        }

    @property
    def preferential_seats_count(self) -> int:
        return sum(len(row.preferential_seat_letters) for row in self.seat_rows.values())

    def has_seat(self, row_number: int, column: str) -> bool:
        row = self.seat_rows.get(row_number)
        return row is not None and row.has_seat(column)

    def is_preferential_seat(self, row_number: int, column: str) -> bool:
        row = self.seat_rows.get(row_number)
        return row is not None and row.is_preferential_seat(column)

    def to_rows(self) -> list[dict[str, Any]]:
        """Serialisable row configurations, the input of `Room.hydrate`."""
        return [
            {
                "row_number": number,
                "last_column_letter": row.last_column_letter,
                "preferential_seat_letters": list(row.preferential_seat_letters),
            }
            for number, row in self.seat_rows.items()
        ]
