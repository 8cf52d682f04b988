"""Result type returned by every domain operation."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from cineroom.domain.failures import Failure

V = TypeVar("V")
U = TypeVar("U")


@dataclass(frozen=True)
class Result(Generic[V]):
    """
    Either a success carrying a value or a failure carrying one or more
    `Failure` records.

    Use `success()` and `failure()` to build instances. Chain steps with
    `flat_map`; the chain stops at the first failed step.
    """

    _value: V | None = None
    failures: tuple[Failure, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.failures

    @property
    def is_invalid(self) -> bool:
        return bool(self.failures)

    @property
    def value(self) -> V:
        if self.failures:
            raise ValueError("Cannot read the value of a failed result")
        return self._value  # type: ignore[return-value]

    @property
    def codes(self) -> list[str]:
        return [f.code.value for f in self.failures]

    def map(self, fn: Callable[[V], U]) -> "Result[U]":
        if self.failures:
            return Result(failures=self.failures)
        return success(fn(self.value))

    def flat_map(self, fn: Callable[[V], "Result[U]"]) -> "Result[U]":
        if self.failures:
            return Result(failures=self.failures)
        return fn(self.value)


def success(value: V) -> Result[V]:
    return Result(_value=value)


def failure(errors: Failure | Iterable[Failure]) -> Result:
    """Build a failed result from one failure or a collection of them."""
    collected = (errors,) if isinstance(errors, Failure) else tuple(errors)
    if not collected:
        raise ValueError("A failed result needs at least one failure")
    return Result(failures=collected)
