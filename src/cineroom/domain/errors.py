"""Technical errors raised when trusted data turns out to be broken."""

from typing import Any

from cineroom.domain.failures import Failure, FailureCode


class TechnicalError(Exception):
    """
    Unexpected structural problem, not a business rule violation.

    Raised by the `hydrate` paths when data coming from storage is
    incomplete. Callers in the normal business flow are not expected to
    catch it.
    """

    def __init__(self, failure: Failure) -> None:
        self.failure = failure
        super().__init__(f"{failure.code.value}: {failure.details}")

    @classmethod
    def raise_if(
        cls,
        condition: bool,
        code: FailureCode,
        details: dict[str, Any] | None = None,
    ) -> None:
        if condition:
            raise cls(Failure(code, details or {}))

    @classmethod
    def validate_required_fields(
        cls,
        code: FailureCode = FailureCode.INVALID_HYDRATE_DATA,
        **fields: Any,
    ) -> None:
        """Raise if any of the given keyword values is None."""
        missing = [name for name, value in fields.items() if value is None]
        cls.raise_if(bool(missing), code, {"fields": missing})
