"""ApiError — one failure outcome, with its status and sub-errors.

INVARIANT: ``400 <= status < 600`` and ``message`` is never blank.
Both are checked once, by the model validators; the builder and the
convenience constructors all funnel through them.

Silent normalizations (not errors):
- ``sub_errors=None`` is stored as an empty tuple.
- ``timestamp=None`` (or omitted) is stamped with :func:`clock.now`.
- Aware timestamps are converted to UTC, naive ones are taken as UTC.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any, Self

from pydantic import BaseModel, Field, field_serializer, field_validator

from api_response.domain import clock
from api_response.domain.sub_errors import WIRE_CONFIG, ApiSubError, SubError, without_unset

TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M:%S"


def describe_exception(exc: BaseException) -> str:
    """Debug text for *exc*: its message, or its class name when the message is empty."""
    return str(exc) or type(exc).__name__


class ApiError(BaseModel):
    """Structured error payload carried by a failed :class:`Response`.

    Attributes:
        status: HTTP status code, 4xx or 5xx.
        timestamp: When the error was created (UTC).
        message: User-facing explanation.
        debug_message: Technical detail, usually derived from an exception.
        sub_errors: Finer-grained causes, read-only.
    """

    model_config = WIRE_CONFIG

    status: int
    timestamp: datetime = Field(default_factory=lambda: clock.now())
    message: str
    debug_message: str | None = None
    sub_errors: tuple[SubError, ...] = ()

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: int) -> int:
        if not 400 <= value < 600:
            msg = f"Status code must be in the 4xx or 5xx range for errors, got {value}"
            raise ValueError(msg)
        return value

    @field_validator("message")
    @classmethod
    def _check_message(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Error message cannot be blank")
        return value

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Any:
        if value is None:
            return clock.now()
        if isinstance(value, str):
            try:
                return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=UTC)
            except ValueError:
                # Not the wire format; let pydantic try ISO 8601.
                return value
        return value

    @field_validator("timestamp")
    @classmethod
    def _normalize_timezone(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @field_validator("sub_errors", mode="before")
    @classmethod
    def _default_sub_errors(cls, value: Any) -> Any:
        return () if value is None else value

    @field_serializer("timestamp", when_used="json")
    def _format_timestamp(self, value: datetime) -> str:
        return value.strftime(TIMESTAMP_FORMAT)

    def has_sub_errors(self) -> bool:
        return bool(self.sub_errors)

    def sub_error_count(self) -> int:
        return len(self.sub_errors)

    @classmethod
    def from_exception(
        cls,
        status: int,
        message: str,
        exc: BaseException,
        *,
        sub_errors: Iterable[ApiSubError] | None = None,
    ) -> ApiError:
        """Build an error whose ``debug_message`` describes *exc*."""
        return cls(
            status=status,
            message=message,
            debug_message=describe_exception(exc),
            sub_errors=tuple(sub_errors) if sub_errors is not None else None,
        )

    @classmethod
    def builder(cls) -> ApiErrorBuilder:
        return ApiErrorBuilder()


class ApiErrorBuilder:
    """Step-wise construction of an :class:`ApiError`.

    Usage::

        error = (
            ApiError.builder()
            .status(422)
            .message("Validation failed")
            .sub_error(violation)
            .build()
        )
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._sub_errors: list[ApiSubError] = []

    def status(self, status: int) -> Self:
        self._values["status"] = status
        return self

    def message(self, message: str) -> Self:
        self._values["message"] = message
        return self

    def debug_message(self, debug_message: str | None) -> Self:
        self._values["debug_message"] = debug_message
        return self

    def cause(self, exc: BaseException | None) -> Self:
        """Derive ``debug_message`` from *exc*; ``None`` leaves it unset."""
        self._values["debug_message"] = describe_exception(exc) if exc is not None else None
        return self

    def timestamp(self, timestamp: datetime | None) -> Self:
        self._values["timestamp"] = timestamp
        return self

    def sub_error(self, sub_error: ApiSubError) -> Self:
        self._sub_errors.append(sub_error)
        return self

    def sub_errors(self, sub_errors: Iterable[ApiSubError] | None) -> Self:
        """Replace every sub-error collected so far."""
        self._sub_errors = list(sub_errors) if sub_errors is not None else []
        return self

    def build(self) -> ApiError:
        """Construct the error.

        Raises:
            pydantic.ValidationError: If ``status`` or ``message`` was never set
                (error type ``missing``), or a value breaks an ApiError invariant.
        """
        return ApiError(**without_unset(self._values), sub_errors=tuple(self._sub_errors))
