"""Response and ResponsePattern — the result container returned by service code.

A response is either a success carrying data or a failure carrying an
:class:`ApiError`, never both. The classification is fixed at construction.

INVARIANT: ``success`` ⇒ ``error is None``, ``data is not None`` and
``200 <= status_code < 300``. ``not success`` ⇒ ``error is not None``,
``data is None`` and ``status_code == error.status``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Generic, Protocol, Self, TypeVar, runtime_checkable

from pydantic import (
    BaseModel,
    SerializerFunctionWrapHandler,
    field_serializer,
    field_validator,
    model_validator,
)

from api_response.domain.api_error import ApiError
from api_response.domain.frozen import declared_container, snapshot, thaw
from api_response.domain.sub_errors import WIRE_CONFIG, ApiSubError

T = TypeVar("T")
U = TypeVar("U")

SUCCESS_STATUS = 200


@runtime_checkable
class ResponsePattern(Protocol[T]):
    """The capability shared by every response implementation.

    Equality of :class:`Response` is defined over this protocol, so any
    object exposing the same outcome compares equal to it.
    """

    @property
    def status_code(self) -> int: ...

    def is_success(self) -> bool: ...

    def get_error(self) -> ApiError | None: ...

    def get_data(self) -> T | None: ...


class Response(BaseModel, Generic[T]):
    """Outcome of an operation: success with data, or failure with an ApiError.

    Build instances with :meth:`ok` and :meth:`fail`. Every invariant is
    checked by the model validators, whichever way the response is built,
    and a violation is raised as a pydantic ``ValidationError``.

    Collection payloads are stored as read-only snapshots (see
    :mod:`api_response.domain.frozen`), also for typed responses such as
    ``Response[list[int]]``.

    Attributes:
        success: Whether the operation succeeded.
        error: The error on failure, ``None`` on success.
        data: The payload on success, ``None`` on failure.
        status_code: 2xx on success, ``error.status`` on failure.
    """

    model_config = WIRE_CONFIG

    success: bool
    error: ApiError | None = None
    data: T | None = None
    status_code: int

    @model_validator(mode="before")
    @classmethod
    def _default_status_code(cls, values: Any) -> Any:
        if not isinstance(values, Mapping):
            return values
        if values.get("status_code", values.get("statusCode")) is not None:
            return values
        error = values.get("error")
        if values.get("success"):
            status = SUCCESS_STATUS
        elif isinstance(error, ApiError):
            status = error.status
        elif error is None and "success" in values:
            raise ValueError("ApiError cannot be None for failed responses")
        elif isinstance(error, Mapping) and error.get("status") is not None:
            status = error["status"]
        else:
            return values
        return {**values, "status_code": status}

    @field_validator("data")
    @classmethod
    def _snapshot_data(cls, value: Any) -> Any:
        return snapshot(value)

    @field_serializer("data", mode="wrap")
    def _serialize_data(self, value: Any, handler: SerializerFunctionWrapHandler) -> Any:
        container = declared_container(type(self).model_fields["data"].annotation)
        return handler(thaw(value, container))

    @model_validator(mode="after")
    def _check_outcome(self) -> Self:
        if self.success:
            if self.error is not None:
                raise ValueError("Successful responses cannot have an ApiError")
            if self.data is None:
                raise ValueError("Successful responses must carry data")
            if not 200 <= self.status_code < 300:
                msg = f"Successful responses need a 2xx status code, got {self.status_code}"
                raise ValueError(msg)
        else:
            if self.error is None:
                raise ValueError("ApiError cannot be None for failed responses")
            if self.data is not None:
                raise ValueError("Failed responses cannot have data")
            if self.status_code != self.error.status:
                msg = (
                    f"Failed response status code {self.status_code} "
                    f"does not match error status {self.error.status}"
                )
                raise ValueError(msg)
        return self

    # --- factories ---

    @classmethod
    def ok(cls, data: T, status_code: int = SUCCESS_STATUS) -> Response[T]:
        """Successful response carrying *data*.

        Raises:
            pydantic.ValidationError: If *data* is None or *status_code* is not 2xx.
        """
        return cls(success=True, data=data, status_code=status_code)

    @classmethod
    def fail(
        cls,
        error: ApiError | int | None,
        message: str | None = None,
        *,
        debug_message: str | None = None,
        sub_errors: Iterable[ApiSubError] | None = None,
    ) -> Response[T]:
        """Failed response.

        Accepts either a ready :class:`ApiError`, or a status code and a
        message from which one is built (timestamped now).

        Raises:
            pydantic.ValidationError: If *error* is None, a status is given
                without a message, or the status/message break an ApiError invariant.
        """
        if isinstance(error, int):
            error = (
                ApiError.builder()
                .status(error)
                .message(message)
                .debug_message(debug_message)
                .sub_errors(sub_errors)
                .build()
            )
        return cls(success=False, error=error)

    # --- accessors ---

    def is_success(self) -> bool:
        return self.success

    def get_data(self) -> T | None:
        return self.data

    def get_error(self) -> ApiError | None:
        return self.error

    # --- transformation ---

    def map(self, fn: Callable[[T], U]) -> Response[U]:
        """Apply *fn* to the payload of a success; a failure passes through untouched.

        *fn* is never called on a failure. The success status code is kept.
        """
        if not self.success:
            return Response.fail(self.error)
        return Response.ok(fn(self.data), status_code=self.status_code)

    def on_success(self, fn: Callable[[T], object]) -> Self:
        if self.success:
            fn(self.data)
        return self

    def on_failure(self, fn: Callable[[ApiError], object]) -> Self:
        if not self.success:
            fn(self.error)
        return self

    # --- equality over the shared protocol ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResponsePattern):
            return NotImplemented
        return (
            self.is_success() == other.is_success()
            and self.status_code == other.status_code
            and self.get_data() == other.get_data()
            and self.get_error() == other.get_error()
        )

    def __hash__(self) -> int:
        return hash((self.success, self.status_code, self.error))
