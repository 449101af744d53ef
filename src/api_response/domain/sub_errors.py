"""Sub-error variants and their tagged union.

A sub-error describes one specific cause inside a broader :class:`ApiError`
(one invalid field, one violated business rule, one rejected credential).
The set is closed: every variant carries a fixed ``type`` tag, and the
:data:`SubError` union dispatches on that tag when decoding.

INVARIANT: Adding a variant means adding it to :data:`SubError`;
decoders reject unknown tags.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Annotated, Any, Literal, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

from api_response.domain.frozen import snapshot, thaw

WIRE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ApiSubError(BaseModel, ABC):
    """Base for all sub-error variants."""

    model_config = WIRE_CONFIG

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary built from the variant's fields."""
        ...

    @classmethod
    def builder(cls) -> SubErrorBuilder[Self]:
        """Start a step-wise builder for this variant."""
        return SubErrorBuilder(cls)


class ApiValidationError(ApiSubError):
    """One rejected value on one object (and optionally one of its fields)."""

    type: Literal["validation"] = "validation"
    object: str
    field: str | None = None
    rejected_value: Any = None
    message: str

    @field_validator("rejected_value")
    @classmethod
    def _snapshot_rejected_value(cls, value: Any) -> Any:
        return snapshot(value)

    @field_serializer("rejected_value", mode="wrap")
    def _serialize_rejected_value(
        self, value: Any, handler: SerializerFunctionWrapHandler
    ) -> Any:
        return handler(thaw(value))

    def __hash__(self) -> int:
        # rejected_value is left out: it may hold unhashable values.
        return hash((self.type, self.object, self.field, self.message))

    @property
    def description(self) -> str:
        target = f"{self.object}.{self.field}" if self.field else self.object
        text = f"{target}: {self.message}"
        if self.rejected_value is not None:
            text += f" (rejected value: {self.rejected_value!r})"
        return text


class ApiBusinessError(ApiSubError):
    """A violated business rule, identified by a stable rule code."""

    type: Literal["business"] = "business"
    code: str
    message: str
    entity: str | None = None
    entity_id: str | None = None

    @property
    def description(self) -> str:
        text = f"[{self.code}] {self.message}"
        if self.entity:
            subject = f"{self.entity} {self.entity_id}" if self.entity_id else self.entity
            text += f" ({subject})"
        return text


class ApiAuthenticationError(ApiSubError):
    """A rejected or missing credential."""

    type: Literal["authentication"] = "authentication"
    message: str
    principal: str | None = None
    scheme: str | None = None

    @property
    def description(self) -> str:
        text = f"{self.scheme} {self.message}" if self.scheme else self.message
        if self.principal:
            text += f" for {self.principal}"
        return text


SubError = Annotated[
    ApiValidationError | ApiBusinessError | ApiAuthenticationError,
    Field(discriminator="type"),
]


def without_unset(values: dict[str, Any]) -> dict[str, Any]:
    """Drop ``None`` entries so pydantic reports unset required fields as ``missing``."""
    return {name: value for name, value in values.items() if value is not None}


class SubErrorBuilder[S: ApiSubError]:
    """Collects field values step by step; the model validates them in :meth:`build`.

    Usage::

        error = (
            ApiValidationError.builder()
            .set(object="user", field="email")
            .set(rejected_value="not-an-email", message="must be a valid address")
            .build()
        )
    """

    def __init__(self, model_cls: type[S]) -> None:
        self._model_cls = model_cls
        self._values: dict[str, Any] = {}

    def set(self, **values: Any) -> Self:
        self._values.update(values)
        return self

    def build(self) -> S:
        """Construct the variant.

        Raises:
            pydantic.ValidationError: If a required field was never set (or
                set to None), reported with error type ``missing``.
        """
        return self._model_cls(**without_unset(self._values))
