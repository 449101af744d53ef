"""Shared pytest fixtures and test helpers for api_response tests."""

from __future__ import annotations

from collections.abc import Generator
from datetime import UTC, datetime

import pytest

from api_response.config.settings import reset_settings
from api_response.domain import clock
from api_response.domain.sub_errors import (
    ApiAuthenticationError,
    ApiBusinessError,
    ApiValidationError,
)

FIXED_NOW = datetime(2026, 10, 18, 14, 5, 9, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None]:
    """Drop the cached settings around each test so env overrides apply."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fixed_now(monkeypatch: pytest.MonkeyPatch) -> datetime:
    """Pin :func:`clock.now` to :data:`FIXED_NOW`."""
    monkeypatch.setattr(clock, "now", lambda: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture
def validation_error() -> ApiValidationError:
    return ApiValidationError(
        object="user",
        field="email",
        rejected_value="not-an-email",
        message="must be a well-formed email address",
    )


@pytest.fixture
def business_error() -> ApiBusinessError:
    return ApiBusinessError(
        code="CREDIT_LIMIT",
        message="Order exceeds the customer's credit limit",
        entity="order",
        entity_id="A-1009",
    )


@pytest.fixture
def authentication_error() -> ApiAuthenticationError:
    return ApiAuthenticationError(message="token expired", principal="ada", scheme="Bearer")
