"""api_response — a Result-pattern container for API responses.

Usage::

    from api_response import ApiError, Response

    def find_user(user_id: int) -> Response[User]:
        user = repo.get(user_id)
        if user is None:
            return Response.fail(404, f"User not found: {user_id}")
        return Response.ok(user)
"""

from api_response.domain.api_error import ApiError, ApiErrorBuilder
from api_response.domain.sub_errors import (
    ApiAuthenticationError,
    ApiBusinessError,
    ApiSubError,
    ApiValidationError,
    SubError,
)
from api_response.exceptions import CodecError
from api_response.response import Response, ResponsePattern

__all__ = [
    "ApiAuthenticationError",
    "ApiBusinessError",
    "ApiError",
    "ApiErrorBuilder",
    "ApiSubError",
    "ApiValidationError",
    "CodecError",
    "Response",
    "ResponsePattern",
    "SubError",
]
