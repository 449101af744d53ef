"""Exception types raised by the response API.

Invariant violations (on direct construction, in factories and builders)
surface as pydantic ``ValidationError``. :class:`CodecError` wraps those
raised while decoding an encoded payload.
"""

from __future__ import annotations


class CodecError(ValueError):
    """An encoded payload does not match the response contract."""
