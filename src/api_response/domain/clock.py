"""Wall clock used to stamp errors.

Tests pin timestamps by monkeypatching :func:`now`.
"""

from __future__ import annotations

from datetime import UTC, datetime


def now() -> datetime:
    """Current UTC time, truncated to whole seconds like the wire format."""
    return datetime.now(UTC).replace(microsecond=0)
