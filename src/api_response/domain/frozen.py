"""Read-only snapshots of caller-owned collections, and their inverse for serializers.

INVARIANT: a value that went through :func:`snapshot` shares no mutable
top-level container with the caller. :func:`thaw` is only used on the way
out, so serializers see the container type the field declares.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableSequence, MutableSet
from types import MappingProxyType
from typing import Any, get_args, get_origin


def snapshot(value: Any) -> Any:
    """Copy a mutable collection into a read-only equivalent.

    Lists become tuples, sets become frozensets, mappings become a
    read-only proxy over a private copy. Anything else is returned as is.
    """
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, MutableSequence):
        return tuple(value)
    if isinstance(value, MutableSet):
        return frozenset(value)
    if isinstance(value, MappingProxyType):
        return value
    if isinstance(value, Mapping):
        return MappingProxyType(dict(value))
    return value


def declared_container(annotation: Any) -> type | None:
    """The mutable builtin container (``list``/``set``/``dict``) an annotation asks for, if any."""
    for arg in (annotation, *get_args(annotation)):
        origin = get_origin(arg) or arg
        if origin in (list, set, dict):
            return origin
    return None


def thaw(value: Any, container: type | None = None) -> Any:
    """Undo :func:`snapshot` so the value matches *container* when serializing."""
    if isinstance(value, MappingProxyType):
        return dict(value)
    if container is list and isinstance(value, tuple):
        return list(value)
    if container is set and isinstance(value, frozenset):
        return set(value)
    return value
