"""Value helpers shared by builders and factories.

Purpose
-------
Clone nested fixture values so a base and everything derived from it never
share mutable sub-structure, and resolve override values that are given
lazily as producers.

Contents
--------
* :func:`deep_copy` – recursive clone over the closed set of structural
  variants (``None``, temporal, buildable, sequence, record, scalar).
* :func:`is_producer` / :func:`resolve_value` – producer detection and
  one-shot invocation.

System Role
-----------
Used by :class:`lib_fixture_builder.application.builder.Builder` to seed its
working copy and to materialise :meth:`build` output, and by the factories to
snapshot base values at creation time.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping, MutableSequence, MutableSet
from datetime import date, time
from typing import Any, Callable

from .errors import CyclicValue

_TEMPORAL_TYPES = (date, time)
_SEQUENCE_TYPES = (list, tuple, set, frozenset, bytearray, MutableSequence, MutableSet)


def deep_copy(value: Any) -> Any:
    """Return a structurally equal clone of *value* sharing no mutable state.

    Why
    ----
    ``copy.deepcopy`` memoises shared references (two occurrences of the same
    list stay one list in the copy) and happily copies callables and arbitrary
    objects. Fixture values need the opposite: every occurrence copied
    independently, producers and opaque objects carried by reference.

    What
    ----
    Dispatches on the runtime variant of *value*:

    1. ``None`` is returned as-is.
    2. ``datetime``/``date``/``time`` are re-created through ``replace()``.
    3. Embedded builders (objects exposing ``build`` and ``with_``) are
       replaced by their built output.
    4. ``list``/``tuple``/``set``/``frozenset`` and any other mutable
       sequence or set (``deque``, ``bytearray``, ...) are rebuilt as the same
       type with copied elements in original order.
    5. Any ``Mapping`` becomes a ``dict`` with copied values in insertion order.
    6. Everything else is returned by identity.

    Raises
    ------
    CyclicValue
        When a container is reached again while it is still being copied.

    Examples
    --------
    >>> source = {"orders": [{"id": "1"}], "name": "John"}
    >>> clone = deep_copy(source)
    >>> clone == source, clone["orders"] is source["orders"]
    (True, False)
    >>> looped = []
    >>> looped.append(looped)
    >>> deep_copy(looped)
    Traceback (most recent call last):
    ...
    lib_fixture_builder.domain.errors.CyclicValue: cannot copy a value that contains itself (list)
    """

    return _copy(value, set())


def _copy(value: Any, active: set[int]) -> Any:
    if value is None:
        return None
    if isinstance(value, _TEMPORAL_TYPES):
        return value.replace()
    if _is_buildable(value):
        return value.build()
    if isinstance(value, (Mapping, *_SEQUENCE_TYPES)):
        return _copy_container(value, active)
    return value


def _copy_container(value: Any, active: set[int]) -> Any:
    """Copy a record or sequence while tracking it on the copy stack."""

    marker = id(value)
    if marker in active:
        raise CyclicValue(f"cannot copy a value that contains itself ({type(value).__name__})")
    active.add(marker)
    try:
        if isinstance(value, Mapping):
            return {key: _copy(item, active) for key, item in value.items()}
        items = [_copy(item, active) for item in value]
    finally:
        active.discard(marker)
    if type(value) is list:
        return items
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        return type(value)(*items)
    if isinstance(value, deque):
        return type(value)(items, value.maxlen)
    return type(value)(items)


def _is_buildable(value: Any) -> bool:
    """Return ``True`` when *value* looks like a builder embedded in a base."""

    kind = type(value)
    return callable(getattr(kind, "build", None)) and hasattr(kind, "with_")


def is_producer(value: Any) -> bool:
    """Tell whether *value* should be invoked to obtain the override value.

    Classes are callable but are treated as data, so ``with_.kind(dict)``
    stores the ``dict`` type instead of an empty dict.

    Examples
    --------
    >>> is_producer(lambda: 1), is_producer(1), is_producer(dict)
    (True, False, False)
    """

    return callable(value) and not isinstance(value, type)


def resolve_value(value: Any | Callable[[], Any]) -> Any:
    """Invoke *value* once when it is a producer, otherwise return it unchanged.

    Examples
    --------
    >>> resolve_value(lambda: "Steve"), resolve_value("John")
    ('Steve', 'John')
    """

    if is_producer(value):
        return value()
    return value


__all__ = ["deep_copy", "is_producer", "resolve_value"]
