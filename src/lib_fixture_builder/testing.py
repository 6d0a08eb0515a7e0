"""Testing helpers for suites that rely on fixture independence.

Purpose
    Give test authors (and this package's own suite) a one-line way to prove
    that two values share no mutable sub-structure, which is the guarantee
    every ``build()`` makes.

Contents
    - ``shared_references``: paths in *right* whose mutable container also
      occurs somewhere in *left*.
    - ``assert_disjoint``: raises ``AssertionError`` listing those paths.

System Integration
    Pure helpers with no pytest dependency so they work with any runner.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping, MutableSequence, MutableSet
from typing import Any

from .domain.paths import AccessPath

_MUTABLE = (MutableMapping, MutableSequence, MutableSet, bytearray)


def shared_references(left: Any, right: Any) -> list[AccessPath]:
    """Return paths in *right* whose mutable object is also reachable from *left*.

    The root of *right* is reported as the empty path.

    Examples
    --------
    >>> address = {"city": "SF"}
    >>> [str(path) for path in shared_references({"a": address}, {"b": address, "c": {}})]
    ['b']
    """

    seen = {id(node) for _, node in _walk(left, AccessPath()) if isinstance(node, _MUTABLE)}
    return [path for path, node in _walk(right, AccessPath()) if isinstance(node, _MUTABLE) and id(node) in seen]


def assert_disjoint(left: Any, right: Any) -> None:
    """Fail when *left* and *right* share any mutable sub-object.

    Examples
    --------
    >>> assert_disjoint({"orders": [1]}, {"orders": [1]})
    >>> shared = [1]
    >>> assert_disjoint({"orders": shared}, {"orders": shared})
    Traceback (most recent call last):
    ...
    AssertionError: values share mutable state at: orders
    """

    shared = shared_references(left, right)
    if shared:
        where = ", ".join(str(path) or "<root>" for path in shared)
        raise AssertionError(f"values share mutable state at: {where}")


def _walk(value: Any, path: AccessPath) -> Iterator[tuple[AccessPath, Any]]:
    yield path, value
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield from _walk(item, path.child(key))
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from _walk(item, path.child(index))
