"""Composition root for ``lib_fixture_builder``.

Purpose
-------
Provide the entry points a test suite uses: declare a base value once with
:func:`create_builder`, then call the returned factory for every variant.

Contents
--------
* :class:`BuilderFactory` – immutable, shareable factory bound to one base.
* :func:`create_builder` – validate and snapshot a base, return its factory.
* :func:`merge_builders` – re-exported union collaborator.

System Role
-----------
Wires the domain helpers (copying, validation) to the application engine and
emits the ``factory_created`` observability event. This is the canonical place
to change how bases are accepted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .application.builder import Builder
from .application.merge import MergedBuilderFactory, merge_builders
from .domain.errors import InvalidBase
from .domain.values import deep_copy
from .observability import log_debug, make_event

T = TypeVar("T", bound=Mapping[str, Any])


@dataclass(frozen=True, slots=True)
class BuilderFactory(Generic[T]):
    """Produce a fresh :class:`Builder` seeded from a private base snapshot.

    Why
    ----
    The base handed to :func:`create_builder` belongs to the caller and may be
    mutated after the factory exists. The factory keeps its own copy and seeds
    every builder from a further copy. No builder shares state with another
    builder or with the caller's original. The snapshot is private to the
    factory; read it through ``factory().get("")`` or ``factory().build()``.

    Examples
    --------
    >>> person = create_builder({"name": "Jeremy", "age": 30})
    >>> person().with_.age(35).build()
    {'name': 'Jeremy', 'age': 35}
    >>> person().build()
    {'name': 'Jeremy', 'age': 30}
    """

    _base: T = field(repr=False)

    def __call__(self) -> Builder[T]:
        return Builder(self._base)

    def __repr__(self) -> str:
        return f"BuilderFactory(fields={list(self._base)!r})"


def create_builder(base: T) -> BuilderFactory[T]:
    """Return a factory of builders for *base*.

    Why
    ----
    One call declares the canonical fixture; every test then derives exactly
    the variation it needs.

    What
    ----
    Rejects non-mapping bases, deep-copies *base* once (materialising any
    builders embedded in it), and binds the snapshot to a
    :class:`BuilderFactory`.

    Parameters
    ----------
    base:
        Mapping of arbitrarily nested mappings and lists.

    Returns
    -------
    BuilderFactory
        Zero-argument callable returning a new :class:`Builder` per call.

    Raises
    ------
    InvalidBase
        When *base* is not a mapping (top-level lists included).
    CyclicValue
        When *base* contains itself.

    Examples
    --------
    >>> address = create_builder({"city": "San Francisco"})
    >>> customer = create_builder({"name": "John", "address": address()})
    >>> customer().with_.address.city("San Jose").build()["address"]
    {'city': 'San Jose'}
    >>> create_builder([{"id": "1"}])
    Traceback (most recent call last):
    ...
    lib_fixture_builder.domain.errors.InvalidBase: Base value must be a mapping, got list
    """

    if not isinstance(base, Mapping):
        raise InvalidBase(f"Base value must be a mapping, got {type(base).__name__}")
    snapshot = deep_copy(base)
    log_debug("factory_created", **make_event(None, None, {"fields": sorted(map(str, snapshot))}))
    return BuilderFactory(snapshot)


__all__ = [
    "Builder",
    "BuilderFactory",
    "MergedBuilderFactory",
    "create_builder",
    "merge_builders",
]
