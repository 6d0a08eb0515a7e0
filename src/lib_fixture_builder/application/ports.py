"""Application-layer ports describing collaborator responsibilities.

Purpose
-------
Define the structural contracts that the interceptor and the merge
collaborator rely on, so each can be exercised in isolation and swapped
for test doubles.

Contents
--------
* :class:`TerminalCallback` – receives the finalised access path and call
  arguments from an interceptor chain.
* :class:`Buildable` – anything exposing ``with_`` and ``build()``.
* :class:`FixtureFactory` – zero-argument callable producing fresh buildables.

System Role
-----------
These protocols keep :mod:`lib_fixture_builder.application.merge` independent
of the concrete factory classes and let the interceptor stay ignorant of what a
terminal call means.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, TypeVar, runtime_checkable

from ..domain.paths import AccessPath

T_co = TypeVar("T_co", bound=Mapping[str, Any], covariant=True)


class TerminalCallback(Protocol):
    """React to the end of an accessor chain.

    Why
    ----
    The interceptor is purely structural; the meaning of ``handle(value)`` is
    supplied by whoever created it.
    """

    def __call__(self, path: AccessPath, args: tuple[Any, ...]) -> Any:
        """Handle a terminal invocation at *path* with positional *args*."""


@runtime_checkable
class Buildable(Protocol[T_co]):
    """Expose a fluent override surface and an independent snapshot."""

    @property
    def with_(self) -> Any:
        """Return the override surface."""

    def build(self) -> T_co:
        """Return an independent deep copy of the current state."""


class FixtureFactory(Protocol[T_co]):
    """Produce a fresh, unshared :class:`Buildable` on every call."""

    def __call__(self) -> Buildable[T_co]:
        """Return a new buildable seeded from the factory's base value."""
