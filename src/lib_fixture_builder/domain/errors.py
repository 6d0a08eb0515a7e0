"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the builder engine, the factory
helpers, the file loaders, and consuming test suites. The hierarchy lives in the
domain layer so every outer layer can depend on it.

Contents
--------
* :class:`FixtureError` – umbrella base class for all library failures.
* :class:`PathNotFound` – an override or lookup walked through a missing
  location.
* :class:`InvalidBase` – a base value is not a mapping.
* :class:`CyclicValue` – deep copy met a reference cycle.
* :class:`InvalidFormat` – a base file could not be parsed.

System Role
-----------
Errors are raised synchronously at the point the faulty instruction is
processed and are never retried. Callers catch :class:`FixtureError` to handle
all library failures uniformly; each subclass also derives from the matching
builtin (``LookupError``, ``TypeError``, ``ValueError``) so generic handlers
keep working.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .paths import AccessPath


class FixtureError(Exception):
    """Base type for all exceptions emitted by ``lib_fixture_builder``."""


class PathNotFound(FixtureError, LookupError):
    """Raised when an access path does not resolve inside the working copy.

    Why
    ----
    Builders never auto-vivify intermediate containers: the base value is
    expected to define the shape being overridden, so a missing step is a
    caller error.

    Attributes
    ----------
    path:
        The full :class:`~lib_fixture_builder.domain.paths.AccessPath` that
        failed to resolve.
    """

    def __init__(self, message: str, path: AccessPath | None = None) -> None:
        super().__init__(message)
        self.path = path


class InvalidBase(FixtureError, TypeError):
    """Raised when a base value is not a mapping.

    Typical Sources
    ---------------
    :func:`lib_fixture_builder.core.create_builder` and the structured file
    loaders. Top-level lists are rejected; build element fixtures and assemble
    the list explicitly instead.
    """


class CyclicValue(FixtureError, ValueError):
    """Raised when :func:`~lib_fixture_builder.domain.values.deep_copy` detects a cycle."""


class InvalidFormat(FixtureError):
    """Raised when a base file cannot be parsed into structured data."""
