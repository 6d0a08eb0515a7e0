"""Builder engine: one mutable working copy, many independent snapshots.

Purpose
-------
Own a private deep copy of a base value, accept override instructions against
it, and hand out disconnected snapshots on demand.

Contents
--------
* :class:`Builder` – the engine (``with_``, :meth:`~Builder.set`,
  :meth:`~Builder.get`, :meth:`~Builder.build`).
* :class:`FieldSurface` – the object returned by ``Builder.with_``; maps a
  top-level field name to an interceptor chain rooted at that field.

System Role
-----------
Created by :class:`lib_fixture_builder.core.BuilderFactory` and
:class:`lib_fixture_builder.application.merge.MergedBuilderFactory`. All path
handling is delegated to :mod:`lib_fixture_builder.domain.paths` and all
copying to :mod:`lib_fixture_builder.domain.values`.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Generic, Mapping, TypeVar, cast

from ..domain.errors import PathNotFound
from ..domain.paths import AccessPath, PathLike, apply_at, resolve_at
from ..domain.values import deep_copy, is_producer, resolve_value
from ..observability import log_debug, make_event
from .interceptor import InterceptorHandle, intercept

T = TypeVar("T", bound=Mapping[str, Any])


class Builder(Generic[T]):
    """Mutable fixture state seeded from a base value.

    Why
    ----
    Tests need many small variations of one model. A builder records overrides in
    its own working copy and returns a fresh deep copy from every
    :meth:`build` call. Neither later overrides nor caller-side mutation of a
    result leak anywhere else.

    What
    ----
    ``builder.with_.<field>[.<key>|[index]]...(value)`` assigns ``value`` at
    that location and returns the same builder for chaining. ``value`` may be a
    zero-argument producer, which is called exactly once when the override is
    applied. A bare top-level field call replaces the field wholesale and may
    introduce a field absent from the base.

    Concurrency
    -----------
    Not synchronised. Confine each builder to one thread or task.

    Examples
    --------
    >>> builder = Builder({"name": "John", "orders": [{"id": "1"}]})
    >>> builder.with_.name("Steve").with_.orders[0].id(lambda: "2").build()
    {'name': 'Steve', 'orders': [{'id': '2'}]}
    >>> builder.set("orders.0.id", "3").get("orders.0.id")
    '3'
    """

    __slots__ = ("_product",)

    def __init__(self, initial_state: Mapping[str, Any]) -> None:
        self._product: dict[str, Any] = deep_copy(initial_state)

    @property
    def with_(self) -> FieldSurface[T]:
        """Fluent override surface mirroring the working copy's shape."""

        return FieldSurface(self)

    def set(self, path: PathLike, value: Any) -> Builder[T]:
        """Apply *value* (or the result of a producer) at *path*.

        Why
        ----
        Explicit counterpart of the fluent surface for paths computed at
        runtime or keys that are not valid identifiers.

        Parameters
        ----------
        path:
            Dotted string (``"orders.0.id"``), segment sequence
            (``("orders", 0, "id")``), or :class:`AccessPath`. The first
            segment names a top-level field.
        value:
            Literal value or zero-argument producer.

        Raises
        ------
        PathNotFound
            When *path* is empty or walks through a missing location.
        """

        resolved = AccessPath.parse(path)
        if not resolved:
            raise PathNotFound("An override needs at least a top-level field", resolved)
        return self._apply(resolved, value)

    def get(self, path: PathLike) -> Any:
        """Return the live value at *path* in the working copy.

        The result is read-through, not a copy: mutating it mutates the
        builder. Use :meth:`build` for an independent snapshot.
        """

        return resolve_at(self._product, path)

    def build(self) -> T:
        """Return an independent deep copy reflecting every override so far.

        The builder is neither reset nor frozen; later overrides only affect
        later builds.
        """

        result = deep_copy(self._product)
        log_debug("fixture_built", **make_event(None, None, {"fields": sorted(map(str, result))}))
        return cast(T, result)

    def _on_terminal(self, field: str, path: AccessPath, args: tuple[Any, ...]) -> Builder[T]:
        """Turn an interceptor call rooted at *field* into an override."""

        full = AccessPath((field, *path.segments))
        if len(args) != 1:
            raise TypeError(f"Override of {str(full)!r} takes exactly one value or producer ({len(args)} given)")
        return self._apply(full, args[0])

    def _apply(self, path: AccessPath, value: Any) -> Builder[T]:
        producer = is_producer(value)
        apply_at(self._product, path, resolve_value(value))
        log_debug("override_applied", **make_event(str(path.segments[0]), str(path), {"producer": producer}))
        return self

    def __repr__(self) -> str:
        return f"Builder(fields={list(self._product)!r})"


class FieldSurface(Generic[T]):
    """Entry point of the fluent override syntax.

    ``surface.name`` and ``surface["name"]`` both return an
    :class:`~lib_fixture_builder.application.interceptor.InterceptorHandle`
    rooted at the top-level field ``name``. Field names beginning with an
    underscore are only reachable through item access.
    """

    __slots__ = ("_builder",)

    __iter__ = None

    def __init__(self, builder: Builder[T]) -> None:
        self._builder = builder

    def __getattr__(self, name: str) -> InterceptorHandle:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, field: str) -> InterceptorHandle:
        return intercept(partial(self._builder._on_terminal, field))

    def __dir__(self) -> list[str]:
        return [key for key in self._builder._product if isinstance(key, str) and key.isidentifier()]

    def __repr__(self) -> str:
        return f"<FieldSurface of {self._builder!r}>"


__all__ = ["Builder", "FieldSurface"]
