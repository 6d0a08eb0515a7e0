"""Structural path interception.

Purpose
-------
Let callers spell an arbitrarily deep location with ordinary Python syntax
(``handle.address.city``, ``handle.orders[0].id``) and hand the accumulated
:class:`~lib_fixture_builder.domain.paths.AccessPath` plus the call arguments to
a callback once the chain ends in a call.

Contents
--------
* :func:`intercept` – create a root handle bound to a terminal callback.
* :class:`InterceptorHandle` – immutable node in an accessor chain.

System Role
-----------
Shape-agnostic: the handle never looks at the value being addressed. The
builder engine supplies the callback that turns ``(path, args)`` into an
override.
"""

from __future__ import annotations

from typing import Any

from ..domain.paths import AccessPath, Segment
from .ports import TerminalCallback


def intercept(on_terminal: TerminalCallback) -> InterceptorHandle:
    """Return a root handle whose terminal calls are reported to *on_terminal*.

    Examples
    --------
    >>> seen = []
    >>> handle = intercept(lambda path, args: seen.append((str(path), args)) or "done")
    >>> handle.orders[0].id("2")
    'done'
    >>> seen
    [('orders.0.id', ('2',))]
    """

    return InterceptorHandle(on_terminal, AccessPath())


class InterceptorHandle:
    """One step of an accessor chain.

    Attribute access and item access both return a new handle extended by the
    accessed key; the receiver is never mutated, so a partially built chain can
    be reused. Names starting with an underscore raise :class:`AttributeError`
    so tooling that probes dunder or private hooks (``__deepcopy__``,
    ``__await__``, ``_repr_html_``) does not treat the handle as something it is
    not. Such keys remain reachable through item access.
    """

    __slots__ = ("_on_terminal", "_path")

    # Item access must not make the handle iterable through the legacy protocol.
    __iter__ = None

    def __init__(self, on_terminal: TerminalCallback, path: AccessPath) -> None:
        self._on_terminal = on_terminal
        self._path = path

    def __getattr__(self, name: str) -> InterceptorHandle:
        if name.startswith("_"):
            raise AttributeError(name)
        return InterceptorHandle(self._on_terminal, self._path.child(name))

    def __getitem__(self, key: Segment) -> InterceptorHandle:
        return InterceptorHandle(self._on_terminal, self._path.child(key))

    def __call__(self, *args: Any) -> Any:
        return self._on_terminal(self._path, args)

    def __repr__(self) -> str:
        return f"<InterceptorHandle path={str(self._path)!r}>"
