"""Explicit access paths into nested fixture values.

Purpose
-------
Represent "where to write" as a value instead of as a chain of runtime
attribute tricks. Every override, whether it arrives through the fluent
``with_`` surface, through :meth:`Builder.set`, or through the CLI, ends up as
an :class:`AccessPath` handed to :func:`apply_at`.

Contents
--------
* :class:`AccessPath` – immutable ordered sequence of keys and indices.
* :func:`resolve_at` – read the live value at a path.
* :func:`apply_at` – assign a value at a path without creating structure.
* :func:`iter_paths` – enumerate every path that exists in a value.

System Role
-----------
Domain layer; pure functions over plain mappings and lists. Raises
:class:`~lib_fixture_builder.domain.errors.PathNotFound` for every location
that cannot be reached.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .errors import PathNotFound

Segment = Union[str, int]
PathLike = Union["AccessPath", str, Sequence[Segment]]


@dataclass(frozen=True, slots=True)
class AccessPath:
    r"""Ordered keys (mapping lookups) and indices (list positions).

    String segments address mapping keys; integer segments address list
    elements. A string made only of digits also addresses a list element when
    the container reached at that step is a list, which lets dotted paths such
    as ``"orders.0.id"`` work unchanged. In the dotted form a key containing a
    dot escapes it with a backslash, and ``str(path)`` writes it back that way.

    Examples
    --------
    >>> path = AccessPath.parse("address.city")
    >>> path.segments
    ('address', 'city')
    >>> str(AccessPath(("orders", 0, "id")))
    'orders.0.id'
    >>> AccessPath().child("name")
    AccessPath(segments=('name',))
    >>> AccessPath.parse(r"hosts.api\.example\.com.port").segments
    ('hosts', 'api.example.com', 'port')
    >>> print(AccessPath(("hosts", "api.example.com")))
    hosts.api\.example\.com
    """

    segments: tuple[Segment, ...] = ()

    @classmethod
    def parse(cls, raw: PathLike) -> AccessPath:
        """Coerce a dotted string, a segment sequence, or a path into a path.

        In a dotted string ``\\.`` stands for a literal dot inside a key and
        ``\\\\`` for a literal backslash.
        """

        if isinstance(raw, AccessPath):
            return raw
        if isinstance(raw, str):
            return cls(_split_dotted(raw)) if raw else cls()
        return cls(tuple(raw))

    def child(self, segment: Segment) -> AccessPath:
        """Return a new path extended by *segment*."""

        return AccessPath((*self.segments, segment))

    @property
    def parent(self) -> AccessPath:
        return AccessPath(self.segments[:-1])

    @property
    def leaf(self) -> Segment:
        return self.segments[-1]

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __str__(self) -> str:
        return ".".join(_escape(segment) for segment in self.segments)


def resolve_at(root: Any, path: PathLike) -> Any:
    """Return the live value stored at *path* inside *root*.

    Raises
    ------
    PathNotFound
        When any step of *path* is missing.

    Examples
    --------
    >>> resolve_at({"orders": [{"id": "1"}]}, "orders.0.id")
    '1'
    >>> resolve_at({"address": None}, "address.city")
    Traceback (most recent call last):
    ...
    lib_fixture_builder.domain.errors.PathNotFound: Cannot resolve 'address.city': 'address' holds None
    """

    resolved = AccessPath.parse(path)
    current = root
    for depth, segment in enumerate(resolved.segments):
        current = _step(current, segment, resolved, depth)
    return current


def apply_at(root: Any, path: PathLike, value: Any) -> None:
    """Assign *value* at *path* inside *root*, in place.

    Why
    ----
    Overrides change an existing shape; they never invent intermediate
    containers. The final step may add a new key to an existing mapping, which
    is how optional fields absent from a base get set.

    What
    ----
    Walks every segment but the last with the same rules as
    :func:`resolve_at`, then assigns at the final key or index. *value* is
    stored by identity.

    Raises
    ------
    PathNotFound
        When an intermediate step is missing, when a list index is outside
        ``0 <= index < len``, or when the parent cannot be assigned into
        (scalars, ``None``, tuples).

    Examples
    --------
    >>> data = {"orders": [{"id": "1"}]}
    >>> apply_at(data, "orders.0.id", "2")
    >>> data
    {'orders': [{'id': '2'}]}
    >>> apply_at(data, ["orders", 3, "id"], "4")
    Traceback (most recent call last):
    ...
    lib_fixture_builder.domain.errors.PathNotFound: Cannot resolve 'orders.3.id': index 3 is out of range for 'orders' (length 1)
    """

    resolved = AccessPath.parse(path)
    if not resolved:
        raise PathNotFound("Cannot assign at an empty path", resolved)
    parent = root
    for depth, segment in enumerate(resolved.segments[:-1]):
        parent = _step(parent, segment, resolved, depth)
    _assign(parent, resolved.leaf, value, resolved)


def iter_paths(value: Any, prefix: AccessPath | None = None) -> Iterator[AccessPath]:
    """Yield every path that exists inside *value*, depth-first.

    Intermediate mappings and lists are yielded before their children, so every
    returned path is both navigable and settable as a whole. Tuples, sets and
    other containers that cannot be assigned into are yielded but not entered.

    Examples
    --------
    >>> [str(path) for path in iter_paths({"name": "John", "orders": [{"id": "1"}]})]
    ['name', 'orders', 'orders.0', 'orders.0.id']
    >>> [str(path) for path in iter_paths({"point": (1, 2)})]
    ['point']
    """

    base = prefix or AccessPath()
    if isinstance(value, Mapping):
        entries: Iterator[tuple[Segment, Any]] = iter(value.items())
    elif isinstance(value, list):
        entries = enumerate(value)
    else:
        return
    for segment, item in entries:
        path = base.child(segment)
        yield path
        yield from iter_paths(item, path)


def _step(container: Any, segment: Segment, path: AccessPath, depth: int) -> Any:
    """Descend one level, raising :class:`PathNotFound` with context on failure."""

    if isinstance(container, Mapping):
        key = _mapping_key(container, segment)
        if key not in container:
            raise PathNotFound(f"Cannot resolve {str(path)!r}: key {segment!r} is missing{_where(path, depth)}", path)
        return container[key]
    if isinstance(container, (list, tuple)):
        return container[_index(container, segment, path, depth)]
    raise PathNotFound(f"Cannot resolve {str(path)!r}: {_describe(path, depth)} holds {_kind(container)}", path)


def _assign(container: Any, segment: Segment, value: Any, path: AccessPath) -> None:
    """Store *value* under *segment* of *container*."""

    depth = len(path) - 1
    if isinstance(container, MutableMapping):
        container[_mapping_key(container, segment)] = value
        return
    if isinstance(container, list):
        container[_index(container, segment, path, depth)] = value
        return
    raise PathNotFound(f"Cannot resolve {str(path)!r}: {_describe(path, depth)} holds {_kind(container)}", path)


def _mapping_key(container: Mapping[Any, Any], segment: Segment) -> Segment:
    """Prefer the segment as given; fall back to its string form for int segments."""

    if isinstance(segment, int) and segment not in container and str(segment) in container:
        return str(segment)
    return segment


def _index(container: Sequence[Any], segment: Segment, path: AccessPath, depth: int) -> int:
    """Translate *segment* into a valid list index or raise :class:`PathNotFound`."""

    if isinstance(segment, str) and segment.isascii() and segment.isdigit():
        index = int(segment)
    elif isinstance(segment, int) and not isinstance(segment, bool):
        index = segment
    else:
        raise PathNotFound(
            f"Cannot resolve {str(path)!r}: {segment!r} is not a list index{_where(path, depth)}",
            path,
        )
    if not 0 <= index < len(container):
        raise PathNotFound(
            f"Cannot resolve {str(path)!r}: index {index} is out of range for {_describe(path, depth)} "
            f"(length {len(container)})",
            path,
        )
    return index


def _describe(path: AccessPath, depth: int) -> str:
    """Name the container reached before segment *depth* of *path*."""

    if depth == 0:
        return "the root"
    return repr(str(AccessPath(path.segments[:depth])))


def _where(path: AccessPath, depth: int) -> str:
    return f" in {_describe(path, depth)}" if depth else ""


def _kind(value: Any) -> str:
    return "None" if value is None else f"a {type(value).__name__}"


def _split_dotted(raw: str) -> tuple[str, ...]:
    """Split on dots that are not escaped with a backslash."""

    segments: list[str] = []
    current: list[str] = []
    chars = iter(raw)
    for char in chars:
        if char == "\\":
            current.append(next(chars, "\\"))
        elif char == ".":
            segments.append("".join(current))
            current = []
        else:
            current.append(char)
    segments.append("".join(current))
    return tuple(segments)


def _escape(segment: Segment) -> str:
    if not isinstance(segment, str):
        return str(segment)
    return segment.replace("\\", "\\\\").replace(".", "\\.")


__all__ = ["AccessPath", "PathLike", "Segment", "apply_at", "iter_paths", "resolve_at"]
