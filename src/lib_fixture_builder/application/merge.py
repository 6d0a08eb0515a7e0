"""Application-layer merge policy for builder factories.

Purpose
-------
Combine two independently declared fixtures (for example a customer and the
customer's contact details) into one fixture over the union shape.

Contents
    - ``merge_builders``: public entry point.
    - ``MergedBuilderFactory``: the factory it returns.
    - ``_union``: shallow, right-biased combination of two built values.

System Role
-----------
Receives any :class:`~lib_fixture_builder.application.ports.FixtureFactory`
(plain or already merged) and returns another one, so merges compose. The
merge is shallow. Nested overrides on the result still work because every
call yields an ordinary
:class:`~lib_fixture_builder.application.builder.Builder`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..observability import log_debug, make_event
from .builder import Builder
from .ports import FixtureFactory


@dataclass(frozen=True, slots=True)
class MergedBuilderFactory:
    """Factory producing builders over the union of two factories' output.

    Each call builds ``left()`` and ``right()`` afresh, so producers embedded
    in either side and any later changes to the factories are honoured, and no
    two builders share state.
    """

    left: FixtureFactory[Any]
    right: FixtureFactory[Any]

    def __call__(self) -> Builder[Any]:
        left_value = self.left().build()
        right_value = self.right().build()
        merged = _union(left_value, right_value)
        log_debug(
            "builders_merged",
            **make_event(None, None, {"left": sorted(map(str, left_value)), "right": sorted(map(str, right_value))}),
        )
        return Builder(merged)


def merge_builders(left: FixtureFactory[Any], right: FixtureFactory[Any]) -> MergedBuilderFactory:
    """Return a factory whose builders start from ``{**left, **right}``.

    Why
    ----
    Intersection-typed models (``Customer & ContactDetails``) are easier to
    declare as two small fixtures than as one large one.

    What
    ----
    Fields from *right* win on key collision. Nested values are taken whole
    from whichever side wins; no recursive merge happens.

    Examples
    --------
    >>> from lib_fixture_builder.core import create_builder
    >>> customer = create_builder({"name": "John", "address": {"city": "SF"}})
    >>> details = create_builder({"mobile": "07777777777"})
    >>> merged = merge_builders(customer, details)
    >>> merged().with_.address.city("San Jose").build()
    {'name': 'John', 'address': {'city': 'San Jose'}, 'mobile': '07777777777'}
    """

    return MergedBuilderFactory(left, right)


def _union(left: Mapping[str, Any], right: Mapping[str, Any]) -> dict[str, Any]:
    """Combine two built values with *right* taking precedence."""

    combined = dict(left)
    combined.update(right)
    return combined
