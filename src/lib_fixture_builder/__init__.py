"""Public package surface for deriving test fixtures from a canonical base.

Declare a base once with :func:`create_builder`, call the returned factory for
each variant, override any nested field through ``builder.with_`` and take an
independent snapshot with ``build()``:

>>> from lib_fixture_builder import create_builder
>>> customer = create_builder({"name": "John", "address": {"city": "SF"}})
>>> customer().with_.address.city("San Jose").build()
{'name': 'John', 'address': {'city': 'San Jose'}}
"""

from __future__ import annotations

from .application.builder import Builder, FieldSurface
from .application.interceptor import InterceptorHandle, intercept
from .core import BuilderFactory, MergedBuilderFactory, create_builder, merge_builders
from .domain.errors import CyclicValue, FixtureError, InvalidBase, InvalidFormat, PathNotFound
from .domain.paths import AccessPath, apply_at, iter_paths, resolve_at
from .domain.values import deep_copy
from .observability import bind_trace_id, get_logger
from .testing import assert_disjoint

__all__ = [
    "AccessPath",
    "Builder",
    "BuilderFactory",
    "CyclicValue",
    "FieldSurface",
    "FixtureError",
    "InterceptorHandle",
    "InvalidBase",
    "InvalidFormat",
    "MergedBuilderFactory",
    "PathNotFound",
    "apply_at",
    "assert_disjoint",
    "bind_trace_id",
    "create_builder",
    "deep_copy",
    "get_logger",
    "intercept",
    "iter_paths",
    "merge_builders",
    "resolve_at",
]
