from __future__ import annotations

import pytest

from lib_fixture_builder.domain.errors import CyclicValue, FixtureError, InvalidBase, InvalidFormat, PathNotFound
from lib_fixture_builder.domain.paths import AccessPath


def test_error_hierarchy() -> None:
    for error_type in (PathNotFound, InvalidBase, CyclicValue, InvalidFormat):
        assert issubclass(error_type, FixtureError)
    for exception in (PathNotFound(""), InvalidBase(""), CyclicValue(""), InvalidFormat("")):
        assert isinstance(exception, FixtureError)


@pytest.mark.parametrize(
    ("error_type", "builtin"),
    [(PathNotFound, LookupError), (InvalidBase, TypeError), (CyclicValue, ValueError)],
)
def test_errors_are_catchable_as_builtins(error_type: type[Exception], builtin: type[Exception]) -> None:
    with pytest.raises(builtin):
        raise error_type("boom")


def test_path_not_found_carries_path() -> None:
    path = AccessPath(("orders", 3))
    error = PathNotFound("missing", path)
    assert error.path is path
    assert str(error) == "missing"
    assert PathNotFound("no path").path is None
