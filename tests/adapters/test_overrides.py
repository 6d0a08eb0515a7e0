from __future__ import annotations

import pytest

from lib_fixture_builder.adapters.overrides import coerce_value, parse_assignment
from lib_fixture_builder.domain.paths import AccessPath


def test_parse_assignment_splits_on_first_equals_sign() -> None:
    path, value = parse_assignment("note=a=b")
    assert path == AccessPath(("note",))
    assert value == "a=b"


def test_parse_assignment_keeps_digit_segments_for_list_indices() -> None:
    path, value = parse_assignment("orders.0.id=2")
    assert path.segments == ("orders", "0", "id")
    assert value == 2


@pytest.mark.parametrize("text", ["address.city", "=value", "  =value"])
def test_parse_assignment_rejects_malformed_input(text: str) -> None:
    with pytest.raises(ValueError, match="Expected PATH=VALUE"):
        parse_assignment(text)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("true", True),
        ("False", False),
        ("null", None),
        ("none", None),
        ("42", 42),
        ("-7", -7),
        ("0.5", 0.5),
        ("San Jose", "San Jose"),
        ('"07777777777"', "07777777777"),
        ('{"city": "San Jose"}', {"city": "San Jose"}),
        ("[1, 2]", [1, 2]),
    ],
)
def test_coerce_value(raw: str, expected: object) -> None:
    assert coerce_value(raw) == expected


def test_coerce_value_leaves_broken_json_as_text() -> None:
    assert coerce_value("[not json") == "[not json"
