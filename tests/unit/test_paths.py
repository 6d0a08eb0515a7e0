from __future__ import annotations

import pytest

from lib_fixture_builder.domain.errors import PathNotFound
from lib_fixture_builder.domain.paths import AccessPath, apply_at, iter_paths, resolve_at


def make_customer() -> dict[str, object]:
    return {
        "name": "John",
        "address": {"street": "2 Main St", "city": "San Francisco"},
        "orders": [{"id": "1", "items": [{"sku": "a"}]}],
        "mobile": None,
        "codes": {"0": "zero", 7: "seven"},
    }


def test_parse_dotted_string_and_sequences() -> None:
    assert AccessPath.parse("orders.0.id").segments == ("orders", "0", "id")
    assert AccessPath.parse(["orders", 0, "id"]).segments == ("orders", 0, "id")
    assert AccessPath.parse("") == AccessPath()
    path = AccessPath(("name",))
    assert AccessPath.parse(path) is path


def test_path_helpers() -> None:
    path = AccessPath().child("orders").child(0).child("id")
    assert str(path) == "orders.0.id"
    assert len(path) == 3
    assert list(path) == ["orders", 0, "id"]
    assert path.parent == AccessPath(("orders", 0))
    assert path.leaf == "id"
    assert not AccessPath()


def test_paths_are_hashable_values() -> None:
    assert {AccessPath(("a",)), AccessPath(("a",))} == {AccessPath(("a",))}


def test_resolve_nested_and_indexed() -> None:
    customer = make_customer()
    assert resolve_at(customer, "address.city") == "San Francisco"
    assert resolve_at(customer, ("orders", 0, "items", 0, "sku")) == "a"
    assert resolve_at(customer, "orders.0.items.0.sku") == "a"
    assert resolve_at(customer, "") is customer


def test_resolve_returns_live_structure() -> None:
    customer = make_customer()
    assert resolve_at(customer, "address") is customer["address"]


def test_int_segment_falls_back_to_string_key() -> None:
    customer = make_customer()
    assert resolve_at(customer, ("codes", 0)) == "zero"
    assert resolve_at(customer, ("codes", 7)) == "seven"


@pytest.mark.parametrize(
    "path",
    ["missing.city", "address.zip.code", "mobile.prefix", "name.first", "orders.1.id", "orders.first", "orders.-1"],
)
def test_resolve_missing_locations_raise(path: str) -> None:
    with pytest.raises(PathNotFound) as excinfo:
        resolve_at(make_customer(), path)
    assert excinfo.value.path == AccessPath.parse(path)


def test_apply_replaces_leaf_and_keeps_identity() -> None:
    customer = make_customer()
    replacement = {"street": "1 Market St", "city": "San Jose"}
    apply_at(customer, "address", replacement)
    assert customer["address"] is replacement


def test_apply_sets_indexed_field_without_changing_length() -> None:
    customer = make_customer()
    apply_at(customer, "orders.0.id", "2")
    assert customer["orders"] == [{"id": "2", "items": [{"sku": "a"}]}]


def test_apply_adds_new_key_on_existing_mapping() -> None:
    customer = make_customer()
    apply_at(customer, "address.zip", "94105")
    apply_at(customer, "email", "john@example.com")
    assert customer["address"]["zip"] == "94105"
    assert customer["email"] == "john@example.com"


@pytest.mark.parametrize(
    ("path", "message"),
    [
        ("orders.1", "index 1 is out of range for 'orders'"),
        ("orders.1.id", "index 1 is out of range"),
        ("mobile.prefix", "'mobile' holds None"),
        ("name.first", "'name' holds a str"),
        ("missing.city", "key 'missing' is missing"),
        ("orders.first", "'first' is not a list index"),
    ],
)
def test_apply_never_creates_structure(path: str, message: str) -> None:
    customer = make_customer()
    with pytest.raises(PathNotFound, match=message):
        apply_at(customer, path, "x")
    assert customer == make_customer()


def test_apply_rejects_empty_path_and_tuples() -> None:
    with pytest.raises(PathNotFound):
        apply_at({}, "", 1)
    with pytest.raises(PathNotFound, match="holds a tuple"):
        apply_at({"pair": (1, 2)}, "pair.0", 3)


def test_iter_paths_lists_intermediate_and_leaf_paths() -> None:
    paths = [str(path) for path in iter_paths({"address": {"city": "SF"}, "orders": [{"id": "1"}], "tags": []})]
    assert paths == ["address", "address.city", "orders", "orders.0", "orders.0.id", "tags"]


def test_iter_paths_of_scalar_is_empty() -> None:
    assert list(iter_paths("John")) == []


def test_dotted_keys_are_escaped_and_parsed_back() -> None:
    path = AccessPath(("hosts", "api.example.com", "port"))
    assert str(path) == r"hosts.api\.example\.com.port"
    assert AccessPath.parse(str(path)) == path
    assert AccessPath.parse(r"dir.C:\\temp").segments == ("dir", "C:\\temp")
    assert AccessPath.parse(str(AccessPath(("C:\\temp.d",)))).segments == ("C:\\temp.d",)


def test_every_enumerated_path_round_trips_through_its_text_form() -> None:
    def make_hosts() -> dict[str, object]:
        return {"example.com": 1, "hosts": {"api.example.com": {"port": 80}}, "orders": [{"id": "1"}]}

    for path in iter_paths(make_hosts()):
        target = make_hosts()
        apply_at(target, str(path), "x")
        assert resolve_at(target, str(path)) == "x"


def test_iter_paths_does_not_enter_tuples() -> None:
    paths = [str(path) for path in iter_paths({"point": (1, 2), "tags": frozenset({"a"}), "orders": [(3,)]})]
    assert paths == ["point", "tags", "orders", "orders.0"]


@pytest.mark.parametrize("segment", ["²", "٣", "-1", "first"])
def test_non_ascii_digit_or_signed_segments_are_not_list_indices(segment: str) -> None:
    with pytest.raises(PathNotFound, match="is not a list index"):
        apply_at(make_customer(), f"orders.{segment}", "x")
