"""Builder engine behaviour: fluent overrides, producers, immutability, errors."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from lib_fixture_builder import AccessPath, PathNotFound, create_builder
from lib_fixture_builder.application.builder import Builder, FieldSurface
from lib_fixture_builder.testing import assert_disjoint


def make_person() -> dict[str, object]:
    return {
        "name": "John",
        "age": 20,
        "address": {"street": "2 Main St", "city": "San Francisco"},
        "orders": [{"id": "1", "date": datetime(2024, 5, 1, 9, 30)}],
        "very": {"deeply": {"nested": {"value": "test"}}},
    }


def test_build_without_overrides_returns_base() -> None:
    assert create_builder({"name": "John", "age": 20})().build() == {"name": "John", "age": 20}


def test_setting_a_property() -> None:
    assert create_builder({"name": "John"})().with_.name("Steve").build()["name"] == "Steve"


def test_setting_a_nested_property_leaves_base_alone() -> None:
    base = {"address": {"city": "SF"}}
    result = create_builder(base)().with_.address.city("San Jose").build()
    assert result["address"]["city"] == "San Jose"
    assert base["address"]["city"] == "SF"


def test_setting_a_deeply_nested_property() -> None:
    result = create_builder(make_person())().with_.very.deeply.nested.value("test2").build()
    assert result["very"]["deeply"]["nested"]["value"] == "test2"


def test_setting_an_array_element_wholesale() -> None:
    replacement = {"id": "9", "date": datetime(2021, 1, 1)}
    result = create_builder(make_person())().with_.orders[0](replacement).build()
    assert result["orders"] == [replacement]
    assert result["orders"][0] is not replacement


def test_setting_an_indexed_field_keeps_length() -> None:
    result = create_builder({"orders": [{"id": "1"}]})().with_.orders[0].id("2").build()
    assert result["orders"][0]["id"] == "2"
    assert len(result["orders"]) == 1


def test_setting_multiple_properties() -> None:
    result = (
        create_builder(make_person())()
        .with_.name("Steve")
        .with_.age(30)
        .with_.address.city("San Jose")
        .with_.orders[0].id("2")
        .with_.very.deeply.nested.value("test2")
        .build()
    )
    assert result["name"] == "Steve"
    assert result["age"] == 30
    assert result["address"] == {"street": "2 Main St", "city": "San Jose"}
    assert result["orders"][0]["id"] == "2"
    assert result["very"]["deeply"]["nested"]["value"] == "test2"


def test_building_twice_from_one_factory_gives_equal_disjoint_results() -> None:
    factory = create_builder(make_person())
    first = factory().with_.address.city("San Jose").build()
    second = factory().with_.address.city("San Jose").build()
    assert first == second
    assert first is not second
    assert_disjoint(first, second)


def test_build_can_be_called_repeatedly() -> None:
    builder = create_builder({"name": "John", "tags": ["a"]})()
    first = builder.build()
    first["tags"].append("mutated")
    second = builder.with_.name("Steve").build()
    assert second == {"name": "Steve", "tags": ["a"]}
    assert first["name"] == "John"


def test_producers_are_invoked_once_per_application() -> None:
    calls: list[str] = []

    def next_name() -> str:
        calls.append("called")
        return "Steve"

    builder = create_builder({"name": "John", "address": {"city": "SF"}})()
    builder.with_.name(next_name)
    assert calls == ["called"]
    builder.build()
    builder.build()
    assert calls == ["called"]
    assert builder.with_.address.city(lambda: "San Jose").build()["address"]["city"] == "San Jose"


def test_classes_are_stored_not_called() -> None:
    assert create_builder({"kind": None})().with_.kind(dict).build()["kind"] is dict


def test_setting_a_complete_object_discards_old_fields() -> None:
    result = create_builder({"address": {"street": "2 Main St", "city": "SF"}})().with_.address({"city": "Buenos Aires"})
    assert result.build()["address"] == {"city": "Buenos Aires"}


def test_wholesale_replacement_is_stored_by_identity_until_build() -> None:
    replacement = {"city": "Buenos Aires"}
    builder = create_builder({"address": {"city": "SF"}})().with_.address(replacement)
    assert builder.get("address") is replacement
    assert builder.build()["address"] is not replacement


def test_idempotent_replacement() -> None:
    once = create_builder({"age": 1})().with_.age(5).build()
    twice = create_builder({"age": 1})().with_.age(5).with_.age(5).build()
    assert once == twice


def test_last_write_wins() -> None:
    assert create_builder({"age": 1})().with_.age(5).with_.age(6).build() == {"age": 6}


def test_with_returns_the_same_builder() -> None:
    builder = create_builder({"name": "John"})()
    assert builder.with_.name("Steve") is builder


def test_original_base_is_not_mutated() -> None:
    original = make_person()
    create_builder(original)().with_.name("Steve").with_.orders[0].id("2").with_.very.deeply.nested.value("x").build()
    assert original == make_person()


def test_optional_top_level_fields_can_be_set() -> None:
    builder = create_builder({"name": "John"})()
    result = builder.with_.age(20).with_.address({"city": "San Francisco"}).build()
    assert result == {"name": "John", "age": 20, "address": {"city": "San Francisco"}}


@pytest.mark.parametrize("initial", [None, 0])
def test_nullish_and_falsy_values_can_be_replaced(initial: object) -> None:
    assert create_builder({"name": "John", "age": initial})().with_.age(20).build()["age"] == 20


def test_date_values() -> None:
    result = create_builder({"name": "John", "date": date.today()})().with_.date(date(2021, 1, 1)).build()
    assert result["date"] == date(2021, 1, 1)


def test_missing_intermediate_container_raises() -> None:
    builder = create_builder({"name": "John", "address": None})()
    with pytest.raises(PathNotFound) as excinfo:
        builder.with_.address.city("San Jose")
    assert excinfo.value.path == AccessPath(("address", "city"))
    with pytest.raises(PathNotFound):
        builder.with_.contact.email("john@example.com")


def test_index_beyond_length_raises_and_leaves_state() -> None:
    builder = create_builder({"orders": [{"id": "1"}]})()
    with pytest.raises(PathNotFound):
        builder.with_.orders[1]({"id": "2"})
    assert builder.build() == {"orders": [{"id": "1"}]}


@pytest.mark.parametrize("args", [(), ("a", "b")])
def test_override_requires_exactly_one_value(args: tuple[object, ...]) -> None:
    builder = create_builder({"name": "John"})()
    with pytest.raises(TypeError, match="exactly one value"):
        builder.with_.name(*args)


def test_set_accepts_dotted_sequence_and_path_forms() -> None:
    builder = create_builder(make_person())()
    builder.set("address.city", "San Jose")
    builder.set(("orders", 0, "id"), "2")
    builder.set(AccessPath(("very", "deeply")), lambda: {"shallow": True})
    result = builder.build()
    assert result["address"]["city"] == "San Jose"
    assert result["orders"][0]["id"] == "2"
    assert result["very"] == {"deeply": {"shallow": True}}


def test_set_rejects_empty_path() -> None:
    with pytest.raises(PathNotFound):
        create_builder({"name": "John"})().set("", {})


def test_get_reads_through_the_working_copy() -> None:
    builder = create_builder({"address": {"city": "SF"}})()
    builder.get("address")["city"] = "Oakland"
    assert builder.build()["address"]["city"] == "Oakland"
    with pytest.raises(PathNotFound):
        builder.get("address.zip")


def test_item_access_on_surface_reaches_any_key() -> None:
    builder = create_builder({"first name": "John", "_id": 1})()
    result = builder.with_["first name"]("Steve").with_["_id"](2).build()
    assert result == {"first name": "Steve", "_id": 2}


def test_surface_hides_underscore_attributes_and_lists_fields() -> None:
    surface = create_builder({"name": "John", "first name": "J"})().with_
    assert isinstance(surface, FieldSurface)
    with pytest.raises(AttributeError):
        surface._id
    assert "name" in dir(surface)
    assert "first name" not in dir(surface)


def test_nested_builders_in_base_are_materialised() -> None:
    address = create_builder({"street": "2 Main St", "city": "San Francisco", "country": "USA"})
    customer = create_builder({"name": "John", "address": address()})
    item = create_builder({"id": "1", "name": "test-product", "price": 199})
    order = create_builder({"id": "1", "customer": customer(), "items": [item()]})

    assert order().build()["customer"]["address"]["city"] == "San Francisco"
    assert order().with_.customer.address.city("San Jose").build()["customer"]["address"]["city"] == "San Jose"
    assert order().with_.items[0].name("test-product-2").build()["items"][0]["name"] == "test-product-2"


def test_builder_repr_lists_fields() -> None:
    assert repr(Builder({"name": "John", "age": 20})) == "Builder(fields=['name', 'age'])"
