"""Unit tests for the introspection table."""

import pytest

from expando import (
    TypedExpando,
    TypeMismatchError,
    UnknownPropertyError,
    describe,
)


class Profile(TypedExpando):
    """TypedExpando with a static read-only and a static writable member."""

    def __init__(self, *args, **kwargs):
        self._label = "profile"
        super().__init__(*args, **kwargs)

    @property
    def kind(self) -> str:
        return "profile"

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, value: str) -> None:
        self._label = value


@pytest.mark.unit
def test_describe_lists_strong_members_before_dynamic_ones():
    """Static members come first, dynamic ones follow in declaration order"""
    profile = Profile([("Age", int), ("Name", str)])

    table = profile.describe()

    names = list(table)
    assert names.index("kind") < names.index("Age")
    assert names[-2:] == ["Age", "Name"]
    assert table["Age"].is_dynamic
    assert not table["kind"].is_dynamic


@pytest.mark.unit
def test_dynamic_descriptor_reports_type_and_access(person):
    """Dynamic descriptors carry the declared type and read-only flag"""
    table = describe(person)

    assert table["Age"].property_type is int
    assert table["Name"].property_type is str
    assert not table["Age"].read_only


@pytest.mark.unit
def test_strong_descriptor_uses_getter_annotation_and_setter_presence():
    """Static properties report their return annotation and writability"""
    table = Profile().describe()

    assert table["kind"].property_type is str
    assert table["kind"].read_only
    assert not table["label"].read_only


@pytest.mark.unit
@pytest.mark.subscription
def test_dynamic_setter_routes_through_notification_pipeline(person, changes):
    """Setting through a descriptor notifies like a direct write"""
    person.subscribe(changes.append)
    table = person.describe()

    table["Name"].set_value("Rafael")

    assert person["Name"] == "Rafael"
    assert table["Name"].get_value() == "Rafael"
    assert changes == ["Name"]


@pytest.mark.unit
def test_dynamic_setter_enforces_declared_type(person):
    """Descriptor writes are type checked"""
    table = person.describe()

    with pytest.raises(TypeMismatchError):
        table["Age"].set_value("Hello")

    assert person["Age"] == 0


@pytest.mark.unit
def test_strong_descriptors_access_the_live_object():
    """Static descriptors read and write the real attribute"""
    profile = Profile()
    table = profile.describe()

    table["label"].set_value("renamed")

    assert profile.label == "renamed"
    assert table["label"].get_value() == "renamed"


@pytest.mark.unit
def test_read_only_descriptor_refuses_set_value():
    """A read-only descriptor raises instead of writing"""
    table = Profile().describe()

    with pytest.raises(AttributeError):
        table["kind"].set_value("other")


@pytest.mark.unit
@pytest.mark.edge_case
def test_descriptor_for_removed_property_reports_unknown(person):
    """A snapshot entry whose property was removed fails on access"""
    table = person.describe()
    person.remove_property("Age")

    with pytest.raises(UnknownPropertyError):
        table["Age"].get_value()
    with pytest.raises(UnknownPropertyError):
        table["Age"].set_value(3)


@pytest.mark.unit
@pytest.mark.edge_case
def test_dynamic_name_shadowed_by_strong_member_is_described_once():
    """A dynamic property named like a static member shows only the static one"""
    profile = Profile([("kind", int)])

    table = profile.describe()

    assert list(table).count("kind") == 1
    assert table["kind"].get_value() == "profile"
