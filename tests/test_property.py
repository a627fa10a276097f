"""Tests for Property and PropertyMap."""

import pytest

from moltraj.core.errors import UsageError
from moltraj.model.property import Property, PropertyKind, PropertyMap


class TestProperty:
    def test_kinds(self):
        assert Property.of(True).kind is PropertyKind.BOOL
        assert Property.of(35).kind is PropertyKind.DOUBLE
        assert Property.of(2.5).kind is PropertyKind.DOUBLE
        assert Property.of("abc").kind is PropertyKind.STRING
        assert Property.of((1, 2, 3)).kind is PropertyKind.VECTOR3D

    def test_int_stored_as_double(self):
        p = Property.of(22)
        assert p.value == 22.0
        assert isinstance(p.value, float)

    def test_vector_is_float_tuple(self):
        assert Property.of([1, 2, 3]).as_vector3d() == (1.0, 2.0, 3.0)

    def test_unsupported_values(self):
        with pytest.raises(UsageError):
            Property.of(object())
        with pytest.raises(UsageError):
            Property.of([1, 2])

    def test_accessor_kind_mismatch(self):
        p = Property.of("test")
        assert p.as_string() == "test"
        with pytest.raises(UsageError):
            p.as_double()
        with pytest.raises(UsageError):
            p.as_bool()

    def test_frozen(self):
        p = Property.of(1.0)
        with pytest.raises(AttributeError):
            p.value = 2.0


class TestPropertyMap:
    def test_get_missing(self):
        props = PropertyMap()
        assert props.get("not here") is None
        assert props.get_double("not here") is None

    def test_overwrite_changes_kind(self):
        props = PropertyMap()
        props.set("foo", 35)
        assert props.get_double("foo") == 35.0

        props.set("foo", "test")
        assert props.get_string("foo") == "test"
        assert props.get_double("foo") is None
        assert props.get_bool("foo") is None
        assert props.get_vector3d("foo") is None
        assert len(props) == 1

    def test_typed_getters(self):
        props = PropertyMap()
        props.set("bar", False)
        props.set("fizz", (1, 2, 3))

        assert props.get_bool("bar") is False
        assert props.get_string("bar") is None
        assert props.get_double("bar") is None
        assert props.get_vector3d("bar") is None

        assert props.get_vector3d("fizz") == (1.0, 2.0, 3.0)
        assert props.get_bool("fizz") is None

    def test_iteration_sorted_by_key(self):
        props = PropertyMap()
        props.set("foo", "test")
        props.set("bar", False)
        props.set("buzz", 22)
        props.set("fizz", (1, 2, 3))

        assert [key for key, _ in props] == ["bar", "buzz", "fizz", "foo"]
        assert props.keys() == ["bar", "buzz", "fizz", "foo"]
        assert props.items()[1] == ("buzz", Property(PropertyKind.DOUBLE, 22.0))

    def test_non_string_key(self):
        with pytest.raises(UsageError):
            PropertyMap().set(1, "value")

    def test_copy_is_independent(self):
        props = PropertyMap()
        props.set("a", 1)
        other = props.copy()
        other.set("a", 2)
        assert props.get_double("a") == 1.0
        assert "a" in other

    def test_remove_and_clear(self):
        props = PropertyMap()
        props.set("a", 1)
        props.set("b", 2)
        props.remove("a")
        props.remove("missing")
        assert props.keys() == ["b"]
        props.clear()
        assert len(props) == 0
