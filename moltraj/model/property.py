"""Typed metadata attached to atoms, residues and frames.

A Property holds exactly one of: bool, float (DOUBLE), str, or a 3-component
vector. A PropertyMap stores properties under unique string keys and iterates
them in lexicographic key order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional, Union

from moltraj.core.errors import UsageError

Vector3D = tuple[float, float, float]
PropertyValue = Union[bool, float, str, Vector3D]


class PropertyKind(Enum):
    BOOL = "bool"
    DOUBLE = "double"
    STRING = "string"
    VECTOR3D = "vector3d"


def _as_vector3d(value: Any) -> Optional[Vector3D]:
    try:
        items = list(value)
    except TypeError:
        return None
    if len(items) != 3:
        return None
    try:
        return (float(items[0]), float(items[1]), float(items[2]))
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Property:
    """A tagged value. Build it with :meth:`Property.of`."""

    kind: PropertyKind
    value: PropertyValue

    @classmethod
    def of(cls, value: Any) -> "Property":
        if isinstance(value, Property):
            return value
        # bool is a subclass of int, check it first
        if isinstance(value, bool):
            return cls(PropertyKind.BOOL, value)
        if isinstance(value, (int, float)):
            return cls(PropertyKind.DOUBLE, float(value))
        if isinstance(value, str):
            return cls(PropertyKind.STRING, value)
        vector = _as_vector3d(value)
        if vector is not None:
            return cls(PropertyKind.VECTOR3D, vector)
        raise UsageError(
            f"Can not store a {type(value).__name__} in a Property; "
            "expected bool, number, str or a 3-component vector"
        )

    def _expect(self, kind: PropertyKind) -> PropertyValue:
        if self.kind is not kind:
            raise UsageError(f"Property holds a {self.kind.value}, not a {kind.value}")
        return self.value

    def as_bool(self) -> bool:
        return self._expect(PropertyKind.BOOL)  # type: ignore[return-value]

    def as_double(self) -> float:
        return self._expect(PropertyKind.DOUBLE)  # type: ignore[return-value]

    def as_string(self) -> str:
        return self._expect(PropertyKind.STRING)  # type: ignore[return-value]

    def as_vector3d(self) -> Vector3D:
        return self._expect(PropertyKind.VECTOR3D)  # type: ignore[return-value]


class PropertyMap:
    """Key -> Property mapping iterated in sorted key order."""

    def __init__(self) -> None:
        self._data: dict[str, Property] = {}

    def set(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise UsageError(f"Property keys must be str, got {type(key).__name__}")
        self._data[key] = Property.of(value)

    def get(self, key: str) -> Optional[Property]:
        return self._data.get(key)

    def _get_kind(self, key: str, kind: PropertyKind) -> Optional[Any]:
        prop = self._data.get(key)
        if prop is None or prop.kind is not kind:
            return None
        return prop.value

    def get_bool(self, key: str) -> Optional[bool]:
        return self._get_kind(key, PropertyKind.BOOL)

    def get_double(self, key: str) -> Optional[float]:
        return self._get_kind(key, PropertyKind.DOUBLE)

    def get_string(self, key: str) -> Optional[str]:
        return self._get_kind(key, PropertyKind.STRING)

    def get_vector3d(self, key: str) -> Optional[Vector3D]:
        return self._get_kind(key, PropertyKind.VECTOR3D)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def copy(self) -> "PropertyMap":
        other = PropertyMap()
        other._data = dict(self._data)
        return other

    def keys(self) -> list[str]:
        return sorted(self._data)

    def items(self) -> list[tuple[str, Property]]:
        return [(k, self._data[k]) for k in sorted(self._data)]

    def __iter__(self) -> Iterator[tuple[str, Property]]:
        return iter(self.items())

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyMap):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={p.value!r}" for k, p in self.items())
        return f"PropertyMap({inner})"


class HasProperties:
    """Mixin giving ``set``/``get`` and typed getters over ``self.properties``."""

    properties: PropertyMap

    def set(self, key: str, value: Any) -> None:
        self.properties.set(key, value)

    def get(self, key: str) -> Optional[Property]:
        return self.properties.get(key)

    def get_bool(self, key: str) -> Optional[bool]:
        return self.properties.get_bool(key)

    def get_double(self, key: str) -> Optional[float]:
        return self.properties.get_double(key)

    def get_string(self, key: str) -> Optional[str]:
        return self.properties.get_string(key)

    def get_vector3d(self, key: str) -> Optional[Vector3D]:
        return self.properties.get_vector3d(key)
