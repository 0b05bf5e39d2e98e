"""
Expando Extensions - Pluggable Property Providers
=================================================

An extension owns a set of named, typed properties and exposes them through a
small capability contract. A container chains several extensions and resolves
each property name to exactly one of them.

Every method except ``member_names`` receives a name the caller has already
found in ``member_names()``; extensions do not re-check membership. Type
checking on write belongs to the container, so ``set`` stores whatever it is
given.

Extensions shipped here:

- **TypedSlotExtension**: an insertion-ordered ``name -> (type, value)`` store
  with explicit ``add_property`` / ``remove_property``.
- **ReadOnlyExtension**: wraps another extension and reports all of its
  members as not writable.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, KeysView, Tuple

from .errors import DuplicatePropertyError, UnknownPropertyError
from .types import default_value, runtime_classes


class PropertyExtension(ABC):
    """Capability contract shared by all property providers."""

    @abstractmethod
    def member_names(self) -> Iterable[str]:
        """Names currently provided by this extension."""
        pass

    @abstractmethod
    def can_read(self, name: str) -> bool:
        pass

    @abstractmethod
    def can_write(self, name: str) -> bool:
        pass

    @abstractmethod
    def get(self, name: str) -> Any:
        pass

    @abstractmethod
    def set(self, name: str, value: Any) -> None:
        pass

    @abstractmethod
    def property_type(self, name: str) -> Any:
        """Declared type tag used for compatibility checks and introspection."""
        pass

    def __contains__(self, name: str) -> bool:
        return name in self.member_names()


@dataclass(slots=True)
class Property:
    """A named slot with a declared type and its current value."""

    name: str
    property_type: Any
    value: Any = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.value = default_value(self.property_type)


class TypedSlotExtension(PropertyExtension):
    """
    In-memory store of typed properties.

    Properties are kept in registration order. ``member_names`` is a live view,
    so additions and removals are visible to the container immediately.

    Example:
        ```python
        ext = TypedSlotExtension()
        ext.add_property("Age", int)
        ext.get("Age")  # 0
        ```
    """

    def __init__(self) -> None:
        self._properties: Dict[str, Property] = {}

    def add_property(self, name: str, property_type: Any) -> None:
        if name in self._properties:
            raise DuplicatePropertyError(name)

        # Reject tags the compatibility check cannot handle before storing them
        runtime_classes(property_type)

        self._properties[name] = Property(name, property_type)
        logging.debug(f"Registered property '{name}' as {property_type!r}")

    def remove_property(self, name: str) -> None:
        if name not in self._properties:
            raise UnknownPropertyError(name)

        del self._properties[name]
        logging.debug(f"Removed property '{name}'")

    def member_names(self) -> KeysView[str]:
        return self._properties.keys()

    def can_read(self, name: str) -> bool:
        return True

    def can_write(self, name: str) -> bool:
        return True

    def get(self, name: str) -> Any:
        return self._properties[name].value

    def set(self, name: str, value: Any) -> None:
        self._properties[name].value = value

    def property_type(self, name: str) -> Any:
        return self._properties[name].property_type

    def items(self) -> Iterator[Tuple[str, Any]]:
        for name, prop in self._properties.items():
            yield name, prop.value

    def __contains__(self, name: str) -> bool:
        return name in self._properties

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={prop.value!r}" for name, prop in self._properties.items()
        )
        return f"TypedSlotExtension({fields})"


class ReadOnlyExtension(PropertyExtension):
    """Expose another extension's members without allowing writes."""

    def __init__(self, inner: PropertyExtension) -> None:
        self._inner = inner

    @property
    def inner(self) -> PropertyExtension:
        return self._inner

    def member_names(self) -> Iterable[str]:
        return self._inner.member_names()

    def can_read(self, name: str) -> bool:
        return self._inner.can_read(name)

    def can_write(self, name: str) -> bool:
        return False

    def get(self, name: str) -> Any:
        return self._inner.get(name)

    def set(self, name: str, value: Any) -> None:
        raise PermissionError(f"Property '{name}' is read-only")

    def property_type(self, name: str) -> Any:
        return self._inner.property_type(name)

    def __contains__(self, name: str) -> bool:
        return name in self._inner
