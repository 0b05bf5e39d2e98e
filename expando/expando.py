"""
TypedExpando - Runtime-Declared Typed Properties
================================================

``TypedExpando`` is a container whose properties are declared at runtime, each
with a type, a current value and change notification. It behaves like a
read-mostly mapping from property name to value:

```python
person = TypedExpando([("Age", int), ("Name", str)])
person.subscribe(lambda name: print(f"{name} changed"))

person["Age"]            # 0
person["Name"] = "Rafa"  # prints "Name changed"
person["Age"] = "Hello"  # TypeMismatchError, Age is still 0

person.add("Score", 42)  # declared as int
dict(person.items())     # {'Age': 0, 'Name': 'Rafa', 'Score': 42}
```

Writes go through the container pipeline, so type checking and notification
behave the same whether a value is set through indexing, ``add`` or an
introspection descriptor. Assigning to a name that was never declared raises
``UnknownPropertyError``; use ``add_property`` or ``add`` first.

Mutating the expando while iterating over it is not supported. Iteration
walks the live property store and may raise or skip entries.
"""

from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Optional, Tuple

from .container import DynamicExtensionContainer, PropertyChangedListener
from .errors import UnknownPropertyError
from .extension import TypedSlotExtension
from .types import infer_type, values_equal


class TypedExpando(DynamicExtensionContainer, Mapping):
    """
    A dynamic object that supports adding typed properties at runtime.

    Args:
        properties: Optional ordered ``(name, type)`` pairs declared in order
            through ``add_property``; a repeated name raises
            ``DuplicatePropertyError``.
        on_property_changed: Optional listener subscribed at construction.
    """

    def __init__(
        self,
        properties: Optional[Iterable[Tuple[str, Any]]] = None,
        on_property_changed: Optional[PropertyChangedListener] = None,
    ) -> None:
        super().__init__(on_property_changed)
        self._slots = TypedSlotExtension()
        self._add_extension(self._slots)

        for name, property_type in properties or ():
            self.add_property(name, property_type)

    # ========================================================================
    # SCHEMA
    # ========================================================================

    def add_property(self, name: str, property_type: Any) -> None:
        """Declare ``name`` with ``property_type``; its value starts at the type default."""
        self._slots.add_property(name, property_type)

    def remove_property(self, name: str) -> None:
        """Remove ``name``, raising ``UnknownPropertyError`` if it was never declared."""
        self._slots.remove_property(name)

    def remove(self, name: str) -> bool:
        """Remove ``name`` if present. Returns whether anything was removed."""
        if name not in self._slots:
            return False
        self._slots.remove_property(name)
        return True

    def add(self, name: str, value: Any) -> None:
        """Declare ``name`` with the type of ``value`` (``Any`` for None) and store it."""
        self.add_property(name, infer_type(value))
        self[name] = value

    def property_type(self, name: str) -> Any:
        if self.resolve(name) is not self._slots:
            raise UnknownPropertyError(name)
        return self._slots.property_type(name)

    # ========================================================================
    # VALUE ACCESS
    # ========================================================================

    def __getitem__(self, name: str) -> Any:
        found, value = self.try_get_property(name)
        if not found:
            raise UnknownPropertyError(name)
        return value

    def __setitem__(self, name: str, value: Any) -> None:
        if not self.try_set_property(name, value):
            raise UnknownPropertyError(name)

    def __delitem__(self, name: str) -> None:
        self.remove_property(name)

    def contains(self, name: str, value: Any) -> bool:
        """True if ``name`` exists and currently holds a value equal to ``value``."""
        found, current = self.try_get_property(name)
        return found and values_equal(current, value)

    # ========================================================================
    # MAPPING PROTOCOL
    # ========================================================================

    def __iter__(self) -> Iterator[str]:
        for name in self._slots.member_names():
            # Names shadowed by strong members are not reachable through the chain
            if self.resolve(name) is self._slots:
                yield name

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is self._slots

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self.items())
        return f"TypedExpando({fields})"
