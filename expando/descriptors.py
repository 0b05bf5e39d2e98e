"""
Expando Descriptors - Introspection Table
=========================================

Data-binding and introspection layers need to see an expando as an object with
ordinary properties. ``describe`` exports that view as a plain table:

```python
table = describe(person)
table["Age"].property_type  # int
table["Age"].read_only      # False
table["Age"].set_value(31)  # same type check and notification as person["Age"] = 31
```

Strong members are listed first, then dynamic members in the order the
extensions report them. Types and read-only flags are captured when the table
is built; getters and setters always act on the live container.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict

from .errors import UnknownPropertyError

if TYPE_CHECKING:
    from .container import DynamicExtensionContainer


@dataclass(frozen=True)
class PropertyDescriptor:
    """One member of a container as seen by an introspection consumer."""

    name: str
    property_type: Any
    read_only: bool
    is_dynamic: bool
    _getter: Callable[[], Any] = field(repr=False, compare=False)
    _setter: Callable[[Any], None] = field(repr=False, compare=False)

    def get_value(self) -> Any:
        return self._getter()

    def set_value(self, value: Any) -> None:
        if self.read_only:
            raise AttributeError(f"Property '{self.name}' is read-only")
        self._setter(value)


def _find_class_attribute(cls: type, name: str) -> Any:
    for klass in cls.__mro__:
        if name in vars(klass):
            return vars(klass)[name]
    raise AttributeError(name)


def _describe_strong(
    container: "DynamicExtensionContainer", name: str
) -> PropertyDescriptor:
    attr = _find_class_attribute(type(container), name)

    if isinstance(attr, property):
        annotations = getattr(attr.fget, "__annotations__", {})
        property_type = annotations.get("return", Any)
        read_only = attr.fset is None
    else:
        property_type = Any
        read_only = False

    def get_value() -> Any:
        return getattr(container, name)

    def set_value(value: Any) -> None:
        setattr(container, name, value)

    return PropertyDescriptor(
        name, property_type, read_only, False, get_value, set_value
    )


def _describe_dynamic(
    container: "DynamicExtensionContainer", name: str
) -> PropertyDescriptor:
    extension = container.resolve(name)
    if extension is None:
        raise UnknownPropertyError(name)

    def get_value() -> Any:
        found, value = container.try_get_property(name)
        if not found:
            raise UnknownPropertyError(name)
        return value

    def set_value(value: Any) -> None:
        if not container.try_set_property(name, value):
            raise UnknownPropertyError(name)

    return PropertyDescriptor(
        name,
        extension.property_type(name),
        not extension.can_write(name),
        True,
        get_value,
        set_value,
    )


def describe(container: "DynamicExtensionContainer") -> Dict[str, PropertyDescriptor]:
    """Build the ``name -> PropertyDescriptor`` table for ``container``."""
    table: Dict[str, PropertyDescriptor] = {}
    for name in container.all_member_names():
        if name in container.strong_names:
            table[name] = _describe_strong(container, name)
        else:
            table[name] = _describe_dynamic(container, name)
    return table
