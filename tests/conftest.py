"""
Shared pytest fixtures and configuration for expando tests.
"""

from typing import Any, Dict, Iterable, List, Tuple

import pytest

from expando import DynamicExtensionContainer, PropertyExtension, TypedExpando


class StubExtension(PropertyExtension):
    """Dictionary-backed extension with configurable read and write access."""

    def __init__(
        self,
        members: Dict[str, Tuple[Any, Any]],
        unreadable: Iterable[str] = (),
        read_only: Iterable[str] = (),
    ):
        self._types = {name: tag for name, (tag, _) in members.items()}
        self._values = {name: value for name, (_, value) in members.items()}
        self._unreadable = set(unreadable)
        self._read_only = set(read_only)

    def member_names(self) -> List[str]:
        return list(self._types)

    def can_read(self, name: str) -> bool:
        return name not in self._unreadable

    def can_write(self, name: str) -> bool:
        return name not in self._read_only

    def get(self, name: str) -> Any:
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        self._values[name] = value

    def property_type(self, name: str) -> Any:
        return self._types[name]


class Chain(DynamicExtensionContainer):
    """Container that registers the given extensions in order."""

    def __init__(self, *extensions: PropertyExtension, on_property_changed=None):
        super().__init__(on_property_changed)
        for extension in extensions:
            self._add_extension(extension)

    @property
    def title(self) -> str:
        return "static title"


@pytest.fixture
def make_extension():
    """Factory for stub extensions."""
    return StubExtension


@pytest.fixture
def make_chain():
    """Factory for containers over a fixed list of extensions."""
    return Chain


@pytest.fixture
def expando():
    """Provide an empty TypedExpando."""
    return TypedExpando()


@pytest.fixture
def person():
    """TypedExpando declaring Age:int and Name:str."""
    return TypedExpando([("Age", int), ("Name", str)])


@pytest.fixture
def changes():
    """List that records property names for use as a change listener."""
    return []
