"""
Expando Errors
==============

Exceptions raised by the property resolution and mutation pipeline.

Only the strict access paths raise. The chain-level ``try_get_property`` and
``try_set_property`` report "not found" and "not writable" through their return
value so callers can fall back to another resolution path; a type violation on
write is always raised.
"""

from typing import Any

from .types import type_name


class ExpandoError(Exception):
    """Base class for all expando errors."""

    pass


class DuplicatePropertyError(ExpandoError, ValueError):
    """Raised when registering a property name that already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Property '{name}' already exists")


class UnknownPropertyError(ExpandoError, KeyError):
    """Raised when a strict accessor addresses a name no extension resolves."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown property '{self.name}'"


class TypeMismatchError(ExpandoError, TypeError):
    """Raised when a written value is not assignable to the declared type."""

    def __init__(self, name: str, expected: Any, actual: Any):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Cannot assign value of type {type_name(actual)} to property "
            f"'{name}' declared as {type_name(expected)}"
        )
