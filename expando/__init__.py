"""
Expando - Typed Dynamic Objects with Pluggable Property Providers

Containers whose properties are declared at runtime, each with a declared type,
a current value, read/write permission and change notification. Properties are
resolved through a chain of extensions, later extensions shadowing earlier ones.
"""

from .container import (
    DynamicExtensionContainer,
    PropertyChangedListener,
    strong_member_names,
)
from .descriptors import PropertyDescriptor, describe
from .errors import (
    DuplicatePropertyError,
    ExpandoError,
    TypeMismatchError,
    UnknownPropertyError,
)
from .expando import TypedExpando
from .extension import (
    Property,
    PropertyExtension,
    ReadOnlyExtension,
    TypedSlotExtension,
)
from .types import (
    default_value,
    infer_type,
    is_assignable,
    is_nullable,
    is_value_type,
    values_equal,
)

__all__ = [
    # Containers
    "TypedExpando",
    "DynamicExtensionContainer",
    "PropertyChangedListener",
    "strong_member_names",
    # Extensions
    "PropertyExtension",
    "TypedSlotExtension",
    "ReadOnlyExtension",
    "Property",
    # Introspection
    "PropertyDescriptor",
    "describe",
    # Type rules
    "default_value",
    "infer_type",
    "is_assignable",
    "is_nullable",
    "is_value_type",
    "values_equal",
    # Exceptions
    "ExpandoError",
    "DuplicatePropertyError",
    "UnknownPropertyError",
    "TypeMismatchError",
]
