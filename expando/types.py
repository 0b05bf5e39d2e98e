"""
Expando Types - Type Tags and Compatibility Rules
=================================================

Every dynamic property carries a declared type tag. Tags are ordinary Python
type expressions:

- plain classes: ``int``, ``str``, ``numpy.float64``, user classes
- nullable forms: ``Optional[int]`` (or ``int | None``)
- the universal type: ``Any`` (``object`` behaves the same)
- unions: ``Union[int, str]``
- parameterised generics: ``Sequence[int]``, ``Dict[str, int]``; only the
  origin class is checked, element types are not inspected

Strict value types (``bool``, ``int``, ``float``, ``complex`` and numpy numeric
scalars) start at their zero value and reject ``None`` unless declared
nullable. Every other tag is reference-like: it starts at ``None`` and accepts
``None``.

Example:
    ```python
    is_assignable(int, "Hello")          # False
    is_assignable(Optional[int], None)   # True
    default_value(numpy.float32)         # numpy.float32(0.0)
    ```
"""

import math
import types
import typing
from typing import Any, Tuple, Union

import numpy as np
from cachetools import LRUCache

NoneType = type(None)

# Tags whose default is their zero value and which reject None
VALUE_TYPES: Tuple[type, ...] = (bool, int, float, complex)

# Abstract numpy scalar bases cannot be instantiated and are reference-like
_NUMPY_ABSTRACT_SCALARS: Tuple[type, ...] = (
    np.generic,
    np.number,
    np.integer,
    np.signedinteger,
    np.unsignedinteger,
    np.inexact,
    np.floating,
    np.complexfloating,
)

_TYPE_CACHE_SIZE = 1024

# tag -> runtime classes used for isinstance checks
_runtime_class_cache: LRUCache = LRUCache(maxsize=_TYPE_CACHE_SIZE)

_UNION_ORIGINS = tuple(
    origin
    for origin in (Union, getattr(types, "UnionType", None))
    if origin is not None
)


def _is_any(tag: Any) -> bool:
    return tag is Any or tag is object


def _union_members(tag: Any) -> Tuple[Any, ...]:
    if typing.get_origin(tag) in _UNION_ORIGINS:
        return typing.get_args(tag)
    return ()


def _resolve_runtime_classes(tag: Any) -> Tuple[type, ...]:
    if _is_any(tag):
        return (object,)
    if tag is None or tag is NoneType:
        return (NoneType,)

    members = _union_members(tag)
    if members:
        classes: Tuple[type, ...] = ()
        for member in members:
            classes += _resolve_runtime_classes(member)
        return classes

    if isinstance(tag, typing.TypeVar):
        return _resolve_runtime_classes(tag.__bound__ or object)

    origin = typing.get_origin(tag)
    if isinstance(origin, type):
        return (origin,)

    if isinstance(tag, type):
        return (tag,)

    raise TypeError(f"Unsupported property type: {tag!r}")


def runtime_classes(tag: Any) -> Tuple[type, ...]:
    """Return the classes a non-None value must be an instance of for ``tag``."""
    try:
        return _runtime_class_cache[tag]
    except KeyError:
        pass
    except TypeError:
        # Unhashable tag (e.g. Annotated with unhashable metadata)
        return _resolve_runtime_classes(tag)

    classes = _resolve_runtime_classes(tag)
    _runtime_class_cache[tag] = classes
    return classes


def is_nullable(tag: Any) -> bool:
    """True if ``tag`` explicitly admits None (``Optional``, ``Any``, ``object``)."""
    if _is_any(tag) or tag is None or tag is NoneType:
        return True
    return any(
        member is NoneType or _is_any(member) for member in _union_members(tag)
    )


def is_value_type(tag: Any) -> bool:
    """True for builtin numbers, ``bool`` and concrete numpy numeric or bool scalars."""
    if not isinstance(tag, type) or tag in _NUMPY_ABSTRACT_SCALARS:
        return False
    return tag in VALUE_TYPES or issubclass(tag, (np.number, np.bool_))


def default_value(tag: Any) -> Any:
    """Initial value for a freshly registered property of type ``tag``."""
    if is_value_type(tag):
        return tag()
    return None


def is_assignable(tag: Any, value: Any) -> bool:
    """
    Check whether ``value`` may be stored in a property declared as ``tag``.

    None is accepted by nullable and reference-like tags and rejected by
    strict value types. Any other value must be an instance of one of the
    tag's runtime classes.
    """
    if value is None:
        return is_nullable(tag) or not is_value_type(tag)
    return isinstance(value, runtime_classes(tag))


def infer_type(value: Any) -> Any:
    """Declared type used when a property is added from a value alone."""
    if value is None:
        return Any
    return type(value)


def values_equal(a: Any, b: Any) -> bool:
    """
    Value equality used for change detection.

    numpy arrays compare element-wise and two NaN scalars count as equal.
    """
    try:
        if _is_nan(a) and _is_nan(b):
            return True
        if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
            if type(a) != type(b):
                return False
            return bool(np.array_equal(a, b))
        return bool(a == b)
    except (ValueError, TypeError):
        return False


def _is_nan(value: Any) -> bool:
    return isinstance(value, (float, np.floating)) and math.isnan(value)


def type_name(tag: Any) -> str:
    if _is_any(tag):
        return "Any"
    if isinstance(tag, type):
        return tag.__name__
    return repr(tag)
