"""
Expando Container - Extension Chain and Property Pipeline
=========================================================

``DynamicExtensionContainer`` owns an ordered list of property extensions and a
fixed set of strong member names, and routes every dynamic read and write
through them.

Resolution
----------

A name resolves to at most one extension:

1. Strong names (public properties and other data descriptors declared on the
   container's class) never resolve. Static members always win.
2. Otherwise extensions are scanned from the most recently registered to the
   first, and the first one that lists the name owns it. A later extension
   therefore shadows an earlier one for the same name.

Writes
------

``try_set_property`` returns False for unknown or read-only names, raises
``TypeMismatchError`` for values incompatible with the declared type (before
anything is mutated), and otherwise stores the value and notifies listeners
when the observable value changed.

Notifications
-------------

Listeners receive the changed property name. They run synchronously, in
subscription order, after the value has been committed. A listener that writes
to the same container recurses into the pipeline; avoiding unbounded recursion
is up to the listener.

Example:
    ```python
    class Settings(DynamicExtensionContainer):
        def __init__(self):
            super().__init__()
            self._slots = TypedSlotExtension()
            self._add_extension(self._slots)

    settings = Settings()
    settings._slots.add_property("theme", str)
    settings.subscribe(lambda name: print(f"{name} changed"))
    settings.try_set_property("theme", "dark")  # prints "theme changed"
    ```
"""

import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    FrozenSet,
    List,
    Optional,
    Tuple,
)

from .errors import TypeMismatchError
from .extension import PropertyExtension
from .types import is_assignable, values_equal

if TYPE_CHECKING:
    from .descriptors import PropertyDescriptor

PropertyChangedListener = Callable[[str], None]


def strong_member_names(cls: type) -> List[str]:
    """Public data descriptors declared on ``cls`` and its bases, base classes first."""
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name.startswith("_") or name in names:
                continue
            if isinstance(attr, property) or hasattr(type(attr), "__set__"):
                names.append(name)
    return names


class DynamicExtensionContainer:
    """
    Proxy property reads and writes onto a chain of dynamic extensions.

    Subclasses register their extensions with ``_add_extension`` while they are
    being constructed.
    """

    def __init__(
        self, on_property_changed: Optional[PropertyChangedListener] = None
    ) -> None:
        self._strong_member_list: Tuple[str, ...] = tuple(
            strong_member_names(type(self))
        )
        self._strong_names: FrozenSet[str] = frozenset(self._strong_member_list)
        self._extensions: List[PropertyExtension] = []
        self._listeners: List[PropertyChangedListener] = []

        if on_property_changed is not None:
            self.subscribe(on_property_changed)

    @property
    def strong_names(self) -> FrozenSet[str]:
        """Member names reserved from dynamic resolution."""
        return self._strong_names

    @property
    def extensions(self) -> Tuple[PropertyExtension, ...]:
        """Registered extensions in registration order."""
        return tuple(self._extensions)

    # ========================================================================
    # EXTENSION REGISTRATION
    # ========================================================================

    def _add_extension(self, extension: PropertyExtension) -> None:
        self._extensions.append(extension)
        logging.debug(
            f"Registered {type(extension).__name__} on {type(self).__name__} "
            f"(position {len(self._extensions) - 1})"
        )

    def _remove_extension(self, extension: PropertyExtension) -> None:
        self._extensions.remove(extension)
        logging.debug(
            f"Removed {type(extension).__name__} from {type(self).__name__}"
        )

    # ========================================================================
    # RESOLUTION
    # ========================================================================

    def resolve(self, name: str) -> Optional[PropertyExtension]:
        """Return the extension that owns ``name``, or None."""
        if name in self._strong_names:
            if any(name in extension for extension in self._extensions):
                logging.debug(
                    f"Strong member '{name}' shadows a dynamic property"
                )
            return None

        for extension in reversed(self._extensions):
            if name in extension:
                return extension
        return None

    def all_member_names(self) -> List[str]:
        """Strong names followed by every dynamic member name, without duplicates."""
        names = list(self._strong_member_list)
        seen = set(names)
        for extension in self._extensions:
            for name in extension.member_names():
                if name not in seen:
                    seen.add(name)
                    names.append(name)
        return names

    # ========================================================================
    # PROPERTY PIPELINE
    # ========================================================================

    def try_get_property(self, name: str) -> Tuple[bool, Any]:
        """
        Read a dynamic property.

        Returns ``(True, value)`` on success and ``(False, None)`` when no
        extension resolves ``name`` or the owning extension cannot read it.
        """
        extension = self.resolve(name)
        if extension is None or not extension.can_read(name):
            return False, None
        return True, extension.get(name)

    def try_set_property(self, name: str, value: Any) -> bool:
        """
        Write a dynamic property.

        Returns False when no extension resolves ``name`` or the owning
        extension cannot write it.

        Raises:
            TypeMismatchError: ``value`` is not assignable to the declared
                type. Nothing is stored and no listener runs.
        """
        extension = self.resolve(name)
        if extension is None:
            logging.debug(f"No extension resolves '{name}'")
            return False

        if not extension.can_write(name):
            logging.debug(f"Property '{name}' is not writable")
            return False

        should_notify = (
            bool(self._listeners)
            and extension.can_read(name)
            and not values_equal(extension.get(name), value)
        )

        declared = extension.property_type(name)
        if not is_assignable(declared, value):
            raise TypeMismatchError(name, declared, type(value))

        extension.set(name, value)

        if should_notify:
            self._notify(name)
        return True

    # ========================================================================
    # CHANGE NOTIFICATION
    # ========================================================================

    def subscribe(self, listener: PropertyChangedListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: PropertyChangedListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, name: str) -> None:
        # Copy so listeners can unsubscribe while being notified
        for listener in list(self._listeners):
            listener(name)

    # ========================================================================
    # INTROSPECTION
    # ========================================================================

    def describe(self) -> Dict[str, "PropertyDescriptor"]:
        """Snapshot of every member as a ``name -> PropertyDescriptor`` table."""
        from .descriptors import describe

        return describe(self)
