"""Element tree data model.

An :class:`Element` is an immutable node holding a name, an attribute mapping
and an ordered tuple of contents. Each content item is one of three kinds
(see :class:`ContentKind`): another element, an elementifiable value that
converts itself to an element, or a scalar/structured value written as text.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import (
    Any,
    BinaryIO,
    Callable,
    Dict,
    Iterable,
    Mapping,
    Optional,
    Protocol,
    Tuple,
    Type,
    runtime_checkable,
)

from xmlgen.shared.errors import UnencodableValueError

Elementifier = Callable[[Any], "Element"]


@dataclass(frozen=True, eq=False)
class Element:
    """A named markup node with attributes and ordered contents.

    The attribute mapping is copied into a read-only view and the contents
    into a tuple, so a constructed element never changes. Names are not
    checked here; they are validated when the element is written, where the
    failure can be reported with its path in the tree.
    """

    name: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    contents: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "attributes", MappingProxyType(dict(self.attributes or {}))
        )
        object.__setattr__(self, "contents", tuple(self.contents or ()))

    def __repr__(self) -> str:
        return (
            f"Element({self.name!r}, attributes={dict(self.attributes)!r}, "
            f"contents={len(self.contents)} item(s))"
        )

    @property
    def is_empty(self) -> bool:
        """True when the element has no contents (attributes do not count)."""
        return not self.contents

    def marshal(self, sink: BinaryIO, **kwargs: Any) -> None:
        """Write this element to ``sink``; see :func:`xmlgen.api.marshal`."""
        from xmlgen.api.marshal import marshal

        marshal(self, sink, **kwargs)


def E(name: str, attrs: Optional[Mapping[str, Any]] = None, *contents: Any) -> Element:
    """Build an element from a name, attributes and variadic contents.

    Example:
        >>> E("Foo", no_attrs(), E("Bar", {"k": "&"}, "x")).name
        'Foo'
    """
    return Element(name, attrs or {}, contents)


def no_attrs() -> Dict[str, Any]:
    """Fresh empty attribute mapping."""
    return {}


@runtime_checkable
class Elementifiable(Protocol):
    """Any value that can produce its own element representation."""

    def to_element(self) -> Element:
        ...


class ElementifierRegistry:
    """Registry of element conversion functions for types the caller does not own.

    Lookups walk the value type's MRO, so registering a base class covers its
    subclasses. Registration takes a lock; lookups do not.
    """

    def __init__(self) -> None:
        self._elementifiers: Dict[type, Elementifier] = {}
        self._lock = threading.RLock()

    def register(self, cls: Type[Any], func: Elementifier) -> None:
        if not isinstance(cls, type):
            raise TypeError("Elementifiers are registered per type")
        if not callable(func):
            raise TypeError("Elementifier must be callable")
        with self._lock:
            self._elementifiers[cls] = func

    def unregister(self, cls: Type[Any]) -> bool:
        with self._lock:
            return self._elementifiers.pop(cls, None) is not None

    def lookup(self, cls: Type[Any]) -> Optional[Elementifier]:
        elementifiers = self._elementifiers
        for base in cls.__mro__:
            func = elementifiers.get(base)
            if func is not None:
                return func
        return None

    def clear(self) -> None:
        with self._lock:
            self._elementifiers.clear()


_registry = ElementifierRegistry()


def register_elementifier(
    cls: Type[Any], func: Optional[Elementifier] = None
) -> Any:
    """Register ``func`` as the element conversion for instances of ``cls``.

    Usable directly or as a decorator:

        >>> @register_elementifier(complex)
        ... def complex_to_element(value):
        ...     return E("complex", {"re": value.real, "im": value.imag})
    """
    if func is None:
        def decorator(f: Elementifier) -> Elementifier:
            _registry.register(cls, f)
            return f

        return decorator
    _registry.register(cls, func)
    return func


def unregister_elementifier(cls: Type[Any]) -> bool:
    """Remove the conversion registered for ``cls``; True if one existed."""
    return _registry.unregister(cls)


class ContentKind(Enum):
    """How a content item is serialized. Exactly one kind applies per item."""

    ELEMENT = auto()
    ELEMENTIFIABLE = auto()
    SCALAR = auto()


def _has_to_element(value: Any) -> bool:
    # A class object exposes to_element as an unbound function
    return not isinstance(value, type) and isinstance(value, Elementifiable)


def classify_content(value: Any) -> ContentKind:
    """Resolve the content kind of ``value``.

    Elements win over the elementifiable capability, which wins over scalar
    or structured rendering.
    """
    if isinstance(value, Element):
        return ContentKind.ELEMENT
    if _has_to_element(value) or _registry.lookup(type(value)) is not None:
        return ContentKind.ELEMENTIFIABLE
    return ContentKind.SCALAR


def elementify(value: Any, path: Iterable[str] = ()) -> Element:
    """Convert an elementifiable value to its element.

    A ``to_element`` method takes precedence over a registered elementifier.

    Raises:
        UnencodableValueError: ``value`` is not elementifiable or its
            conversion did not produce an :class:`Element`
    """
    if _has_to_element(value):
        produced = value.to_element()
    else:
        func = _registry.lookup(type(value))
        if func is None:
            raise UnencodableValueError(repr(value), path)
        produced = func(value)
    if not isinstance(produced, Element):
        raise UnencodableValueError(
            f"{value!r} (converted to {type(produced).__name__}, not Element)", path
        )
    return produced
