"""Element tree and serializer.

Key Components:
    Element: Immutable markup node with attributes and ordered contents
    Elementifiable: Protocol for values that convert themselves to elements
    ElementSerializer: Recursive writer streaming a tree to a binary sink
"""

from .element import (
    ContentKind,
    E,
    Element,
    Elementifiable,
    ElementifierRegistry,
    classify_content,
    elementify,
    no_attrs,
    register_elementifier,
    unregister_elementifier,
)
from .serializer import ElementSerializer

__all__ = [
    "ContentKind",
    "E",
    "Element",
    "Elementifiable",
    "ElementifierRegistry",
    "ElementSerializer",
    "classify_content",
    "elementify",
    "no_attrs",
    "register_elementifier",
    "unregister_elementifier",
]
