"""xmlgen: streaming XML generation from in-memory element trees.

Build a tree with :func:`E` and write it with :func:`marshal`. Content items
may be nested elements, values that convert themselves to elements, scalars
(strings, booleans, numbers) or structured values handed to a pluggable
encoder. Failures report the element path where they happened.

Progressive API disclosure:
- Level 1: E(), marshal(), marshal_to_string()
- Level 2: SerializerConfig presets and overrides
- Level 3: Elementifiable values, register_elementifier(), custom encoders
"""

import logging

__version__ = "0.1.0"
__author__ = "xmlgen Team"

from .api import (
    FunctionEncoder,
    LxmlStructuredEncoder,
    StructuredEncoder,
    marshal,
    marshal_to_bytes,
    marshal_to_string,
    try_marshal,
)
from .markup import is_valid_name
from .shared import (
    AttributeOrder,
    EncodingError,
    InvalidNameError,
    MarkupError,
    MarshalResult,
    SerializerConfig,
    UnencodableValueError,
    WriteFailureError,
)
from .tree import (
    E,
    Element,
    Elementifiable,
    no_attrs,
    register_elementifier,
    unregister_elementifier,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: tree construction and marshalling
    "E",
    "Element",
    "no_attrs",
    "marshal",
    "marshal_to_bytes",
    "marshal_to_string",
    "try_marshal",
    "is_valid_name",

    # Level 2: configuration
    "AttributeOrder",
    "SerializerConfig",

    # Level 3: extension points
    "Elementifiable",
    "register_elementifier",
    "unregister_elementifier",
    "StructuredEncoder",
    "LxmlStructuredEncoder",
    "FunctionEncoder",
    "EncodingError",

    # Results and errors
    "MarshalResult",
    "MarkupError",
    "InvalidNameError",
    "UnencodableValueError",
    "WriteFailureError",
]

# Applications configure handlers; records are dropped until they do.
logging.getLogger(__name__).addHandler(logging.NullHandler())
