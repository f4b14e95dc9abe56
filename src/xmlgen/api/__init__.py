"""Public marshal API and structured encoders.

This module provides the entry points that write element trees to sinks,
plus the pluggable encoders used for content that is neither an element nor
a scalar.
"""

from .encoders import (
    FailingEncoder,
    FunctionEncoder,
    LxmlStructuredEncoder,
    StructuredEncoder,
)
from .marshal import (
    marshal,
    marshal_to_bytes,
    marshal_to_string,
    resolve_encoder,
    try_marshal,
)

__all__ = [
    "FailingEncoder",
    "FunctionEncoder",
    "LxmlStructuredEncoder",
    "StructuredEncoder",
    "marshal",
    "marshal_to_bytes",
    "marshal_to_string",
    "resolve_encoder",
    "try_marshal",
]
