"""Shared utilities for markup generation.

This module provides configuration, error types, result objects and logging
used across the escaping, tree and API layers.
"""

from .errors import (
    ConfigValidationError,
    EncodingError,
    InvalidNameError,
    MarkupError,
    UnencodableValueError,
    WriteFailureError,
)
from .config import (
    AttributeOrder,
    SerializerConfig,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    MarshalMetrics,
    MarshalResult,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "ConfigValidationError",
    "EncodingError",
    "InvalidNameError",
    "MarkupError",
    "UnencodableValueError",
    "WriteFailureError",
    "AttributeOrder",
    "SerializerConfig",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "MarshalMetrics",
    "MarshalResult",
    "CorrelationLogger",
    "get_logger",
]
