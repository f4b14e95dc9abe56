"""Name validation and value escaping utilities.

Pure helpers shared by the serializer: the XML name grammar check and the
per-kind rendering of scalar values in text or attribute position.
"""

from .names import NAME_PATTERN, is_valid_name
from .values import (
    escape_attribute,
    escape_text,
    format_scalar,
    write_bytes,
    write_escaped_value,
)

__all__ = [
    "NAME_PATTERN",
    "is_valid_name",
    "escape_attribute",
    "escape_text",
    "format_scalar",
    "write_bytes",
    "write_escaped_value",
]
