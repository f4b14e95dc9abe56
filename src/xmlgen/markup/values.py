"""Scalar rendering and escaping for text and attribute positions.

Values are rendered by kind:

- ``bool``: ``true`` / ``false``
- ``str``: XML-escaped (``&``, ``<``, ``>``; plus ``"`` in attributes)
- integers: plain decimal digits
- other real numbers: fixed point with six fractional digits
- anything else: bytes produced by a structured encoder, written verbatim
"""

import numbers
from typing import TYPE_CHECKING, Any, BinaryIO, Iterable, Optional
from xml.sax.saxutils import escape

from xmlgen.shared.errors import (
    UnencodableValueError,
    WriteFailureError,
)

if TYPE_CHECKING:
    from xmlgen.api.encoders import StructuredEncoder

_ATTRIBUTE_ENTITIES = {'"': "&quot;"}

# Exceptions a file-like sink raises when it cannot accept bytes.
SINK_ERRORS = (OSError, ValueError, TypeError)


def escape_text(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for element content."""
    return escape(text)


def escape_attribute(text: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` for a double-quoted attribute value."""
    return escape(text, _ATTRIBUTE_ENTITIES)


def format_scalar(value: Any) -> Optional[str]:
    """Render a scalar as unescaped text.

    Args:
        value: Candidate scalar

    Returns:
        The textual form, or None if ``value`` is not a string, boolean or
        real number
    """
    # bool is an Integral; it must win over the integer branch
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        return "%f" % float(value)
    return None


def write_bytes(sink: BinaryIO, data: bytes, path: Iterable[str] = ()) -> int:
    """Write ``data`` to ``sink``, translating sink failures.

    Returns:
        Number of bytes handed to the sink

    Raises:
        WriteFailureError: The sink raised while writing
    """
    try:
        sink.write(data)
    except SINK_ERRORS as e:
        raise WriteFailureError(e, path) from e
    return len(data)


def write_escaped_value(
    sink: BinaryIO,
    value: Any,
    encoder: Optional["StructuredEncoder"] = None,
    in_attribute: bool = False,
    encoding: str = "utf-8",
    path: Iterable[str] = (),
) -> int:
    """Write the escaped rendering of ``value`` to ``sink``.

    Args:
        sink: Binary file-like object
        value: Value to render
        encoder: Fallback for non-scalar values; None rejects them
        in_attribute: Escape for a double-quoted attribute value
        encoding: Text encoding for scalar output
        path: Element path attached to any raised error

    Returns:
        Number of bytes written

    Raises:
        UnencodableValueError: ``value`` is not a scalar and the encoder
            is missing or cannot represent it
        WriteFailureError: The sink rejected the write
    """
    text = format_scalar(value)
    if text is not None:
        if isinstance(value, str):
            text = escape_attribute(text) if in_attribute else escape_text(text)
        return write_bytes(sink, text.encode(encoding, "xmlcharrefreplace"), path)

    if encoder is None:
        raise UnencodableValueError(repr(value), path)
    try:
        fragment = encoder.encode(value)
    except Exception as e:
        # Any encoder failure is reported as an unencodable value
        raise UnencodableValueError(repr(value), path) from e
    if isinstance(fragment, str):
        fragment = fragment.encode(encoding, "xmlcharrefreplace")
    if not isinstance(fragment, bytes):
        raise UnencodableValueError(
            f"{value!r} (encoder returned {type(fragment).__name__}, not bytes)", path
        )
    return write_bytes(sink, fragment, path)
