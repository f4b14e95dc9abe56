"""Marshal entry points.

Progressive API disclosure:
- ``marshal(element, sink)``: stream to any binary sink, raising on failure
- ``marshal_to_bytes`` / ``marshal_to_string``: in-memory output
- ``try_marshal``: never raises for markup errors, returns a MarshalResult
"""

import io
import time
from typing import Any, BinaryIO, Optional

from xmlgen.api.encoders import FailingEncoder, LxmlStructuredEncoder, StructuredEncoder
from xmlgen.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    MarkupError,
    MarshalResult,
    SerializerConfig,
    get_logger,
)
from xmlgen.tree import Element, ElementSerializer, classify_content, elementify
from xmlgen.tree.element import ContentKind

MS_PER_SECOND = 1000


def resolve_encoder(
    config: SerializerConfig, encoder: Optional[StructuredEncoder] = None
) -> StructuredEncoder:
    """Pick the structured encoder for a marshal call.

    An explicit encoder always wins; otherwise ``strict_scalars`` selects
    :class:`FailingEncoder` and the default is :class:`LxmlStructuredEncoder`.
    """
    if encoder is not None:
        return encoder
    if config.strict_scalars:
        return FailingEncoder()
    return LxmlStructuredEncoder(config.encoding, config.correlation_id)


def _root_element(element: Any) -> Element:
    kind = classify_content(element)
    if kind is ContentKind.ELEMENT:
        return element
    if kind is ContentKind.ELEMENTIFIABLE:
        return elementify(element)
    raise TypeError(f"Cannot marshal {type(element).__name__}: expected an Element")


def _serialize(
    element: Any,
    sink: BinaryIO,
    config: Optional[SerializerConfig],
    encoder: Optional[StructuredEncoder],
    correlation_id: Optional[str],
) -> ElementSerializer:
    config = config or SerializerConfig()
    correlation_id = correlation_id or config.correlation_id
    root = _root_element(element)
    logger = get_logger(__name__, correlation_id, "marshal").bind(root=root.name)
    serializer = ElementSerializer(
        sink, config, resolve_encoder(config, encoder), correlation_id
    )

    start_time = time.time()
    logger.info(
        "Starting marshal operation",
        extra={"encoder": serializer.encoder.name},
    )
    try:
        serializer.write(root)
    except MarkupError as e:
        logger.error(
            "Marshal operation failed",
            extra={
                "error_type": type(e).__name__,
                "reason": e.reason,
                "path": e.path_display,
            },
            exc_info=False,
        )
        raise
    finally:
        serializer.metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND

    logger.info(
        "Marshal operation completed",
        extra={
            "elements_written": serializer.metrics.elements_written,
            "bytes_written": serializer.metrics.bytes_written,
            "processing_time_ms": serializer.metrics.processing_time_ms,
        },
    )
    return serializer


def marshal(
    element: Any,
    sink: BinaryIO,
    config: Optional[SerializerConfig] = None,
    encoder: Optional[StructuredEncoder] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """Serialize ``element`` to ``sink``.

    Bytes already written are not rolled back when an error is raised; treat
    the sink contents as unreliable after a failure.

    Args:
        element: Root Element (or an elementifiable value)
        sink: Any object with a ``write(bytes)`` method
        config: Serializer configuration
        encoder: Structured encoder for non-scalar content
        correlation_id: Optional correlation ID for request tracking

    Raises:
        InvalidNameError: A tag or attribute name is not a legal XML name
        UnencodableValueError: A value cannot be rendered
        WriteFailureError: The sink rejected a write

    Examples:
        >>> from xmlgen import E
        >>> buffer = io.BytesIO()
        >>> marshal(E("Foo", {}, E("Bar", {"k": "&"}, "x")), buffer)
        >>> buffer.getvalue()
        b'<Foo><Bar k="&amp;">x</Bar></Foo>'
    """
    _serialize(element, sink, config, encoder, correlation_id)


def marshal_to_bytes(
    element: Any,
    config: Optional[SerializerConfig] = None,
    encoder: Optional[StructuredEncoder] = None,
    correlation_id: Optional[str] = None,
) -> bytes:
    """Serialize ``element`` into a new bytes object.

    The XML declaration is written first when ``config.xml_declaration`` is set.
    """
    config = config or SerializerConfig()
    buffer = io.BytesIO()
    if config.xml_declaration:
        buffer.write(config.declaration.encode(config.encoding))
    _serialize(element, buffer, config, encoder, correlation_id)
    return buffer.getvalue()


def marshal_to_string(
    element: Any,
    config: Optional[SerializerConfig] = None,
    encoder: Optional[StructuredEncoder] = None,
    correlation_id: Optional[str] = None,
) -> str:
    """Serialize ``element`` and decode the result with the configured encoding."""
    config = config or SerializerConfig()
    return marshal_to_bytes(element, config, encoder, correlation_id).decode(config.encoding)


def try_marshal(
    element: Any,
    sink: BinaryIO,
    config: Optional[SerializerConfig] = None,
    encoder: Optional[StructuredEncoder] = None,
    correlation_id: Optional[str] = None,
) -> MarshalResult:
    """Serialize ``element`` and report markup failures in the result.

    Returns:
        MarshalResult with metrics, and the error plus a diagnostic entry
        when serialization failed
    """
    config = config or SerializerConfig()
    correlation_id = correlation_id or config.correlation_id
    result = MarshalResult(correlation_id=correlation_id)

    try:
        serializer = _serialize(element, sink, config, encoder, correlation_id)
    except MarkupError as e:
        result.success = False
        result.error = e
        result.diagnostics.append(DiagnosticEntry(
            severity=DiagnosticSeverity.ERROR,
            message=str(e),
            component="marshal",
            path=e.path,
            details={"error_type": type(e).__name__, "reason": e.reason},
            correlation_id=correlation_id,
        ))
        return result

    result.metrics = serializer.metrics
    return result
