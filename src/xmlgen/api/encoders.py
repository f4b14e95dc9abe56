"""Structured-value encoders used for content that is not an element or scalar.

The serializer hands such values to a :class:`StructuredEncoder` and writes
the returned bytes verbatim, trusting them to be well-formed markup. The
default :class:`LxmlStructuredEncoder` maps dataclass instances onto element
trees built with ``lxml.etree``:

- the class name (or a ``__xml_name__`` class attribute) names the element,
  and ``__xml_namespace__`` declares a default namespace;
- each field becomes a child element named after the field, or after the
  ``"xml"`` key of the field metadata; ``"-"`` skips the field;
- ``None`` fields are omitted, lists and tuples repeat the child element,
  nested dataclasses nest;
- a top-level ``None`` encodes to an empty fragment.
"""

from abc import ABC, abstractmethod
from dataclasses import fields, is_dataclass
from typing import Any, Callable, Optional, Union

from lxml import etree

from xmlgen.markup import format_scalar, is_valid_name
from xmlgen.shared import EncodingError, get_logger

SKIP_FIELD = "-"


class StructuredEncoder(ABC):
    """Converts arbitrary values into complete markup fragments."""

    name: str = "structured"

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Encode ``value`` as a markup fragment.

        Args:
            value: Value that is neither an element nor a scalar

        Returns:
            Well-formed markup bytes

        Raises:
            EncodingError: ``value`` cannot be represented
        """


class FailingEncoder(StructuredEncoder):
    """Rejects every value; only scalars and elements can be written."""

    name = "strict"

    def encode(self, value: Any) -> bytes:
        raise EncodingError(f"Structured values are disabled: {type(value).__name__}")


class FunctionEncoder(StructuredEncoder):
    """Adapts a plain callable returning ``bytes`` or ``str`` markup."""

    name = "function"

    def __init__(self, func: Callable[[Any], Union[bytes, str]], encoding: str = "utf-8") -> None:
        self.func = func
        self.encoding = encoding

    def encode(self, value: Any) -> bytes:
        fragment = self.func(value)
        if isinstance(fragment, str):
            return fragment.encode(self.encoding, "xmlcharrefreplace")
        if isinstance(fragment, bytes):
            return fragment
        raise EncodingError(
            f"Encoder function returned {type(fragment).__name__}, expected bytes or str"
        )


class LxmlStructuredEncoder(StructuredEncoder):
    """Encodes dataclass instances (and sequences of them) with ``lxml.etree``."""

    name = "lxml"

    def __init__(self, encoding: str = "utf-8", correlation_id: Optional[str] = None) -> None:
        """Initialize the encoder.

        Args:
            encoding: Encoding of the returned bytes
            correlation_id: Optional correlation ID for request tracking
        """
        self.encoding = encoding
        self.logger = get_logger(__name__, correlation_id, "lxml_encoder")

    def encode(self, value: Any) -> bytes:
        if value is None:
            return b""
        if isinstance(value, (list, tuple)):
            return b"".join(self.encode(item) for item in value)
        if not _is_dataclass_instance(value):
            raise EncodingError(f"Unsupported type: {type(value).__name__}")

        try:
            root = self._build(value, None, None)
            fragment = etree.tostring(root, encoding=self.encoding, xml_declaration=False)
        except ValueError as e:
            # lxml rejects invalid names and non-XML characters with ValueError
            raise EncodingError(str(e)) from e

        self.logger.debug(
            "Encoded structured value",
            extra={"value_type": type(value).__name__, "fragment_bytes": len(fragment)},
        )
        return fragment

    def _build(self, obj: Any, tag: Optional[str], namespace: Optional[str]) -> Any:
        cls = type(obj)
        own_namespace = getattr(cls, "__xml_namespace__", None)
        local_name = tag or getattr(cls, "__xml_name__", None) or cls.__name__
        if not is_valid_name(local_name):
            raise EncodingError(f"Invalid element name: {local_name!r}")

        ns = own_namespace or namespace
        nsmap = {None: own_namespace} if own_namespace and own_namespace != namespace else None
        element = etree.Element(_qualify(local_name, ns), nsmap=nsmap)

        for item in fields(obj):
            explicit = item.metadata.get("xml")
            if explicit == SKIP_FIELD:
                continue
            self._append(element, item.name, explicit, getattr(obj, item.name), ns)
        return element

    def _append(
        self,
        parent: Any,
        field_name: str,
        explicit: Optional[str],
        value: Any,
        namespace: Optional[str],
    ) -> None:
        if value is None:
            return
        if isinstance(value, (list, tuple)):
            for item in value:
                self._append(parent, field_name, explicit, item, namespace)
            return
        if _is_dataclass_instance(value):
            tag = explicit or getattr(type(value), "__xml_name__", None) or field_name
            parent.append(self._build(value, tag, namespace))
            return

        text = format_scalar(value)
        if text is None:
            raise EncodingError(
                f"Unsupported field type for {field_name!r}: {type(value).__name__}"
            )
        tag = explicit or field_name
        if not is_valid_name(tag):
            raise EncodingError(f"Invalid element name: {tag!r}")
        child = etree.SubElement(parent, _qualify(tag, namespace))
        child.text = text


def _is_dataclass_instance(value: Any) -> bool:
    return is_dataclass(value) and not isinstance(value, type)


def _qualify(local_name: str, namespace: Optional[str]) -> str:
    if namespace:
        return f"{{{namespace}}}{local_name}"
    return local_name
