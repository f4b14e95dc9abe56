"""Recursive element serializer.

:class:`ElementSerializer` walks an element tree pre-order and streams markup
to a binary sink. The path from the root to the element being written is an
immutable tuple passed down the recursion; any error raised while writing an
element captures that tuple, so the reported path is always the one of the
deepest failing element.
"""

import logging
from typing import Any, BinaryIO, Iterable, List, Optional, Tuple

from xmlgen.markup import escape_text, is_valid_name, write_bytes, write_escaped_value
from xmlgen.shared import (
    AttributeOrder,
    InvalidNameError,
    MarshalMetrics,
    SerializerConfig,
    UnencodableValueError,
    get_logger,
)
from xmlgen.shared.errors import PATH_SEPARATOR
from xmlgen.tree.element import ContentKind, Element, classify_content, elementify

Path = Tuple[str, ...]


class ElementSerializer:
    """Streams one or more element trees to a sink.

    Instances hold per-call metrics and are not meant to be shared between
    threads; create one serializer per sink.
    """

    def __init__(
        self,
        sink: BinaryIO,
        config: Optional[SerializerConfig] = None,
        encoder: Optional[Any] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the serializer.

        Args:
            sink: Binary file-like object receiving the markup
            config: Serializer configuration, defaults to SerializerConfig()
            encoder: Structured encoder for non-scalar content; None rejects it
            correlation_id: Optional correlation ID for request tracking
        """
        self.sink = sink
        self.config = config or SerializerConfig()
        self.encoder = encoder
        self.metrics = MarshalMetrics()
        self.logger = get_logger(
            __name__, correlation_id or self.config.correlation_id, "element_serializer"
        )

    def write(self, element: Element, path: Path = ()) -> None:
        """Write ``element`` and everything below it.

        Args:
            element: Element to serialize
            path: Names of the ancestors of ``element``

        Raises:
            InvalidNameError: A tag or attribute name is not a legal XML name
            UnencodableValueError: A content or attribute value cannot be rendered
            WriteFailureError: The sink rejected a write
        """
        path = path + (element.name,)
        if not is_valid_name(element.name):
            raise InvalidNameError(element.name, "tag", path)

        self.metrics.elements_written += 1
        self.metrics.max_depth = max(self.metrics.max_depth, len(path))

        self._emit("<" + element.name, path)
        for key, value in self._ordered_attributes(element):
            if not is_valid_name(key):
                raise InvalidNameError(key, "attribute", path)
            self._emit(f' {escape_text(key)}="', path)
            self._write_value(value, path, in_attribute=True)
            self._emit('"', path)
            self.metrics.attributes_written += 1

        if element.is_empty and self.config.self_close_empty:
            self._emit("/>", path)
            return

        self._emit(">", path)
        for item in element.contents:
            self._write_content(item, path)
        self._emit(f"</{element.name}>", path)

    def _write_content(self, item: Any, path: Path) -> None:
        kind = classify_content(item)
        if kind is ContentKind.ELEMENT:
            self.write(item, path)
        elif kind is ContentKind.ELEMENTIFIABLE:
            produced = elementify(item, path)
            if self.logger.is_enabled_for(logging.DEBUG):
                self.logger.debug(
                    "Elementified content value",
                    extra={
                        "value_type": type(item).__name__,
                        "produced": produced.name,
                        "path": PATH_SEPARATOR.join(str(segment) for segment in path),
                    },
                )
            self.write(produced, path)
        else:
            self._write_value(item, path)

    def _ordered_attributes(self, element: Element) -> List[Tuple[Any, Any]]:
        items = list(element.attributes.items())
        if self.config.attribute_order is AttributeOrder.SORTED:
            items.sort(key=lambda item: str(item[0]))
        return items

    def _write_value(self, value: Any, path: Path, in_attribute: bool = False) -> None:
        self.metrics.bytes_written += write_escaped_value(
            self.sink,
            value,
            self.encoder,
            in_attribute=in_attribute,
            encoding=self.config.encoding,
            path=path,
        )

    def _emit(self, markup: str, path: Iterable[str]) -> None:
        try:
            data = markup.encode(self.config.encoding)
        except UnicodeEncodeError as e:
            raise UnencodableValueError(repr(markup), path) from e
        self.metrics.bytes_written += write_bytes(self.sink, data, path)
