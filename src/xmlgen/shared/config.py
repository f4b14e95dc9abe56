"""Configuration for markup serialization.

:class:`SerializerConfig` is an immutable dataclass controlling the
observable choices of the serializer: attribute ordering, empty-element
style, output encoding and the optional XML declaration. Being frozen, one
instance can be shared freely between threads.
"""

import json
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Optional

from xmlgen.shared.errors import ConfigValidationError


class AttributeOrder(Enum):
    """Order in which an element's attributes are emitted."""

    INSERTION = "insertion"  # Mapping iteration order
    SORTED = "sorted"        # Lexicographic by attribute name


@dataclass(frozen=True)
class SerializerConfig:
    """Settings for a marshal operation.

    Attributes:
        encoding: Text encoding used for every byte written to the sink
        attribute_order: Deterministic attribute emission order
        self_close_empty: Emit ``<name/>`` for elements without contents
        xml_declaration: Prefix in-memory output with an XML declaration
        strict_scalars: Reject non-scalar content instead of delegating to
            the structured encoder (only applies when no encoder is given)
        correlation_id: Optional correlation ID attached to log records
    """

    encoding: str = "utf-8"
    attribute_order: AttributeOrder = AttributeOrder.INSERTION
    self_close_empty: bool = True
    xml_declaration: bool = False
    strict_scalars: bool = False
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not isinstance(self.encoding, str) or not self.encoding:
            raise ConfigValidationError(
                "encoding must be a non-empty string", field_name="encoding"
            )
        try:
            # Non-text codecs such as base64 fail here too
            bom = "".encode(self.encoding)
        except LookupError as e:
            raise ConfigValidationError(
                f"Unknown encoding: {self.encoding}",
                field_name="encoding",
                suggestions=["utf-8", "utf-16-le", "ascii"],
            ) from e
        # Output is encoded piecewise; a BOM would be repeated in every piece
        if bom:
            raise ConfigValidationError(
                f"Encoding writes a byte order mark: {self.encoding}",
                field_name="encoding",
                suggestions=["utf-8", "utf-16-le", "utf-16-be"],
            )
        if not isinstance(self.attribute_order, AttributeOrder):
            raise ConfigValidationError(
                "attribute_order must be an AttributeOrder member",
                field_name="attribute_order",
                suggestions=[member.name for member in AttributeOrder],
            )

    @property
    def declaration(self) -> str:
        """XML declaration matching the configured encoding."""
        return f'<?xml version="1.0" encoding="{self.encoding}"?>'

    def override(self, **kwargs: Any) -> "SerializerConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = SerializerConfig().override(self_close_empty=False)
            >>> config.self_close_empty
            False
        """
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        result: Dict[str, Any] = {}
        for config_field in fields(self):
            value = getattr(self, config_field.name)
            if isinstance(value, Enum):
                value = value.name
            result[config_field.name] = value
        return result

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SerializerConfig":
        """Create configuration from a dictionary, ignoring unknown keys.

        Enum fields accept member names (``"SORTED"``) or values (``"sorted"``).
        """
        values: Dict[str, Any] = {}
        for config_field in fields(cls):
            if config_field.name not in data:
                continue
            value = data[config_field.name]
            if config_field.name == "attribute_order" and isinstance(value, str):
                try:
                    value = AttributeOrder[value.upper()]
                except KeyError as e:
                    raise ConfigValidationError(
                        f"Unknown attribute order: {value}",
                        field_name="attribute_order",
                        suggestions=[member.name for member in AttributeOrder],
                    ) from e
            values[config_field.name] = value
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "SerializerConfig":
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def default(cls) -> "SerializerConfig":
        """Insertion-ordered attributes, self-closed empty elements."""
        return cls()

    @classmethod
    def canonical(cls) -> "SerializerConfig":
        """Reproducible output independent of attribute insertion order."""
        return cls(attribute_order=AttributeOrder.SORTED, self_close_empty=False)

    @classmethod
    def document(cls) -> "SerializerConfig":
        """Complete documents with an XML declaration."""
        return cls(xml_declaration=True)
