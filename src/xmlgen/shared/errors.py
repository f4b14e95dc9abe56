"""Exception hierarchy for markup generation.

Markup errors carry the element path at which they were raised. The path is
a snapshot (a tuple of element names from the root down), so an error raised
deep in the tree keeps its own path while it propagates through the
ancestors' frames untouched.
"""

from typing import Iterable, List, Optional, Tuple

PATH_SEPARATOR = " > "


class MarkupError(Exception):
    """Base class for all failures raised while marshalling an element tree."""

    def __init__(self, reason: str, path: Iterable[str] = ()) -> None:
        super().__init__(reason)
        self.reason = reason
        self.path: Tuple[str, ...] = tuple(path)

    @property
    def path_display(self) -> str:
        """Path segments joined for display, e.g. ``Foo > Bar``."""
        return PATH_SEPARATOR.join(str(segment) for segment in self.path)

    def __str__(self) -> str:
        if not self.path:
            return self.reason
        return f"{self.reason} (Path: {self.path_display})"


class InvalidNameError(MarkupError):
    """A tag or attribute name does not match the XML name grammar."""

    def __init__(self, name: str, kind: str = "tag", path: Iterable[str] = ()) -> None:
        super().__init__(f"Invalid name for {kind}: {name}", path)
        self.name = name
        self.kind = kind


class WriteFailureError(MarkupError):
    """The output sink rejected a write."""

    def __init__(self, cause: BaseException, path: Iterable[str] = ()) -> None:
        super().__init__(f"Write to sink failed: {cause}", path)
        self.cause = cause


class UnencodableValueError(MarkupError):
    """A content value could not be rendered by any available strategy."""

    def __init__(self, value_repr: str, path: Iterable[str] = ()) -> None:
        super().__init__(f"Unable to write: {value_repr}", path)
        self.value_repr = value_repr


class EncodingError(Exception):
    """Raised by a structured encoder that cannot represent a value."""


class ConfigValidationError(ValueError):
    """Raised when serializer configuration validation fails."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []
