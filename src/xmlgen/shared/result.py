"""Result objects and diagnostic types for marshal operations."""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple

from xmlgen.shared.errors import MarkupError


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    path: Tuple[str, ...] = ()
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class MarshalMetrics:
    """Counters collected while writing one element tree."""

    elements_written: int = 0
    attributes_written: int = 0
    bytes_written: int = 0
    max_depth: int = 0
    processing_time_ms: float = 0.0

    @property
    def bytes_per_element(self) -> float:
        if self.elements_written == 0:
            return 0.0
        return self.bytes_written / self.elements_written


@dataclass
class MarshalResult:
    """Outcome of :func:`xmlgen.api.try_marshal`.

    A failed result means the sink holds an incomplete, unreliable stream;
    the bytes written before the failure are not rolled back.
    """

    success: bool = True
    error: Optional[MarkupError] = None
    metrics: MarshalMetrics = field(default_factory=MarshalMetrics)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    correlation_id: Optional[str] = None

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None

    @property
    def error_path(self) -> Tuple[str, ...]:
        """Path of the failing element, empty on success."""
        return self.error.path if self.error is not None else ()
