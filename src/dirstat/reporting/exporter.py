"""Report rendering interfaces."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from dirstat.core.models import TraversalResult


class ExportFormat(str, Enum):
    """Output formats for a traversal report."""

    TEXT = "text"
    JSON = "json"


class ReportExporter(Protocol):
    """Turns a traversal result into printable output."""

    def render(self, result: TraversalResult, fmt: ExportFormat) -> str:
        """Returns the report for ``result`` in the chosen format."""
