"""Default text and JSON reports."""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Dict

import humanize

from dirstat.core.models import Stats, TraversalResult
from .exporter import ExportFormat, ReportExporter


class DefaultReportExporter(ReportExporter):
    """Renders the total as a single line of text or as a JSON document."""

    def render(self, result: TraversalResult, fmt: ExportFormat) -> str:
        if fmt is ExportFormat.TEXT:
            return f"Total size is {result.total}"
        if fmt is ExportFormat.JSON:
            return json.dumps(self._build_json_payload(result), indent=2, ensure_ascii=False)
        raise ValueError(f"Unsupported report format: {fmt}")  # pragma: no cover - future formats

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def _build_json_payload(self, result: TraversalResult) -> Dict[str, object]:
        return {
            "root": str(result.root),
            "totals": self._stats_to_dict(result.total),
            "root_scan": self._stats_to_dict(result.root_stats),
            "workers": [self._stats_to_dict(stats) for stats in result.worker_stats],
            "skipped": result.skipped,
            "elapsed": humanize.precisedelta(timedelta(seconds=result.elapsed), minimum_unit="milliseconds"),
            "elapsed_seconds": round(result.elapsed, 6),
        }

    @staticmethod
    def _stats_to_dict(stats: Stats) -> Dict[str, object]:
        return {
            "bytes": stats.total_bytes,
            "items": stats.item_count,
            "human_size": stats.human_size(),
        }
