"""Rendering of traversal results."""

from .default import DefaultReportExporter
from .exporter import ExportFormat, ReportExporter

__all__ = ["ReportExporter", "ExportFormat", "DefaultReportExporter"]
