"""Shared modules: configuration, logging, error reports."""

from .config import ConfigurationError, TraversalConfig
from .error_reporting import ErrorReport, get_error_reports_dir, write_error_report
from .logging import configure_logging

__all__ = [
	"ConfigurationError",
	"TraversalConfig",
	"configure_logging",
	"ErrorReport",
	"get_error_reports_dir",
	"write_error_report",
]
