"""Concurrent directory traversal engine."""

from . import models
from .channel import WorkChannel, WorkChannelClosed
from .models import FileSize, SkippedEntry, Stats, TerminationPolicy, TraversalResult
from .pool import DEFAULT_IDLE_TIMEOUT, WorkerPool, run
from .scanner import EntryScanner, ErrorReporter, LoggingErrorReporter

__all__ = [
	"models",
	"DEFAULT_IDLE_TIMEOUT",
	"EntryScanner",
	"ErrorReporter",
	"FileSize",
	"LoggingErrorReporter",
	"SkippedEntry",
	"Stats",
	"TerminationPolicy",
	"TraversalResult",
	"WorkChannel",
	"WorkChannelClosed",
	"WorkerPool",
	"run",
]
