"""Error report files for traversals that fail outright."""

from __future__ import annotations

import json
import os
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from uuid import uuid4


@dataclass(frozen=True, slots=True)
class ErrorReport:
    path: Path
    created_at: datetime


def get_error_reports_dir() -> Path:
    """Returns `DIRSTAT_ERROR_DIR` if set, otherwise `~/.dirstat/error_reports`."""

    override = (os.getenv("DIRSTAT_ERROR_DIR") or "").strip()
    base = Path(override) if override else Path.home() / ".dirstat" / "error_reports"
    base.mkdir(parents=True, exist_ok=True)
    return base


def write_error_report(
    error: BaseException,
    *,
    where: str,
    context: dict[str, Any] | None = None,
) -> ErrorReport:
    """Writes the failing traversal's context and traceback; returns the report."""

    created_at = datetime.now(timezone.utc)
    path = get_error_reports_dir() / f"error_{created_at:%Y%m%d_%H%M%S}_{uuid4().hex[:8]}.txt"

    header = {
        "created_at": created_at.isoformat(),
        "where": where,
        "cwd": str(Path.cwd()),
        "context": dict(context or {}),
        "error": f"{type(error).__name__}: {error}",
    }
    tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))

    path.write_text(
        json.dumps(header, ensure_ascii=False, indent=2, default=str) + "\n\n" + tb,
        encoding="utf-8",
        errors="replace",
    )
    return ErrorReport(path=path, created_at=created_at)
