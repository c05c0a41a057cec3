from __future__ import annotations

import json
from pathlib import Path


def test_write_error_report_creates_file(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("DIRSTAT_ERROR_DIR", str(tmp_path))

    from dirstat.shared.error_reporting import write_error_report

    try:
        raise ValueError("boom")
    except ValueError as exc:
        report = write_error_report(exc, where="test", context={"path": "/data", "workers": 4})

    assert report.path.exists()
    assert report.path.parent == tmp_path
    text = report.path.read_text(encoding="utf-8", errors="replace")

    header, traceback_text = text.split("\n\n", 1)
    payload = json.loads(header)
    assert payload["where"] == "test"
    assert payload["error"] == "ValueError: boom"
    assert payload["context"] == {"path": "/data", "workers": 4}
    assert "Traceback" in traceback_text


def test_error_reports_dir_falls_back_to_home(monkeypatch, tmp_path: Path):
    monkeypatch.delenv("DIRSTAT_ERROR_DIR", raising=False)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path / "home"))

    from dirstat.shared.error_reporting import get_error_reports_dir

    directory = get_error_reports_dir()

    assert directory == tmp_path / "home" / ".dirstat" / "error_reports"
    assert directory.is_dir()
