from __future__ import annotations
import json
import pathlib
import uuid
from typing import Iterable

from .metrics import BenchmarkRun, PerformanceReport, SystemInfo


def assemble(system_info: SystemInfo, ordered_runs: Iterable[BenchmarkRun]) -> PerformanceReport:
    """Combine host metadata and runs; run order is kept as measured."""
    return PerformanceReport(system_info=system_info, test_results=list(ordered_runs))


def to_json(report: PerformanceReport) -> str:
    return json.dumps(report.to_dict(), indent=2)


def report_filename() -> str:
    return f"results_{uuid.uuid4()}.json"


def export_report(report: PerformanceReport, export_path: str | None) -> pathlib.Path | None:
    """Write the report JSON to a local file, creating parent directories."""
    if not export_path:
        return None
    # Normalize Windows-style separators on POSIX if users pass e.g. "results\file.json"
    if "\\" in export_path and ":" not in export_path:
        export_path = export_path.replace("\\", "/")
    path = pathlib.Path(export_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(to_json(report))
    return path
