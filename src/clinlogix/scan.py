from collections.abc import Iterable
from pathlib import Path

import srsly
from pydantic import BaseModel, Field


class ScanSummary(BaseModel):
    file: str = Field(description="Scanned log file")
    total_lines: int = Field(default=0, ge=0)
    errors: int = Field(default=0, ge=0)
    warnings: int = Field(default=0, ge=0)
    error_lines: list[str] = Field(
        default_factory=list,
        description="Lines counted as errors, when collected",
    )


def scan_lines(
    lines: Iterable[str], file: str, *, collect_errors: bool = False
) -> ScanSummary:
    """Count lines mentioning ``error`` and, failing that, ``warning``."""
    summary = ScanSummary(file=file)
    for raw_line in lines:
        line = raw_line.removesuffix("\n").removesuffix("\r")
        summary.total_lines += 1
        lowered = line.lower()
        if "error" in lowered:
            summary.errors += 1
            if collect_errors:
                summary.error_lines.append(line)
        elif "warning" in lowered:
            summary.warnings += 1
    return summary


def scan_log(logfile: Path, *, collect_errors: bool = False) -> ScanSummary:
    # Only "\n" ends a line; a lone "\r" stays part of it.
    with logfile.open("r", encoding="utf-8", newline="\n") as handle:
        return scan_lines(handle, str(logfile), collect_errors=collect_errors)


def format_scan_report(summary: ScanSummary) -> str:
    return "\n".join(
        [
            "ClinLogix Report",
            "----------------",
            f"File: {summary.file}",
            f"Total lines: {summary.total_lines}",
            f"Errors: {summary.errors}",
            f"Warnings: {summary.warnings}",
        ]
    )


def format_scan_json(summary: ScanSummary) -> str:
    return srsly.json_dumps(
        summary.model_dump(
            include={"file", "total_lines", "errors", "warnings"}
        )
    )
