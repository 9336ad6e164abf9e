"""Turn a validator's OperationOutcome into a grouped, sorted report."""

import logging
import string
from collections import Counter
from collections.abc import Iterable
from http import HTTPStatus

import typer
from pydantic import ValidationError

from clinlogix.validate.models import (
    GENERAL_THEME,
    NO_DIAGNOSTICS,
    PROFILE_RESOLUTION_THEME,
    ClassifiedIssue,
    Issue,
    OperationOutcome,
    ValidationReport,
)

logger = logging.getLogger(__name__)

PROFILE_RESOLUTION_PHRASE = "unable to resolve reference to profile"
PROFILE_RESOLUTION_HINT = (
    "This usually means the server doesn't have the required "
    "implementation guide packages (e.g., US Core) installed."
)
LINE_MARKER = "line:"
MAX_LINE_NUMBER = (1 << 32) - 1

_ERROR_SEVERITIES = frozenset({"error", "fatal"})
_ASCII_DIGITS = frozenset(string.digits)


def parse_operation_outcome(body_text: str) -> OperationOutcome:
    """Decode a response body, treating anything undecodable as no issues.

    A single malformed issue entry rejects the whole document.
    """
    try:
        return OperationOutcome.model_validate_json(body_text)
    except ValidationError as err:
        logger.debug(
            "Response body is not an OperationOutcome (%d errors); "
            "treating it as empty",
            err.error_count(),
        )
        return OperationOutcome.empty()


def classify_theme(message: str) -> str:
    lowered = message.lower()
    if PROFILE_RESOLUTION_PHRASE in lowered:
        return PROFILE_RESOLUTION_THEME
    # Servers paraphrase the message, e.g. "Failed to resolve profile ..."
    if "profile" in lowered and "resolve" in lowered:
        return PROFILE_RESOLUTION_THEME
    return GENERAL_THEME


def extract_line_number(message: str) -> int | None:
    """Return the first digit run after the first ``line:`` marker."""
    lowered = message.lower()
    start = lowered.find(LINE_MARKER)
    if start < 0:
        return None
    rest = lowered[start + len(LINE_MARKER) :].lstrip()
    digits: list[str] = []
    for char in rest:
        if char not in _ASCII_DIGITS:
            break
        digits.append(char)
    if not digits:
        return None
    value = int("".join(digits))
    if value > MAX_LINE_NUMBER:
        return None
    return value


def _issue_message(issue: Issue) -> str:
    if issue.diagnostics is not None:
        return issue.diagnostics
    if issue.details is not None and issue.details.text is not None:
        return issue.details.text
    return ""


def summarize_issue(issue: Issue) -> ClassifiedIssue:
    message = _issue_message(issue)
    return ClassifiedIssue(
        severity=issue.severity if issue.severity is not None else "unknown",
        code=issue.code if issue.code is not None else "unknown",
        message=message,
        location=list(issue.location),
        expression=list(issue.expression),
        theme=classify_theme(message),
        line=extract_line_number(message),
    )


def _display_message(message: str) -> str:
    return message if message else NO_DIAGNOSTICS


def group_key(item: ClassifiedIssue) -> str:
    return f"{item.severity} | {item.code} | {_display_message(item.message)}"


def build_report(
    outcome: OperationOutcome,
    status: int,
    file: str,
    base_url: str,
) -> ValidationReport:
    groups: dict[str, list[ClassifiedIssue]] = {}
    themes: dict[str, int] = {}
    error_count = 0
    warning_count = 0
    info_count = 0

    for issue in outcome.issue:
        item = summarize_issue(issue)
        if item.severity in _ERROR_SEVERITIES:
            error_count += 1
        elif item.severity == "warning":
            warning_count += 1
        elif item.severity == "information":
            info_count += 1

        groups.setdefault(group_key(item), []).append(item)
        themes[item.theme] = themes.get(item.theme, 0) + 1

    return ValidationReport(
        status=status,
        file=file,
        base_url=base_url,
        total=len(outcome.issue),
        error_count=error_count,
        warning_count=warning_count,
        info_count=info_count,
        groups=groups,
        themes=themes,
    )


def is_failure(report: ValidationReport) -> bool:
    return not report.passed


def summarize_severity(items: Iterable[ClassifiedIssue]) -> dict[str, int]:
    counts = Counter(item.severity for item in items)
    return dict(sorted(counts.items()))


def format_severity_summary(counts: dict[str, int]) -> str:
    if not counts:
        return "no severities"
    return ", ".join(
        f"{severity}: {count}" for severity, count in sorted(counts.items())
    )


def sorted_groups(
    groups: dict[str, list[ClassifiedIssue]],
) -> list[tuple[str, list[ClassifiedIssue]]]:
    """Largest groups first; equal sizes fall back to key order."""
    return sorted(groups.items(), key=lambda entry: (-len(entry[1]), entry[0]))


def sorted_themes(themes: dict[str, int]) -> list[tuple[str, int]]:
    return sorted(themes.items(), key=lambda entry: (-entry[1], entry[0]))


def _format_status(status: int) -> str:
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return str(status)


def _format_themes(report: ValidationReport) -> list[str]:
    lines = ["Themes:"]
    ranked = sorted_themes(report.themes)
    if not ranked:
        lines.append("  none")
        return lines
    for rank, (theme, count) in enumerate(ranked, start=1):
        lines.append(f"  {rank}. {theme} (x{count})")
        if theme == PROFILE_RESOLUTION_THEME:
            lines.append(f"     {PROFILE_RESOLUTION_HINT}")
    return lines


def _format_group(key: str, items: list[ClassifiedIssue]) -> list[str]:
    summary = format_severity_summary(summarize_severity(items))
    lines = [f"- {key} ({len(items)}): {summary}"]
    for index, item in enumerate(items, start=1):
        lines.append(
            f"  {index}. [{item.severity}] {_display_message(item.message)}"
        )
        if item.location:
            lines.append(f"     location: {', '.join(item.location)}")
        if item.expression:
            lines.append(f"     expression: {', '.join(item.expression)}")
            # Line numbers are only reported alongside an expression.
            if item.line is not None:
                lines.append(f"     line: {item.line}")
    return lines


def format_report(report: ValidationReport) -> str:
    lines = [
        "FHIR Validation",
        "--------------",
        f"File: {report.file}",
        f"Base: {report.base_url}",
        f"HTTP: {_format_status(report.status)}",
        (
            f"Issues: {report.total} (errors: {report.error_count}, "
            f"warnings: {report.warning_count}, info: {report.info_count})"
        ),
        f"Total: {report.total} issues in {len(report.groups)} categories",
        "Result: PASS ✅" if report.passed else "Result: FAIL ❌",
        "",
    ]
    lines.extend(_format_themes(report))
    lines.append("")

    if not report.groups:
        lines.append("No issues reported.")
        return "\n".join(lines)

    lines.append("Issue Categories (severity/code/message):")
    for key, items in sorted_groups(report.groups):
        lines.extend(_format_group(key, items))
    return "\n".join(lines)


def print_report(report: ValidationReport) -> None:
    typer.echo(format_report(report))
