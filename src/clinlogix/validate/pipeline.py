from pathlib import Path

import httpx
from pydantic import BaseModel

from clinlogix.config import ClientSettings
from clinlogix.validate.client import load_request, post_validate
from clinlogix.validate.models import ValidationReport
from clinlogix.validate.report import (
    build_report,
    format_report,
    parse_operation_outcome,
)


class ValidationRun(BaseModel):
    report: ValidationReport
    text: str

    @property
    def passed(self) -> bool:
        return self.report.passed


def run_validate(
    fhir_file: Path,
    settings: ClientSettings,
    client: httpx.Client | None = None,
) -> ValidationRun:
    """Validate one resource file against a remote FHIR server.

    Raises ResourceLoadError or ValidationRequestError when no report can
    be produced; a failing validation is reported through ``passed``.
    """
    request = load_request(fhir_file)
    response = post_validate(request, settings, client=client)
    outcome = parse_operation_outcome(response.body_text)
    report = build_report(
        outcome,
        status=response.status,
        file=str(fhir_file),
        base_url=settings.base_url,
    )
    return ValidationRun(report=report, text=format_report(report))


def validate_file(fhir_file: Path | str, base_url: str) -> ValidationRun:
    return run_validate(Path(fhir_file), ClientSettings(base_url=base_url))
