"""validate: submit FHIR resources to $validate and report the outcome."""

from clinlogix.validate.client import (
    ValidateRequest,
    ValidateResponse,
    build_validate_url,
    load_request,
    post_validate,
)
from clinlogix.validate.models import (
    GENERAL_THEME,
    PROFILE_RESOLUTION_THEME,
    ClassifiedIssue,
    CodeableConcept,
    FhirResource,
    Issue,
    OperationOutcome,
    ValidationReport,
)
from clinlogix.validate.pipeline import (
    ValidationRun,
    run_validate,
    validate_file,
)
from clinlogix.validate.report import (
    build_report,
    format_report,
    is_failure,
    parse_operation_outcome,
    print_report,
)

__all__ = [
    "GENERAL_THEME",
    "PROFILE_RESOLUTION_THEME",
    "ClassifiedIssue",
    "CodeableConcept",
    "FhirResource",
    "Issue",
    "OperationOutcome",
    "ValidateRequest",
    "ValidateResponse",
    "ValidationReport",
    "ValidationRun",
    "build_report",
    "build_validate_url",
    "format_report",
    "is_failure",
    "load_request",
    "parse_operation_outcome",
    "post_validate",
    "print_report",
    "run_validate",
    "validate_file",
]
