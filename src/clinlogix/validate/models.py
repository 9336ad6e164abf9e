from pydantic import BaseModel, ConfigDict, Field

PROFILE_RESOLUTION_THEME = "Profile resolution"
GENERAL_THEME = "General"
NO_DIAGNOSTICS = "(no diagnostics provided)"


class FhirResource(BaseModel):
    """Just enough of a FHIR resource to route a $validate request."""

    resource_type: str = Field(alias="resourceType")


class CodeableConcept(BaseModel):
    text: str | None = None


class Issue(BaseModel):
    """One entry of an OperationOutcome ``issue`` array."""

    severity: str | None = Field(
        default=None, description="fatal, error, warning or information"
    )
    code: str | None = Field(default=None, description="FHIR issue type code")
    diagnostics: str | None = None
    details: CodeableConcept | None = None
    location: list[str] = Field(default_factory=list)
    expression: list[str] = Field(default_factory=list)


class OperationOutcome(BaseModel):
    resource_type: str | None = Field(default=None, alias="resourceType")
    issue: list[Issue] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "OperationOutcome":
        return cls()


class ClassifiedIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    severity: str = Field(description="Severity verbatim, or 'unknown'")
    code: str = Field(description="Issue code verbatim, or 'unknown'")
    message: str = Field(
        description="diagnostics, else details.text, else empty"
    )
    location: list[str] = Field(default_factory=list)
    expression: list[str] = Field(default_factory=list)
    theme: str = Field(default=GENERAL_THEME)
    line: int | None = Field(
        default=None, ge=0, description="Line number parsed from message"
    )


class ValidationReport(BaseModel):
    """Aggregated outcome of one validation run.

    ``groups`` is keyed by ``severity | code | message``; its iteration
    order carries no meaning and renderers sort it explicitly.
    """

    model_config = ConfigDict(frozen=True)

    status: int = Field(description="HTTP status code of the response")
    file: str = Field(description="Source file label")
    base_url: str
    total: int = Field(ge=0, description="Raw issue count")
    error_count: int = Field(default=0, ge=0)
    warning_count: int = Field(default=0, ge=0)
    info_count: int = Field(default=0, ge=0)
    groups: dict[str, list[ClassifiedIssue]] = Field(default_factory=dict)
    themes: dict[str, int] = Field(default_factory=dict)

    @property
    def status_ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def passed(self) -> bool:
        return self.error_count == 0 and self.status_ok
