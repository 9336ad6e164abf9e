from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "https://hapi.fhir.org/baseR4"
DEFAULT_TIMEOUT_SEC = 30.0
BASE_URL_ENVVAR = "CLINLOGIX_FHIR_BASE_URL"
TIMEOUT_ENVVAR = "CLINLOGIX_TIMEOUT_SEC"


class ClientSettings(BaseModel):
    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="FHIR server base URL"
    )
    timeout_sec: float = Field(
        default=DEFAULT_TIMEOUT_SEC,
        gt=0,
        description="Request timeout in seconds",
    )

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, value: str) -> str:
        stripped = value.strip().rstrip("/")
        if not stripped:
            raise ValueError("base_url must not be empty")
        return stripped
