import logging
from pathlib import Path

import httpx
from pydantic import BaseModel, Field, ValidationError

from clinlogix.config import ClientSettings
from clinlogix.errors import ResourceLoadError, ValidationRequestError
from clinlogix.validate.models import FhirResource

logger = logging.getLogger(__name__)

FHIR_JSON_MEDIA_TYPE = "application/fhir+json"


class ValidateRequest(BaseModel):
    raw: str = Field(description="Resource document exactly as read")
    resource_type: str


class ValidateResponse(BaseModel):
    status: int
    body_text: str
    url: str


def load_request(fhir_file: Path) -> ValidateRequest:
    """Read a resource file and pull out the type used to route it."""
    try:
        raw = fhir_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise ResourceLoadError(f"cannot read {fhir_file}: {err}") from err
    try:
        resource = FhirResource.model_validate_json(raw)
    except ValidationError as err:
        first_error = err.errors(include_url=False)[0]
        raise ResourceLoadError(
            f"{fhir_file} is not a FHIR resource: {first_error['msg']}"
        ) from err
    return ValidateRequest(raw=raw, resource_type=resource.resource_type)


def build_validate_url(base_url: str, resource_type: str) -> str:
    return f"{base_url.rstrip('/')}/{resource_type}/$validate"


def _make_client(settings: ClientSettings) -> httpx.Client:
    return httpx.Client(timeout=settings.timeout_sec)


def post_validate(
    request: ValidateRequest,
    settings: ClientSettings,
    client: httpx.Client | None = None,
) -> ValidateResponse:
    """POST the resource to ``$validate``.

    Non-success statuses are returned, not raised; only transport
    failures become ``ValidationRequestError``. A caller-supplied client
    is left open.
    """
    url = build_validate_url(settings.base_url, request.resource_type)
    headers = {
        "Accept": FHIR_JSON_MEDIA_TYPE,
        "Content-Type": FHIR_JSON_MEDIA_TYPE,
    }
    logger.debug("POST %s", url)
    owns_client = client is None
    http = client if client is not None else _make_client(settings)
    try:
        response = http.post(
            url, content=request.raw.encode("utf-8"), headers=headers
        )
    except httpx.HTTPError as err:
        raise ValidationRequestError(
            f"validate request to {url} failed: {err}"
        ) from err
    finally:
        if owns_client:
            http.close()

    logger.debug("%s returned HTTP %d", url, response.status_code)
    return ValidateResponse(
        status=response.status_code, body_text=response.text, url=url
    )
