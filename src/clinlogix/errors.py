class ClinLogixError(Exception):
    """Base class for errors raised by clinlogix library code."""


class ResourceLoadError(ClinLogixError):
    """Raised when a FHIR resource file cannot be read or routed."""


class ValidationRequestError(ClinLogixError):
    """Raised when the validate request never produced an HTTP response."""
