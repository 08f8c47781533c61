from dataclasses import dataclass
from typing import List


@dataclass
class DomainError(Exception):
    detail: str
    title: str = "Domain Error"
    type: str = "https://example.com/problems/domain-error"
    errors: List[dict] | None = None


@dataclass
class ValidationError(DomainError):
    title: str = "Validation Error"
    type: str = "https://example.com/problems/validation-error"


@dataclass
class RecordLookupError(DomainError):
    """Raised by record lookups when the reliability snapshot cannot be fetched."""

    title: str = "Reliability Record Unavailable"
    type: str = "https://example.com/problems/reliability-record-unavailable"
