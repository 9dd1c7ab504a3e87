"""Domain models for request fingerprinting."""

from request_fingerprint.domain.models.fingerprint_result import FingerprintResult
from request_fingerprint.domain.models.request_attributes import (
    PrimaryHeaders,
    RequestAttributes,
)

__all__ = [
    "FingerprintResult",
    "PrimaryHeaders",
    "RequestAttributes",
]
