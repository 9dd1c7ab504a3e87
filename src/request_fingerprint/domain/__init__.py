"""Domain layer - request attributes, header allow-list and ports."""

from request_fingerprint.domain.models import (
    FingerprintResult,
    PrimaryHeaders,
    RequestAttributes,
)
from request_fingerprint.domain.ports import AttributeExtractor, FingerprintService

__all__ = [
    "AttributeExtractor",
    "FingerprintResult",
    "FingerprintService",
    "PrimaryHeaders",
    "RequestAttributes",
]
