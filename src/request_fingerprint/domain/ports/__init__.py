"""Ports (interfaces) for the ports-and-adapters architecture."""

from request_fingerprint.domain.ports.attribute_extractor import AttributeExtractor
from request_fingerprint.domain.ports.fingerprint_service import FingerprintService

__all__ = [
    "AttributeExtractor",
    "FingerprintService",
]
