"""Fingerprint service port."""

from typing import Protocol

from request_fingerprint.domain.models.fingerprint_result import FingerprintResult
from request_fingerprint.domain.models.request_attributes import RequestAttributes


class FingerprintService(Protocol):
    """Port for fingerprinting request attributes."""

    def fingerprint(self, attributes: RequestAttributes) -> FingerprintResult:
        """Compute and report the fingerprint of the given attributes."""
        ...
