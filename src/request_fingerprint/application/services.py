"""Application services (use cases) for request fingerprinting."""

import logging
from collections.abc import Callable
from datetime import datetime

from request_fingerprint.application.fingerprint_engine import compute_fingerprint
from request_fingerprint.domain.models import FingerprintResult, RequestAttributes

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone().replace(microsecond=0)


def _display_text(value: str) -> str:
    # Undecodable header bytes become U+FFFD for logging and reporting only.
    return value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


class FingerprintService:
    """Computes fingerprints and writes one console log line per request."""

    def __init__(self, clock: Callable[[], datetime] = _local_now) -> None:
        """Initialize the service.

        Args:
            clock: Returns the timestamp attached to each result. Should be
                timezone-aware so it renders as RFC3339.
        """
        self._clock = clock

    def fingerprint(self, attributes: RequestAttributes) -> FingerprintResult:
        """Fingerprint the attributes and log the outcome."""
        result = FingerprintResult(
            fingerprint=compute_fingerprint(attributes),
            timestamp=self._clock(),
            client_address=_display_text(attributes.client_address),
            user_agent=_display_text(attributes.primary_headers.user_agent),
        )
        logger.info(
            f"[{result.rfc3339_timestamp}] Fingerprint: {result.fingerprint} "
            f"| IP: {result.client_address} | UA: {result.user_agent}"
        )
        return result
