"""Attribute extractor port."""

from typing import Any, Protocol

from request_fingerprint.domain.models.request_attributes import RequestAttributes


class AttributeExtractor(Protocol):
    """Port for turning a transport-level request into request attributes."""

    def extract(self, request: Any) -> RequestAttributes:
        """Extract the fingerprint attributes of a request."""
        ...
