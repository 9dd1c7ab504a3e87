"""Web adapters for serving fingerprints over HTTP."""

from request_fingerprint.adapters.web.attribute_extractor import StarletteAttributeExtractor
from request_fingerprint.adapters.web.fingerprint_app import (
    StarletteWebAdapter,
    create_app,
)

__all__ = ["StarletteAttributeExtractor", "StarletteWebAdapter", "create_app"]
