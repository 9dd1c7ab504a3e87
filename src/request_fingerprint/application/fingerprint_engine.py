"""Fingerprint engine.

Turns ``RequestAttributes`` into a SHA-256 hex digest. The attributes are
serialized as ``key:value`` parts joined with ``|``: a fixed-position prefix
(address, request line, transport, the four primary headers) followed by the
remaining allow-listed headers sorted by name, so the digest does not depend
on header arrival order.

All functions here are pure and safe to call concurrently.
"""

import hashlib

from request_fingerprint.domain.header_allowlist import PRIMARY_HEADER_KEYS
from request_fingerprint.domain.models import RequestAttributes

PART_SEPARATOR = "|"


def build_fingerprint_parts(attributes: RequestAttributes) -> list[str]:
    """Build the ordered ``key:value`` parts for the given attributes.

    ``tls`` and ``port`` parts are left out entirely when the value is absent
    or empty. The primary header parts are always present, even when empty.
    """
    parts = [
        f"ip:{attributes.client_address}",
        f"method:{attributes.method}",
        f"protocol:{attributes.protocol_version}",
    ]
    if attributes.tls_version:
        parts.append(f"tls:{attributes.tls_version}")
    if attributes.port:
        parts.append(f"port:{attributes.port}")

    primary = attributes.primary_headers
    parts.append(f"ua:{primary.user_agent}")
    parts.append(f"accept:{primary.accept}")
    parts.append(f"accept-lang:{primary.accept_language}")
    parts.append(f"accept-enc:{primary.accept_encoding}")

    extra = attributes.extra_headers
    # sorted() on str compares code points, which matches byte order for UTF-8.
    for name in sorted(key for key in extra if key not in PRIMARY_HEADER_KEYS):
        parts.append(f"{name}:{extra[name]}")

    return parts


def serialize_fingerprint_parts(attributes: RequestAttributes) -> str:
    """Return the canonical string that gets hashed."""
    return PART_SEPARATOR.join(build_fingerprint_parts(attributes))


def compute_fingerprint(attributes: RequestAttributes) -> str:
    """Compute the fingerprint of the given attributes.

    Returns:
        Lowercase hexadecimal SHA-256 digest, 64 characters long.
    """
    canonical = serialize_fingerprint_parts(attributes)
    return hashlib.sha256(canonical.encode("utf-8", "surrogateescape")).hexdigest()
