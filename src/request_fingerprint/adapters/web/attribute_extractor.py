"""Extraction of fingerprint attributes from Starlette requests.

The resolved client address trusts X-Forwarded-For and X-Real-IP when
``trust_proxy_headers`` is enabled. Those headers are client-controlled and are
not validated against any list of known proxies.
"""

from __future__ import annotations

import logging
import ssl
from collections.abc import Mapping
from typing import Any

from starlette.requests import Request

from request_fingerprint.domain.header_allowlist import (
    PRIMARY_HEADER_KEYS,
    select_fingerprint_headers,
)
from request_fingerprint.domain.models import PrimaryHeaders, RequestAttributes

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"
UNKNOWN_TLS_VERSION = "unknown"

_TLS_VERSION_LABELS: dict[int, str] = {
    ssl.TLSVersion.TLSv1: "TLS1.0",
    ssl.TLSVersion.TLSv1_1: "TLS1.1",
    ssl.TLSVersion.TLSv1_2: "TLS1.2",
    ssl.TLSVersion.TLSv1_3: "TLS1.3",
}

# ASGI reports major-only versions for HTTP/2 and HTTP/3.
_PROTOCOL_VERSIONS: dict[str, str] = {"2": "2.0", "3": "3.0"}


def decode_header_value(value: str) -> str:
    """Recover the text of a header value that Starlette decoded as latin-1.

    The wire bytes are decoded as UTF-8. Bytes that are not valid UTF-8 are
    kept as surrogate escapes so they hash exactly as sent.
    """
    return value.encode("latin-1").decode("utf-8", "surrogateescape")


def _get_header(request: Request, name: str) -> str | None:
    value = request.headers.get(name)
    if value is None:
        return None
    return decode_header_value(value)


def format_protocol_version(http_version: str) -> str:
    """Render an ASGI ``http_version`` as a request-line protocol, e.g. ``HTTP/2.0``."""
    return f"HTTP/{_PROTOCOL_VERSIONS.get(http_version, http_version)}"


def split_host_port(hostport: str) -> tuple[str, str]:
    """Split ``host:port`` or ``[ipv6]:port`` into host and port.

    Raises:
        ValueError: If the string has no port separator, too many colons for
            an unbracketed host, or unbalanced brackets.
    """
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0:
            raise ValueError(f"missing ']' in address: {hostport!r}")
        host = hostport[1:end]
        rest = hostport[end + 1 :]
        if not rest.startswith(":"):
            raise ValueError(f"missing port in address: {hostport!r}")
        port = rest[1:]
    else:
        colons = hostport.count(":")
        if colons == 0:
            raise ValueError(f"missing port in address: {hostport!r}")
        if colons > 1:
            raise ValueError(f"too many colons in address: {hostport!r}")
        host, port = hostport.split(":")
        if "[" in host or "]" in host:
            raise ValueError(f"unexpected bracket in address: {hostport!r}")

    if "[" in port or "]" in port:
        raise ValueError(f"unexpected bracket in address: {hostport!r}")
    return host, port


def _strip_port(address: str) -> str:
    if ":" not in address:
        return address
    try:
        host, _ = split_host_port(address)
    except ValueError:
        # Bare IPv6 addresses carry colons but no port.
        return address
    return host


def extract_client_ip(request: Request, trust_proxy_headers: bool = True) -> str:
    """Resolve the client address of a request.

    Order: first X-Forwarded-For entry, then X-Real-IP, then the peer address
    with any port removed. Blank header values fall through to the next
    source. Returns ``"unknown"`` when nothing is available.
    """
    if trust_proxy_headers:
        forwarded_for = _get_header(request, "X-Forwarded-For")
        if forwarded_for:
            # X-Forwarded-For can contain multiple IPs: "client, proxy1, proxy2"
            client_ip = forwarded_for.split(",")[0].strip()
            if client_ip:
                return client_ip

        real_ip = _get_header(request, "X-Real-IP")
        if real_ip and real_ip.strip():
            return real_ip.strip()

        logger.debug("No usable proxy headers, falling back to peer address")

    if request.client and request.client.host:
        return _strip_port(request.client.host)

    logger.warning("Could not determine client IP, using 'unknown'")
    return UNKNOWN_CLIENT


def map_tls_version(version: int | None) -> str:
    """Map a numeric TLS protocol version (e.g. ``0x0303``) to its label."""
    if version is None:
        return UNKNOWN_TLS_VERSION
    return _TLS_VERSION_LABELS.get(version, UNKNOWN_TLS_VERSION)


def extract_tls_version(scope: Mapping[str, Any]) -> str | None:
    """Return the TLS label for an ASGI scope, or ``None`` for plain transports.

    Uses the ASGI TLS extension when the server provides it. An ``https``
    scope without version information yields ``"unknown"``. uvicorn does not
    populate the extension, so behind uvicorn a TLS connection is always
    reported as ``"unknown"``; the numbered labels need a server that does.
    """
    extensions = scope.get("extensions") or {}
    tls_info = extensions.get("tls")
    if tls_info is not None:
        return map_tls_version(tls_info.get("tls_version"))
    if scope.get("scheme") in ("https", "wss"):
        return UNKNOWN_TLS_VERSION
    return None


def extract_port(host: str | None) -> str | None:
    """Return the port of a Host header value, or ``None`` if it has none."""
    if not host or ":" not in host:
        return None
    try:
        _, port = split_host_port(host)
    except ValueError:
        return None
    return port or None


class StarletteAttributeExtractor:
    """Builds ``RequestAttributes`` from a Starlette request."""

    def __init__(self, trust_proxy_headers: bool = True) -> None:
        """Initialize the extractor.

        Args:
            trust_proxy_headers: Whether forwarded-for / real-ip headers take
                precedence over the peer address.
        """
        self.trust_proxy_headers = trust_proxy_headers

    def extract(self, request: Request) -> RequestAttributes:
        """Extract the fingerprint attributes of a request."""
        decoded = {name: decode_header_value(value) for name, value in request.headers.items()}
        headers = select_fingerprint_headers(decoded)
        primary = PrimaryHeaders(
            user_agent=headers.get("user-agent", ""),
            accept=headers.get("accept", ""),
            accept_language=headers.get("accept-language", ""),
            accept_encoding=headers.get("accept-encoding", ""),
        )
        http_version = request.scope.get("http_version", "1.1")

        return RequestAttributes(
            client_address=extract_client_ip(request, self.trust_proxy_headers),
            method=request.method,
            protocol_version=format_protocol_version(http_version),
            primary_headers=primary,
            tls_version=extract_tls_version(request.scope),
            port=extract_port(decoded.get("host")),
            extra_headers={
                name: value for name, value in headers.items() if name not in PRIMARY_HEADER_KEYS
            },
        )
