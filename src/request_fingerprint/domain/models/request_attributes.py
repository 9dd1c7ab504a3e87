"""Request attributes domain model."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PrimaryHeaders:
    """The four negotiation headers that always take part in a fingerprint.

    Missing headers are represented by an empty string.
    """

    user_agent: str = ""
    accept: str = ""
    accept_language: str = ""
    accept_encoding: str = ""


@dataclass(frozen=True)
class RequestAttributes:
    """Observable attributes of one incoming request.

    ``tls_version`` and ``port`` are ``None`` when the transport did not
    provide them. ``extra_headers`` maps lowercase header names from the
    allow-list to their values.
    """

    client_address: str
    method: str
    protocol_version: str
    primary_headers: PrimaryHeaders = field(default_factory=PrimaryHeaders)
    tls_version: str | None = None
    port: str | None = None
    extra_headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Keys are lowercase and unique; on a case collision the last value wins.
        normalized = {name.lower(): value for name, value in self.extra_headers.items()}
        object.__setattr__(self, "extra_headers", normalized)
