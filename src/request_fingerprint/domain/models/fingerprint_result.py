"""Fingerprint result domain model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class FingerprintResult(BaseModel):
    """A computed fingerprint together with the data reported alongside it."""

    model_config = ConfigDict(frozen=True)

    fingerprint: str
    timestamp: datetime
    client_address: str
    user_agent: str

    @property
    def rfc3339_timestamp(self) -> str:
        """Timestamp formatted as RFC3339 with seconds precision."""
        return self.timestamp.isoformat(timespec="seconds")
