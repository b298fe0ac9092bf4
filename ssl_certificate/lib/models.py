"""Result models for CA operations."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey


@dataclass(frozen=True)
class Validity:
    """Certificate validity window (UTC)."""

    not_before: datetime
    not_after: datetime

    def __post_init__(self) -> None:
        if self.not_after <= self.not_before:
            raise ValueError("validity must end after it starts")

    @classmethod
    def from_seconds(cls, seconds: int, start: datetime | None = None) -> "Validity":
        """Validity starting at start (default: now) and lasting seconds."""
        not_before = start or datetime.now(UTC)
        return cls(not_before=not_before, not_after=not_before + timedelta(seconds=seconds))

    @classmethod
    def from_days(cls, days: int, start: datetime | None = None) -> "Validity":
        """Validity starting at start (default: now) and lasting days."""
        return cls.from_seconds(days * 86400, start=start)


@dataclass
class CAArtifacts:
    """Result from CA generation.

    Holds the generated key and certificate plus where they were written.
    """

    private_key: RSAPrivateKey
    certificate: x509.Certificate
    subject: x509.Name
    validity: Validity
    key_file_path: Path
    cert_file_path: Path
    serial: str
    key_passphrase: str | None = None
