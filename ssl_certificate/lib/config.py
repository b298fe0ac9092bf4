"""CA configuration dataclasses."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.x509 import oid

DEFAULT_REGION = os.environ.get("AWS_REGION", "eu-west-2")
PASSPHRASE_ENV_VAR = "CA_KEY_PASSPHRASE"

# Digests accepted for CA signatures. sha1 stays listed so older configurations
# fail at signing with GenerationError; cryptography rejects SHA-1 signatures.
SIGNATURE_HASHES: Mapping[str, type[hashes.HashAlgorithm]] = {
    "sha1": hashes.SHA1,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}


@dataclass
class CAConfig:
    """CA configuration with no AWS dependencies."""

    country: str = "ES"
    state: str = "Gipuzkoa"
    locality: str = "Donostia"
    organization: str = "Example Org"
    organizational_unit: str = "Operations"
    common_name: str = "Example CA"
    key_size: int = 2048
    validity_days: int = 3650
    # Authorities were historically signed with SHA-1, which cryptography no
    # longer supports for certificate signatures.
    signature_hash: str = "sha256"

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """Return the hash instance used to sign CA certificates.

        Raises:
            ValueError: If signature_hash is not a supported digest name
        """
        try:
            return SIGNATURE_HASHES[self.signature_hash.lower()]()
        except KeyError:
            raise ValueError(f"unsupported signature hash: {self.signature_hash}") from None

    def default_subject(self) -> "DistinguishedName":
        """Build the subject DN from the configured defaults."""
        return DistinguishedName(
            country=self.country,
            state=self.state,
            locality=self.locality,
            organization=self.organization,
            organizational_unit=self.organizational_unit,
            common_name=self.common_name,
        )


# Keys accepted in subject mappings, mapped to DistinguishedName fields.
SUBJECT_MAPPING_KEYS = {
    "common_name": "common_name",
    "country": "country",
    "state": "state",
    "city": "locality",
    "locality": "locality",
    "organization": "organization",
    "department": "organizational_unit",
    "organizational_unit": "organizational_unit",
    "email": "email",
}

# Short names used in OpenSSL style subject strings ("/C=GB/O=Acme/CN=Acme CA").
SUBJECT_STRING_KEYS = {
    "C": "country",
    "ST": "state",
    "L": "locality",
    "O": "organization",
    "OU": "organizational_unit",
    "CN": "common_name",
    "emailAddress": "email",
}


@dataclass
class DistinguishedName:
    """X.509 Subject Distinguished Name."""

    common_name: str
    country: str | None = None
    state: str | None = None
    locality: str | None = None
    organization: str | None = None
    organizational_unit: str | None = None
    email: str | None = None

    def to_x509_name(self) -> x509.Name:
        """Convert to cryptography x509.Name, skipping unset fields."""
        fields = [
            (oid.NameOID.COUNTRY_NAME, self.country),
            (oid.NameOID.STATE_OR_PROVINCE_NAME, self.state),
            (oid.NameOID.LOCALITY_NAME, self.locality),
            (oid.NameOID.ORGANIZATION_NAME, self.organization),
            (oid.NameOID.ORGANIZATIONAL_UNIT_NAME, self.organizational_unit),
            (oid.NameOID.COMMON_NAME, self.common_name),
            (oid.NameOID.EMAIL_ADDRESS, self.email),
        ]
        return x509.Name(
            [x509.NameAttribute(name_oid, value) for name_oid, value in fields if value]
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "DistinguishedName":
        """Build from a mapping such as {"common_name": ..., "city": ...}.

        Raises:
            ValueError: On unknown keys or a missing common_name
        """
        kwargs: dict[str, str] = {}
        for key, value in values.items():
            if key not in SUBJECT_MAPPING_KEYS:
                raise ValueError(f"unknown subject field: {key}")
            kwargs[SUBJECT_MAPPING_KEYS[key]] = value
        if not kwargs.get("common_name"):
            raise ValueError("subject requires a common_name")
        return cls(**kwargs)

    @classmethod
    def from_string(cls, subject: str) -> "DistinguishedName":
        """Parse an OpenSSL style subject string like "/C=GB/O=Acme/CN=Acme CA".

        Raises:
            ValueError: On malformed components, unknown keys or a missing CN
        """
        kwargs: dict[str, str] = {}
        for part in subject.strip().strip("/").split("/"):
            if not part:
                continue
            key, sep, value = part.partition("=")
            if not sep or not value:
                raise ValueError(f"malformed subject component: {part!r}")
            if key not in SUBJECT_STRING_KEYS:
                raise ValueError(f"unknown subject field: {key}")
            kwargs[SUBJECT_STRING_KEYS[key]] = value
        if not kwargs.get("common_name"):
            raise ValueError("subject requires a CN")
        return cls(**kwargs)


def build_subject(
    subject: "DistinguishedName | Mapping[str, str] | str | x509.Name",
) -> x509.Name:
    """Normalize any accepted subject form into an x509.Name."""
    if isinstance(subject, x509.Name):
        return subject
    if isinstance(subject, DistinguishedName):
        return subject.to_x509_name()
    if isinstance(subject, str):
        return DistinguishedName.from_string(subject).to_x509_name()
    return DistinguishedName.from_mapping(subject).to_x509_name()
