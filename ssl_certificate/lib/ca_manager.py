"""CA manager for self-signed certificate authority generation."""

import logging
from collections.abc import Mapping
from pathlib import Path

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from .cert_utils import (
    deserialize_private_key,
    generate_private_key,
    get_certificate_serial_hex,
    write_certificate,
    write_private_key,
)
from .certificate_builder import CertificateBuilder
from .config import CAConfig, DistinguishedName, build_subject
from .exceptions import GenerationError
from .models import CAArtifacts, Validity

logger = logging.getLogger(__name__)

Subject = DistinguishedName | Mapping[str, str] | str | x509.Name


class CAManager:
    """Certificate Authority manager for self-signed CA generation."""

    def __init__(self, config: CAConfig | None = None) -> None:
        """Initialize CA manager with configuration.

        Args:
            config: CA configuration with key size, validity and digest
        """
        self.config = config or CAConfig()

    def write_private_key(
        self, key_file_path: Path | str, key_passphrase: str | None = None
    ) -> RSAPrivateKey:
        """Generate an RSA key and write it to key_file_path (mode 0400).

        Args:
            key_file_path: Destination of the PEM private key
            key_passphrase: Encrypts the PEM when given

        Returns:
            The generated private key

        Raises:
            GenerationError: If key generation, encryption or the write fails
        """
        key_file_path = Path(key_file_path)
        try:
            key = generate_private_key(self.config.key_size)
            write_private_key(key_file_path, key, key_passphrase)
        except (OSError, ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise GenerationError(f"cannot write CA private key {key_file_path}: {e}") from e
        logger.debug(
            "wrote %s CA key to %s",
            "encrypted" if key_passphrase else "unencrypted",
            key_file_path,
        )
        return key

    def write_ca_certificate(
        self,
        subject: Subject,
        key_file_path: Path | str,
        cert_file_path: Path | str,
        validity: Validity,
        key_passphrase: str | None = None,
    ) -> tuple[RSAPrivateKey, x509.Certificate]:
        """Self-sign a CA certificate with the key stored at key_file_path.

        Args:
            subject: Subject DN (dataclass, mapping, "/CN=..." string or x509.Name)
            key_file_path: PEM private key written by write_private_key
            cert_file_path: Destination of the PEM certificate
            validity: notBefore/notAfter window
            key_passphrase: Passphrase the key file was encrypted with

        Returns:
            Tuple of (private_key, certificate)

        Raises:
            GenerationError: If the key cannot be loaded, or signing or the write fails
        """
        key_file_path = Path(key_file_path)
        cert_file_path = Path(cert_file_path)
        try:
            key = deserialize_private_key(key_file_path.read_bytes(), key_passphrase)
            cert = CertificateBuilder.build_self_signed_ca(
                subject=build_subject(subject),
                private_key=key,
                validity=validity,
                signature_hash=self.config.hash_algorithm(),
            )
            write_certificate(cert_file_path, cert)
        except (OSError, ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise GenerationError(f"cannot write CA certificate {cert_file_path}: {e}") from e
        logger.debug("wrote CA certificate %s to %s", cert.subject.rfc4514_string(), cert_file_path)
        return key, cert

    def generate_ca(
        self,
        subject: Subject,
        key_file_path: Path | str,
        cert_file_path: Path | str,
        validity: Validity | None = None,
        key_passphrase: str | None = None,
    ) -> CAArtifacts:
        """Generate CA key and self-signed certificate, writing both to disk.

        Existing files are overwritten. A failure after the key is written
        leaves the key in place; rerunning regenerates both.

        Args:
            subject: Subject DN (dataclass, mapping, "/CN=..." string or x509.Name)
            key_file_path: Destination of the PEM private key (mode 0400)
            cert_file_path: Destination of the PEM certificate
            validity: Validity window (default: now + config.validity_days)
            key_passphrase: Encrypts the private key file when given

        Returns:
            CAArtifacts with key, certificate and file paths

        Raises:
            GenerationError: If any generation step fails
        """
        key_file_path = Path(key_file_path)
        cert_file_path = Path(cert_file_path)
        validity = validity or Validity.from_days(self.config.validity_days)

        self.write_private_key(key_file_path, key_passphrase)
        key, cert = self.write_ca_certificate(
            subject, key_file_path, cert_file_path, validity, key_passphrase
        )

        return CAArtifacts(
            private_key=key,
            certificate=cert,
            subject=cert.subject,
            validity=validity,
            key_file_path=key_file_path,
            cert_file_path=cert_file_path,
            serial=get_certificate_serial_hex(cert),
            key_passphrase=key_passphrase,
        )
