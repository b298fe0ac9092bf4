"""Certificate utility functions for key generation, serialization, and file output."""

import os
import uuid
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

PRIVATE_KEY_MODE = 0o400
CERTIFICATE_MODE = 0o644


def generate_private_key(key_size: int = 2048) -> RSAPrivateKey:
    """Generate RSA private key with specified size."""
    return rsa.generate_private_key(
        public_exponent=65537,
        key_size=key_size,
    )


def serialize_private_key(key: RSAPrivateKey, passphrase: str | None = None) -> bytes:
    """Serialize private key to traditional OpenSSL PEM.

    With a passphrase the PEM body is encrypted with AES in CBC mode
    (cryptography's best available PEM encryption); without one it is
    written in the clear.
    """
    if passphrase:
        encryption: serialization.KeySerializationEncryption = (
            serialization.BestAvailableEncryption(passphrase.encode("utf-8"))
        )
    else:
        encryption = serialization.NoEncryption()
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=encryption,
    )


def deserialize_private_key(pem_data: bytes, passphrase: str | None = None) -> RSAPrivateKey:
    """Deserialize private key from PEM bytes, decrypting with passphrase if given."""
    password = passphrase.encode("utf-8") if passphrase else None
    key = serialization.load_pem_private_key(pem_data, password=password)
    if not isinstance(key, RSAPrivateKey):
        raise ValueError("expected RSA private key")
    return key


def serialize_certificate(cert: x509.Certificate) -> bytes:
    """Serialize certificate to PEM format."""
    return cert.public_bytes(serialization.Encoding.PEM)


def deserialize_certificate(pem_data: bytes) -> x509.Certificate:
    """Deserialize certificate from PEM bytes."""
    return x509.load_pem_x509_certificate(pem_data)


def generate_serial_number() -> int:
    """Generate certificate serial number from UUID4 (128-bit, positive)."""
    return uuid.uuid4().int


def get_certificate_serial_hex(cert: x509.Certificate) -> str:
    """Return certificate serial number as hex with colons (e.g., 3A:F2:B1:...)."""
    serial_hex = f"{cert.serial_number:X}"
    if len(serial_hex) % 2 != 0:
        serial_hex = "0" + serial_hex
    return ":".join(serial_hex[i : i + 2] for i in range(0, len(serial_hex), 2))


def write_file(path: Path, data: bytes, mode: int) -> Path:
    """Write data to a freshly created file that already has mode before any byte lands.

    An existing file is removed first: a previous read-only key would
    otherwise refuse to be reopened for writing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.unlink(missing_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
    with os.fdopen(fd, "wb") as io:
        io.write(data)
    return path


def write_private_key(path: Path, key: RSAPrivateKey, passphrase: str | None = None) -> Path:
    """Write the PEM private key to path with owner-only read permission."""
    return write_file(path, serialize_private_key(key, passphrase), PRIVATE_KEY_MODE)


def write_certificate(path: Path, cert: x509.Certificate) -> Path:
    """Write the PEM certificate to path."""
    return write_file(path, serialize_certificate(cert), CERTIFICATE_MODE)
