"""Certificate builder for self-signed CA certificates."""

from collections.abc import Callable

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from .cert_utils import generate_serial_number
from .models import Validity

CA_BASIC_CONSTRAINTS = x509.BasicConstraints(ca=True, path_length=None)

# keyUsage=cRLSign,keyCertSign
CA_KEY_USAGE = x509.KeyUsage(
    digital_signature=False,
    content_commitment=False,
    key_encipherment=False,
    data_encipherment=False,
    key_agreement=False,
    key_cert_sign=True,
    crl_sign=True,
    encipher_only=False,
    decipher_only=False,
)

# (extension factory, critical) in the order they are attached.
CA_EXTENSIONS: tuple[tuple[Callable[[RSAPublicKey], x509.ExtensionType], bool], ...] = (
    (x509.SubjectKeyIdentifier.from_public_key, False),
    (lambda _public_key: CA_BASIC_CONSTRAINTS, True),
    (lambda _public_key: CA_KEY_USAGE, True),
)


class CertificateBuilder:
    """Builds self-signed X.509 CA certificates."""

    @staticmethod
    def build_self_signed_ca(
        subject: x509.Name,
        private_key: RSAPrivateKey,
        validity: Validity,
        signature_hash: hashes.HashAlgorithm | None = None,
    ) -> x509.Certificate:
        """Build self-signed CA certificate.

        Issuer is the subject itself and the certificate carries exactly the
        CA_EXTENSIONS set. The digest defaults to SHA-256.

        Args:
            subject: Subject (and issuer) name
            private_key: RSA private key for the certificate and its signature
            validity: notBefore/notAfter window
            signature_hash: Digest for the signature (default: SHA-256)

        Returns:
            Self-signed X.509 certificate with CA extensions
        """
        public_key = private_key.public_key()

        builder = (
            x509.CertificateBuilder()
            .subject_name(subject)
            .issuer_name(subject)
            .public_key(public_key)
            .serial_number(generate_serial_number())
            .not_valid_before(validity.not_before)
            .not_valid_after(validity.not_after)
        )
        for factory, critical in CA_EXTENSIONS:
            builder = builder.add_extension(factory(public_key), critical=critical)

        return builder.sign(private_key, signature_hash or hashes.SHA256())
