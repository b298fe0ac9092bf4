"""Test fixtures for ssl_certificate tests."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from cryptography import x509
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from ssl_certificate.lib.cert_utils import generate_private_key
from ssl_certificate.lib.certificate_builder import CertificateBuilder
from ssl_certificate.lib.config import CAConfig, DistinguishedName
from ssl_certificate.lib.models import Validity
from ssl_certificate.lib.resolver import ChainBackends, ChainResolver

CHAIN_PEM = "-----BEGIN CERTIFICATE-----\nchain\n-----END CERTIFICATE-----\n"


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Return temporary directory for test output artifacts."""
    return tmp_path


@pytest.fixture
def ca_config() -> CAConfig:
    """Return test CA configuration."""
    return CAConfig(
        country="GB",
        state="London",
        locality="London",
        organization="Test Org",
        organizational_unit="Test Unit",
        common_name="Test CA",
        key_size=2048,
        validity_days=30,
    )


@pytest.fixture
def ca_dn() -> DistinguishedName:
    """Return test CA distinguished name."""
    return DistinguishedName(
        country="GB",
        state="London",
        locality="London",
        organization="Test Org",
        organizational_unit="Test Unit",
        common_name="Test CA",
    )


@pytest.fixture
def validity() -> Validity:
    """Return a one-day validity window starting now."""
    return Validity.from_days(1)


@pytest.fixture
def ca_key() -> RSAPrivateKey:
    """Generate RSA private key for the CA."""
    return generate_private_key(key_size=2048)


@pytest.fixture
def ca_cert(
    ca_key: RSAPrivateKey, ca_dn: DistinguishedName, validity: Validity
) -> x509.Certificate:
    """Build self-signed CA certificate."""
    return CertificateBuilder.build_self_signed_ca(
        subject=ca_dn.to_x509_name(),
        private_key=ca_key,
        validity=validity,
    )


@pytest.fixture
def backends() -> MagicMock:
    """Return mocked reader callables, all returning CHAIN_PEM."""
    mock = MagicMock(spec=ChainBackends)
    mock.attribute.return_value = CHAIN_PEM
    mock.data_bag.return_value = CHAIN_PEM.encode()
    mock.chef_vault.return_value = CHAIN_PEM.encode()
    mock.file.return_value = CHAIN_PEM.encode()
    return mock


@pytest.fixture
def resolver(backends: MagicMock) -> ChainResolver:
    """Return resolver wired to the mocked backends."""
    return ChainResolver(backends)


@pytest.fixture
def chain_pem() -> str:
    """Return the chain content served by the mocked backends."""
    return CHAIN_PEM
