"""Tests for chain source resolution."""

from unittest.mock import MagicMock, patch

import pytest

from ssl_certificate.lib.chain import ChainConfig
from ssl_certificate.lib.exceptions import ContentError
from ssl_certificate.lib.resolver import (
    SOURCES,
    ChainResolver,
    ChainSource,
    normalize_source,
    validate_content,
)

DATA_BAG_ATTRS = {"bag": "ssl", "item": "web", "item_key": "chain"}


def make_chain(resolver: ChainResolver, source: str, **attributes: object) -> ChainConfig:
    """Build a ChainConfig with locators for every source."""
    values = {**DATA_BAG_ATTRS, "path": "/etc/ssl/certs/chain.pem", **attributes}
    return ChainConfig(
        platform="ubuntu",
        namespace={"ssl_chain": {"content": "from-namespace"}},
        resolver=resolver,
        source=source,
        **values,
    )


class TestNormalizeSource:
    """Tests for source tag normalization."""

    @pytest.mark.parametrize(
        ("declared", "expected"),
        [
            ("attribute", ChainSource.ATTRIBUTE),
            ("data_bag", ChainSource.DATA_BAG),
            ("data-bag", ChainSource.DATA_BAG),
            ("chef-vault", ChainSource.CHEF_VAULT),
            (" File ", ChainSource.FILE),
        ],
    )
    def test_known_tags(self, declared: str, expected: ChainSource) -> None:
        """Separators, case and padding normalize to a known source."""
        assert normalize_source(declared) is expected

    @pytest.mark.parametrize("declared", ["s3", "", "data bag", None])
    def test_unknown_tags(self, declared: str | None) -> None:
        """Anything else is not a source."""
        assert normalize_source(declared) is None

    def test_sources_constant(self) -> None:
        """SOURCES lists the four tags in declaration order."""
        assert SOURCES == ("attribute", "data_bag", "chef_vault", "file")


class TestResolveSuccess:
    """Tests for resolving each recognized source."""

    def test_attribute_reads_namespace(
        self, resolver: ChainResolver, backends: MagicMock, chain_pem: str
    ) -> None:
        """attribute passes the namespace to the attribute reader."""
        chain = make_chain(resolver, "attribute")

        assert chain.content == chain_pem
        backends.attribute.assert_called_once_with({"ssl_chain": {"content": "from-namespace"}})

    def test_data_bag_passes_locator_and_secret(
        self, resolver: ChainResolver, backends: MagicMock, chain_pem: str
    ) -> None:
        """data_bag passes bag, item, key, encryption flag and secret file."""
        chain = make_chain(resolver, "data_bag", encrypted=True, secret_file="/etc/secret")

        assert chain.content == chain_pem
        backends.data_bag.assert_called_once_with("ssl", "web", "chain", True, "/etc/secret")

    def test_chef_vault_passes_locator(
        self, resolver: ChainResolver, backends: MagicMock, chain_pem: str
    ) -> None:
        """chef_vault passes bag, item and key."""
        chain = make_chain(resolver, "chef-vault")

        assert chain.content == chain_pem
        backends.chef_vault.assert_called_once_with("ssl", "web", "chain")

    def test_file_uses_derived_path(
        self, resolver: ChainResolver, backends: MagicMock, chain_pem: str
    ) -> None:
        """file derives the path from directory and name before reading."""
        chain = ChainConfig(platform="centos", source="file", name="chain.pem", resolver=resolver)

        assert chain.content == chain_pem
        backends.file.assert_called_once_with("/etc/pki/tls/certs/chain.pem")

    @pytest.mark.parametrize("source", SOURCES)
    def test_backend_called_once_per_instance(
        self, resolver: ChainResolver, backends: MagicMock, source: str, chain_pem: str
    ) -> None:
        """Every source hits its backend once however often content is read."""
        chain = make_chain(resolver, source)

        for _ in range(3):
            assert chain.content == chain_pem
        assert getattr(backends, source).call_count == 1

    @pytest.mark.parametrize("source", SOURCES)
    def test_only_matching_backend_called(
        self, resolver: ChainResolver, backends: MagicMock, source: str
    ) -> None:
        """Exactly one backend is consulted."""
        make_chain(resolver, source).content

        for other in SOURCES:
            expected = 1 if other == source else 0
            assert getattr(backends, other).call_count == expected


class TestResolveFailure:
    """Tests for ContentError on unusable backend results."""

    @pytest.mark.parametrize("bad", [None, "", b"", 42, b"\xff\xfe"])
    @pytest.mark.parametrize("source", ["data_bag", "chef_vault"])
    def test_item_sources_name_locator(
        self, resolver: ChainResolver, backends: MagicMock, source: str, bad: object
    ) -> None:
        """Item store failures name bag.item->item_key."""
        getattr(backends, source).return_value = bad

        with pytest.raises(ContentError, match=r"ssl\.web->chain") as excinfo:
            make_chain(resolver, source).content

        assert excinfo.value.source == source
        assert excinfo.value.locator == "ssl.web->chain"

    @pytest.mark.parametrize("bad", [None, "", b""])
    def test_file_names_path(
        self, resolver: ChainResolver, backends: MagicMock, bad: object
    ) -> None:
        """File failures name the path."""
        backends.file.return_value = bad

        with pytest.raises(ContentError, match="/etc/ssl/certs/chain.pem"):
            make_chain(resolver, "file").content

    @pytest.mark.parametrize("bad", [None, "", ["list"]])
    def test_attribute_failure(
        self, resolver: ChainResolver, backends: MagicMock, bad: object
    ) -> None:
        """Missing or non-text attribute content fails."""
        backends.attribute.return_value = bad

        with pytest.raises(ContentError, match="Cannot read SSL intermediary chain from attribute"):
            make_chain(resolver, "attribute").content

    def test_file_without_name_or_path(self, resolver: ChainResolver, backends: MagicMock) -> None:
        """An unset path is passed through and reported."""
        backends.file.return_value = None
        chain = ChainConfig(source="file", resolver=resolver)

        with pytest.raises(ContentError, match="path None"):
            chain.content
        backends.file.assert_called_once_with(None)

    def test_content_error_is_value_error(self) -> None:
        """ContentError can be caught as ValueError."""
        with pytest.raises(ValueError):
            validate_content(None, ChainSource.FILE, "path /x")


class TestUnrecognizedSource:
    """Tests for sources that match no backend."""

    @pytest.mark.parametrize("source", ["s3", "vault", "data bag"])
    def test_returns_none_without_backend_calls(
        self, resolver: ChainResolver, backends: MagicMock, source: str
    ) -> None:
        """No content, no error, no backend touched."""
        chain = make_chain(resolver, source)

        assert chain.content is None
        for name in SOURCES:
            getattr(backends, name).assert_not_called()

    def test_unset_source_returns_none(self, resolver: ChainResolver) -> None:
        """A chain without any source resolves to None."""
        assert ChainConfig(resolver=resolver).content is None

    def test_logs_debug_note(self, resolver: ChainResolver) -> None:
        """A debug note records that no chain was provided."""
        with patch("ssl_certificate.lib.resolver.logger") as mock_logger:
            assert resolver.resolve(ChainConfig(source="s3", resolver=resolver)) is None

        mock_logger.debug.assert_called_once_with("No SSL intermediary chain provided.")


class TestValidateContent:
    """Tests for validate_content."""

    def test_decodes_bytes(self) -> None:
        """UTF-8 bytes come back as str."""
        assert validate_content(b"pem", ChainSource.FILE, "path /x") == "pem"

    def test_keeps_str(self) -> None:
        """Text is returned unchanged."""
        assert validate_content("pem", ChainSource.ATTRIBUTE, "content key value") == "pem"
