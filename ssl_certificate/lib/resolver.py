"""Chain source resolution: picks one backend per declared source and validates its content."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from .exceptions import ContentError
from .readers import read_from_attribute, read_from_chef_vault, read_from_data_bag, read_from_path

if TYPE_CHECKING:
    from .chain import ChainConfig

logger = logging.getLogger(__name__)


class ChainSource(StrEnum):
    """Known origins of intermediate chain content."""

    ATTRIBUTE = "attribute"
    DATA_BAG = "data_bag"
    CHEF_VAULT = "chef_vault"
    FILE = "file"


SOURCES: tuple[str, ...] = tuple(source.value for source in ChainSource)


def normalize_source(source: str | None) -> ChainSource | None:
    """Map a declared source ("chef-vault", " File ") to a ChainSource, or None."""
    if not isinstance(source, str):
        return None
    try:
        return ChainSource(source.strip().lower().replace("-", "_"))
    except ValueError:
        return None


@dataclass(frozen=True)
class ChainBackends:
    """Reader callables used for each source, replaceable for tests or other stores."""

    attribute: Callable[[Mapping[str, Any]], Any] = read_from_attribute
    data_bag: Callable[[str, str, str, bool, str | None], Any] = read_from_data_bag
    chef_vault: Callable[[str, str, str], Any] = read_from_chef_vault
    file: Callable[[str | None], Any] = read_from_path


def validate_content(content: Any, source: ChainSource, locator: str) -> str:
    """Return content as non-empty text.

    Raises:
        ContentError: If content is absent, empty, undecodable or not text
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError:
            raise ContentError(source.value, locator) from None
    if not isinstance(content, str) or not content:
        raise ContentError(source.value, locator)
    return content


class ChainResolver:
    """Resolves the chain content of a ChainConfig from its declared source."""

    def __init__(self, backends: ChainBackends | None = None) -> None:
        """Initialize resolver.

        Args:
            backends: Reader callables per source (default: the real readers)
        """
        self.backends = backends or ChainBackends()

    def resolve(self, config: "ChainConfig") -> str | None:
        """Read chain content from the backend matching config.source.

        Args:
            config: Chain attributes to resolve

        Returns:
            Chain content, or None when no recognized source is configured

        Raises:
            ContentError: If the recognized source yields no usable content
        """
        source = normalize_source(config.source)

        if source is ChainSource.ATTRIBUTE:
            content = self.backends.attribute(config.namespace)
            locator = "content key value"
        elif source is ChainSource.DATA_BAG:
            content = self.backends.data_bag(
                config.bag, config.item, config.item_key, config.encrypted, config.secret_file
            )
            locator = f"{config.bag}.{config.item}->{config.item_key}"
        elif source is ChainSource.CHEF_VAULT:
            content = self.backends.chef_vault(config.bag, config.item, config.item_key)
            locator = f"{config.bag}.{config.item}->{config.item_key}"
        elif source is ChainSource.FILE:
            path = config.path
            content = self.backends.file(path)
            locator = f"path {path}"
        else:
            logger.debug("No SSL intermediary chain provided.")
            return None

        return validate_content(content, source, locator)
