"""Backend readers returning raw chain content or None when absent.

Each reader works only on its explicit arguments so it can be swapped or
mocked independently. Absence is reported as None; turning that into an
error is the resolver's job.
"""

import base64
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes

from .dynamodb_client import DynamoDBClient
from .ssm_client import SSMClient

logger = logging.getLogger(__name__)

NAMESPACE_KEY = "ssl_chain"


def read_namespace(namespace: Mapping[str, Any], *keys: str) -> Any:
    """Walk nested mappings by keys, returning None on the first missing level."""
    value: Any = namespace
    for key in keys:
        if not isinstance(value, Mapping) or key not in value:
            return None
        value = value[key]
    return value


def read_from_attribute(namespace: Mapping[str, Any]) -> Any:
    """Return the chain content configured under ssl_chain.content."""
    return read_namespace(namespace, NAMESPACE_KEY, "content")


def data_bag_fernet(secret: bytes) -> Fernet:
    """Build the Fernet cipher for encrypted data bag values from a shared secret."""
    digest = hashes.Hash(hashes.SHA256())
    digest.update(secret.strip())
    return Fernet(base64.urlsafe_b64encode(digest.finalize()))


def encrypt_data_bag_value(value: str | bytes, secret: bytes) -> str:
    """Encrypt a value the way read_from_data_bag expects to find it."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return data_bag_fernet(secret).encrypt(value).decode("ascii")


def read_from_data_bag(
    bag: str,
    item: str,
    item_key: str,
    encrypted: bool = False,
    secret_file: str | None = None,
    client: DynamoDBClient | None = None,
) -> bytes | None:
    """Read bag/item/item_key from the item store.

    Args:
        bag: Data bag (table) name
        item: Item id
        item_key: Key inside the item
        encrypted: Whether the value is encrypted with the data bag secret
        secret_file: Path of the file holding the data bag secret
        client: Item store client (default: a new DynamoDBClient)

    Returns:
        The (decrypted) value as bytes, or None when missing or undecryptable
    """
    if not (bag and item and item_key):
        return None

    client = client or DynamoDBClient()
    value = client.get_item_value(bag, item, item_key)
    if value is None:
        return None
    if isinstance(value, str):
        value = value.encode("utf-8")
    if not encrypted:
        return value

    secret = read_from_path(secret_file)
    if secret is None:
        logger.warning("data bag secret file %s is not readable", secret_file)
        return None
    try:
        return data_bag_fernet(secret).decrypt(value)
    except InvalidToken:
        logger.warning("cannot decrypt data bag value %s.%s->%s", bag, item, item_key)
        return None


def read_from_chef_vault(
    bag: str, item: str, item_key: str, client: SSMClient | None = None
) -> bytes | None:
    """Read bag/item/item_key from the secret broker (decrypted by the broker)."""
    if not (bag and item and item_key):
        return None

    client = client or SSMClient()
    return client.get_secret(bag, item, item_key)


def read_from_path(path: str | Path | None) -> bytes | None:
    """Read raw bytes from path; None if unset, missing or unreadable."""
    if not path:
        return None
    try:
        return Path(path).read_bytes()
    except OSError as e:
        logger.debug("cannot read %s: %s", path, e)
        return None
