"""Certificate chain attributes with platform and namespace defaults."""

import os
import threading
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from .readers import NAMESPACE_KEY, read_namespace
from .resolver import ChainResolver

T = TypeVar("T")

# Declared evaluation order: content depends on source, which may depend on the rest.
ATTRIBUTES: tuple[str, ...] = (
    "path",
    "name",
    "directory",
    "source",
    "bag",
    "item",
    "item_key",
    "encrypted",
    "secret_file",
    "content",
)

DEBIAN_CERT_DIR = "/etc/ssl/certs"
RHEL_CERT_DIR = "/etc/pki/tls/certs"
FALLBACK_CERT_DIR = "/etc"

PLATFORM_CERT_DIRS: Mapping[str, str] = {
    "debian": DEBIAN_CERT_DIR,
    "ubuntu": DEBIAN_CERT_DIR,
    "redhat": RHEL_CERT_DIR,
    "rhel": RHEL_CERT_DIR,
    "centos": RHEL_CERT_DIR,
    "fedora": RHEL_CERT_DIR,
    "scientific": RHEL_CERT_DIR,
    "amazon": RHEL_CERT_DIR,
}

DEFAULT_SECRET_FILE = "/etc/chef/encrypted_data_bag_secret"


def platform_cert_dir(platform: str | None) -> str:
    """Return the default certificate directory for a platform or platform family."""
    return PLATFORM_CERT_DIRS.get((platform or "").lower(), FALLBACK_CERT_DIR)


class ComputeOnce(Generic[T]):
    """Holds a value computed on first access.

    A computation that raises leaves the cell empty.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = False
        self._value: T | None = None

    @property
    def done(self) -> bool:
        return self._done

    def get(self, compute: Callable[[], T]) -> T:
        if not self._done:
            with self._lock:
                if not self._done:
                    self._value = compute()
                    self._done = True
        return self._value  # type: ignore[return-value]


class ChainAttribute:
    """Typed attribute that falls back to the owner's default_<name>() when unset."""

    def __init__(self, kind: type) -> None:
        self.kind = kind

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: "ChainConfig | None", owner: type) -> Any:
        if instance is None:
            return self
        if self.name in instance._values:
            return instance._values[self.name]
        value = getattr(instance, f"default_{self.name}")()
        if value is not None:
            self.check(value)
        return value

    def __set__(self, instance: "ChainConfig", value: Any) -> None:
        if value is None:
            instance._values.pop(self.name, None)
            return
        self.check(value)
        instance._values[self.name] = value

    def check(self, value: Any) -> None:
        if not isinstance(value, self.kind):
            raise TypeError(
                f"{self.name} must be {self.kind.__name__}, got {type(value).__name__}"
            )


class ChainConfig:
    """Intermediate chain settings of one certificate declaration.

    Attributes left unset are computed on read from the platform and the
    attribute namespace, so overriding name also moves the derived path.
    content is resolved through the resolver the first time it is read and
    cached for the life of the instance.

    Args:
        platform: Platform or platform family name ("ubuntu", "centos", ...)
        namespace: Attribute namespace consulted for defaults (ssl_chain.*)
        resolver: Resolver used for content (default: ChainResolver())
        **attributes: Initial values for any name in ATTRIBUTES
    """

    path = ChainAttribute(str)
    name = ChainAttribute(str)
    directory = ChainAttribute(str)
    source = ChainAttribute(str)
    bag = ChainAttribute(str)
    item = ChainAttribute(str)
    item_key = ChainAttribute(str)
    encrypted = ChainAttribute(bool)
    secret_file = ChainAttribute(str)

    def __init__(
        self,
        platform: str = "",
        namespace: Mapping[str, Any] | None = None,
        resolver: ChainResolver | None = None,
        **attributes: Any,
    ) -> None:
        unknown = set(attributes) - set(ATTRIBUTES)
        if unknown:
            raise TypeError(f"unknown chain attributes: {', '.join(sorted(unknown))}")

        self.platform = platform
        self.namespace: Mapping[str, Any] = namespace or {}
        self.resolver = resolver or ChainResolver()
        self._values: dict[str, Any] = {}
        self._content: ComputeOnce[str | None] = ComputeOnce()

        for attribute in ATTRIBUTES:
            if attribute in attributes:
                setattr(self, attribute, attributes[attribute])

    @property
    def content(self) -> str | None:
        """Chain content: the assigned value, or resolved once from the source."""
        if "content" in self._values:
            return self._values["content"]
        return self._content.get(lambda: self.resolver.resolve(self))

    @content.setter
    def content(self, value: str | None) -> None:
        if self._content.done:
            raise AttributeError("chain content is already resolved")
        if value is None:
            self._values.pop("content", None)
        elif isinstance(value, str):
            self._values["content"] = value
        else:
            raise TypeError(f"content must be str, got {type(value).__name__}")

    def _namespace(self, *keys: str) -> Any:
        return read_namespace(self.namespace, NAMESPACE_KEY, *keys)

    def default_path(self) -> str | None:
        name = self.name
        if name is None:
            return None
        return os.path.join(self.directory, name)

    def default_name(self) -> str | None:
        return self._namespace("name")

    def default_directory(self) -> str:
        return platform_cert_dir(self.platform)

    def default_source(self) -> str | None:
        return self._namespace("source")

    def default_bag(self) -> str | None:
        return self._namespace("bag") or read_namespace(self.namespace, "bag")

    def default_item(self) -> str | None:
        return self._namespace("item") or read_namespace(self.namespace, "item")

    def default_item_key(self) -> str | None:
        return self._namespace("item_key")

    def default_encrypted(self) -> bool:
        encrypted = self._namespace("encrypted")
        if encrypted is None:
            encrypted = read_namespace(self.namespace, "encrypted")
        return False if encrypted is None else encrypted

    def default_secret_file(self) -> str:
        return (
            self._namespace("secret_file")
            or read_namespace(self.namespace, "secret_file")
            or DEFAULT_SECRET_FILE
        )

    def to_dict(self) -> dict[str, Any]:
        """Return every attribute except content, defaults applied."""
        return {attribute: getattr(self, attribute) for attribute in ATTRIBUTES[:-1]}
