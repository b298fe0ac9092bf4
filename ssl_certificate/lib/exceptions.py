"""Error kinds raised by chain resolution and CA generation."""


class SSLCertificateError(Exception):
    """Base class for ssl_certificate errors."""


class ContentError(SSLCertificateError, ValueError):
    """A recognized chain source returned absent, empty or non-text content."""

    def __init__(self, source: str, locator: str) -> None:
        self.source = source
        self.locator = locator
        super().__init__(f"Cannot read SSL intermediary chain from {source}: {locator}")


class GenerationError(SSLCertificateError):
    """CA key or certificate generation failed."""
