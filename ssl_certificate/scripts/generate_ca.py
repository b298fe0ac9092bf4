#!/usr/bin/env python3
"""Generate a self-signed CA private key and certificate."""

import argparse
import os
import sys
from pathlib import Path

from ssl_certificate.lib.ca_manager import CAManager
from ssl_certificate.lib.config import PASSPHRASE_ENV_VAR, CAConfig
from ssl_certificate.lib.exceptions import GenerationError
from ssl_certificate.lib.logging_config import LOGGER, set_verbose
from ssl_certificate.lib.models import Validity


def main(argv: list[str] | None = None) -> int:
    """Generate CA key and certificate files.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Generate a self-signed CA key and certificate")
    parser.add_argument(
        "--subject",
        default=None,
        help='OpenSSL style subject, e.g. "/C=ES/O=Example/CN=Example CA" (default: CAConfig subject fields)',
    )
    parser.add_argument("--key-file", type=Path, required=True, help="Private key output path")
    parser.add_argument("--cert-file", type=Path, required=True, help="Certificate output path")
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help="Validity in days (default: CAConfig.validity_days)",
    )
    parser.add_argument(
        "--passphrase-env",
        default=PASSPHRASE_ENV_VAR,
        help=f"Environment variable holding the key passphrase (default: {PASSPHRASE_ENV_VAR})",
    )
    parser.add_argument(
        "--signature-hash",
        default=CAConfig.signature_hash,
        help=f"Signature digest (default: {CAConfig.signature_hash})",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    set_verbose(args.verbose)

    try:
        config = CAConfig(signature_hash=args.signature_hash)
        days = args.days if args.days is not None else config.validity_days
        passphrase = os.environ.get(args.passphrase_env) or None

        LOGGER.info("Generating CA...")
        result = CAManager(config).generate_ca(
            subject=args.subject or config.default_subject(),
            key_file_path=args.key_file,
            cert_file_path=args.cert_file,
            validity=Validity.from_days(days),
            key_passphrase=passphrase,
        )

        LOGGER.info("CA created:")
        LOGGER.info("  Key: %s (%s)", result.key_file_path, "encrypted" if passphrase else "unencrypted")
        LOGGER.info("  Cert: %s", result.cert_file_path)
        LOGGER.info("  Serial: %s", result.serial)
        return 0

    except (GenerationError, ValueError) as e:
        LOGGER.error("CA generation failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
