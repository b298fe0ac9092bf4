#!/usr/bin/env python3
"""Resolve intermediate chain content from its configured source and print it."""

import argparse
import sys

from ssl_certificate.lib.chain import ChainConfig
from ssl_certificate.lib.exceptions import ContentError
from ssl_certificate.lib.logging_config import LOGGER, set_verbose
from ssl_certificate.lib.resolver import SOURCES

EXIT_NO_CONTENT = 2


def main(argv: list[str] | None = None) -> int:
    """Resolve chain content and write it to stdout.

    Returns:
        Exit code (0 for success, 1 on content errors, 2 when no source is configured)
    """
    parser = argparse.ArgumentParser(description="Resolve SSL intermediate chain content")
    parser.add_argument("--source", help=f"Chain source ({', '.join(SOURCES)})")
    parser.add_argument("--bag", help="Data bag or vault name")
    parser.add_argument("--item", help="Data bag or vault item")
    parser.add_argument("--item-key", help="Key inside the item")
    parser.add_argument("--encrypted", action="store_true", help="Data bag value is encrypted")
    parser.add_argument("--secret-file", help="Data bag secret file")
    parser.add_argument("--path", help="Chain file path")
    parser.add_argument("--name", help="Chain file name, joined to --directory when --path is unset")
    parser.add_argument("--directory", help="Chain directory (default: platform certificate dir)")
    parser.add_argument("--platform", default="", help="Platform name, e.g. ubuntu or centos")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    set_verbose(args.verbose)

    chain = ChainConfig(
        platform=args.platform,
        source=args.source,
        bag=args.bag,
        item=args.item,
        item_key=args.item_key,
        encrypted=args.encrypted or None,
        secret_file=args.secret_file,
        path=args.path,
        name=args.name,
        directory=args.directory,
    )
    LOGGER.debug("Chain attributes: %s", chain.to_dict())

    try:
        content = chain.content
    except ContentError as e:
        LOGGER.error("%s", e)
        return 1

    if content is None:
        LOGGER.info("No SSL intermediary chain provided.")
        return EXIT_NO_CONTENT

    sys.stdout.write(content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
