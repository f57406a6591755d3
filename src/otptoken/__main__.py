"""Print the one-time password for an otpauth://totp/ URI."""

import argparse
import logging
import sys
from typing import List, Optional

from . import ParseError, generate, parse_uri

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="otptoken",
        description="Generate the TOTP code for an otpauth://totp/ provisioning URI.",
    )
    parser.add_argument("uri", help="otpauth://totp/<label>?secret=<base32>&... URI")
    parser.add_argument(
        "--time",
        type=int,
        default=None,
        metavar="SECONDS",
        help="Unix time to generate the code for (default: now)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        token = parse_uri(args.uri)
    except ParseError as e:
        log.debug("URI rejected", exc_info=True)
        print("otptoken: {}".format(e), file=sys.stderr)
        return 2

    print(generate(token, args.time))
    return 0


if __name__ == "__main__":
    sys.exit(main())
