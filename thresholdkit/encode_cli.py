"""Command line tool converting a string between base64 and hex encodings."""

from __future__ import annotations

import argparse
import base64
import binascii
import re
import sys
from typing import Sequence

EXIT_OK = 0
EXIT_DATAERR = 65

_HEX_PATTERN = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _decode_hex(value: str) -> bytes:
    if not _HEX_PATTERN.fullmatch(value):
        raise ValueError("Invalid hex string")
    return bytes.fromhex(value)


def _decode_base64(value: str) -> bytes:
    try:
        data = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("Invalid base64 string") from None
    # Only the canonical encoding of the bytes is accepted.
    if base64.b64encode(data).decode("ascii") != value:
        raise ValueError("Invalid base64 string")
    return data


def base64_to_hex(value: str) -> tuple[bytes, str]:
    """Decode a base64 string; return the bytes and their lower-case hex encoding."""
    data = _decode_base64(value)
    return data, data.hex()


def hex_to_base64(value: str) -> tuple[bytes, str]:
    """Decode a hex string; return the bytes and their base64 encoding."""
    data = _decode_hex(value)
    return data, base64.b64encode(data).decode("ascii")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="encode-cli",
        description="Convert between base64 and hex encoding of a string",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("base64-to-hex", "Decode a base64 string into hex string."),
        ("hex-to-base64", "Decode a hex string into base64 string."),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("-v", "--value", required=True)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line tool and return its exit status."""
    args = _build_parser().parse_args(argv)
    try:
        if args.command == "base64-to-hex":
            data, encoded = base64_to_hex(args.value)
            label = "Hex"
        else:
            data, encoded = hex_to_base64(args.value)
            label = "Base64"
    except ValueError as error:
        print(f"Error: {error}")
        return EXIT_DATAERR
    print(f"Decoded bytes: {list(data)}")
    print(f'{label}: "{encoded}"')
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())