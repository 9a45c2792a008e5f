"""bsonutil command-line interface.

Usage:
    python3 -m bsonutil decode int32 2a000000
    python3 -m bsonutil decode string 0400000061006200 --raw
    python3 -m bsonutil encode double 1.5
    python3 -m bsonutil key 42
    python3 -m bsonutil size --index 42
    python3 -m bsonutil version
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, List, Optional

from . import (
    READERS,
    BsonError,
    ByteSpan,
    __version__,
    array_key_size,
    encode,
    index_to_key,
    object_key_size,
    read,
    read_string,
    string_value_size,
)

_ENCODE_KINDS = ["int32", "int64", "double", "bool", "cstring", "string"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bsonutil",
        description="bsonutil: BSON primitive encode/decode",
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log decoder diagnostics to stderr")
    sub = parser.add_subparsers(dest="command")

    # ── decode ──
    dec_p = sub.add_parser("decode", help="Decode one value from hex bytes")
    dec_p.add_argument("kind", choices=sorted(READERS))
    dec_p.add_argument("hex", help="Input bytes as hex (whitespace allowed)")
    dec_p.add_argument("--offset", type=int, default=0,
                       help="Byte offset to start reading at")
    dec_p.add_argument("--raw", action="store_true",
                       help="Print the content bytes as hex instead of text "
                            "(string only)")

    # ── encode ──
    enc_p = sub.add_parser("encode", help="Encode one value as hex bytes")
    enc_p.add_argument("kind", choices=_ENCODE_KINDS)
    enc_p.add_argument("value")

    # ── key ──
    key_p = sub.add_parser("key", help="Array index key as hex bytes")
    key_p.add_argument("index", type=int)

    # ── size ──
    size_p = sub.add_parser("size", help="Wire size of a key or string value")
    size_g = size_p.add_mutually_exclusive_group(required=True)
    size_g.add_argument("--key", metavar="TEXT", help="Object key")
    size_g.add_argument("--index", type=int, metavar="N", help="Array index key")
    size_g.add_argument("--string", metavar="TEXT", help="Length-prefixed string value")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _parse_hex(text: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise ValueError("not a hex string: {!r}".format(text)) from None


def _parse_value(kind: str, text: str) -> Any:
    if kind in ("int32", "int64"):
        return int(text, 0)
    if kind == "double":
        return float(text)
    if kind == "bool":
        lowered = text.lower()
        if lowered in ("1", "true"):
            return True
        if lowered in ("0", "false"):
            return False
        raise ValueError("not a boolean: {!r}".format(text))
    return text


def _cmd_decode(args: argparse.Namespace) -> None:
    span = ByteSpan(_parse_hex(args.hex), offset=args.offset)
    if args.kind == "string" and args.raw:
        result = read_string(span, raw=True)
        shown = result.value.hex()
    else:
        result = read(span, args.kind)
        shown = repr(result.value)
    print("{} consumed={} remaining={}".format(shown, result.consumed, span.remaining))


def _cmd_encode(args: argparse.Namespace) -> None:
    print(encode(args.kind, _parse_value(args.kind, args.value)).hex())


def _cmd_size(args: argparse.Namespace) -> None:
    if args.key is not None:
        print(object_key_size(args.key))
    elif args.index is not None:
        print(array_key_size(args.index))
    else:
        print(string_value_size(args.string))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command == "decode" and args.raw and args.kind != "string":
        parser.error("--raw only applies to: decode string")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"bsonutil {__version__}")
        return

    try:
        if args.command == "decode":
            _cmd_decode(args)
        elif args.command == "encode":
            _cmd_encode(args)
        elif args.command == "key":
            print(index_to_key(args.index).hex())
        elif args.command == "size":
            _cmd_size(args)
    except BsonError as e:
        print(f"bsonutil: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"bsonutil: bad input: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
