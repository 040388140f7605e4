"""Command-line interface for custom_id.

Two subcommands:
- decode: print the prefix, segments and fields of custom IDs as JSON lines
- encode: build a custom ID from a prefix and ``-f name=value`` fields
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Iterable

from .errors import CustomIdError
from .fields import ARRAY_SEPARATOR, FieldValue
from .identifier import CustomId
from .options import EncodeOptions
from .serializer import MAX_LENGTH


def _read_ids(raw: str) -> Iterable[str]:
    if raw == "-":
        return (line.rstrip("\r\n") for line in sys.stdin)
    return [raw]


def _field_arg(text: str) -> tuple[str, FieldValue]:
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected name=value, got {text!r}")
    if ARRAY_SEPARATOR in value:
        return name, value.split(ARRAY_SEPARATOR)
    return name, value


def _decode(args: argparse.Namespace) -> int:
    for raw in _read_ids(args.raw):
        cid = CustomId(raw)
        doc = {
            "prefix": cid.prefix,
            "segments": cid.segments,
            "fields": dict(cid.get_fields()),
        }
        sys.stdout.write(json.dumps(doc) + "\n")
    return 0


def _encode(args: argparse.Namespace) -> int:
    cid = CustomId(args.prefix)
    for name, value in args.fields:
        cid.set_field(name, value)
    options = EncodeOptions(
        skip_falsy_values=not args.keep_falsy,
        convert_true_to_one=args.true_to_one,
    )
    sys.stdout.write(cid.serialize(options, limit=args.limit) + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="custom-id", description="Encode and decode custom IDs with fields.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    sub = p.add_subparsers(dest="command", required=True)

    d = sub.add_parser("decode", help="Decode custom IDs to JSON")
    d.add_argument("raw", help="Custom ID, or '-' to read one per line from stdin")
    d.set_defaults(func=_decode)

    e = sub.add_parser("encode", help="Encode a prefix and fields into a custom ID")
    e.add_argument("prefix", help="Custom ID prefix, e.g. ban/confirm")
    e.add_argument("-f", "--field", dest="fields", action="append", default=[], type=_field_arg,
                   metavar="NAME=VALUE", help="Field to set; commas make an array (repeatable)")
    e.add_argument("--keep-falsy", action="store_true", help="Encode empty and zero values too")
    e.add_argument("--true-to-one", action="store_true", help="Write true as 1")
    e.add_argument("--limit", type=int, default=MAX_LENGTH, help="Maximum output length (default: %(default)s)")
    e.set_defaults(func=_encode)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except CustomIdError as ex:
        sys.stderr.write(f"error: {ex}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
