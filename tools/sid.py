#!/usr/bin/env python3
"""SteamID inspector: decode, encode, parse and format 64-bit SteamIDs.

Usage:
    python3 tools/sid.py <command> [args...]

Commands:
    decode <id>         Show the fields of a packed SteamID
    encode --account N  Pack fields into a SteamID
    parse <text>        Text form ([U:1:12345]) to packed SteamID
    format <id>         Packed SteamID to text form
    check <id>...       Report validity (non-zero universe) for each ID

Packed IDs may be given in decimal or 0x-prefixed hex.

Environment:
    STEAMID_UNIVERSE    Default universe for encode (default: 1)
    STEAMID_TYPE        Default type letter for encode (default: U)
"""

import argparse
import json
import os
import sys

from steamid.core.steam_id import SteamID, SteamIdComponents, is_valid
from steamid.core.text_form import (
    LETTER_TO_TYPE,
    SteamIdParseError,
    format_text_form,
    parse_text_form,
)

DEFAULT_UNIVERSE = int(os.environ.get("STEAMID_UNIVERSE", "1"))
DEFAULT_TYPE = os.environ.get("STEAMID_TYPE", "U")


def fail(message):
    """Print error and exit."""
    print(f"ERROR: {message}", file=sys.stderr)
    sys.exit(1)


def packed_id(value: str) -> int:
    """argparse type for a packed SteamID in decimal or hex."""
    try:
        steam_id = int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if not 0 <= steam_id < 1 << 64:
        raise argparse.ArgumentTypeError(f"not a 64-bit unsigned value: {value!r}")
    return steam_id


def describe(steam_id: int) -> dict:
    sid = SteamID(steam_id)
    account_type = sid.account_type
    return {
        "steam_id": steam_id,
        "text": format_text_form(steam_id),
        "account_number": sid.account_number,
        "instance": sid.instance,
        "type_code": sid.type_code,
        "type": account_type.name if account_type is not None else None,
        "universe_code": sid.universe_code,
        "valid": sid.is_valid(),
    }


def print_fields(fields: dict):
    """Print key/value pairs in an aligned column."""
    width = max(len(k) for k in fields)
    for k, v in fields.items():
        print(f"{k:<{width}}  {v}")


def emit(args, fields: dict):
    if args.json:
        print(json.dumps(fields, indent=2))
    else:
        print_fields(fields)


# ---- Commands ----

def cmd_decode(args):
    emit(args, describe(args.id))


def cmd_encode(args):
    if args.type not in LETTER_TO_TYPE:
        fail(f"Unknown type letter {args.type!r}")
    components = SteamIdComponents(
        account_number=args.account,
        instance=args.instance,
        type_code=int(LETTER_TO_TYPE[args.type]),
        universe_code=args.universe,
    )
    try:
        sid = SteamID.from_components(components, strict=args.strict)
    except ValueError as e:
        fail(e)
    if args.json:
        print(json.dumps(describe(sid.value), indent=2))
    else:
        print(sid.value)


def cmd_parse(args):
    try:
        steam_id = parse_text_form(args.text)
    except SteamIdParseError as e:
        fail(f"{e} ({e.kind.value})")
    emit(args, describe(steam_id))


def cmd_format(args):
    text = format_text_form(args.id)
    if args.json:
        print(json.dumps({"steam_id": args.id, "text": text}, indent=2))
    else:
        print(text)


def cmd_check(args):
    results = [(steam_id, is_valid(steam_id)) for steam_id in args.ids]
    if args.json:
        print(json.dumps([{"steam_id": s, "valid": ok} for s, ok in results], indent=2))
    else:
        for steam_id, ok in results:
            print(f"{steam_id}  {format_text_form(steam_id)}  {'valid' if ok else 'INVALID'}")
    if not all(ok for _, ok in results):
        sys.exit(1)


# ---- CLI setup ----

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="sid",
        description="Inspect and build 64-bit SteamIDs",
    )
    parser.add_argument("--json", action="store_true", help="Machine-readable JSON output")

    sub = parser.add_subparsers(dest="command", required=True)

    # decode
    p_decode = sub.add_parser("decode", help="Show the fields of a packed SteamID")
    p_decode.add_argument("id", type=packed_id, help="Packed SteamID (decimal or 0x hex)")

    # encode
    p_encode = sub.add_parser("encode", help="Pack fields into a SteamID")
    p_encode.add_argument("--account", type=int, required=True, help="Account number")
    p_encode.add_argument("--instance", type=int, default=0, help="Instance (default: 0)")
    p_encode.add_argument("--type", default=DEFAULT_TYPE,
                          help=f"Type letter (default: {DEFAULT_TYPE})")
    p_encode.add_argument("--universe", type=int, default=DEFAULT_UNIVERSE,
                          help=f"Universe (default: {DEFAULT_UNIVERSE})")
    p_encode.add_argument("--strict", action="store_true",
                          help="Reject out-of-range fields instead of truncating")

    # parse
    p_parse = sub.add_parser("parse", help="Text form to packed SteamID")
    p_parse.add_argument("text", help="Text form, e.g. [U:1:12345]")

    # format
    p_format = sub.add_parser("format", help="Packed SteamID to text form")
    p_format.add_argument("id", type=packed_id, help="Packed SteamID")

    # check
    p_check = sub.add_parser("check", help="Report validity of SteamIDs")
    p_check.add_argument("ids", nargs="+", type=packed_id, help="Packed SteamIDs")

    args = parser.parse_args(argv)

    commands = {
        "decode": cmd_decode,
        "encode": cmd_encode,
        "parse": cmd_parse,
        "format": cmd_format,
        "check": cmd_check,
    }

    commands[args.command](args)


if __name__ == "__main__":
    main()
