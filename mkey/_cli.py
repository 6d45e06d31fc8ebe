"""mkey command-line interface.

Usage:
    python3 -m mkey encode users 42 email
    python3 -m mkey encode --text 007 --base64
    python3 -m mkey decode ff7573657273004102
    python3 -m mkey compare 3ef9ff 3efdff
    python3 -m mkey sort --input keys.jsonl
    python3 -m mkey version
"""

from __future__ import annotations

import argparse
import base64
import json
import logging
import sys
from typing import Any, List, Optional

import structlog

from . import (
    Composite,
    MKeyError,
    Text,
    __version__,
    compare,
    decode_composite,
)

logger = structlog.get_logger()


def setup_logging(verbose: bool = False) -> None:
    """Route log events to stderr; debug events only with -v."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mkey",
        description="mkey — order-preserving keys for integers, text and tuples",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log decoder details to stderr")
    sub = parser.add_subparsers(dest="command")

    # ── encode ──
    enc_p = sub.add_parser("encode", help="Encode components as one key")
    enc_p.add_argument("values", nargs="+", metavar="VALUE",
                       help="Components; integer literals become integers")
    enc_p.add_argument("--text", action="store_true",
                       help="Treat every component as text")
    enc_p.add_argument("--base64", action="store_true",
                       help="Emit base64 instead of hex")

    # ── decode ──
    dec_p = sub.add_parser("decode", help="Decode a key to a JSON array")
    dec_p.add_argument("key", metavar="KEY", help="Encoded key (hex by default)")
    dec_p.add_argument("--base64", action="store_true",
                       help="KEY is base64 instead of hex")
    dec_p.add_argument("--lenient", action="store_true",
                       help="Skip unrecognized mantissa bytes instead of failing")

    # ── compare ──
    cmp_p = sub.add_parser("compare", help="Compare two hex keys (-1, 0, 1)")
    cmp_p.add_argument("a", metavar="KEY_A")
    cmp_p.add_argument("b", metavar="KEY_B")

    # ── sort ──
    sort_p = sub.add_parser("sort", help="Sort JSON arrays (one per line) by key")
    sort_p.add_argument("--input", "-i", metavar="FILE",
                        help="Read from FILE instead of stdin")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _read_input(filepath: Optional[str]) -> str:
    if filepath:
        with open(filepath, "r", encoding="utf-8") as f:
            return f.read()
    if sys.stdin.isatty():
        print("mkey: reading from stdin (Ctrl-D to end)...", file=sys.stderr)
    return sys.stdin.read()


def _parse_key(text: str, b64: bool = False) -> bytes:
    if b64:
        return base64.b64decode(text, validate=True)
    return bytes.fromhex(text)


def _cmd_encode(args: argparse.Namespace) -> None:
    if args.text:
        comp = Composite(*[Text(v) for v in args.values])
    else:
        comp = Composite(*args.values)
    if args.base64:
        print(base64.b64encode(comp.encoded).decode("ascii"))
    else:
        print(comp.encoded.hex())


def _cmd_decode(args: argparse.Namespace) -> None:
    raw = _parse_key(args.key, args.base64)
    logger.debug("decoding key", size=len(raw), lenient=args.lenient)
    print(json.dumps(decode_composite(raw, lenient=args.lenient), ensure_ascii=False))


def _cmd_compare(args: argparse.Namespace) -> None:
    print(compare(_parse_key(args.a), _parse_key(args.b)))


def _cmd_sort(args: argparse.Namespace) -> None:
    keys: List[Composite] = []
    for lineno, line in enumerate(_read_input(args.input).splitlines(), 1):
        if not line.strip():
            continue
        row: Any = json.loads(line)
        if not isinstance(row, list):
            row = [row]
        logger.debug("read sort row", line=lineno, row=row)
        keys.append(Composite(*row))
    for k in sorted(keys):
        print(json.dumps(k.to_list(), ensure_ascii=False))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"mkey {__version__}")
        return

    try:
        if args.command == "encode":
            _cmd_encode(args)
        elif args.command == "decode":
            _cmd_decode(args)
        elif args.command == "compare":
            _cmd_compare(args)
        elif args.command == "sort":
            _cmd_sort(args)
    except MKeyError as e:
        print(f"mkey: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except json.JSONDecodeError as e:
        print(f"mkey: JSON parse error: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"mkey: bad key encoding: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
