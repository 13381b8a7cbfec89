#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Normalize command handlers that call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daicho",
        description="Delivery ledger paste parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse [file|-]             Parse pasted ledger text (stdin if omitted)
  vendor <header_file>       Look up recipient/vendor blocks for a header
  serve [--host] [--port]    Start the ledger parsing server

Config:
  config/ledger_format.toml  = marker/unit overrides
  config/gyousya.txt         = vendor directory
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Parse pasted ledger text")
    parse_parser.add_argument("input", nargs="?", default=None, help="Ledger text file ('-' or omitted: stdin)")
    parse_parser.add_argument(
        "--format", choices=["text", "json"], default="text", help="Output format (default: text)"
    )
    parse_parser.add_argument("--output", "-o", default=None, help="Write output to this file instead of stdout")
    parse_parser.add_argument("--date", default=None, help="Date text for the export header")
    parse_parser.add_argument(
        "--two-token-policy",
        choices=["amount", "price"],
        default=None,
        help="Meaning of the larger number when an item has exactly two numbers",
    )
    parse_parser.add_argument(
        "--format-config",
        action="append",
        default=None,
        help="Ledger format TOML override (repeatable; default: config/ledger_format.toml)",
    )
    parse_parser.add_argument(
        "--vendor-directory", default=None, help="Vendor directory file used to fill recipient/vendor blocks"
    )
    parse_parser.add_argument(
        "--use-vendor-directory",
        action="store_true",
        help="Fill recipient/vendor blocks from config/gyousya.txt",
    )

    # vendor command
    vendor_parser = subparsers.add_parser("vendor", help="Look up a vendor in the vendor directory")
    vendor_parser.add_argument("header", help="Text file containing a '業者名:' line")
    vendor_parser.add_argument("--directory", default=None, help="Vendor directory file (default: config/gyousya.txt)")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start ledger parsing server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "parse":
        from daicho.cli.ledger import cmd_parse

        return _run_command(cmd_parse, args)
    elif args.command == "vendor":
        from daicho.cli.ledger import cmd_vendor

        return _run_command(cmd_vendor, args)
    elif args.command == "serve":
        from daicho.cli.ledger import cmd_serve

        return _run_command(cmd_serve, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
