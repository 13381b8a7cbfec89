"""Ledger command handlers used by the unified CLI."""

import argparse
import json
import sys
from pathlib import Path

from daicho.runtime import get_logger

logger = get_logger(__name__)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server for parsing pasted ledger text."""
    import uvicorn

    from daicho.runtime import ledger_server as server

    print(f"Starting ledger server on {args.host}:{args.port}")
    print(f"Endpoints: http://{args.host}:{args.port}/parse | /parse/text | /health")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse a pasted ledger text file (or stdin) and print rows + summary."""
    from daicho.application.ledger.parse import LedgerParseRequest, run_ledger_parse
    from daicho.ledger.formatter import result_to_payload

    text = None
    input_path = None
    if args.input in (None, "-"):
        text = sys.stdin.read()
    else:
        input_path = Path(args.input)

    response = run_ledger_parse(
        LedgerParseRequest(
            text=text,
            input_path=input_path,
            date=args.date or "",
            two_token_policy=args.two_token_policy,
            format_paths=tuple(args.format_config) if args.format_config else None,
            vendor_directory_path=Path(args.vendor_directory) if args.vendor_directory else None,
            use_vendor_directory=args.vendor_directory is not None or args.use_vendor_directory,
        )
    )

    if response.status != "parsed" or response.result is None:
        logger.error("%s", response.error)
        print(f"Error: {response.error}")
        sys.exit(1)

    if args.format == "json":
        payload = result_to_payload(response.result)
        output = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
    else:
        output = response.export_text

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output, encoding="utf-8")
        print(f"Saved: {output_path}")
    else:
        sys.stdout.write(output)

    summary = response.result.summary
    if summary.taxable_base and not summary.match_mark:
        # Mismatch is only a review hint, not a failure
        print(
            f"Check: amount sum {summary.computed_base_text or '0.00'} != taxable base {summary.taxable_base}",
            file=sys.stderr,
        )


def cmd_vendor(args: argparse.Namespace) -> None:
    """Look up recipient/vendor blocks for the vendor named in a header text file."""
    from daicho.application.ledger.vendor import VendorLookupRequest, run_vendor_lookup

    header_path = Path(args.header)
    if not header_path.exists():
        print(f"Error: header file not found: {header_path}")
        sys.exit(1)

    try:
        header_text = header_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: cannot read header file {header_path}: {exc}")
        sys.exit(1)

    result = run_vendor_lookup(
        VendorLookupRequest(
            header_text=header_text,
            directory_path=Path(args.directory) if args.directory else None,
        )
    )
    if result.status != "found" or result.record is None:
        print(f"Error: {result.error}")
        sys.exit(1)

    print("宛先:")
    for line in result.record.recipient_lines:
        print(line)
    print("業者名:")
    for line in result.record.vendor_lines:
        print(line)


def main() -> int:
    """Compatibility entrypoint; delegates to the unified CLI parser."""
    from daicho.cli.main import main as unified_main

    return unified_main()


if __name__ == "__main__":
    raise SystemExit(main())
