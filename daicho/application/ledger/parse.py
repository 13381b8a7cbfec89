"""Ledger paste parsing workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from daicho.domain.ledger import DocumentHeader
from daicho.ledger.format_rules import LedgerFormatError
from daicho.ledger.formatter import format_ledger_text
from daicho.ledger.ledger_parser import parse
from daicho.ledger.vendor_directory import find_vendor
from daicho.runtime import get_logger, load_ledger_format, load_vendor_directory

if TYPE_CHECKING:
    from daicho.domain.ledger import LedgerParseResult

logger = get_logger(__name__)

ParseStatus = Literal[
    "parsed",
    "file_not_found",
    "empty_input",
    "unreadable_input",
    "invalid_format",
]


@dataclass(frozen=True)
class LedgerParseRequest:
    """Inputs for running the ledger parse workflow.

    Exactly one of ``text`` / ``input_path`` is used; ``text`` wins.
    """

    text: str | None = None
    input_path: Path | None = None
    date: str = ""
    two_token_policy: str | None = None
    format_paths: tuple[str, ...] | None = None
    vendor_directory_path: Path | None = None
    use_vendor_directory: bool = False


@dataclass(frozen=True)
class LedgerParseResponse:
    """Outcome from the ledger parse workflow."""

    status: ParseStatus
    result: LedgerParseResult | None = None
    header: DocumentHeader | None = None
    export_text: str = ""
    error: str | None = None


def _build_header(request: LedgerParseRequest, result: LedgerParseResult) -> DocumentHeader:
    """Fill recipient/vendor blocks from the vendor directory when asked to."""
    vendor = next((row.vendor for row in result.rows if row.vendor), "")
    if not request.use_vendor_directory:
        return DocumentHeader(date=request.date, vendor_lines=(vendor,) if vendor else ())

    directory = load_vendor_directory(request.vendor_directory_path)
    record = find_vendor(directory, vendor)
    if record is None:
        logger.warning("No vendor directory entry matches %r", vendor)
        return DocumentHeader(
            date=request.date,
            recipient_lines=directory.recipient_lines if any(directory.recipient_lines) else (),
            vendor_lines=(vendor,) if vendor else (),
        )

    logger.info("Vendor directory match: %s", record.key)
    return DocumentHeader(
        date=request.date,
        recipient_lines=record.recipient_lines,
        vendor_lines=record.vendor_lines,
    )


def run_ledger_parse(request: LedgerParseRequest) -> LedgerParseResponse:
    """Run parse flow: read text -> parse -> check -> format export text."""
    text = request.text
    if text is None:
        if request.input_path is None or not request.input_path.exists():
            return LedgerParseResponse(
                status="file_not_found",
                error=f"Ledger text file not found: {request.input_path}",
            )
        try:
            text = request.input_path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Cannot read ledger text file %s: %s", request.input_path, exc)
            return LedgerParseResponse(
                status="unreadable_input",
                error=f"Cannot read ledger text file {request.input_path}: {exc}",
            )

    if not text.strip():
        return LedgerParseResponse(status="empty_input", error="Ledger text is empty")

    try:
        ledger_format = load_ledger_format(request.format_paths, request.two_token_policy)
    except LedgerFormatError as exc:
        logger.error("Invalid ledger format: %s", exc)
        return LedgerParseResponse(status="invalid_format", error=str(exc))

    result = parse(text, ledger_format)
    logger.info(
        "Parsed %d rows (amount sum %s, taxable base %s)",
        len(result.rows),
        result.summary.computed_base_text or "-",
        result.summary.taxable_base or "-",
    )
    for warning in result.warnings:
        if warning.code:
            logger.warning("item %s: %s", warning.code, warning.message)
        else:
            logger.warning("%s", warning.message)

    header = _build_header(request, result)
    export_text = format_ledger_text(result, header=header, ledger_format=ledger_format)
    return LedgerParseResponse(
        status="parsed",
        result=result,
        header=header,
        export_text=export_text,
    )
