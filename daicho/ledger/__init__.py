"""Delivery ledger parsing: pasted text -> line items, totals and export text."""

from .format_rules import (
    DEFAULT_LEDGER_FORMAT,
    LedgerFormat,
    LedgerFormatError,
    build_ledger_format,
    get_default_ledger_format,
)
from .formatter import format_ledger_text, read_ledger_text, result_to_payload
from .ledger_parser import parse
from .vendor_directory import extract_vendor_from_header, find_vendor, parse_vendor_directory

__all__ = [
    "DEFAULT_LEDGER_FORMAT",
    "LedgerFormat",
    "LedgerFormatError",
    "build_ledger_format",
    "extract_vendor_from_header",
    "find_vendor",
    "format_ledger_text",
    "get_default_ledger_format",
    "parse",
    "parse_vendor_directory",
    "read_ledger_text",
    "result_to_payload",
]
