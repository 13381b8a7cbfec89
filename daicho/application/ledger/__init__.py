"""Ledger workflows."""

from daicho.application.ledger.parse import LedgerParseRequest, LedgerParseResponse, run_ledger_parse
from daicho.application.ledger.vendor import VendorLookupRequest, VendorLookupResult, run_vendor_lookup

__all__ = [
    "LedgerParseRequest",
    "LedgerParseResponse",
    "run_ledger_parse",
    "VendorLookupRequest",
    "VendorLookupResult",
    "run_vendor_lookup",
]
