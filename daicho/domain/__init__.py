"""Core domain models for the daicho project.

This module provides the data models used throughout the project:
- LineItem, Summary, LedgerParseResult: parsed delivery ledger output
- NumberToken, Printed, Computed: internal parsing values
- VendorRecord, VendorDirectory: recipient/vendor address blocks

Usage:
    from daicho.domain import LedgerParseResult, LineItem, Summary
"""

from daicho.domain.ledger import (
    Computed,
    DocumentHeader,
    ExportedLedger,
    FieldValue,
    LedgerParseResult,
    LineItem,
    NumberToken,
    ParseWarning,
    Printed,
    Summary,
)
from daicho.domain.vendor import VendorDirectory, VendorRecord

__all__ = [
    "Computed",
    "DocumentHeader",
    "ExportedLedger",
    "FieldValue",
    "LedgerParseResult",
    "LineItem",
    "NumberToken",
    "ParseWarning",
    "Printed",
    "Summary",
    "VendorDirectory",
    "VendorRecord",
]
