"""Vendor directory lookup workflow."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from daicho.domain.vendor import VendorRecord
from daicho.ledger.vendor_directory import extract_vendor_from_header, find_vendor
from daicho.runtime import get_logger, load_vendor_directory

logger = get_logger(__name__)

VendorLookupStatus = Literal["found", "no_vendor_in_header", "not_found", "directory_empty"]


@dataclass(frozen=True)
class VendorLookupRequest:
    """Header text holding a "業者名:" line, plus an optional directory file override."""

    header_text: str
    directory_path: Path | None = None


@dataclass(frozen=True)
class VendorLookupResult:
    """Outcome of a vendor directory lookup."""

    status: VendorLookupStatus
    vendor: str = ""
    record: VendorRecord | None = None
    error: str | None = None


def run_vendor_lookup(request: VendorLookupRequest) -> VendorLookupResult:
    """Extract the header vendor name and find its directory record."""
    directory = load_vendor_directory(request.directory_path)
    if not directory.records:
        return VendorLookupResult(
            status="directory_empty",
            error="Vendor directory has no vendor records; check the file format.",
        )

    vendor = extract_vendor_from_header(request.header_text)
    if not vendor:
        return VendorLookupResult(
            status="no_vendor_in_header",
            error="No vendor name found in the header text (expected a line starting with 業者名:).",
        )

    record = find_vendor(directory, vendor)
    if record is None:
        logger.info("No vendor directory key matches %r", vendor)
        return VendorLookupResult(
            status="not_found",
            vendor=vendor,
            error=f"No vendor directory entry matches {vendor!r}; check the key column.",
        )
    return VendorLookupResult(status="found", vendor=vendor, record=record)
