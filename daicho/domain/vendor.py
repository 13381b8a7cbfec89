"""Data models for the vendor directory (recipient and vendor address blocks)."""

from dataclasses import dataclass, field

RECIPIENT_LINE_COUNT = 3
VENDOR_LINE_COUNT = 5


@dataclass(frozen=True)
class VendorRecord:
    """One vendor entry keyed by a short vendor name."""

    key: str
    # [vendor name, representative, address, contact person, phone]
    vendor_lines: tuple[str, ...]
    recipient_lines: tuple[str, ...]


@dataclass(frozen=True)
class VendorDirectory:
    """Shared recipient block plus vendor records in file order."""

    recipient_lines: tuple[str, ...] = ()
    records: tuple[VendorRecord, ...] = field(default_factory=tuple)
