"""Vendor directory lookup (recipient and vendor address blocks by vendor keyword).

Directory text format (UTF-8, comma separated)::

    滝川駐屯地 会計隊 御中,〒073-0000 北海道滝川市○○,TEL 0124-00-0000
    トワニ旭川,代表 太郎,〒070-0000 北海道旭川市○○,担当 佐藤,0166-00-0000
    セイコーフレッシュフーズ,代表 花子,〒003-0000 札幌市白石区○○,担当 高橋,011-000-0000

The first non-blank line is the recipient block shared by every vendor. Every
later line is a vendor: short key name, representative, address, contact
person, phone. A vendor matches when its key occurs in the vendor name taken
from the ledger header (or the other way round).
"""

import csv
import re

from daicho.domain.vendor import RECIPIENT_LINE_COUNT, VENDOR_LINE_COUNT, VendorDirectory, VendorRecord

from .text_parser.common import split_lines

VENDOR_HEADER_PATTERN = re.compile(r"^業者名[:：]\s*")


def _pad(fields: list[str], count: int) -> tuple[str, ...]:
    padded = fields[:count] + [""] * (count - len(fields))
    return tuple(padded)


def parse_vendor_directory(text: str | None) -> VendorDirectory:
    """Parse directory text into the shared recipient block and vendor records."""
    rows = [line for line in split_lines(text) if line.strip()]

    recipient_lines: tuple[str, ...] | None = None
    records: list[VendorRecord] = []
    for fields in csv.reader(rows, skipinitialspace=True):
        fields = [field.strip() for field in fields]
        if not any(fields):
            continue
        if recipient_lines is None:
            recipient_lines = _pad(fields, RECIPIENT_LINE_COUNT)
            continue
        key = fields[0] if fields else ""
        if not key:
            continue
        records.append(
            VendorRecord(
                key=key,
                vendor_lines=_pad(fields, VENDOR_LINE_COUNT),
                recipient_lines=recipient_lines,
            )
        )

    return VendorDirectory(
        recipient_lines=recipient_lines or _pad([], RECIPIENT_LINE_COUNT),
        records=tuple(records),
    )


def extract_vendor_from_header(header_text: str | None) -> str:
    """Return the value of the first "業者名:" line of a header text, or ""."""
    for line in split_lines(header_text):
        stripped = line.strip()
        if VENDOR_HEADER_PATTERN.match(stripped):
            return VENDOR_HEADER_PATTERN.sub("", stripped).strip()
    return ""


def find_vendor(directory: VendorDirectory, vendor_text: str | None) -> VendorRecord | None:
    """
    Find the first record whose key and the vendor text contain one another.

    e.g. vendor_text "株式会社トワニ旭川食品" matches key "トワニ旭川".
    """
    vendor = (vendor_text or "").strip()
    if not vendor:
        return None
    for record in directory.records:
        if record.key in vendor or vendor in record.key:
            return record
    return None
