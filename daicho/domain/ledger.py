"""Data models for delivery ledger parsing."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class LineItem:
    """A single line item recovered from a delivery ledger."""

    vendor: str
    code: str  # 4-digit item code that anchored the block
    name: str
    unit: str = ""
    quantity: str = ""
    unit_price: str = ""
    amount: str = ""
    # Reserved for manual entry; the parser never fills these.
    spec: str = ""
    note: str = ""


@dataclass
class Summary:
    """Trailing totals section of the ledger plus the consistency check."""

    taxable_base: str = ""
    tax: str = ""
    total: str = ""
    computed_base_value: Decimal = Decimal("0")
    computed_base_text: str = ""
    match_mark: str = ""


@dataclass
class ParseWarning:
    """Parser diagnostic attached to an item code (None for document-level)."""

    message: str
    code: str | None = None


@dataclass
class LedgerParseResult:
    """Parsed ledger data."""

    rows: list[LineItem] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)
    warnings: list[ParseWarning] = field(default_factory=list)


@dataclass(frozen=True)
class NumberToken:
    """A numeric-looking substring found by the lexer."""

    text: str
    value: Decimal
    position: int  # character index within its line
    line_offset: int = 0  # line index relative to the block start
    is_item_code: bool = False


@dataclass(frozen=True)
class Printed:
    """A field value taken verbatim from the source text."""

    text: str


@dataclass(frozen=True)
class Computed:
    """A field value the parser had to calculate because nothing was printed."""

    value: Decimal


FieldValue = Printed | Computed


@dataclass(frozen=True)
class DocumentHeader:
    """Host-supplied header text; opaque to the parser."""

    date: str = ""
    recipient_lines: tuple[str, ...] = ()
    vendor_lines: tuple[str, ...] = ()


@dataclass
class ExportedLedger:
    """Ledger data read back from the tab-separated export text."""

    version_line: str = ""
    header: DocumentHeader = field(default_factory=DocumentHeader)
    rows: list[LineItem] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)
    amount_sum_line: str = ""  # "金額の合計: ..." as written, for reference
