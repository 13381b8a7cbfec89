"""Format parsed ledger data as export text (and read it back).

The export text is the tab-separated "copy all data" layout consumed by the
invoice renderer:

    納入台帳テキスト解析 v2025.12.04-01
    日付: 令和7年11月30日
    宛先:
    ...
    業者名:
    ...

    No  品名  規格  単位  合計数量  契約単価  金額  備考      (tab separated)
    0001  ...
    金額の合計: 969,582.00 <
    [最終ページ集計]
    課税対象額: 969,582.00
    消費税: 77,566
    合計: 1,047,148
"""

from dataclasses import asdict
from typing import Any

from daicho.domain.ledger import DocumentHeader, ExportedLedger, LedgerParseResult, LineItem, Summary

from .format_rules import LedgerFormat, get_default_ledger_format
from .text_parser.common import format_amount, split_lines, sum_amounts

VERSION_LINE = "納入台帳テキスト解析 v2025.12.04-01"

DATE_LABEL = "日付:"
RECIPIENT_LABEL = "宛先:"
VENDOR_LABEL = "業者名:"
LOCATION_LABELS = ("納地:", "納　地")
AMOUNT_SUM_LABEL = "金額の合計:"
SUMMARY_SECTION = "[最終ページ集計]"

COLUMN_HEADERS = ("No", "品名", "規格", "単位", "合計数量", "契約単価", "金額", "備考")
ROW_FIELDS = ("code", "name", "spec", "unit", "quantity", "unit_price", "amount", "note")


def _row_cells(row: LineItem) -> list[str]:
    # Tabs/newlines inside a cell would break the column layout
    return [" ".join(str(getattr(row, field_name)).split()) for field_name in ROW_FIELDS]


def format_ledger_text(
    result: LedgerParseResult,
    header: DocumentHeader | None = None,
    version_line: str = VERSION_LINE,
    ledger_format: LedgerFormat | None = None,
) -> str:
    """
    Format parse results as the tab-separated export text.

    Args:
        result: Parsed ledger
        header: Host-supplied date/recipient/vendor text; when it has no vendor
            lines, the vendor captured from the ledger header is used
        version_line: First line identifying the producing tool
        ledger_format: Supplies the summary labels

    Returns:
        Export text ending with a newline
    """
    fmt = ledger_format or get_default_ledger_format()
    header = header or DocumentHeader()

    vendor_lines = list(header.vendor_lines)
    if not vendor_lines:
        vendors = [row.vendor for row in result.rows if row.vendor]
        if vendors:
            vendor_lines = [vendors[0]]

    lines = [version_line, f"{DATE_LABEL} {header.date}".rstrip(), RECIPIENT_LABEL]
    lines.extend(header.recipient_lines)
    lines.append(VENDOR_LABEL)
    lines.extend(vendor_lines)
    lines.append("")

    lines.append("\t".join(COLUMN_HEADERS))
    for row in result.rows:
        lines.append("\t".join(_row_cells(row)))

    summary = result.summary
    amount_sum = f"{AMOUNT_SUM_LABEL} {summary.computed_base_text}"
    if summary.match_mark:
        amount_sum = f"{amount_sum} {summary.match_mark}"
    lines.append(amount_sum.rstrip())

    lines.append(SUMMARY_SECTION)
    lines.append(f"{fmt.taxable_base_label}: {summary.taxable_base}".rstrip())
    lines.append(f"{fmt.tax_label}: {summary.tax}".rstrip())
    lines.append(f"{fmt.total_label}: {summary.total}".rstrip())
    lines.append("")

    return "\n".join(lines)


def _is_location_line(stripped: str) -> bool:
    return stripped.startswith(LOCATION_LABELS)


def _read_block(lines: list[str], start: int, stop_labels: tuple[str, ...]) -> tuple[list[str], int]:
    """Collect non-blank lines from start until a blank line (after content) or a stop label."""
    collected: list[str] = []
    idx = start
    while idx < len(lines):
        stripped = lines[idx].strip()
        if not stripped:
            if collected:
                break
            idx += 1
            continue
        if stripped.startswith(stop_labels) or _is_location_line(stripped) or _looks_like_column_header(stripped):
            break
        collected.append(stripped)
        idx += 1
    return collected, idx


def _looks_like_column_header(stripped: str) -> bool:
    return stripped.startswith("No") and COLUMN_HEADERS[1] in stripped and COLUMN_HEADERS[4] in stripped


def read_ledger_text(text: str | None, ledger_format: LedgerFormat | None = None) -> ExportedLedger:
    """
    Read export text produced by format_ledger_text (or the browser export tool).

    Unknown lines are ignored; missing sections are left blank.
    """
    fmt = ledger_format or get_default_ledger_format()
    lines = split_lines(text)
    exported = ExportedLedger()

    for line in lines:
        if line.strip():
            exported.version_line = line.strip()
            break

    date = ""
    recipient_lines: list[str] = []
    vendor_lines: list[str] = []
    header_idx = None
    for idx, line in enumerate(lines):
        stripped = line.strip()
        if not date and line.startswith(DATE_LABEL):
            date = line[len(DATE_LABEL) :].strip()
        if header_idx is None and _looks_like_column_header(stripped):
            header_idx = idx

    for idx, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith(RECIPIENT_LABEL) and not recipient_lines:
            recipient_lines, _ = _read_block(lines, idx + 1, (VENDOR_LABEL,))
        elif stripped.startswith(VENDOR_LABEL) and not vendor_lines:
            vendor_lines, _ = _read_block(lines, idx + 1, ())

    exported.header = DocumentHeader(
        date=date,
        recipient_lines=tuple(recipient_lines),
        vendor_lines=tuple(vendor_lines),
    )

    if header_idx is not None:
        for line in lines[header_idx + 1 :]:
            stripped = line.strip()
            if not stripped:
                continue
            if stripped.startswith(AMOUNT_SUM_LABEL):
                exported.amount_sum_line = stripped
                break
            if stripped.startswith(SUMMARY_SECTION):
                break
            if not fmt.item_code_pattern.match(stripped):
                continue
            cells = [cell.strip() for cell in line.split("\t")]
            cells.extend([""] * (len(ROW_FIELDS) - len(cells)))
            values = dict(zip(ROW_FIELDS, cells))
            exported.rows.append(LineItem(vendor="", **values))

    summary = Summary()
    for line in lines:
        stripped = line.strip()
        for label, attr in (
            (fmt.taxable_base_label, "taxable_base"),
            (fmt.tax_label, "tax"),
            (fmt.total_label, "total"),
        ):
            prefix = f"{label}:"
            if label and stripped.startswith(prefix):
                setattr(summary, attr, stripped[len(prefix) :].strip())

    computed = sum_amounts(row.amount for row in exported.rows)
    summary.computed_base_value = computed
    summary.computed_base_text = format_amount(computed) if exported.rows else ""
    exported.summary = summary
    return exported


def result_to_payload(result: LedgerParseResult) -> dict[str, Any]:
    """Return a JSON-serializable dict; Decimal values become strings."""
    summary = asdict(result.summary)
    summary["computed_base_value"] = str(result.summary.computed_base_value)
    return {
        "rows": [asdict(row) for row in result.rows],
        "summary": summary,
        "warnings": [asdict(w) for w in result.warnings],
    }
