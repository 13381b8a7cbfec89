"""Trailing totals extraction and the amount consistency check."""

from collections.abc import Sequence
from decimal import localcontext

from daicho.domain.ledger import LineItem, Summary

from ..format_rules import LedgerFormat
from .common import LEDGER_CONTEXT, find_number_tokens, format_amount, normalize_total, parse_number, sum_amounts

SUMMARY_VALUE_COUNT = 3


def _summary_start(lines: list[str], ledger_format: LedgerFormat) -> int | None:
    """Index right after the last remainder-blank marker, or None if there is none."""
    for idx in range(len(lines) - 1, -1, -1):
        stripped = lines[idx].strip()
        if stripped and ledger_format.is_remainder_blank(stripped):
            return idx + 1
    return None


def extract_summary(lines: list[str], ledger_format: LedgerFormat) -> Summary:
    """
    Read taxable base, total and tax from the end of the ledger.

    The last number of each line after the final "以　下　余　白" marker is
    collected until three are found. They are printed in the order taxable
    base, total (e.g. "\\1,047,148-"), tax. Without a marker the last lines of
    the text are scanned instead. Fewer than three numbers means no summary.
    """
    start = _summary_start(lines, ledger_format)
    if start is None:
        start = max(len(lines) - ledger_format.summary_fallback_lines, 0)

    values: list[str] = []
    for line in lines[start:]:
        tokens = find_number_tokens(line)
        if not tokens:
            continue
        values.append(tokens[-1].text)
        if len(values) >= SUMMARY_VALUE_COUNT:
            break

    if len(values) < SUMMARY_VALUE_COUNT:
        return Summary()

    taxable_base, total, tax = values
    return Summary(taxable_base=taxable_base, tax=tax, total=normalize_total(total))


def check_consistency(rows: Sequence[LineItem], summary: Summary, ledger_format: LedgerFormat) -> Summary:
    """
    Compare the sum of row amounts with the printed taxable base.

    Returns a new Summary with computed_base_value/text filled in and the
    match mark set when both agree within the format's tolerance.
    """
    computed = sum_amounts(row.amount for row in rows)

    match_mark = ""
    base = parse_number(summary.taxable_base)
    if base is not None:
        with localcontext(LEDGER_CONTEXT):
            difference = abs(base - computed)
        if difference < ledger_format.match_tolerance:
            match_mark = ledger_format.match_mark

    return Summary(
        taxable_base=summary.taxable_base,
        tax=summary.tax,
        total=summary.total,
        computed_base_value=computed,
        computed_base_text=format_amount(computed) if rows else "",
        match_mark=match_mark,
    )
