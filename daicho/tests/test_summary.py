from __future__ import annotations

from decimal import Decimal

from daicho.domain.ledger import LineItem, Summary
from daicho.ledger.format_rules import LedgerFormat
from daicho.ledger.text_parser import check_consistency, extract_summary, split_lines


def test_summary_after_remainder_marker(ledger_format: LedgerFormat) -> None:
    text = "\n".join(
        [
            "0001 牛乳 PC",
            "1 100.00",
            "-　以　下　余　白　-",
            "課税対象額　969,582.00",
            "合計　\\1,047,148-",
            "消費税　77,566",
        ]
    )

    summary = extract_summary(split_lines(text), ledger_format)

    assert summary.taxable_base == "969,582.00"
    assert summary.total == "1,047,148"
    assert summary.tax == "77,566"


def test_last_marker_wins(ledger_format: LedgerFormat) -> None:
    text = "\n".join(
        [
            "-　以　下　余　白　-",
            "課税対象額　1.00",
            "合計　\\2-",
            "消費税　3",
            "-　以　下　余　白　-",
            "課税対象額　100.00",
            "合計　\\110-",
            "消費税　10",
        ]
    )

    summary = extract_summary(split_lines(text), ledger_format)

    assert (summary.taxable_base, summary.total, summary.tax) == ("100.00", "110", "10")


def test_summary_without_marker_scans_last_lines(ledger_format: LedgerFormat) -> None:
    text = "課税対象額　500.00\n合計　\\540-\n消費税　40\n"

    summary = extract_summary(split_lines(text), ledger_format)

    assert (summary.taxable_base, summary.total, summary.tax) == ("500.00", "540", "40")


def test_fewer_than_three_numbers_means_no_summary(ledger_format: LedgerFormat) -> None:
    text = "-　以　下　余　白　-\n課税対象額　500.00\n消費税　40"

    assert extract_summary(split_lines(text), ledger_format) == Summary()


def test_consistency_match_sets_mark(ledger_format: LedgerFormat) -> None:
    rows = [
        LineItem(vendor="", code="0001", name="牛乳", amount="1,950.00"),
        LineItem(vendor="", code="0002", name="豆乳", amount="1,800.00"),
    ]
    summary = Summary(taxable_base="3,750.00", tax="300", total="4,050")

    checked = check_consistency(rows, summary, ledger_format)

    assert checked.computed_base_value == Decimal("3750.00")
    assert checked.computed_base_text == "3,750.00"
    assert checked.match_mark == "<"
    assert checked.total == "4,050"
    # The input summary is not mutated
    assert summary.match_mark == ""


def test_consistency_mismatch_of_half_a_yen(ledger_format: LedgerFormat) -> None:
    rows = [LineItem(vendor="", code="0001", name="牛乳", amount="100.00")]

    checked = check_consistency(rows, Summary(taxable_base="100.50"), ledger_format)

    assert checked.match_mark == ""
    assert checked.computed_base_text == "100.00"


def test_consistency_skips_blank_amounts(ledger_format: LedgerFormat) -> None:
    rows = [
        LineItem(vendor="", code="0001", name="牛乳", amount="100.00"),
        LineItem(vendor="", code="0002", name="パン", amount=""),
    ]

    checked = check_consistency(rows, Summary(taxable_base="100.00"), ledger_format)

    assert checked.match_mark == "<"


def test_consistency_without_rows(ledger_format: LedgerFormat) -> None:
    checked = check_consistency([], Summary(), ledger_format)

    assert checked.computed_base_value == Decimal("0")
    assert checked.computed_base_text == ""
    assert checked.match_mark == ""
