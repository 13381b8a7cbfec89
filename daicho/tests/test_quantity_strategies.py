from __future__ import annotations

from decimal import Decimal

from daicho.domain.ledger import Computed, Printed
from daicho.ledger.format_rules import LedgerFormat, build_ledger_format
from daicho.ledger.text_parser import (
    find_number_tokens,
    render_field,
    resolve_best_fit,
    resolve_last_pair,
    resolve_quantities,
    resolve_single_token,
    resolve_two_tokens,
)


def _tokens(*lines: str):
    return [find_number_tokens(line, line_offset=idx) for idx, line in enumerate(lines)]


def _rendered(resolution) -> tuple[str, str, str]:
    return (
        render_field(resolution.quantity),
        render_field(resolution.unit_price),
        render_field(resolution.amount),
    )


def test_last_pair_takes_bottom_pair_and_next_amount(ledger_format: LedgerFormat) -> None:
    tokens = _tokens("0.10", "0.10 19,500.00", "1,950.00")

    resolution = resolve_quantities(tokens, ledger_format)

    assert resolution.rule == "last_pair"
    assert _rendered(resolution) == ("0.10", "19,500.00", "1,950.00")
    assert not resolution.has_computed_value


def test_last_pair_prefers_the_lowest_pair_line(ledger_format: LedgerFormat) -> None:
    tokens = _tokens("1 100.00", "2 150.00", "300.00")

    assert _rendered(resolve_last_pair(tokens, ledger_format)) == ("2", "150.00", "300.00")


def test_last_pair_without_amount_line_computes_amount(ledger_format: LedgerFormat) -> None:
    resolution = resolve_last_pair(_tokens("", "4 25.50"), ledger_format)

    assert resolution is not None
    assert resolution.amount == Computed(Decimal("102.00"))
    assert _rendered(resolution) == ("4", "25.50", "102.00")


def test_last_pair_declines_without_a_pair_line(ledger_format: LedgerFormat) -> None:
    assert resolve_last_pair(_tokens("12", "300.00", "3600.00"), ledger_format) is None


def test_best_fit_picks_exact_product(ledger_format: LedgerFormat) -> None:
    tokens = _tokens("12.00", "300.00", "3600.00")

    resolution = resolve_quantities(tokens, ledger_format)

    assert resolution.rule == "best_fit"
    assert _rendered(resolution) == ("12.00", "300.00", "3600.00")


def test_best_fit_ignores_token_order(ledger_format: LedgerFormat) -> None:
    resolution = resolve_best_fit(_tokens("3600.00", "300.00", "12.00"), ledger_format)

    assert resolution is not None
    assert resolution.amount == Printed("3600.00")
    assert {render_field(resolution.quantity), render_field(resolution.unit_price)} == {"12.00", "300.00"}


def test_best_fit_without_a_fit_uses_smallest_pair(ledger_format: LedgerFormat) -> None:
    resolution = resolve_quantities(_tokens("2.00", "5.00", "100.00"), ledger_format)

    assert resolution.rule == "smallest_pair"
    assert _rendered(resolution) == ("2.00", "5.00", "10.00")
    assert resolution.has_computed_value


def test_best_fit_needs_three_tokens(ledger_format: LedgerFormat) -> None:
    assert resolve_best_fit(_tokens("3", "600.00"), ledger_format) is None


def test_two_tokens_amount_policy(ledger_format: LedgerFormat) -> None:
    resolution = resolve_quantities(_tokens("600.00", "3"), ledger_format)

    assert resolution.rule == "two_tokens_amount"
    assert _rendered(resolution) == ("3", "", "600.00")


def test_two_tokens_price_policy() -> None:
    price_format = build_ledger_format([{"two_token_policy": "price"}])

    resolution = resolve_two_tokens(_tokens("3", "600.00"), price_format)

    assert resolution is not None
    assert resolution.rule == "two_tokens_price"
    assert _rendered(resolution) == ("3", "600.00", "1,800.00")


def test_single_token_is_quantity(ledger_format: LedgerFormat) -> None:
    resolution = resolve_quantities(_tokens("", "24"), ledger_format)

    assert resolution.rule == "single_token"
    assert _rendered(resolution) == ("24", "", "")
    assert resolve_single_token(_tokens("1", "2"), ledger_format) is None


def test_no_tokens_is_blank(ledger_format: LedgerFormat) -> None:
    resolution = resolve_quantities(_tokens("", "牛乳"), ledger_format)

    assert resolution.rule == "blank"
    assert _rendered(resolution) == ("", "", "")


def test_custom_strategy_order(ledger_format: LedgerFormat) -> None:
    tokens = _tokens("2 150.00", "300.00")

    resolution = resolve_quantities(tokens, ledger_format, strategies=[resolve_best_fit])

    assert resolution.rule == "best_fit"
    assert _rendered(resolution) == ("2", "150.00", "300.00")
