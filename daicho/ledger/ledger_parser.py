"""Parse pasted delivery-ledger text into structured line items and totals."""

from collections.abc import Sequence
from dataclasses import replace

from daicho.domain.ledger import LedgerParseResult, LineItem, NumberToken, ParseWarning

from .format_rules import LedgerFormat, get_default_ledger_format
from .text_parser import (
    ItemBlock,
    QuantityStrategy,
    assemble_name_and_unit,
    check_consistency,
    extract_summary,
    find_number_tokens,
    render_field,
    resolve_quantities,
    segment_blocks,
    split_lines,
)


def _block_tokens(lines: list[str], block: ItemBlock) -> list[list[NumberToken]]:
    """Lex every block line; the item code token on the first line is flagged."""
    tokens_by_line: list[list[NumberToken]] = []
    for offset, idx in enumerate(range(block.start, block.end)):
        line_tokens = find_number_tokens(lines[idx], line_offset=offset)
        if offset == 0:
            line_tokens = [
                replace(token, is_item_code=True)
                if token.position <= block.code_start < token.position + len(token.text)
                else token
                for token in line_tokens
            ]
        tokens_by_line.append(line_tokens)
    return tokens_by_line


def _parse_block(
    lines: list[str],
    block: ItemBlock,
    ledger_format: LedgerFormat,
    strategies: Sequence[QuantityStrategy] | None,
    warning_sink: list[ParseWarning],
) -> LineItem:
    tokens_by_line = _block_tokens(lines, block)
    value_tokens = [[t for t in line_tokens if not t.is_item_code] for line_tokens in tokens_by_line]

    resolution = resolve_quantities(value_tokens, ledger_format, strategies)
    name, unit = assemble_name_and_unit(lines, block, value_tokens, ledger_format)

    if resolution.rule == "blank":
        warning_sink.append(ParseWarning(message="no quantity, price or amount found", code=block.code))
    elif resolution.has_computed_value:
        warning_sink.append(
            ParseWarning(
                message=f"amount computed from quantity x unit price ({resolution.rule})",
                code=block.code,
            )
        )
    if not name:
        warning_sink.append(ParseWarning(message="empty product name", code=block.code))

    return LineItem(
        vendor=block.vendor,
        code=block.code,
        name=name,
        unit=unit,
        quantity=render_field(resolution.quantity),
        unit_price=render_field(resolution.unit_price),
        amount=render_field(resolution.amount),
    )


def parse(
    text: str | None,
    ledger_format: LedgerFormat | None = None,
    strategies: Sequence[QuantityStrategy] | None = None,
) -> LedgerParseResult:
    """
    Parse pasted ledger text into rows and the trailing summary.

    This is a best-effort heuristic parser - results should be reviewed.
    It never raises on odd input: whatever cannot be recovered is left blank
    and reported in ``warnings``.

    Args:
        text: Raw pasted ledger text (any string, including empty)
        ledger_format: Marker/unit table; defaults to the built-in format
        strategies: Optional quantity strategy order override

    Returns:
        LedgerParseResult with rows in source order and the checked summary
    """
    fmt = ledger_format or get_default_ledger_format()
    lines = split_lines(text)
    warnings: list[ParseWarning] = []

    rows = [_parse_block(lines, block, fmt, strategies, warnings) for block in segment_blocks(lines, fmt)]

    summary = extract_summary(lines, fmt)
    if not summary.taxable_base and (text or "").strip():
        warnings.append(ParseWarning(message="summary section not found"))
    summary = check_consistency(rows, summary, fmt)
    if summary.taxable_base and not summary.match_mark:
        warnings.append(
            ParseWarning(
                message=(
                    f"amount sum {summary.computed_base_text or '0.00'} does not match "
                    f"taxable base {summary.taxable_base}"
                )
            )
        )

    return LedgerParseResult(rows=rows, summary=summary, warnings=warnings)
