"""Composable delivery-ledger text parser components."""

from .blocks_parser import ItemBlock, segment_blocks
from .common import (
    find_number_tokens,
    format_amount,
    multiply,
    normalize_text,
    normalize_total,
    parse_number,
    render_field,
    split_lines,
    sum_amounts,
)
from .name_parser import assemble_name_and_unit, split_name_and_unit
from .quantities_parser import (
    DEFAULT_QUANTITY_STRATEGIES,
    QuantityResolution,
    QuantityStrategy,
    resolve_best_fit,
    resolve_last_pair,
    resolve_quantities,
    resolve_single_token,
    resolve_two_tokens,
)
from .summary_parser import check_consistency, extract_summary

__all__ = [
    "DEFAULT_QUANTITY_STRATEGIES",
    "ItemBlock",
    "QuantityResolution",
    "QuantityStrategy",
    "assemble_name_and_unit",
    "check_consistency",
    "extract_summary",
    "find_number_tokens",
    "format_amount",
    "multiply",
    "normalize_text",
    "normalize_total",
    "parse_number",
    "render_field",
    "resolve_best_fit",
    "resolve_last_pair",
    "resolve_quantities",
    "resolve_single_token",
    "resolve_two_tokens",
    "segment_blocks",
    "split_lines",
    "split_name_and_unit",
    "sum_amounts",
]
