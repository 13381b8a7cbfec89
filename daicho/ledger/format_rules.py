"""Literal markers and tuning constants of the delivery ledger format.

The ledger layout is a closed vocabulary: item-code pattern, unit codes,
header markers and summary labels. They are kept here as a table so another
ledger variant can be supported by overriding entries from TOML instead of
editing the parser.

To override a value, put a ``ledger_format.toml`` in the project config
directory, e.g.::

    unit_codes = ["PC", "BG", "KG", "EA", "CA", "CN", "SH", "BT"]
    two_token_policy = "price"

    [markers]
    remainder_blank = ["以", "余"]
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Any, Literal

TwoTokenPolicy = Literal["amount", "price"]
TWO_TOKEN_POLICIES: tuple[str, ...] = ("amount", "price")

# A marker matches a line when every fragment occurs somewhere in it.
MarkerRule = tuple[str, ...]

DEFAULT_LEDGER_FORMAT: dict[str, Any] = {
    # 0001, 0002, ... but not the first four digits of a longer number
    "item_code_pattern": r"(?<!\d)0\d{3}(?!\d)",
    "unit_codes": ["PC", "BG", "KG", "EA", "CA", "CN", "SH"],
    "two_token_policy": "amount",
    "match_mark": "<",
    "match_tolerance": "0.5",
    "fit_tolerance": "0.5",
    "summary_fallback_lines": 10,
    "markers": {
        "era_header": ["令和", "年", "月"],
        "location_header": ["納　地", "業 者 名"],
        "ledger_title": ["納入台帳"],
        "taxable_base": ["課税対象額"],
        "remainder_blank": ["以", "余"],
    },
    "labels": {
        "taxable_base": "課税対象額",
        "tax": "消費税",
        "total": "合計",
    },
}


class LedgerFormatError(ValueError):
    """Raised when a ledger format table cannot be built."""


@dataclass(frozen=True)
class LedgerFormat:
    """In-memory ledger format table used by every parsing stage."""

    item_code_pattern: re.Pattern[str]
    unit_codes: tuple[str, ...]
    unit_pattern: re.Pattern[str]
    glued_unit_pattern: re.Pattern[str]
    era_header: MarkerRule
    location_header: MarkerRule
    ledger_title: MarkerRule
    taxable_base_marker: MarkerRule
    remainder_blank: MarkerRule
    taxable_base_label: str
    tax_label: str
    total_label: str
    two_token_policy: TwoTokenPolicy
    match_mark: str
    match_tolerance: Decimal
    fit_tolerance: Decimal
    summary_fallback_lines: int

    def is_era_header(self, line: str) -> bool:
        return _marker_matches(self.era_header, line)

    def is_remainder_blank(self, line: str) -> bool:
        return _marker_matches(self.remainder_blank, line)

    def is_section_header(self, line: str) -> bool:
        """Return True for page/section header lines that close an item block."""
        return any(
            _marker_matches(marker, line)
            for marker in (
                self.location_header,
                self.ledger_title,
                self.taxable_base_marker,
                self.era_header,
            )
        )


def _marker_matches(marker: MarkerRule, line: str) -> bool:
    if not marker:
        return False
    return all(fragment in line for fragment in marker)


def _normalize_marker(raw: Any, name: str) -> MarkerRule:
    """Normalize a marker value from TOML into a tuple of fragments."""
    if isinstance(raw, str):
        value = raw.strip()
        return (value,) if value else tuple()
    if isinstance(raw, (list, tuple)):
        # Fragments keep their inner spacing: "納　地" relies on it.
        return tuple(str(v) for v in raw if str(v).strip())
    raise LedgerFormatError(f"marker {name!r} must be a string or a list of strings")


def _merge_layers(configs: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for config in configs:
        if not isinstance(config, Mapping):
            raise LedgerFormatError(f"ledger format layer must be a table, got {type(config).__name__}")
        for key, value in config.items():
            if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
                section = dict(merged[key])
                section.update(value)
                merged[key] = section
            else:
                merged[key] = value
    return merged


def _to_decimal(raw: Any, name: str) -> Decimal:
    try:
        value = Decimal(str(raw))
    except InvalidOperation as exc:
        raise LedgerFormatError(f"{name} must be a number, got {raw!r}") from exc
    if not value.is_finite() or value < 0:
        raise LedgerFormatError(f"{name} must be a finite non-negative number, got {raw!r}")
    return value


def _to_int(raw: Any, name: str) -> int:
    if isinstance(raw, bool):
        raise LedgerFormatError(f"{name} must be an integer, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise LedgerFormatError(f"{name} must be an integer, got {raw!r}") from exc


def _section(merged: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = merged.get(name, {})
    if not isinstance(section, Mapping):
        raise LedgerFormatError(f"[{name}] must be a table")
    return section


def build_ledger_format(configs: Sequence[Mapping[str, Any]] | None = None) -> LedgerFormat:
    """Build a ledger format from the built-in table layered with in-memory configs.

    Later configs win. Sub-tables (``markers``, ``labels``) are merged key by key.
    """
    merged = _merge_layers([DEFAULT_LEDGER_FORMAT, *(configs or ())])

    try:
        # ASCII: \d must not match full-width digits such as "１"
        item_code_pattern = re.compile(str(merged["item_code_pattern"]), re.ASCII)
    except re.error as exc:
        raise LedgerFormatError(f"invalid item_code_pattern: {exc}") from exc

    raw_unit_codes = merged.get("unit_codes", [])
    if not isinstance(raw_unit_codes, (list, tuple)):
        raise LedgerFormatError("unit_codes must be a list of strings")
    unit_codes = tuple(str(u).strip() for u in raw_unit_codes if str(u).strip())
    if not unit_codes:
        raise LedgerFormatError("unit_codes must not be empty")
    # Longest first so "CAN" would win over "CA" if both were configured.
    alternation = "|".join(re.escape(u) for u in sorted(unit_codes, key=len, reverse=True))

    policy = str(merged.get("two_token_policy", "amount")).strip().lower()
    if policy not in TWO_TOKEN_POLICIES:
        raise LedgerFormatError(f"two_token_policy must be one of {TWO_TOKEN_POLICIES}, got {policy!r}")

    markers = _section(merged, "markers")
    labels = _section(merged, "labels")

    fallback_lines = _to_int(merged.get("summary_fallback_lines", 10), "summary_fallback_lines")
    if fallback_lines < 0:
        raise LedgerFormatError("summary_fallback_lines must not be negative")

    return LedgerFormat(
        item_code_pattern=item_code_pattern,
        unit_codes=unit_codes,
        unit_pattern=re.compile(rf"(?<!\d)({alternation})(?=\s|$)"),
        glued_unit_pattern=re.compile(rf"^(.*?)({alternation})$", re.DOTALL),
        era_header=_normalize_marker(markers.get("era_header", ()), "era_header"),
        location_header=_normalize_marker(markers.get("location_header", ()), "location_header"),
        ledger_title=_normalize_marker(markers.get("ledger_title", ()), "ledger_title"),
        taxable_base_marker=_normalize_marker(markers.get("taxable_base", ()), "taxable_base"),
        remainder_blank=_normalize_marker(markers.get("remainder_blank", ()), "remainder_blank"),
        taxable_base_label=str(labels.get("taxable_base", "")),
        tax_label=str(labels.get("tax", "")),
        total_label=str(labels.get("total", "")),
        two_token_policy=policy,  # type: ignore[arg-type]
        match_mark=str(merged.get("match_mark", "")),
        match_tolerance=_to_decimal(merged.get("match_tolerance", "0.5"), "match_tolerance"),
        fit_tolerance=_to_decimal(merged.get("fit_tolerance", "0.5"), "fit_tolerance"),
        summary_fallback_lines=fallback_lines,
    )


@lru_cache(maxsize=1)
def get_default_ledger_format() -> LedgerFormat:
    """Built-in-only format (no file I/O, no runtime deps)."""
    return build_ledger_format()
