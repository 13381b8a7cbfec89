"""Shared constants and helpers for ledger text parsing."""

import re
from collections.abc import Iterable
from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    localcontext,
)

from daicho.domain.ledger import Computed, FieldValue, NumberToken

# Half-width digits only: a name such as "１Ｌ豆乳飲料" must never lex as a number.
NUMBER_TOKEN_PATTERN = re.compile(r"[0-9,.¥￥\\]+-*")

# Stripped before parsing a token as a number
NUMBER_NOISE_PATTERN = re.compile(r"[,¥￥\\]")
CURRENCY_PATTERN = re.compile(r"[¥￥\\]")
TRAILING_SIGN_PATTERN = re.compile(r"-+$")

CENTS = Decimal("0.01")

# Printed numbers may be arbitrarily long: widen the exponent range and let
# overflow saturate to Infinity instead of raising.
LEDGER_CONTEXT = Context(
    prec=28,
    rounding=ROUND_HALF_EVEN,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, DivisionByZero],
)


def normalize_text(text: str | None) -> str:
    """Unify line endings of pasted text."""
    return (text or "").replace("\r\n", "\n").replace("\r", "\n")


def split_lines(text: str | None) -> list[str]:
    return normalize_text(text).split("\n")


def parse_number(text: str | None) -> Decimal | None:
    """
    Parse a printed number such as "19,500.00", "¥1,200" or "\\1,047,148-".

    Returns None when the text does not hold a finite non-negative number.
    """
    if not text:
        return None
    cleaned = NUMBER_NOISE_PATTERN.sub("", text)
    cleaned = TRAILING_SIGN_PATTERN.sub("", cleaned.strip())
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    return value


def find_number_tokens(line: str, line_offset: int = 0) -> list[NumberToken]:
    """Return numeric-looking substrings of a line, left to right; unparsable runs are dropped."""
    tokens: list[NumberToken] = []
    if not line:
        return tokens
    for match in NUMBER_TOKEN_PATTERN.finditer(line):
        value = parse_number(match.group(0))
        if value is None:
            continue
        tokens.append(
            NumberToken(
                text=match.group(0),
                value=value,
                position=match.start(),
                line_offset=line_offset,
            )
        )
    return tokens


def format_amount(value: Decimal | float | str | None) -> str:
    """Format as thousands-separated with two decimals, e.g. 1950 -> "1,950.00"."""
    if value is None:
        return ""
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return ""
    if not number.is_finite():
        return ""
    with localcontext(LEDGER_CONTEXT) as ctx:
        # Enough digits to keep every integer digit plus the cents
        ctx.prec = max(ctx.prec, number.adjusted() + 4)
        return f"{number.quantize(CENTS, rounding=ROUND_HALF_UP):,.2f}"


def multiply(left: Decimal, right: Decimal) -> Decimal | None:
    """Product of two parsed numbers, or None when it does not fit a finite Decimal."""
    with localcontext(LEDGER_CONTEXT):
        product = left * right
    return product if product.is_finite() else None


def sum_amounts(texts: Iterable[str]) -> Decimal:
    """Sum the parsable printed amounts; blank or unparsable texts are skipped."""
    total = Decimal("0")
    with localcontext(LEDGER_CONTEXT):
        for text in texts:
            amount = parse_number(text)
            if amount is not None:
                total += amount
    return total


def normalize_total(text: str | None) -> str:
    """Strip currency glyphs and the trailing sign run from a printed total."""
    if not text:
        return ""
    cleaned = CURRENCY_PATTERN.sub("", text)
    cleaned = TRAILING_SIGN_PATTERN.sub("", cleaned.strip())
    return cleaned.strip()


def render_field(value: FieldValue | None) -> str:
    """Collapse a field value to text: printed text wins, computed values are formatted."""
    if value is None:
        return ""
    if isinstance(value, Computed):
        return format_amount(value.value)
    return value.text
