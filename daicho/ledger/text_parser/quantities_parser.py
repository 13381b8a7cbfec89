"""Quantity / unit price / amount disambiguation inside an item block.

Ledger blocks carry no column grammar, so numbers are classified by an ordered
list of strategies. Each strategy looks at the block's numeric tokens (item
code already removed) and either returns a resolution or None; the first
resolution wins.

Strategy order:
1. Last pair: the bottom-most line with two or more numbers is the
   "quantity  unit price" row; the next line with a number holds the amount.
       0.10 19,500.00   <- quantity, unit price
       1,950.00         <- amount
2. Best fit: largest number is the amount, the (quantity, price) pair whose
   product is closest to it is chosen.
3. Degenerate counts: two numbers (policy dependent), one number, none.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import localcontext

from daicho.domain.ledger import Computed, FieldValue, NumberToken, Printed

from ..format_rules import LedgerFormat
from .common import LEDGER_CONTEXT, multiply


@dataclass(frozen=True)
class QuantityResolution:
    """Classified numeric fields of one item."""

    quantity: FieldValue | None = None
    unit_price: FieldValue | None = None
    amount: FieldValue | None = None
    rule: str = "blank"

    @property
    def has_computed_value(self) -> bool:
        return any(isinstance(v, Computed) for v in (self.quantity, self.unit_price, self.amount))


QuantityStrategy = Callable[[Sequence[Sequence[NumberToken]], LedgerFormat], QuantityResolution | None]


def _flatten(tokens_by_line: Sequence[Sequence[NumberToken]]) -> list[NumberToken]:
    return [token for line_tokens in tokens_by_line for token in line_tokens]


def resolve_last_pair(
    tokens_by_line: Sequence[Sequence[NumberToken]],
    _ledger_format: LedgerFormat,
) -> QuantityResolution | None:
    """Bottom-most multi-number line -> (quantity, price); next numeric line -> amount."""
    pair_idx = None
    for idx, line_tokens in enumerate(tokens_by_line):
        if len(line_tokens) >= 2:
            pair_idx = idx
    if pair_idx is None:
        return None

    qty_token, price_token = tokens_by_line[pair_idx][-2:]

    amount: FieldValue | None = None
    for line_tokens in tokens_by_line[pair_idx + 1 :]:
        if line_tokens:
            amount = Printed(line_tokens[-1].text)
            break
    if amount is None:
        # No amount line printed below the pair
        product = multiply(qty_token.value, price_token.value)
        amount = Computed(product) if product is not None else None

    return QuantityResolution(
        quantity=Printed(qty_token.text),
        unit_price=Printed(price_token.text),
        amount=amount,
        rule="last_pair",
    )


def resolve_best_fit(
    tokens_by_line: Sequence[Sequence[NumberToken]],
    ledger_format: LedgerFormat,
) -> QuantityResolution | None:
    """Largest number = amount; pick the (quantity, price) pair whose product matches it best."""
    tokens = _flatten(tokens_by_line)
    if len(tokens) < 3:
        return None

    # max() keeps the first maximal token, i.e. the earliest in reading order
    amount_token = max(tokens, key=lambda t: t.value)
    candidates = [(order, t) for order, t in enumerate(tokens) if t is not amount_token and t.value > 0]

    best: tuple | None = None
    with localcontext(LEDGER_CONTEXT):
        for qty_order, qty_token in candidates:
            for price_order, price_token in candidates:
                if qty_order == price_order:
                    continue
                diff = abs(qty_token.value * price_token.value - amount_token.value)
                if not diff.is_finite():
                    continue
                key = (diff, qty_order, price_order)
                if best is None or key < best[0]:
                    best = (key, qty_token, price_token)

    if best is not None and best[0][0] <= ledger_format.fit_tolerance:
        _, qty_token, price_token = best
        return QuantityResolution(
            quantity=Printed(qty_token.text),
            unit_price=Printed(price_token.text),
            amount=Printed(amount_token.text),
            rule="best_fit",
        )

    # Nothing multiplies out: two smallest numbers, amount has to be computed
    smallest = sorted(tokens, key=lambda t: t.value)[:2]
    product = multiply(smallest[0].value, smallest[1].value)
    return QuantityResolution(
        quantity=Printed(smallest[0].text),
        unit_price=Printed(smallest[1].text),
        amount=Computed(product) if product is not None else None,
        rule="smallest_pair",
    )


def resolve_two_tokens(
    tokens_by_line: Sequence[Sequence[NumberToken]],
    ledger_format: LedgerFormat,
) -> QuantityResolution | None:
    """
    Two numbers only: the smaller is always the quantity.

    The larger one is the amount under the "amount" policy (price left blank),
    or the unit price under the "price" policy (amount = quantity x price).
    """
    tokens = _flatten(tokens_by_line)
    if len(tokens) != 2:
        return None
    small, large = sorted(tokens, key=lambda t: t.value)
    if ledger_format.two_token_policy == "price":
        product = multiply(small.value, large.value)
        return QuantityResolution(
            quantity=Printed(small.text),
            unit_price=Printed(large.text),
            amount=Computed(product) if product is not None else None,
            rule="two_tokens_price",
        )
    return QuantityResolution(
        quantity=Printed(small.text),
        amount=Printed(large.text),
        rule="two_tokens_amount",
    )


def resolve_single_token(
    tokens_by_line: Sequence[Sequence[NumberToken]],
    _ledger_format: LedgerFormat,
) -> QuantityResolution | None:
    """One number only: it can only be the quantity."""
    tokens = _flatten(tokens_by_line)
    if len(tokens) != 1:
        return None
    return QuantityResolution(quantity=Printed(tokens[0].text), rule="single_token")


DEFAULT_QUANTITY_STRATEGIES: tuple[QuantityStrategy, ...] = (
    resolve_last_pair,
    resolve_best_fit,
    resolve_two_tokens,
    resolve_single_token,
)


def resolve_quantities(
    tokens_by_line: Sequence[Sequence[NumberToken]],
    ledger_format: LedgerFormat,
    strategies: Sequence[QuantityStrategy] | None = None,
) -> QuantityResolution:
    """
    Run quantity strategies in order and return the first resolution.

    Args:
        tokens_by_line: Numeric tokens per block line, item code removed
        ledger_format: Format table (tolerances, two-token policy)
        strategies: Override strategy order; defaults to DEFAULT_QUANTITY_STRATEGIES

    Returns:
        The first strategy result, or an all-blank resolution
    """
    for strategy in strategies if strategies is not None else DEFAULT_QUANTITY_STRATEGIES:
        resolution = strategy(tokens_by_line, ledger_format)
        if resolution is not None:
            return resolution
    return QuantityResolution()
