"""Money arithmetic shared by cart totals and checkout snapshots.

Prices are stored as floats on the aggregates; every calculation goes through
``Decimal`` and is rounded half-up to cents before it is handed back.
"""

from decimal import ROUND_HALF_UP, Decimal

# Applied to every line at checkout, never to displayed cart totals.
DISCOUNT_RATE = Decimal("0.9")

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Convert a float, int, str or Decimal to a Decimal rounded to cents."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def discounted_price(price) -> Decimal:
    """Unit price charged at checkout for a product currently priced at ``price``."""
    return to_money(Decimal(str(price)) * DISCOUNT_RATE)


def lines_total(lines) -> Decimal:
    """Sum ``unit_price * quantity`` over ``(unit_price, quantity)`` pairs."""
    total = sum((Decimal(str(price)) * quantity for price, quantity in lines), Decimal("0"))
    return to_money(total)
