from decimal import ROUND_HALF_UP, Decimal, localcontext

from .config import CURRENCY_SYMBOL

CENT = Decimal("0.01")


def to_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    # str() first so 0.1 stays 0.1 instead of its binary expansion
    return Decimal(str(amount))


def format_price(amount) -> str:
    """Render an amount as en-US dollars, e.g. ``$45,000.00``.

    Rounds to cents half away from zero.
    """
    value = to_decimal(amount)
    if not value.is_finite():
        raise ValueError(f"Cannot format non-finite amount: {amount!r}")

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
        sign = "-" if rounded < 0 else ""
        return f"{sign}{CURRENCY_SYMBOL}{abs(rounded):,.2f}"
