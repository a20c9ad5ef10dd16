"""Fixed-point decimal policy shared by every amortisation strategy.

Money is held at two decimal places and rounded half-up. Rate arithmetic keeps
``RATE_SCALE`` fractional digits and every calculation runs inside its own
decimal context, so the global ``decimal`` context is never modified.
"""

from decimal import Context, Decimal, ROUND_HALF_UP

CURRENCY_SCALE = 2
RATE_SCALE = 15
ROUNDING = ROUND_HALF_UP

# Significant digits kept for intermediate results such as (1 + r)^n
INTERNAL_PRECISION = 60

CURRENCY_QUANTUM = Decimal(1).scaleb(-CURRENCY_SCALE)
RATE_QUANTUM = Decimal(1).scaleb(-RATE_SCALE)

ZERO = Decimal("0")
MONTHS_PER_YEAR = Decimal(12)
HUNDRED = Decimal(100)


def calculation_context() -> Context:
    """Context to pass to ``decimal.localcontext`` for one calculation"""
    return Context(prec=INTERNAL_PRECISION, rounding=ROUNDING)


def to_currency(value: Decimal) -> Decimal:
    """Round a value to currency scale (2 places, half-up)"""
    return value.quantize(CURRENCY_QUANTUM, rounding=ROUNDING)


def to_rate(value: Decimal) -> Decimal:
    """Round a value to rate scale (15 places, half-up)"""
    return value.quantize(RATE_QUANTUM, rounding=ROUNDING)


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    """
    Convert an annual percentage rate into a monthly decimal rate.

    Each division is rounded to ``RATE_SCALE`` places, so 8.5 becomes
    0.007083333333333. The result is never rounded to currency scale.
    """
    return to_rate(to_rate(annual_rate_percent / MONTHS_PER_YEAR) / HUNDRED)


def plain(value: Decimal) -> str:
    """Render a decimal without scientific notation"""
    return format(value, "f")
