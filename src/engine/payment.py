"""Down payment, level P&I payment, and monthly carrying costs.

Pure functions: Decimal in, Decimal out. No I/O. Never raises: negative and
non-finite inputs are treated as 0.
"""

from decimal import Decimal

from src.models.inputs import DownPaymentType, MortgageInputs

ZERO = Decimal("0")
HUNDRED = Decimal("100")
TWELVE = Decimal("12")


def safe_decimal(value) -> Decimal:
    """Coerce to a finite Decimal, 0 otherwise."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value if value.is_finite() else ZERO


def non_negative(value) -> Decimal:
    return max(ZERO, safe_decimal(value))


def non_negative_int(value) -> int:
    """Floor a count (months, years) to a non-negative int."""
    return int(non_negative(value))


def clamp(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    return min(high, max(low, value))


def compute_down_payment(
    home_price: Decimal, down_payment_type: DownPaymentType, value: Decimal
) -> tuple[Decimal, Decimal]:
    """Resolve a down payment input into (amount, percent of home price).

    Amounts clamp to [0, home_price], percents to [0, 100].
    """
    hp = non_negative(home_price)
    v = non_negative(value)
    if hp == 0:
        return ZERO, ZERO

    if down_payment_type is DownPaymentType.AMOUNT:
        amount = clamp(v, ZERO, hp)
        return amount, amount / hp * HUNDRED

    pct = clamp(v, ZERO, HUNDRED)
    amount = pct / HUNDRED * hp
    return clamp(amount, ZERO, hp), pct


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return non_negative(annual_rate_percent) / HUNDRED / TWELVE


def monthly_payment(principal: Decimal, annual_rate_percent: Decimal, term_months: int) -> Decimal:
    """Level monthly P&I payment.

    Also used to recast mid-loan: pass the remaining balance and remaining term.
    """
    p = non_negative(principal)
    n = non_negative_int(term_months)
    if n == 0:
        return ZERO

    r = monthly_rate(annual_rate_percent)
    if r == 0:
        return p / n

    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    if factor == 1:
        # Rate too small to register at Decimal precision
        return p / n
    return p * (r * factor) / (factor - 1)


def monthly_taxes_costs(inputs: MortgageInputs) -> Decimal:
    """Non-P&I monthly costs: property tax, insurance, PMI, HOA, other."""
    return (
        non_negative(inputs.property_tax_annual) / TWELVE
        + non_negative(inputs.home_insurance_annual) / TWELVE
        + non_negative(inputs.pmi_monthly)
        + non_negative(inputs.hoa_monthly)
        + non_negative(inputs.other_costs_monthly)
    )
