"""Refinance break-even analysis.

Pure functions: Decimal in, dataclass out. No I/O.
"""

import math
from decimal import Decimal

from src.engine.payment import ZERO, monthly_payment, non_negative, non_negative_int
from src.models.results import (
    AmortizationRow,
    MortgageCalculation,
    MortgageSummary,
    RefinanceResult,
)


def compute_refinance_break_even(
    remaining_balance: Decimal,
    remaining_term_months: int,
    current_monthly_pi: Decimal,
    new_rate_annual_percent: Decimal,
    new_term_months: int,
    closing_costs: Decimal,
) -> RefinanceResult:
    """Compare the current P&I against a new loan for the remaining balance.

    Break-even is the number of months of savings needed to recover closing
    costs; None when the new payment saves nothing. Net savings are counted
    over the shorter of the remaining and new terms.
    """
    balance = non_negative(remaining_balance)
    old_pi = non_negative(current_monthly_pi)
    costs = non_negative(closing_costs)

    new_pi = monthly_payment(balance, new_rate_annual_percent, new_term_months)
    savings = old_pi - new_pi

    if savings > 0:
        break_even = math.ceil(costs / savings)
        months = min(non_negative_int(remaining_term_months), non_negative_int(new_term_months))
        net_savings = savings * months - costs
    else:
        break_even = None
        net_savings = -costs

    return RefinanceResult(
        remaining_balance=balance,
        old_monthly_pi=old_pi,
        new_monthly_pi=new_pi,
        monthly_savings=savings,
        break_even_months=break_even,
        total_savings_over_remaining_term=net_savings,
    )


def remaining_balance_at_payment(
    summary: MortgageSummary,
    schedule: tuple[AmortizationRow, ...],
    payment_index: int,
) -> Decimal:
    """Balance after the given 1-based payment (clamped to the schedule)."""
    if not schedule:
        return summary.loan_amount
    idx = max(1, min(int(payment_index), len(schedule)))
    return schedule[idx - 1].balance


def refinance_at_payment(
    calculation: MortgageCalculation,
    payment_index: int,
    new_rate_annual_percent: Decimal,
    new_term_months: int,
    closing_costs: Decimal,
) -> RefinanceResult | None:
    """Refinance an existing schedule right after ``payment_index``.

    Returns None when there is no balance left to refinance.
    """
    schedule = calculation.schedule
    if not schedule:
        return None

    idx = max(1, min(int(payment_index), len(schedule)))
    balance = remaining_balance_at_payment(calculation.summary, schedule, idx)
    new_term = max(1, non_negative_int(new_term_months))
    if balance <= 0:
        return None

    return compute_refinance_break_even(
        remaining_balance=balance,
        remaining_term_months=max(0, len(schedule) - idx),
        current_monthly_pi=schedule[idx - 1].scheduled_pi,
        new_rate_annual_percent=new_rate_annual_percent,
        new_term_months=new_term,
        closing_costs=closing_costs,
    )
