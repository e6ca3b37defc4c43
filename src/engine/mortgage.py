"""Mortgage calculation orchestrator: inputs → (summary, schedule).

Runs the amortization simulator twice, once with the caller's extra payments
and once without (the baseline), and reduces both into a MortgageSummary.

Pure computation. No I/O. Dataclasses in, MortgageCalculation out.
"""

import logging
from dataclasses import replace
from decimal import Decimal

from src.engine.amortization import (
    PAYOFF_THRESHOLD,
    ScheduleParams,
    build_schedule,
    summarize_schedule,
)
from src.engine.arm import rate_change_track
from src.engine.dates import clamp_month_index
from src.engine.extras import NO_EXTRAS, build_extra_plan
from src.engine.payment import (
    ZERO,
    compute_down_payment,
    monthly_payment,
    monthly_rate,
    monthly_taxes_costs,
    non_negative,
    non_negative_int,
)
from src.models.inputs import MortgageInputs
from src.models.results import MortgageCalculation, MortgageSummary

logger = logging.getLogger(__name__)


def calculate_mortgage(
    inputs: MortgageInputs,
    payoff_threshold: Decimal = PAYOFF_THRESHOLD,
) -> MortgageCalculation:
    """Compute the amortization schedule and summary for one set of inputs."""
    home_price = non_negative(inputs.home_price)
    term_months = int(non_negative(inputs.loan_term_years) * 12)
    annual_rate = non_negative(inputs.interest_rate_annual_percent)

    down_amount, down_percent = compute_down_payment(
        home_price, inputs.down_payment_type, inputs.down_payment_value
    )
    loan_amount = max(ZERO, home_price - down_amount)
    scheduled_pi = monthly_payment(loan_amount, annual_rate, term_months)
    carrying_costs = monthly_taxes_costs(inputs)

    start_month_index = clamp_month_index(inputs.start_month_index)
    start_year = non_negative_int(inputs.start_year)

    actual_params = ScheduleParams(
        loan_amount=loan_amount,
        term_months=term_months,
        annual_rate_percent=annual_rate,
        scheduled_monthly_pi=scheduled_pi,
        start_month_index=start_month_index,
        start_year=start_year,
        rate_changes=rate_change_track(inputs),
        extras=build_extra_plan(inputs),
        payoff_threshold=payoff_threshold,
    )
    # Baseline: same loan and rate track, no extra principal of any kind
    baseline_params = replace(actual_params, extras=NO_EXTRAS)

    schedule = build_schedule(actual_params)
    baseline = build_schedule(baseline_params)

    total_interest, total_to_lender = summarize_schedule(schedule)
    baseline_interest, _ = summarize_schedule(baseline)

    months_to_payoff = len(schedule)
    if schedule:
        payoff_month_index, payoff_year = schedule[-1].month_index, schedule[-1].year
    else:
        payoff_month_index, payoff_year = start_month_index, start_year

    total_taxes_costs = carrying_costs * months_to_payoff if inputs.include_taxes_costs else ZERO

    logger.debug(
        "Calculated %d-month schedule (baseline %d) for loan %s at %s%%",
        months_to_payoff,
        len(baseline),
        loan_amount,
        annual_rate,
    )

    summary = MortgageSummary(
        home_price=home_price,
        down_payment_amount=down_amount,
        down_payment_percent=down_percent,
        loan_amount=loan_amount,
        term_months=term_months,
        annual_rate_percent=annual_rate,
        monthly_rate=monthly_rate(annual_rate),
        scheduled_monthly_pi=scheduled_pi,
        monthly_taxes_costs=carrying_costs,
        months_to_payoff=months_to_payoff,
        payoff_month_index=payoff_month_index,
        payoff_year=payoff_year,
        total_interest=total_interest,
        total_to_lender=total_to_lender,
        total_taxes_costs=total_taxes_costs,
        total_out_of_pocket=total_to_lender + total_taxes_costs,
        baseline_months_to_payoff=len(baseline),
        baseline_total_interest=baseline_interest,
        interest_saved=max(ZERO, baseline_interest - total_interest),
        months_saved=max(0, len(baseline) - months_to_payoff),
    )
    return MortgageCalculation(summary=summary, schedule=schedule)
