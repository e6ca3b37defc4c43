"""Extra principal payment rules.

Two mutually exclusive modes, chosen once per calculation:

    LEGACY: single-value monthly (from a start month) and yearly (one month of
            every year from a start year) extras.
    RANGED: any number of dated monthly / yearly ranges, summed per month.

A one-time extra applies in either mode. Pure functions. No I/O.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from src.engine.dates import absolute_month, clamp_month_index
from src.engine.payment import ZERO, non_negative, non_negative_int
from src.models.inputs import ExtraMonthlyRange, ExtraYearlyRange, MortgageInputs

logger = logging.getLogger(__name__)


class ExtraPaymentMode(Enum):
    LEGACY = "legacy"
    RANGED = "ranged"


@dataclass(frozen=True)
class ExtraPaymentPlan:
    mode: ExtraPaymentMode = ExtraPaymentMode.LEGACY

    monthly: Decimal = ZERO
    monthly_start: int = 0  # Absolute month
    yearly: Decimal = ZERO
    yearly_month_index: int = 0
    yearly_start_year: int = 0
    one_time: Decimal = ZERO
    one_time_month_index: int = 0
    one_time_year: int = 0

    monthly_ranges: tuple[ExtraMonthlyRange, ...] = ()
    yearly_ranges: tuple[ExtraYearlyRange, ...] = ()


NO_EXTRAS = ExtraPaymentPlan()


def extra_payment_mode(inputs: MortgageInputs) -> ExtraPaymentMode:
    if inputs.extra_ranges_valid and inputs.has_extra_ranges:
        return ExtraPaymentMode.RANGED
    return ExtraPaymentMode.LEGACY


def build_extra_plan(inputs: MortgageInputs) -> ExtraPaymentPlan:
    """Normalize the caller's extra-payment configuration.

    In RANGED mode the legacy monthly/yearly amounts are zeroed so the two
    never stack. In LEGACY mode the ranges are dropped.
    """
    mode = extra_payment_mode(inputs)
    ranged = mode is ExtraPaymentMode.RANGED
    if not inputs.extra_ranges_valid and inputs.has_extra_ranges:
        logger.debug("Extra-payment ranges flagged invalid, ignoring them")

    return ExtraPaymentPlan(
        mode=mode,
        monthly=ZERO if ranged else non_negative(inputs.extra_monthly),
        monthly_start=absolute_month(
            clamp_month_index(inputs.extra_monthly_start_month_index),
            non_negative_int(inputs.extra_monthly_start_year),
        ),
        yearly=ZERO if ranged else non_negative(inputs.extra_yearly),
        yearly_month_index=clamp_month_index(inputs.extra_yearly_month_index),
        yearly_start_year=non_negative_int(inputs.extra_yearly_start_year),
        one_time=non_negative(inputs.extra_one_time),
        one_time_month_index=clamp_month_index(inputs.extra_one_time_month_index),
        one_time_year=non_negative_int(inputs.extra_one_time_year),
        monthly_ranges=inputs.extra_monthly_ranges if ranged else (),
        yearly_ranges=inputs.extra_yearly_ranges if ranged else (),
    )


def _in_range(month: int, start: int, end: int | None) -> bool:
    return month >= start and (end is None or month <= end)


def ranged_monthly_extra(ranges: tuple[ExtraMonthlyRange, ...], month: int) -> Decimal:
    return sum(
        (non_negative(r.amount) for r in ranges if _in_range(month, r.start_month, r.end_month)),
        ZERO,
    )


def ranged_yearly_extra(
    ranges: tuple[ExtraYearlyRange, ...], month_index: int, month: int
) -> Decimal:
    return sum(
        (
            non_negative(r.amount)
            for r in ranges
            if r.payment_month_index == month_index and _in_range(month, r.start_month, r.end_month)
        ),
        ZERO,
    )


def extra_for_month(plan: ExtraPaymentPlan, month_index: int, year: int) -> Decimal:
    """Uncapped extra principal scheduled for the given calendar month."""
    month = absolute_month(month_index, year)

    if plan.mode is ExtraPaymentMode.RANGED:
        monthly = ranged_monthly_extra(plan.monthly_ranges, month)
        yearly = ranged_yearly_extra(plan.yearly_ranges, month_index, month)
    else:
        monthly = plan.monthly if plan.monthly > 0 and month >= plan.monthly_start else ZERO
        yearly = (
            plan.yearly
            if plan.yearly > 0
            and year >= plan.yearly_start_year
            and month_index == plan.yearly_month_index
            else ZERO
        )

    one_time = (
        plan.one_time
        if plan.one_time > 0
        and year == plan.one_time_year
        and month_index == plan.one_time_month_index
        else ZERO
    )

    return max(ZERO, monthly) + max(ZERO, yearly) + max(ZERO, one_time)
