"""Form input parsing: raw text fields → validated MortgageInputs.

This is the validation boundary. Problems with ARM rate changes or extra
payment ranges never raise; they are reported through the validity flags on
MortgageInputs (which the engine treats as "ignore this feature") and a
human-readable message.
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation

from src.config import settings
from src.engine.dates import absolute_month, clamp_month_index
from src.engine.payment import ZERO
from src.models.inputs import (
    ArmRateChange,
    ArmRateChangeRaw,
    ExtraMonthlyRange,
    ExtraMonthlyRangeRaw,
    ExtraYearlyRange,
    ExtraYearlyRangeRaw,
    InterestType,
    MortgageInputs,
    MortgageInputsRaw,
)

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


@dataclass(frozen=True)
class ParsedInputs:
    inputs: MortgageInputs
    arm_rate_validation_message: str | None = None
    extra_range_validation_message: str | None = None


def number_from_input(raw: str | None) -> Decimal:
    """Parse a loosely formatted number ("$1,200.50" → 1200.50); 0 if unparseable."""
    cleaned = _NON_NUMERIC.sub("", raw or "")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return ZERO
    return value if value.is_finite() else ZERO


def clamp_int(value: Decimal, low: int, high: int) -> int:
    return min(high, max(low, math.floor(value)))


def parse_year(raw: str | None, default: int) -> int:
    parsed = number_from_input(raw)
    return clamp_int(parsed if parsed > 0 else Decimal(default), settings.min_year, settings.max_year)


def _intervals_overlap(intervals: list[tuple[int, float]]) -> bool:
    prev_end = -math.inf
    for start, end in sorted(intervals, key=lambda it: it[0]):
        if start <= prev_end:
            return True
        prev_end = max(prev_end, end)
    return False


def _range_bounds(
    start_month_index: int,
    start_year_raw: str,
    end_enabled: bool,
    end_month_index: int,
    end_year_raw: str,
    default_start_year: int,
) -> tuple[int, int | None]:
    start_year = parse_year(start_year_raw, default_start_year)
    start_index = clamp_month_index(start_month_index)
    start = absolute_month(start_index, start_year)
    if not end_enabled:
        return start, None
    end_year = parse_year(end_year_raw, start_year)
    return start, absolute_month(clamp_month_index(end_month_index), end_year)


def parse_monthly_ranges(
    raw_ranges: tuple[ExtraMonthlyRangeRaw, ...], default_start_year: int
) -> tuple[tuple[ExtraMonthlyRange, ...], str | None]:
    """Parse monthly ranges; the message is None when they are valid."""
    ranges = []
    message = None
    for r in raw_ranges:
        start, end = _range_bounds(
            r.start_month_index, r.start_year_raw, r.end_enabled,
            r.end_month_index, r.end_year_raw, default_start_year,
        )
        if end is not None and end < start:
            message = message or "Monthly extra payment range ends before it starts."
        ranges.append(ExtraMonthlyRange(amount=number_from_input(r.amount_raw), start_month=start, end_month=end))

    intervals = [(r.start_month, math.inf if r.end_month is None else r.end_month) for r in ranges]
    if _intervals_overlap(intervals):
        message = message or "Monthly extra payment ranges overlap."
    return tuple(ranges), message


def parse_yearly_ranges(
    raw_ranges: tuple[ExtraYearlyRangeRaw, ...], default_start_year: int
) -> tuple[tuple[ExtraYearlyRange, ...], str | None]:
    ranges = []
    message = None
    for r in raw_ranges:
        start, end = _range_bounds(
            r.start_month_index, r.start_year_raw, r.end_enabled,
            r.end_month_index, r.end_year_raw, default_start_year,
        )
        if end is not None and end < start:
            message = message or "Yearly extra payment range ends before it starts."
        ranges.append(ExtraYearlyRange(
            amount=number_from_input(r.amount_raw),
            payment_month_index=clamp_month_index(r.payment_month_index),
            start_month=start,
            end_month=end,
        ))

    intervals = [(r.start_month, math.inf if r.end_month is None else r.end_month) for r in ranges]
    if _intervals_overlap(intervals):
        message = message or "Yearly extra payment ranges overlap."
    return tuple(ranges), message


def parse_arm_rate_changes(
    raw_changes: tuple[ArmRateChangeRaw, ...],
    loan_start: int,
    term_months: int,
    default_year: int,
) -> tuple[tuple[ArmRateChange, ...], str | None]:
    """Parse ARM changes; each must fall strictly inside the loan term.

    The first payment month is excluded since the initial rate already
    applies there.
    """
    changes = []
    seen: set[int] = set()
    message = None
    last_payment = loan_start + term_months - 1

    for r in raw_changes:
        month = absolute_month(
            clamp_month_index(r.effective_month_index), parse_year(r.effective_year_raw, default_year)
        )
        rate = number_from_input(r.rate_annual_percent_raw)

        if rate < 0:
            message = message or "ARM rates cannot be negative."
        elif month <= loan_start:
            message = message or "ARM rate changes must come after the first payment."
        elif month > last_payment:
            message = message or "ARM rate changes must fall within the loan term."
        elif month in seen:
            message = message or "Only one ARM rate change is allowed per month."
        seen.add(month)
        changes.append(ArmRateChange(effective_month=month, annual_rate_percent=rate))

    changes.sort(key=lambda c: c.effective_month)
    return tuple(changes), message


def parse_mortgage_inputs(raw: MortgageInputsRaw, current_year: int | None = None) -> ParsedInputs:
    """Parse and validate a raw form into MortgageInputs."""
    current_year = current_year or date.today().year

    start_month_index = clamp_month_index(raw.start_month_index)
    start_year = parse_year(raw.start_year_raw, current_year)
    loan_start = absolute_month(start_month_index, start_year)

    term_years = min(number_from_input(raw.loan_term_years_raw), Decimal(settings.max_term_years))
    term_months = int(max(ZERO, term_years) * 12)

    # ARM
    arm_changes: tuple[ArmRateChange, ...] = ()
    arm_message = None
    if raw.interest_type is InterestType.ARM:
        arm_changes, arm_message = parse_arm_rate_changes(
            raw.arm_rate_changes, loan_start, term_months, start_year
        )
        if arm_message:
            logger.info("ARM rate changes rejected: %s", arm_message)

    # Extra-payment ranges
    monthly_ranges, monthly_message = parse_monthly_ranges(raw.extra_monthly_ranges or (), start_year)
    yearly_ranges, yearly_message = parse_yearly_ranges(raw.extra_yearly_ranges or (), start_year)

    range_mode = raw.extra_monthly_ranges is not None or raw.extra_yearly_ranges is not None
    has_ranges = bool(monthly_ranges or yearly_ranges)
    range_message = (monthly_message or yearly_message) if has_ranges else None
    ranges_valid = range_message is None
    if range_message:
        logger.info("Extra payment ranges rejected: %s", range_message)

    extra_monthly_start_index = (
        raw.extra_monthly_start_month_index
        if raw.extra_monthly_start_month_index is not None
        else start_month_index
    )

    inputs = MortgageInputs(
        home_price=number_from_input(raw.home_price_raw),
        down_payment_type=raw.down_payment_type,
        down_payment_value=number_from_input(raw.down_payment_raw),
        loan_term_years=max(ZERO, term_years),
        interest_rate_annual_percent=number_from_input(raw.interest_rate_raw),
        interest_type=raw.interest_type,
        arm_rate_changes=arm_changes,
        arm_rate_changes_valid=arm_message is None,
        start_month_index=start_month_index,
        start_year=start_year,
        include_taxes_costs=raw.include_taxes_costs,
        property_tax_annual=number_from_input(raw.property_tax_annual_raw),
        home_insurance_annual=number_from_input(raw.home_insurance_annual_raw),
        pmi_monthly=number_from_input(raw.pmi_monthly_raw),
        hoa_monthly=number_from_input(raw.hoa_monthly_raw),
        other_costs_monthly=number_from_input(raw.other_costs_monthly_raw),
        # Range forms replace the legacy monthly/yearly fields entirely
        extra_monthly=ZERO if range_mode else number_from_input(raw.extra_monthly_raw),
        extra_monthly_start_month_index=clamp_month_index(extra_monthly_start_index),
        extra_monthly_start_year=parse_year(raw.extra_monthly_start_year_raw, start_year),
        extra_yearly=ZERO if range_mode else number_from_input(raw.extra_yearly_raw),
        extra_yearly_month_index=clamp_month_index(raw.extra_yearly_month_index),
        extra_yearly_start_year=parse_year(raw.extra_yearly_start_year_raw, current_year + 1),
        extra_one_time=number_from_input(raw.extra_one_time_raw),
        extra_one_time_month_index=clamp_month_index(raw.extra_one_time_month_index),
        extra_one_time_year=parse_year(raw.extra_one_time_year_raw, current_year),
        extra_monthly_ranges=monthly_ranges if ranges_valid else (),
        extra_yearly_ranges=yearly_ranges if ranges_valid else (),
        extra_ranges_valid=ranges_valid,
    )
    return ParsedInputs(
        inputs=inputs,
        arm_rate_validation_message=arm_message,
        extra_range_validation_message=range_message,
    )
