"""Scenario comparison: summary deltas, payment series, schedule events, risk.

Pure functions over two MortgageCalculations. No I/O.
"""

from decimal import Decimal

from src.engine.dates import format_month_year, from_absolute
from src.engine.payment import ZERO
from src.models.results import (
    AmortizationRow,
    DatedValue,
    MortgageCalculation,
    PaymentPoint,
    ResetJump,
    RiskSummary,
    ScenarioComparison,
    ScheduleEvent,
)

CHANGE_TOLERANCE = Decimal("0.005")


def total_monthly_outflow(row: AmortizationRow, monthly_taxes_costs: Decimal) -> Decimal:
    return row.payment_pi + row.extra_principal + monthly_taxes_costs


def _changed(a: Decimal, b: Decimal) -> bool:
    return abs(a - b) > CHANGE_TOLERANCE


def row_tags(
    row: AmortizationRow,
    prev: AmortizationRow | None,
    is_first: bool,
    is_payoff: bool,
) -> list[str]:
    tags = []
    if is_first:
        tags.append("Start")
    if row.is_rate_change_month:
        tags.append("ARM reset")
    if prev is not None:
        if _changed(row.scheduled_pi, prev.scheduled_pi):
            tags.append("Recast")
        if _changed(row.extra_principal, prev.extra_principal):
            tags.append("Extra changed")
    if is_payoff:
        tags.append("Payoff")
    return tags


def schedule_events(schedule: tuple[AmortizationRow, ...]) -> list[ScheduleEvent]:
    """Months worth calling out: start, resets, recasts, extra changes, payoff."""
    events = []
    for i, row in enumerate(schedule):
        prev = schedule[i - 1] if i > 0 else None
        tags = row_tags(row, prev, is_first=i == 0, is_payoff=i == len(schedule) - 1)
        if tags:
            events.append(ScheduleEvent(
                absolute_month=row.absolute_month,
                label=format_month_year(row.month_index, row.year),
                tags=tuple(tags),
            ))
    return events


def risk_summary(
    schedule: tuple[AmortizationRow, ...], monthly_taxes_costs: Decimal
) -> RiskSummary:
    if not schedule:
        return RiskSummary()

    # Ties resolve to the earliest month
    min_row = min(schedule, key=lambda r: total_monthly_outflow(r, monthly_taxes_costs))
    max_row = max(schedule, key=lambda r: total_monthly_outflow(r, monthly_taxes_costs))
    max_rate_row = max(schedule, key=lambda r: r.annual_rate_percent)

    first_reset_jump = None
    reset_idx = next((i for i, r in enumerate(schedule) if r.is_rate_change_month), None)
    if reset_idx:
        prev, row = schedule[reset_idx - 1], schedule[reset_idx]
        first_reset_jump = ResetJump(
            delta_total=(
                total_monthly_outflow(row, monthly_taxes_costs)
                - total_monthly_outflow(prev, monthly_taxes_costs)
            ),
            delta_pi=row.payment_pi - prev.payment_pi,
            month_index=row.month_index,
            year=row.year,
        )

    return RiskSummary(
        min_total=DatedValue(
            total_monthly_outflow(min_row, monthly_taxes_costs), min_row.month_index, min_row.year
        ),
        max_total=DatedValue(
            total_monthly_outflow(max_row, monthly_taxes_costs), max_row.month_index, max_row.year
        ),
        max_rate=DatedValue(max_rate_row.annual_rate_percent, max_rate_row.month_index, max_rate_row.year),
        first_reset_jump=first_reset_jump,
    )


def payment_series(
    schedule_a: tuple[AmortizationRow, ...],
    schedule_b: tuple[AmortizationRow, ...],
    monthly_taxes_costs_a: Decimal,
    monthly_taxes_costs_b: Decimal,
) -> list[PaymentPoint]:
    """Both schedules merged on calendar month; missing side is None."""
    by_month_a = {r.absolute_month: r for r in schedule_a}
    by_month_b = {r.absolute_month: r for r in schedule_b}

    points = []
    for month in sorted(by_month_a.keys() | by_month_b.keys()):
        a = by_month_a.get(month)
        b = by_month_b.get(month)
        month_index, year = from_absolute(month)
        points.append(PaymentPoint(
            absolute_month=month,
            label=format_month_year(month_index, year),
            a_total=total_monthly_outflow(a, monthly_taxes_costs_a) if a else None,
            b_total=total_monthly_outflow(b, monthly_taxes_costs_b) if b else None,
            a_pi=a.payment_pi if a else None,
            b_pi=b.payment_pi if b else None,
            a_reset=bool(a and a.is_rate_change_month),
            b_reset=bool(b and b.is_rate_change_month),
        ))
    return points


def compare_scenarios(
    a: MortgageCalculation,
    b: MortgageCalculation,
    monthly_taxes_costs_a: Decimal = ZERO,
    monthly_taxes_costs_b: Decimal = ZERO,
) -> ScenarioComparison:
    """Compare scenario B against scenario A (deltas are B - A).

    Monthly taxes/costs are passed separately since a scenario may exclude
    them from its totals.
    """
    sa, sb = a.summary, b.summary
    return ScenarioComparison(
        delta_scheduled_pi=sb.scheduled_monthly_pi - sa.scheduled_monthly_pi,
        delta_total_monthly_payment=(
            (sb.scheduled_monthly_pi + monthly_taxes_costs_b)
            - (sa.scheduled_monthly_pi + monthly_taxes_costs_a)
        ),
        delta_total_interest=sb.total_interest - sa.total_interest,
        delta_total_out_of_pocket=sb.total_out_of_pocket - sa.total_out_of_pocket,
        delta_months_to_payoff=sb.months_to_payoff - sa.months_to_payoff,
        payment_series=payment_series(a.schedule, b.schedule, monthly_taxes_costs_a, monthly_taxes_costs_b),
        a_events=schedule_events(a.schedule),
        b_events=schedule_events(b.schedule),
        a_risk=risk_summary(a.schedule, monthly_taxes_costs_a),
        b_risk=risk_summary(b.schedule, monthly_taxes_costs_b),
    )
