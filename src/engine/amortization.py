"""Month-by-month amortization simulator.

Pure function: ScheduleParams in, tuple of AmortizationRow out. No I/O.
Identical params always yield an identical schedule.
"""

from dataclasses import dataclass
from decimal import Decimal

from src.engine.arm import due_rate_changes, remaining_term
from src.engine.dates import absolute_month, add_months
from src.engine.extras import NO_EXTRAS, ExtraPaymentPlan, extra_for_month
from src.engine.payment import ZERO, monthly_payment, monthly_rate, non_negative, non_negative_int
from src.models.inputs import ArmRateChange
from src.models.results import AmortizationRow

PAYOFF_THRESHOLD = Decimal("0.005")


@dataclass(frozen=True)
class ScheduleParams:
    loan_amount: Decimal
    term_months: int
    annual_rate_percent: Decimal
    scheduled_monthly_pi: Decimal
    start_month_index: int = 0
    start_year: int = 0
    rate_changes: tuple[ArmRateChange, ...] = ()  # Sorted by effective month
    extras: ExtraPaymentPlan = NO_EXTRAS
    payoff_threshold: Decimal = PAYOFF_THRESHOLD


@dataclass
class _LoanState:
    balance: Decimal
    rate_percent: Decimal
    monthly_rate: Decimal
    scheduled_pi: Decimal
    next_change: int = 0


def _apply_rate_changes(
    state: _LoanState,
    track: tuple[ArmRateChange, ...],
    term_months: int,
    month: int,
    months_elapsed: int,
) -> bool:
    """Apply ARM changes effective this month; True if any applied."""
    due, state.next_change = due_rate_changes(track, state.next_change, month)
    for change in due:
        state.rate_percent = non_negative(change.annual_rate_percent)
        state.monthly_rate = monthly_rate(state.rate_percent)
        # Recast from the balance before this month's payment
        state.scheduled_pi = monthly_payment(
            state.balance,
            state.rate_percent,
            remaining_term(term_months, months_elapsed),
        )
    return bool(due)


def build_schedule(params: ScheduleParams) -> tuple[AmortizationRow, ...]:
    """Simulate the loan until payoff or term exhaustion.

    Each month: apply rate changes, accrue interest, pay scheduled P&I (never
    more than what closes the loan), then apply extra principal capped at the
    remaining balance.
    """
    term_months = non_negative_int(params.term_months)
    threshold = non_negative(params.payoff_threshold)
    state = _LoanState(
        balance=non_negative(params.loan_amount),
        rate_percent=non_negative(params.annual_rate_percent),
        monthly_rate=monthly_rate(params.annual_rate_percent),
        scheduled_pi=non_negative(params.scheduled_monthly_pi),
    )

    rows: list[AmortizationRow] = []
    i = 0
    while i < term_months and state.balance > threshold:
        month_index, year = add_months(params.start_month_index, params.start_year, i)
        is_rate_change = _apply_rate_changes(
            state, params.rate_changes, term_months, absolute_month(month_index, year), i
        )

        interest = ZERO if state.monthly_rate == 0 else state.balance * state.monthly_rate
        payment_pi = min(state.scheduled_pi, state.balance + interest)
        principal = min(max(ZERO, payment_pi - interest), state.balance)

        extra = extra_for_month(params.extras, month_index, year)
        extra = min(extra, max(ZERO, state.balance - principal))

        state.balance = max(ZERO, state.balance - principal - extra)

        rows.append(AmortizationRow(
            index=i + 1,
            month_index=month_index,
            year=year,
            annual_rate_percent=state.rate_percent,
            scheduled_pi=state.scheduled_pi,
            is_rate_change_month=is_rate_change,
            payment_pi=payment_pi,
            interest=interest,
            principal=principal,
            extra_principal=extra,
            total_to_lender=payment_pi + extra,
            balance=state.balance,
        ))
        i += 1

    return tuple(rows)


def summarize_schedule(schedule: tuple[AmortizationRow, ...]) -> tuple[Decimal, Decimal]:
    """(total interest, total paid to lender)."""
    total_interest = sum((r.interest for r in schedule), ZERO)
    total_to_lender = sum((r.total_to_lender for r in schedule), ZERO)
    return total_interest, total_to_lender
