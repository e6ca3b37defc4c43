from dataclasses import replace
from decimal import Decimal

from src.engine.mortgage import calculate_mortgage
from src.engine.refinance import (
    compute_refinance_break_even,
    refinance_at_payment,
    remaining_balance_at_payment,
)
from src.models.results import MortgageCalculation, MortgageSummary

CENT = Decimal("0.01")


class TestBreakEven:
    def test_standard_refinance(self):
        """$200K left, refinance to 5%/30yr from $1,200 P&I with $5K costs."""
        result = compute_refinance_break_even(
            remaining_balance=Decimal("200000"),
            remaining_term_months=300,
            current_monthly_pi=Decimal("1200"),
            new_rate_annual_percent=Decimal("5"),
            new_term_months=360,
            closing_costs=Decimal("5000"),
        )
        assert result.new_monthly_pi.quantize(CENT) == Decimal("1073.64")
        assert result.monthly_savings.quantize(CENT) == Decimal("126.36")
        # 5000 / 126.36 = 39.6 → 40 months
        assert result.break_even_months == 40
        # Savings counted over the shorter remaining term
        assert result.total_savings_over_remaining_term == result.monthly_savings * 300 - Decimal("5000")

    def test_no_savings_never_breaks_even(self):
        result = compute_refinance_break_even(
            remaining_balance=Decimal("200000"),
            remaining_term_months=300,
            current_monthly_pi=Decimal("1000"),
            new_rate_annual_percent=Decimal("7"),
            new_term_months=360,
            closing_costs=Decimal("3000"),
        )
        assert result.monthly_savings < 0
        assert result.break_even_months is None
        assert result.total_savings_over_remaining_term == Decimal("-3000")

    def test_free_refinance_breaks_even_immediately(self):
        result = compute_refinance_break_even(
            remaining_balance=Decimal("200000"),
            remaining_term_months=300,
            current_monthly_pi=Decimal("1500"),
            new_rate_annual_percent=Decimal("4"),
            new_term_months=300,
            closing_costs=Decimal("0"),
        )
        assert result.break_even_months == 0
        assert result.total_savings_over_remaining_term == result.monthly_savings * 300

    def test_vanishing_new_rate(self):
        result = compute_refinance_break_even(
            remaining_balance=Decimal("120000"),
            remaining_term_months=120,
            current_monthly_pi=Decimal("1500"),
            new_rate_annual_percent=Decimal("1e-27"),
            new_term_months=120,
            closing_costs=Decimal("2000"),
        )
        assert result.new_monthly_pi == Decimal("1000")
        assert result.break_even_months == 4


class TestRefinanceAtPayment:
    def test_uses_balance_after_payment(self, canonical_calculation):
        schedule = canonical_calculation.schedule
        result = refinance_at_payment(
            canonical_calculation,
            payment_index=60,
            new_rate_annual_percent=Decimal("4.5"),
            new_term_months=300,
            closing_costs=Decimal("4000"),
        )
        assert result.remaining_balance == schedule[59].balance
        assert result.old_monthly_pi == schedule[59].scheduled_pi
        assert result.monthly_savings > 0
        assert result.break_even_months is not None

    def test_payment_index_clamped(self, canonical_calculation):
        result = refinance_at_payment(
            canonical_calculation,
            payment_index=0,
            new_rate_annual_percent=Decimal("5"),
            new_term_months=360,
            closing_costs=Decimal("0"),
        )
        assert result.remaining_balance == canonical_calculation.schedule[0].balance

    def test_uses_recast_payment_after_arm_reset(self, arm_inputs):
        calc = calculate_mortgage(arm_inputs)
        result = refinance_at_payment(
            calc,
            payment_index=72,
            new_rate_annual_percent=Decimal("5"),
            new_term_months=288,
            closing_costs=Decimal("2500"),
        )
        assert result.old_monthly_pi == calc.schedule[71].scheduled_pi
        assert result.old_monthly_pi > calc.summary.scheduled_monthly_pi

    def test_nothing_to_refinance(self):
        assert refinance_at_payment(
            MortgageCalculation(summary=MortgageSummary()),
            payment_index=1,
            new_rate_annual_percent=Decimal("5"),
            new_term_months=360,
            closing_costs=Decimal("0"),
        ) is None

    def test_paid_off_loan(self, canonical_inputs):
        calc = calculate_mortgage(replace(
            canonical_inputs,
            extra_one_time=Decimal("1000000"),
            extra_one_time_month_index=0,
            extra_one_time_year=2024,
        ))
        assert refinance_at_payment(calc, 1, Decimal("5"), 360, Decimal("0")) is None


class TestRemainingBalance:
    def test_empty_schedule_returns_loan_amount(self):
        summary = MortgageSummary(loan_amount=Decimal("1234"))
        assert remaining_balance_at_payment(summary, (), 10) == Decimal("1234")

    def test_clamped_to_last_payment(self, canonical_calculation):
        schedule = canonical_calculation.schedule
        balance = remaining_balance_at_payment(canonical_calculation.summary, schedule, 999)
        assert balance == schedule[-1].balance
