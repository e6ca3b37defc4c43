from decimal import Decimal

from src.engine.dates import absolute_month
from src.engine.extras import (
    NO_EXTRAS,
    ExtraPaymentMode,
    ExtraPaymentPlan,
    build_extra_plan,
    extra_for_month,
    extra_payment_mode,
)
from src.models.inputs import ExtraMonthlyRange, ExtraYearlyRange, MortgageInputs

JAN_2024 = absolute_month(0, 2024)


def _inputs(**kwargs) -> MortgageInputs:
    return MortgageInputs(home_price=Decimal("300000"), **kwargs)


class TestExtraPaymentMode:
    def test_legacy_without_ranges(self):
        assert extra_payment_mode(_inputs(extra_monthly=Decimal("100"))) is ExtraPaymentMode.LEGACY

    def test_ranged_when_ranges_valid(self):
        inputs = _inputs(extra_monthly_ranges=(ExtraMonthlyRange(Decimal("100"), JAN_2024),))
        assert extra_payment_mode(inputs) is ExtraPaymentMode.RANGED

    def test_invalid_ranges_fall_back_to_legacy(self):
        inputs = _inputs(
            extra_monthly_ranges=(ExtraMonthlyRange(Decimal("100"), JAN_2024),),
            extra_ranges_valid=False,
        )
        assert extra_payment_mode(inputs) is ExtraPaymentMode.LEGACY


class TestBuildExtraPlan:
    def test_ranged_mode_zeroes_legacy_amounts(self):
        inputs = _inputs(
            extra_monthly=Decimal("500"),
            extra_yearly=Decimal("1000"),
            extra_one_time=Decimal("2000"),
            extra_monthly_ranges=(ExtraMonthlyRange(Decimal("100"), JAN_2024),),
        )
        plan = build_extra_plan(inputs)
        assert plan.monthly == 0
        assert plan.yearly == 0
        # One-time extra survives either mode
        assert plan.one_time == Decimal("2000")
        assert len(plan.monthly_ranges) == 1

    def test_legacy_mode_drops_ranges(self):
        inputs = _inputs(
            extra_monthly=Decimal("500"),
            extra_monthly_ranges=(ExtraMonthlyRange(Decimal("100"), JAN_2024),),
            extra_ranges_valid=False,
        )
        plan = build_extra_plan(inputs)
        assert plan.monthly == Decimal("500")
        assert plan.monthly_ranges == ()

    def test_negative_amounts_clamped(self):
        plan = build_extra_plan(_inputs(extra_monthly=Decimal("-200")))
        assert plan.monthly == 0


class TestLegacyExtraForMonth:
    def test_monthly_from_start_month(self):
        plan = ExtraPaymentPlan(monthly=Decimal("200"), monthly_start=absolute_month(5, 2024))
        assert extra_for_month(plan, 4, 2024) == 0
        assert extra_for_month(plan, 5, 2024) == Decimal("200")
        assert extra_for_month(plan, 0, 2030) == Decimal("200")

    def test_yearly_in_chosen_month(self):
        plan = ExtraPaymentPlan(yearly=Decimal("1000"), yearly_month_index=11, yearly_start_year=2025)
        assert extra_for_month(plan, 11, 2024) == 0
        assert extra_for_month(plan, 10, 2025) == 0
        assert extra_for_month(plan, 11, 2025) == Decimal("1000")
        assert extra_for_month(plan, 11, 2026) == Decimal("1000")

    def test_one_time_only_once(self):
        plan = ExtraPaymentPlan(one_time=Decimal("5000"), one_time_month_index=2, one_time_year=2026)
        assert extra_for_month(plan, 2, 2026) == Decimal("5000")
        assert extra_for_month(plan, 2, 2027) == 0

    def test_components_stack(self):
        plan = ExtraPaymentPlan(
            monthly=Decimal("100"),
            yearly=Decimal("1000"),
            yearly_month_index=0,
            yearly_start_year=2024,
            one_time=Decimal("50"),
            one_time_month_index=0,
            one_time_year=2024,
        )
        assert extra_for_month(plan, 0, 2024) == Decimal("1150")

    def test_no_extras(self):
        assert extra_for_month(NO_EXTRAS, 0, 2024) == 0


class TestRangedExtraForMonth:
    def test_monthly_ranges_inclusive_bounds(self):
        plan = ExtraPaymentPlan(
            mode=ExtraPaymentMode.RANGED,
            monthly_ranges=(ExtraMonthlyRange(Decimal("100"), JAN_2024, JAN_2024 + 11),),
        )
        assert extra_for_month(plan, 0, 2024) == Decimal("100")
        assert extra_for_month(plan, 11, 2024) == Decimal("100")
        assert extra_for_month(plan, 0, 2025) == 0

    def test_open_ended_range(self):
        plan = ExtraPaymentPlan(
            mode=ExtraPaymentMode.RANGED,
            monthly_ranges=(ExtraMonthlyRange(Decimal("75"), JAN_2024 + 6),),
        )
        assert extra_for_month(plan, 5, 2024) == 0
        assert extra_for_month(plan, 0, 2050) == Decimal("75")

    def test_yearly_ranges_sum_in_payment_month(self):
        plan = ExtraPaymentPlan(
            mode=ExtraPaymentMode.RANGED,
            yearly_ranges=(
                ExtraYearlyRange(Decimal("1000"), 3, JAN_2024, absolute_month(11, 2026)),
                ExtraYearlyRange(Decimal("500"), 3, absolute_month(0, 2025)),
            ),
        )
        assert extra_for_month(plan, 3, 2024) == Decimal("1000")
        assert extra_for_month(plan, 3, 2025) == Decimal("1500")
        assert extra_for_month(plan, 3, 2027) == Decimal("500")
        assert extra_for_month(plan, 4, 2025) == 0

    def test_ranged_mode_ignores_legacy_fields(self):
        plan = ExtraPaymentPlan(mode=ExtraPaymentMode.RANGED, monthly=Decimal("999"))
        assert extra_for_month(plan, 0, 2024) == 0
