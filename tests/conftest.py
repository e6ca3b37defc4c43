"""Canonical test fixtures used across all engine tests.

Fixture: $300K home, 20% down ($240K loan), 6% rate, 30yr fixed, first payment Jan 2024.
"""

import pytest
from dataclasses import replace
from decimal import Decimal

from src.engine.dates import absolute_month
from src.engine.mortgage import calculate_mortgage
from src.models.inputs import ArmRateChange, InterestType, MortgageInputs

START = absolute_month(0, 2024)


@pytest.fixture
def canonical_inputs() -> MortgageInputs:
    """$300K home, 20% down, 6% for 30 years, no extras."""
    return MortgageInputs(
        home_price=Decimal("300000"),
        down_payment_value=Decimal("20"),
        loan_term_years=Decimal("30"),
        interest_rate_annual_percent=Decimal("6"),
        start_month_index=0,
        start_year=2024,
    )


@pytest.fixture
def canonical_calculation(canonical_inputs):
    return calculate_mortgage(canonical_inputs)


@pytest.fixture
def arm_inputs(canonical_inputs) -> MortgageInputs:
    """Same loan as an ARM: 6% for 5 years, then 7%."""
    return replace(
        canonical_inputs,
        interest_type=InterestType.ARM,
        arm_rate_changes=(ArmRateChange(effective_month=START + 60, annual_rate_percent=Decimal("7")),),
    )


@pytest.fixture
def taxed_inputs(canonical_inputs) -> MortgageInputs:
    """$3,600/yr tax + $1,200/yr insurance + $75/mo HOA = $475/mo."""
    return replace(
        canonical_inputs,
        include_taxes_costs=True,
        property_tax_annual=Decimal("3600"),
        home_insurance_annual=Decimal("1200"),
        hoa_monthly=Decimal("75"),
    )
