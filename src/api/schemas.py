"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field


# ---- Request schemas ----

class ArmRateChangeRequest(BaseModel):
    effective_month_index: int = Field(..., ge=0, le=11)
    effective_year: str
    rate_annual_percent: str


class ExtraMonthlyRangeRequest(BaseModel):
    amount: str
    start_month_index: int = Field(0, ge=0, le=11)
    start_year: str = ""
    end_enabled: bool = False
    end_month_index: int = Field(0, ge=0, le=11)
    end_year: str = ""


class ExtraYearlyRangeRequest(ExtraMonthlyRangeRequest):
    payment_month_index: int = Field(0, ge=0, le=11)


class MortgageRequest(BaseModel):
    """Form fields as typed by the user; numbers arrive as loosely formatted text."""
    home_price: str = Field(..., description="e.g. \"$300,000\"")
    down_payment_type: str = Field("percent", pattern="^(percent|amount)$")
    down_payment: str = "20"
    loan_term_years: str = "30"
    interest_rate: str = "6"

    interest_type: str = Field("fixed", pattern="^(fixed|arm)$")
    arm_rate_changes: list[ArmRateChangeRequest] = Field(default_factory=list)

    start_month_index: int = Field(0, ge=0, le=11)
    start_year: str = ""

    include_taxes_costs: bool = False
    property_tax_annual: str = ""
    home_insurance_annual: str = ""
    pmi_monthly: str = ""
    hoa_monthly: str = ""
    other_costs_monthly: str = ""

    extra_monthly: str = ""
    extra_monthly_start_month_index: int | None = Field(None, ge=0, le=11)
    extra_monthly_start_year: str = ""
    extra_monthly_ranges: list[ExtraMonthlyRangeRequest] | None = None

    extra_yearly: str = ""
    extra_yearly_month_index: int = Field(0, ge=0, le=11)
    extra_yearly_start_year: str = ""
    extra_yearly_ranges: list[ExtraYearlyRangeRequest] | None = None

    extra_one_time: str = ""
    extra_one_time_month_index: int = Field(0, ge=0, le=11)
    extra_one_time_year: str = ""


class RefinanceRequest(BaseModel):
    remaining_balance: Decimal = Field(..., ge=0)
    remaining_term_months: int = Field(..., ge=0)
    current_monthly_pi: Decimal = Field(..., ge=0)
    new_rate_annual_percent: Decimal = Field(..., ge=0)
    new_term_months: int = Field(..., ge=1)
    closing_costs: Decimal = Field(Decimal("0"), ge=0)


class RefinanceAtPaymentRequest(BaseModel):
    mortgage: MortgageRequest
    payment_index: int = Field(1, ge=1, description="1-based payment after which to refinance")
    new_rate_annual_percent: Decimal = Field(..., ge=0)
    new_term_years: int = Field(30, ge=1)
    closing_costs: Decimal = Field(Decimal("0"), ge=0)


class ComparisonRequest(BaseModel):
    scenario_a: MortgageRequest
    scenario_b: MortgageRequest


# ---- Response schemas ----

class AmortizationRowResponse(BaseModel):
    index: int
    month_index: int
    year: int
    annual_rate_percent: Decimal
    scheduled_pi: Decimal
    is_rate_change_month: bool
    payment_pi: Decimal
    interest: Decimal
    principal: Decimal
    extra_principal: Decimal
    total_to_lender: Decimal
    balance: Decimal


class MortgageSummaryResponse(BaseModel):
    home_price: Decimal
    down_payment_amount: Decimal
    down_payment_percent: Decimal
    loan_amount: Decimal
    term_months: int
    annual_rate_percent: Decimal
    scheduled_monthly_pi: Decimal
    monthly_taxes_costs: Decimal
    months_to_payoff: int
    payoff_month_index: int
    payoff_year: int
    total_interest: Decimal
    total_to_lender: Decimal
    total_taxes_costs: Decimal
    total_out_of_pocket: Decimal
    baseline_months_to_payoff: int
    baseline_total_interest: Decimal
    interest_saved: Decimal
    months_saved: int


class MortgageResponse(BaseModel):
    summary: MortgageSummaryResponse
    schedule: list[AmortizationRowResponse]
    arm_rate_validation_message: str | None = None
    extra_range_validation_message: str | None = None


class LoanYearTotalsResponse(BaseModel):
    pi: Decimal
    extra: Decimal
    interest: Decimal
    principal: Decimal
    taxes_costs: Decimal
    total_payment: Decimal


class LoanYearResponse(BaseModel):
    loan_year: int
    start_label: str
    end_label: str
    start_balance: Decimal
    end_balance: Decimal
    payments: int
    totals: LoanYearTotalsResponse


class RefinanceResponse(BaseModel):
    remaining_balance: Decimal
    old_monthly_pi: Decimal
    new_monthly_pi: Decimal
    monthly_savings: Decimal
    break_even_months: int | None
    total_savings_over_remaining_term: Decimal


class ScheduleEventResponse(BaseModel):
    absolute_month: int
    label: str
    tags: list[str]


class DatedValueResponse(BaseModel):
    value: Decimal
    month_index: int
    year: int


class ResetJumpResponse(BaseModel):
    delta_total: Decimal
    delta_pi: Decimal
    month_index: int
    year: int


class RiskSummaryResponse(BaseModel):
    min_total: DatedValueResponse | None = None
    max_total: DatedValueResponse | None = None
    max_rate: DatedValueResponse | None = None
    first_reset_jump: ResetJumpResponse | None = None


class PaymentPointResponse(BaseModel):
    absolute_month: int
    label: str
    a_total: Decimal | None = None
    b_total: Decimal | None = None
    a_pi: Decimal | None = None
    b_pi: Decimal | None = None
    a_reset: bool = False
    b_reset: bool = False


class ComparisonResponse(BaseModel):
    scenario_a: MortgageSummaryResponse
    scenario_b: MortgageSummaryResponse
    delta_scheduled_pi: Decimal
    delta_total_monthly_payment: Decimal
    delta_total_interest: Decimal
    delta_total_out_of_pocket: Decimal
    delta_months_to_payoff: int
    payment_series: list[PaymentPointResponse]
    a_events: list[ScheduleEventResponse]
    b_events: list[ScheduleEventResponse]
    a_risk: RiskSummaryResponse
    b_risk: RiskSummaryResponse
