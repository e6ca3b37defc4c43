from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class AmortizationRow:
    index: int  # 1-based payment number
    month_index: int  # 0-11
    year: int

    annual_rate_percent: Decimal
    scheduled_pi: Decimal  # Post-recast on rate-change months
    is_rate_change_month: bool

    payment_pi: Decimal
    interest: Decimal
    principal: Decimal
    extra_principal: Decimal

    total_to_lender: Decimal  # payment_pi + extra_principal
    balance: Decimal  # Ending balance

    @property
    def absolute_month(self) -> int:
        return self.year * 12 + self.month_index

    @property
    def loan_year(self) -> int:
        return (self.index - 1) // 12 + 1


@dataclass(frozen=True)
class MortgageSummary:
    home_price: Decimal = Decimal("0")
    down_payment_amount: Decimal = Decimal("0")
    down_payment_percent: Decimal = Decimal("0")
    loan_amount: Decimal = Decimal("0")

    term_months: int = 0
    annual_rate_percent: Decimal = Decimal("0")
    monthly_rate: Decimal = Decimal("0")

    scheduled_monthly_pi: Decimal = Decimal("0")
    monthly_taxes_costs: Decimal = Decimal("0")

    # Payoff
    months_to_payoff: int = 0
    payoff_month_index: int = 0
    payoff_year: int = 0

    # Totals
    total_interest: Decimal = Decimal("0")
    total_to_lender: Decimal = Decimal("0")
    total_taxes_costs: Decimal = Decimal("0")
    total_out_of_pocket: Decimal = Decimal("0")

    # Baseline comparison (same loan, no extras)
    baseline_months_to_payoff: int = 0
    baseline_total_interest: Decimal = Decimal("0")
    interest_saved: Decimal = Decimal("0")
    months_saved: int = 0

    @property
    def total_monthly_payment(self) -> Decimal:
        return self.scheduled_monthly_pi + self.monthly_taxes_costs


@dataclass(frozen=True)
class MortgageCalculation:
    summary: MortgageSummary
    schedule: tuple[AmortizationRow, ...] = ()


@dataclass(frozen=True)
class RefinanceResult:
    remaining_balance: Decimal
    old_monthly_pi: Decimal
    new_monthly_pi: Decimal
    monthly_savings: Decimal
    break_even_months: int | None  # None = never breaks even
    total_savings_over_remaining_term: Decimal


@dataclass
class LoanYearTotals:
    pi: Decimal = Decimal("0")
    extra: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    principal: Decimal = Decimal("0")  # Includes extra principal
    taxes_costs: Decimal = Decimal("0")
    total_payment: Decimal = Decimal("0")


@dataclass
class LoanYearGroup:
    loan_year: int
    start_label: str
    end_label: str
    start_balance: Decimal
    end_balance: Decimal
    rows: list[AmortizationRow] = field(default_factory=list)
    totals: LoanYearTotals = field(default_factory=LoanYearTotals)


@dataclass(frozen=True)
class ScheduleEvent:
    absolute_month: int
    label: str
    tags: tuple[str, ...]


@dataclass(frozen=True)
class DatedValue:
    value: Decimal
    month_index: int
    year: int


@dataclass(frozen=True)
class ResetJump:
    delta_total: Decimal
    delta_pi: Decimal
    month_index: int
    year: int


@dataclass(frozen=True)
class RiskSummary:
    min_total: DatedValue | None = None
    max_total: DatedValue | None = None
    max_rate: DatedValue | None = None
    first_reset_jump: ResetJump | None = None


@dataclass(frozen=True)
class PaymentPoint:
    absolute_month: int
    label: str
    a_total: Decimal | None
    b_total: Decimal | None
    a_pi: Decimal | None
    b_pi: Decimal | None
    a_reset: bool
    b_reset: bool


@dataclass
class ScenarioComparison:
    """Side-by-side comparison of two mortgage scenarios (deltas are B - A)."""

    delta_scheduled_pi: Decimal = Decimal("0")
    delta_total_monthly_payment: Decimal = Decimal("0")
    delta_total_interest: Decimal = Decimal("0")
    delta_total_out_of_pocket: Decimal = Decimal("0")
    delta_months_to_payoff: int = 0

    payment_series: list[PaymentPoint] = field(default_factory=list)
    a_events: list[ScheduleEvent] = field(default_factory=list)
    b_events: list[ScheduleEvent] = field(default_factory=list)
    a_risk: RiskSummary = field(default_factory=RiskSummary)
    b_risk: RiskSummary = field(default_factory=RiskSummary)
