from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class DownPaymentType(Enum):
    PERCENT = "percent"
    AMOUNT = "amount"


class InterestType(Enum):
    FIXED = "fixed"
    ARM = "arm"


class ArmPreset(Enum):
    FIVE_ONE = "5/1"  # 5-year fixed, then annual resets
    SEVEN_SIX = "7/6"  # 7-year fixed, then resets every 6 months
    FIVE_SIX = "5/6"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ArmRateChange:
    effective_month: int  # Absolute month: year * 12 + month_index
    annual_rate_percent: Decimal


@dataclass(frozen=True)
class ExtraMonthlyRange:
    amount: Decimal
    start_month: int  # Absolute month, inclusive
    end_month: int | None = None  # Absolute month, inclusive; None = open-ended


@dataclass(frozen=True)
class ExtraYearlyRange:
    amount: Decimal
    payment_month_index: int  # 0-11
    start_month: int
    end_month: int | None = None


@dataclass(frozen=True)
class MortgageInputs:
    # Purchase
    home_price: Decimal
    down_payment_type: DownPaymentType = DownPaymentType.PERCENT
    down_payment_value: Decimal = Decimal("20")

    # Loan
    loan_term_years: Decimal = Decimal("30")
    interest_rate_annual_percent: Decimal = Decimal("6")
    interest_type: InterestType = InterestType.FIXED
    arm_rate_changes: tuple[ArmRateChange, ...] = ()
    arm_rate_changes_valid: bool = True

    start_month_index: int = 0  # 0-11
    start_year: int = 2024

    # Taxes & costs
    include_taxes_costs: bool = False
    property_tax_annual: Decimal = Decimal("0")
    home_insurance_annual: Decimal = Decimal("0")
    pmi_monthly: Decimal = Decimal("0")
    hoa_monthly: Decimal = Decimal("0")
    other_costs_monthly: Decimal = Decimal("0")

    # Legacy single-value extras
    extra_monthly: Decimal = Decimal("0")
    extra_monthly_start_month_index: int = 0
    extra_monthly_start_year: int = 0
    extra_yearly: Decimal = Decimal("0")
    extra_yearly_month_index: int = 0
    extra_yearly_start_year: int = 0
    extra_one_time: Decimal = Decimal("0")
    extra_one_time_month_index: int = 0
    extra_one_time_year: int = 0

    # Ranged extras (supersede legacy monthly/yearly when present and valid)
    extra_monthly_ranges: tuple[ExtraMonthlyRange, ...] = ()
    extra_yearly_ranges: tuple[ExtraYearlyRange, ...] = ()
    extra_ranges_valid: bool = True

    @property
    def has_extra_ranges(self) -> bool:
        return bool(self.extra_monthly_ranges or self.extra_yearly_ranges)

    @property
    def uses_arm(self) -> bool:
        """ARM changes are only honoured for ARM loans with a validated change list."""
        return self.interest_type is InterestType.ARM and self.arm_rate_changes_valid


@dataclass(frozen=True)
class ArmRateChangeRaw:
    effective_month_index: int
    effective_year_raw: str
    rate_annual_percent_raw: str


@dataclass(frozen=True)
class ExtraMonthlyRangeRaw:
    amount_raw: str
    start_month_index: int
    start_year_raw: str
    end_enabled: bool = False
    end_month_index: int = 0
    end_year_raw: str = ""


@dataclass(frozen=True)
class ExtraYearlyRangeRaw:
    amount_raw: str
    payment_month_index: int
    start_month_index: int
    start_year_raw: str
    end_enabled: bool = False
    end_month_index: int = 0
    end_year_raw: str = ""


@dataclass(frozen=True)
class MortgageInputsRaw:
    """Form-level text inputs, before parsing into MortgageInputs."""
    home_price_raw: str
    down_payment_type: DownPaymentType = DownPaymentType.PERCENT
    down_payment_raw: str = "20"
    loan_term_years_raw: str = "30"
    interest_rate_raw: str = "6"

    interest_type: InterestType = InterestType.FIXED
    arm_rate_changes: tuple[ArmRateChangeRaw, ...] = ()

    start_month_index: int = 0
    start_year_raw: str = ""

    include_taxes_costs: bool = False
    property_tax_annual_raw: str = ""
    home_insurance_annual_raw: str = ""
    pmi_monthly_raw: str = ""
    hoa_monthly_raw: str = ""
    other_costs_monthly_raw: str = ""

    extra_monthly_raw: str = ""
    extra_monthly_start_month_index: int | None = None
    extra_monthly_start_year_raw: str = ""
    # None = legacy form; a tuple (even empty) switches to ranged extras
    extra_monthly_ranges: tuple[ExtraMonthlyRangeRaw, ...] | None = None

    extra_yearly_raw: str = ""
    extra_yearly_month_index: int = 0
    extra_yearly_start_year_raw: str = ""
    extra_yearly_ranges: tuple[ExtraYearlyRangeRaw, ...] | None = None

    extra_one_time_raw: str = ""
    extra_one_time_month_index: int = 0
    extra_one_time_year_raw: str = ""
