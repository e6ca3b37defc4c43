"""Mortgage calculation routes."""

from dataclasses import asdict
from decimal import Decimal

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from src.api.deps import get_settings
from src.api.schemas import (
    AmortizationRowResponse,
    LoanYearResponse,
    LoanYearTotalsResponse,
    MortgageRequest,
    MortgageResponse,
    MortgageSummaryResponse,
)
from src.config import Settings
from src.engine.input_parser import ParsedInputs, parse_mortgage_inputs
from src.engine.loan_years import group_by_loan_year
from src.engine.mortgage import calculate_mortgage
from src.models.inputs import (
    ArmRateChangeRaw,
    DownPaymentType,
    ExtraMonthlyRangeRaw,
    ExtraYearlyRangeRaw,
    InterestType,
    MortgageInputsRaw,
)
from src.models.results import MortgageCalculation, MortgageSummary
from src.reports.schedule_csv import create_schedule_csv

router = APIRouter(prefix="/api/v1/mortgage", tags=["mortgage"])


def build_raw_inputs(req: MortgageRequest) -> MortgageInputsRaw:
    """Map the request body onto the form-level raw inputs."""
    monthly_ranges = None
    if req.extra_monthly_ranges is not None:
        monthly_ranges = tuple(
            ExtraMonthlyRangeRaw(
                amount_raw=r.amount,
                start_month_index=r.start_month_index,
                start_year_raw=r.start_year,
                end_enabled=r.end_enabled,
                end_month_index=r.end_month_index,
                end_year_raw=r.end_year,
            )
            for r in req.extra_monthly_ranges
        )

    yearly_ranges = None
    if req.extra_yearly_ranges is not None:
        yearly_ranges = tuple(
            ExtraYearlyRangeRaw(
                amount_raw=r.amount,
                payment_month_index=r.payment_month_index,
                start_month_index=r.start_month_index,
                start_year_raw=r.start_year,
                end_enabled=r.end_enabled,
                end_month_index=r.end_month_index,
                end_year_raw=r.end_year,
            )
            for r in req.extra_yearly_ranges
        )

    return MortgageInputsRaw(
        home_price_raw=req.home_price,
        down_payment_type=DownPaymentType(req.down_payment_type),
        down_payment_raw=req.down_payment,
        loan_term_years_raw=req.loan_term_years,
        interest_rate_raw=req.interest_rate,
        interest_type=InterestType(req.interest_type),
        arm_rate_changes=tuple(
            ArmRateChangeRaw(
                effective_month_index=c.effective_month_index,
                effective_year_raw=c.effective_year,
                rate_annual_percent_raw=c.rate_annual_percent,
            )
            for c in req.arm_rate_changes
        ),
        start_month_index=req.start_month_index,
        start_year_raw=req.start_year,
        include_taxes_costs=req.include_taxes_costs,
        property_tax_annual_raw=req.property_tax_annual,
        home_insurance_annual_raw=req.home_insurance_annual,
        pmi_monthly_raw=req.pmi_monthly,
        hoa_monthly_raw=req.hoa_monthly,
        other_costs_monthly_raw=req.other_costs_monthly,
        extra_monthly_raw=req.extra_monthly,
        extra_monthly_start_month_index=req.extra_monthly_start_month_index,
        extra_monthly_start_year_raw=req.extra_monthly_start_year,
        extra_monthly_ranges=monthly_ranges,
        extra_yearly_raw=req.extra_yearly,
        extra_yearly_month_index=req.extra_yearly_month_index,
        extra_yearly_start_year_raw=req.extra_yearly_start_year,
        extra_yearly_ranges=yearly_ranges,
        extra_one_time_raw=req.extra_one_time,
        extra_one_time_month_index=req.extra_one_time_month_index,
        extra_one_time_year_raw=req.extra_one_time_year,
    )


def run_calculation(req: MortgageRequest, cfg: Settings) -> tuple[ParsedInputs, MortgageCalculation]:
    """Parse the request and run the engine."""
    parsed = parse_mortgage_inputs(build_raw_inputs(req))
    return parsed, calculate_mortgage(parsed.inputs, payoff_threshold=cfg.payoff_threshold)


def monthly_costs(parsed: ParsedInputs, calc: MortgageCalculation) -> Decimal:
    """Monthly taxes/costs counted in payments, 0 when the toggle is off."""
    if parsed.inputs.include_taxes_costs:
        return calc.summary.monthly_taxes_costs
    return Decimal("0")


def summary_to_response(summary: MortgageSummary) -> MortgageSummaryResponse:
    return MortgageSummaryResponse(**asdict(summary))


def calculation_to_response(parsed: ParsedInputs, calc: MortgageCalculation) -> MortgageResponse:
    """Convert engine MortgageCalculation to API response."""
    return MortgageResponse(
        summary=summary_to_response(calc.summary),
        schedule=[AmortizationRowResponse(**asdict(r)) for r in calc.schedule],
        arm_rate_validation_message=parsed.arm_rate_validation_message,
        extra_range_validation_message=parsed.extra_range_validation_message,
    )


@router.post("/calculate", response_model=MortgageResponse)
async def calculate(req: MortgageRequest, cfg: Settings = Depends(get_settings)):
    """Raw form inputs → summary, full schedule and validation messages."""
    parsed, calc = run_calculation(req, cfg)
    return calculation_to_response(parsed, calc)


@router.post("/schedule.csv")
async def schedule_csv(req: MortgageRequest, cfg: Settings = Depends(get_settings)):
    """Download the schedule as CSV."""
    parsed, calc = run_calculation(req, cfg)
    taxes = monthly_costs(parsed, calc)
    content = create_schedule_csv(calc.schedule, taxes)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="amortization-schedule.csv"'},
    )


@router.post("/loan-years", response_model=list[LoanYearResponse])
async def loan_years(req: MortgageRequest, cfg: Settings = Depends(get_settings)):
    """Schedule grouped into 12-payment loan years with subtotals."""
    parsed, calc = run_calculation(req, cfg)
    taxes = monthly_costs(parsed, calc)
    groups = group_by_loan_year(calc.schedule, taxes, calc.summary.loan_amount)
    return [
        LoanYearResponse(
            loan_year=g.loan_year,
            start_label=g.start_label,
            end_label=g.end_label,
            start_balance=g.start_balance,
            end_balance=g.end_balance,
            payments=len(g.rows),
            totals=LoanYearTotalsResponse(**asdict(g.totals)),
        )
        for g in groups
    ]
