"""Scenario comparison routes."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from src.api.deps import get_settings
from src.api.routes.mortgage import monthly_costs, run_calculation, summary_to_response
from src.api.schemas import (
    ComparisonRequest,
    ComparisonResponse,
    PaymentPointResponse,
    RiskSummaryResponse,
    ScheduleEventResponse,
)
from src.config import Settings
from src.engine.comparison import compare_scenarios

router = APIRouter(prefix="/api/v1/comparison", tags=["comparison"])


@router.post("/run", response_model=ComparisonResponse)
async def run_comparison(req: ComparisonRequest, cfg: Settings = Depends(get_settings)):
    """Compare scenario B against scenario A."""
    parsed_a, calc_a = run_calculation(req.scenario_a, cfg)
    parsed_b, calc_b = run_calculation(req.scenario_b, cfg)

    result = compare_scenarios(
        calc_a,
        calc_b,
        monthly_taxes_costs_a=monthly_costs(parsed_a, calc_a),
        monthly_taxes_costs_b=monthly_costs(parsed_b, calc_b),
    )

    return ComparisonResponse(
        scenario_a=summary_to_response(calc_a.summary),
        scenario_b=summary_to_response(calc_b.summary),
        delta_scheduled_pi=result.delta_scheduled_pi,
        delta_total_monthly_payment=result.delta_total_monthly_payment,
        delta_total_interest=result.delta_total_interest,
        delta_total_out_of_pocket=result.delta_total_out_of_pocket,
        delta_months_to_payoff=result.delta_months_to_payoff,
        payment_series=[PaymentPointResponse(**asdict(p)) for p in result.payment_series],
        a_events=[ScheduleEventResponse(**asdict(e)) for e in result.a_events],
        b_events=[ScheduleEventResponse(**asdict(e)) for e in result.b_events],
        a_risk=RiskSummaryResponse(**asdict(result.a_risk)),
        b_risk=RiskSummaryResponse(**asdict(result.b_risk)),
    )
