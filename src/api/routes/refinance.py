"""Refinance break-even routes."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_settings
from src.api.routes.mortgage import run_calculation
from src.api.schemas import RefinanceAtPaymentRequest, RefinanceRequest, RefinanceResponse
from src.config import Settings
from src.engine.refinance import compute_refinance_break_even, refinance_at_payment

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/refinance", tags=["refinance"])


@router.post("/break-even", response_model=RefinanceResponse)
async def break_even(req: RefinanceRequest):
    """Break-even for explicit current and proposed loan terms."""
    result = compute_refinance_break_even(
        remaining_balance=req.remaining_balance,
        remaining_term_months=req.remaining_term_months,
        current_monthly_pi=req.current_monthly_pi,
        new_rate_annual_percent=req.new_rate_annual_percent,
        new_term_months=req.new_term_months,
        closing_costs=req.closing_costs,
    )
    return RefinanceResponse(**asdict(result))


@router.post("/at-payment", response_model=RefinanceResponse)
async def at_payment(req: RefinanceAtPaymentRequest, cfg: Settings = Depends(get_settings)):
    """Refinance an existing mortgage right after a given payment number."""
    _, calc = run_calculation(req.mortgage, cfg)
    result = refinance_at_payment(
        calc,
        payment_index=req.payment_index,
        new_rate_annual_percent=req.new_rate_annual_percent,
        new_term_months=req.new_term_years * 12,
        closing_costs=req.closing_costs,
    )
    if result is None:
        logger.warning("Refinance requested with no balance left (payment %d)", req.payment_index)
        raise HTTPException(status_code=400, detail="Nothing left to refinance at that payment.")
    return RefinanceResponse(**asdict(result))
