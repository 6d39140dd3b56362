"""
Pricing Endpoints

GET  /api/v1/pricing/plans       - All plans priced for a tier
POST /api/v1/pricing/transition  - Apply an event to an echoed tier state
POST /api/v1/pricing/quote       - Price row for plan + tier (used by checkout)

Version: pricing_tiers_v1
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query

from .catalog import (
    get_all_plans_with_pricing,
    get_plan_with_pricing,
    get_recommended_plan_id,
    get_recurring_price_text,
)
from .models import (
    PlanWithPricing,
    PricingTier,
    QuoteRequest,
    QuoteResponse,
    TransitionRequest,
    TransitionResponse,
)
from .state import apply_pricing_event

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/pricing",
    tags=["pricing"],
)


@router.get("/plans")
def list_plans(tier: PricingTier = Query(default=PricingTier.FIRST_DISCOUNT)):
    """Plans with the price row for the requested tier."""
    plans: List[PlanWithPricing] = get_all_plans_with_pricing(tier)
    return {
        "tier": tier.value,
        "recommended_plan_id": get_recommended_plan_id(),
        "plans": [p.model_dump() for p in plans],
    }


@router.post("/transition", response_model=TransitionResponse)
def transition(request: TransitionRequest):
    """
    Apply a pricing event to the client's current state.

    The server holds no pricing state; the returned state replaces the
    client's copy.
    """
    try:
        new_state = apply_pricing_event(request.state, request.event)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return TransitionResponse(
        success=True,
        previous_tier=request.state.tier,
        state=new_state,
        changed=new_state != request.state,
    )


@router.post("/quote", response_model=QuoteResponse)
def quote(request: QuoteRequest):
    """Authoritative price for a plan under the requested tier."""
    plan = get_plan_with_pricing(request.plan_id, request.tier)
    if plan is None:
        raise HTTPException(status_code=400, detail="Invalid plan ID")

    return QuoteResponse(
        success=True,
        plan=plan,
        recurring_price_text=get_recurring_price_text(
            plan.recurring_price_cents,
            plan.billing_interval,
        ),
    )
