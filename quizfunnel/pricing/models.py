"""
Pricing Models

Tier state, pricing events, plans and per-tier price rows.

Discounts apply to the first billing cycle only; every later invoice is
charged at recurring_price_cents.

Version: pricing_tiers_v1
"""

from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from quizfunnel import config


class PricingTier(str, Enum):
    FIRST_DISCOUNT = "FIRST_DISCOUNT"
    MAX_DISCOUNT = "MAX_DISCOUNT"
    FULL_PRICE = "FULL_PRICE"


class PricingEventType(str, Enum):
    CHECKOUT_CANCELED = "checkout_canceled"
    TIMER_EXPIRED = "timer_expired"
    SET_TIER = "set_tier"


PlanDuration = Literal["7_days", "1_month", "3_months"]
BillingInterval = Literal["month", "quarter"]


class PricingTierState(BaseModel):
    """
    Client-held pricing state for one shopper.

    Instances are immutable; transitions return a new state.
    """
    tier: PricingTier = PricingTier.FIRST_DISCOUNT
    timer_expired: bool = False
    checkout_canceled: bool = False
    timer_started_at: Optional[float] = Field(
        default=None,
        description="Epoch seconds when the countdown started"
    )
    timer_duration_seconds: int = Field(
        default=config.TIMER_DURATION_SECONDS,
        ge=0,
    )

    class Config:
        frozen = True
        use_enum_values = False


class PricingEvent(BaseModel):
    """An event applied to a PricingTierState."""
    type: PricingEventType
    tier: Optional[PricingTier] = Field(
        default=None,
        description="Target tier; required for set_tier"
    )


class PlanPricing(BaseModel):
    """One price row: what a plan costs under one tier."""
    initial_price_cents: int
    original_price_cents: Optional[int] = Field(
        default=None,
        description="Crossed-out price; None means no discount is shown"
    )
    per_day_price_cents: int
    recurring_price_cents: int
    discount_amount_cents: int

    class Config:
        frozen = True


class SubscriptionPlan(BaseModel):
    id: str
    duration: PlanDuration
    name: str
    duration_days: int
    billing_interval: BillingInterval
    stripe_price_id: str
    is_recommended: bool = False
    badge: Optional[str] = None
    features: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class PlanWithPricing(SubscriptionPlan, PlanPricing):
    """Plan merged with its price row for one tier."""
    tier: PricingTier


# API request / response models

class TransitionRequest(BaseModel):
    state: PricingTierState = Field(default_factory=PricingTierState)
    event: PricingEvent


class TransitionResponse(BaseModel):
    success: bool = True
    previous_tier: PricingTier
    state: PricingTierState
    changed: bool


class QuoteRequest(BaseModel):
    plan_id: str
    tier: PricingTier


class QuoteResponse(BaseModel):
    success: bool = True
    plan: PlanWithPricing
    recurring_price_text: str
