"""
Quiz Funnel Pricing

Three-tier discount state machine and the plan price catalog.

Version: pricing_tiers_v1
"""

from .models import (
    PricingTier,
    PricingEventType,
    PricingEvent,
    PricingTierState,
    PlanPricing,
    SubscriptionPlan,
    PlanWithPricing,
)
from .state import (
    initial_state,
    handle_checkout_canceled,
    handle_timer_expired,
    set_pricing_tier,
    apply_pricing_event,
    start_timer,
    time_remaining,
    tick,
)
from .catalog import (
    SUBSCRIPTION_PLANS,
    TIERED_PRICING,
    get_plan_by_id,
    get_plan_pricing,
    get_plan_with_pricing,
    get_all_plans_with_pricing,
    get_recommended_plan_id,
    is_valid_plan_id,
    is_valid_pricing_tier,
    format_price,
    get_recurring_price_text,
)

__all__ = [
    "PricingTier",
    "PricingEventType",
    "PricingEvent",
    "PricingTierState",
    "PlanPricing",
    "SubscriptionPlan",
    "PlanWithPricing",
    "initial_state",
    "handle_checkout_canceled",
    "handle_timer_expired",
    "set_pricing_tier",
    "apply_pricing_event",
    "start_timer",
    "time_remaining",
    "tick",
    "SUBSCRIPTION_PLANS",
    "TIERED_PRICING",
    "get_plan_by_id",
    "get_plan_pricing",
    "get_plan_with_pricing",
    "get_all_plans_with_pricing",
    "get_recommended_plan_id",
    "is_valid_plan_id",
    "is_valid_pricing_tier",
    "format_price",
    "get_recurring_price_text",
]

__version__ = "pricing_tiers_v1"
