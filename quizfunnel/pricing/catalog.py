"""
Plan Pricing Catalog

Subscription plans and the price row each pricing tier selects.
All amounts are in halere (1/100 CZK).

The tier only chooses which row is requested; the subscription endpoint
looks the row up here again rather than trusting client-sent amounts.
"""

from typing import Dict, List, Optional

from quizfunnel import config
from quizfunnel.shared import rounding_half_up
from .models import (
    PlanPricing,
    PlanWithPricing,
    PricingTier,
    SubscriptionPlan,
)

SUBSCRIPTION_PLANS: List[SubscriptionPlan] = [
    SubscriptionPlan(
        id="plan_7_days",
        duration="7_days",
        name="7 dni",
        duration_days=7,
        billing_interval="month",
        stripe_price_id=config.STRIPE_PRICE_MONTHLY,
        is_recommended=False,
        features=[
            "Plny pristup k programu",
            "Zakladni moduly",
            "Denni cviceni",
        ],
    ),
    SubscriptionPlan(
        id="plan_1_month",
        duration="1_month",
        name="1 mesic",
        duration_days=30,
        billing_interval="month",
        stripe_price_id=config.STRIPE_PRICE_MONTHLY,
        is_recommended=True,
        badge="Nejoblibenejsi volba",
        features=[
            "Plny pristup k programu",
            "Vsechny moduly",
            "Kruh duvery",
            "Osobni mapa pokroku",
        ],
    ),
    SubscriptionPlan(
        id="plan_3_months",
        duration="3_months",
        name="3 mesice",
        duration_days=90,
        billing_interval="quarter",
        stripe_price_id=config.STRIPE_PRICE_QUARTERLY,
        is_recommended=False,
        features=[
            "Vse z mesicniho planu",
            "Nejlepsi hodnota",
            "Dlouhodoba podpora",
            "Bonusove materialy",
        ],
    ),
]


def _row(initial, original, per_day, recurring, discount) -> PlanPricing:
    return PlanPricing(
        initial_price_cents=initial,
        original_price_cents=original,
        per_day_price_cents=per_day,
        recurring_price_cents=recurring,
        discount_amount_cents=discount,
    )


# duration -> tier -> price row
TIERED_PRICING: Dict[str, Dict[PricingTier, PlanPricing]] = {
    "7_days": {
        PricingTier.FIRST_DISCOUNT: _row(34500, 49500, 4900, 99500, 65000),
        PricingTier.MAX_DISCOUNT: _row(32500, 49500, 4600, 99500, 67000),
        PricingTier.FULL_PRICE: _row(49500, None, 7000, 99500, 50000),
    },
    "1_month": {
        PricingTier.FIRST_DISCOUNT: _row(69500, 99500, 2300, 99500, 30000),
        PricingTier.MAX_DISCOUNT: _row(64500, 99500, 2100, 99500, 35000),
        PricingTier.FULL_PRICE: _row(99500, None, 3300, 99500, 0),
    },
    "3_months": {
        PricingTier.FIRST_DISCOUNT: _row(169500, 239500, 1800, 239500, 70000),
        PricingTier.MAX_DISCOUNT: _row(159500, 239500, 1700, 239500, 80000),
        PricingTier.FULL_PRICE: _row(239500, None, 2600, 239500, 0),
    },
}

_PERIOD_TEXT = {
    "month": "mesic",
    "quarter": "3 mesice",
}


def get_plan_by_id(plan_id: str) -> Optional[SubscriptionPlan]:
    for plan in SUBSCRIPTION_PLANS:
        if plan.id == plan_id:
            return plan
    return None


def get_plan_pricing(plan_id: str, tier: PricingTier) -> Optional[PlanPricing]:
    plan = get_plan_by_id(plan_id)
    if plan is None:
        return None
    return TIERED_PRICING[plan.duration][PricingTier(tier)]


def get_plan_with_pricing(plan_id: str, tier: PricingTier) -> Optional[PlanWithPricing]:
    plan = get_plan_by_id(plan_id)
    pricing = get_plan_pricing(plan_id, tier)
    if plan is None or pricing is None:
        return None
    return PlanWithPricing(**plan.model_dump(), **pricing.model_dump(), tier=PricingTier(tier))


def get_all_plans_with_pricing(tier: PricingTier) -> List[PlanWithPricing]:
    return [get_plan_with_pricing(plan.id, tier) for plan in SUBSCRIPTION_PLANS]


def get_recommended_plan_id() -> str:
    for plan in SUBSCRIPTION_PLANS:
        if plan.is_recommended:
            return plan.id
    return SUBSCRIPTION_PLANS[0].id if SUBSCRIPTION_PLANS else "plan_1_month"


def is_valid_plan_id(plan_id: str) -> bool:
    return get_plan_by_id(plan_id) is not None


def is_valid_pricing_tier(tier: str) -> bool:
    return tier in PricingTier._value2member_map_


def format_price(cents: int) -> str:
    """
    Whole crowns with Czech digit grouping.

    >>> format_price(239500)
    '2 395'
    """
    crowns = rounding_half_up(cents / 100)
    return f"{crowns:,}".replace(",", " ")


def get_billing_period_text(interval: str) -> str:
    return _PERIOD_TEXT.get(interval, _PERIOD_TEXT["quarter"])


def get_recurring_price_text(recurring_price_cents: int, interval: str) -> str:
    return f"{format_price(recurring_price_cents)} Kc / {get_billing_period_text(interval)}"
