"""
Pricing Tier State Machine

    FIRST_DISCOUNT --checkout canceled--> MAX_DISCOUNT
    FIRST_DISCOUNT --timer expired-----> FULL_PRICE
    FULL_PRICE     --checkout canceled--> MAX_DISCOUNT

Rules:
- A canceled checkout always lands on MAX_DISCOUNT and the flag never clears.
- MAX_DISCOUNT, however it was entered, is never downgraded by the timer
  or by an explicit tier change.
- Nothing returns to FIRST_DISCOUNT once it has been left.

Every transition is a pure function: state in, new state out. The state is
held by the client and echoed to the server; the server never stores it.
"""

import logging
import time
from typing import Optional

from .models import PricingEvent, PricingEventType, PricingTier, PricingTierState

logger = logging.getLogger(__name__)


def initial_state(timer_duration_seconds: Optional[int] = None) -> PricingTierState:
    if timer_duration_seconds is None:
        return PricingTierState()
    return PricingTierState(timer_duration_seconds=timer_duration_seconds)


def handle_checkout_canceled(state: PricingTierState) -> PricingTierState:
    """Shopper abandoned checkout: lock in the best offer."""
    return state.model_copy(update={
        "tier": PricingTier.MAX_DISCOUNT,
        "checkout_canceled": True,
    })


def handle_timer_expired(state: PricingTierState) -> PricingTierState:
    """Countdown ran out: drop to full price unless MAX_DISCOUNT is locked in."""
    if state.checkout_canceled or state.tier == PricingTier.MAX_DISCOUNT:
        return state
    return state.model_copy(update={
        "tier": PricingTier.FULL_PRICE,
        "timer_expired": True,
    })


def set_pricing_tier(state: PricingTierState, tier: PricingTier) -> PricingTierState:
    """
    Explicitly select a tier (e.g. when restoring persisted client state).

    MAX_DISCOUNT is never left once entered, and FIRST_DISCOUNT cannot be
    re-entered from any other tier.
    """
    tier = PricingTier(tier)
    if (state.checkout_canceled or state.tier == PricingTier.MAX_DISCOUNT) and tier != PricingTier.MAX_DISCOUNT:
        logger.info(f"Ignoring tier {tier.value}: MAX_DISCOUNT is locked")
        return state
    if tier == PricingTier.FIRST_DISCOUNT and state.tier != PricingTier.FIRST_DISCOUNT:
        logger.info(f"Ignoring FIRST_DISCOUNT: already moved to {state.tier.value}")
        return state
    return state.model_copy(update={"tier": tier})


def apply_pricing_event(state: PricingTierState, event: PricingEvent) -> PricingTierState:
    """Dispatch one event to its transition."""
    if event.type == PricingEventType.CHECKOUT_CANCELED:
        return handle_checkout_canceled(state)
    if event.type == PricingEventType.TIMER_EXPIRED:
        return handle_timer_expired(state)
    if event.type == PricingEventType.SET_TIER:
        if event.tier is None:
            raise ValueError("set_tier event requires a tier")
        return set_pricing_tier(state, event.tier)
    raise ValueError(f"Unknown pricing event: {event.type}")


# ---------------------------------------------------------------------------
# Shared countdown
# ---------------------------------------------------------------------------

def start_timer(
    state: PricingTierState,
    duration_seconds: Optional[int] = None,
    now: Optional[float] = None,
) -> PricingTierState:
    """Start the countdown once; later calls keep the original start."""
    if state.timer_started_at is not None:
        return state
    update = {"timer_started_at": time.time() if now is None else now}
    if duration_seconds is not None:
        update["timer_duration_seconds"] = duration_seconds
    return state.model_copy(update=update)


def time_remaining(state: PricingTierState, now: Optional[float] = None) -> int:
    """Whole seconds left on the countdown, never below 0."""
    if state.timer_started_at is None:
        return state.timer_duration_seconds
    now = time.time() if now is None else now
    elapsed = int(now - state.timer_started_at)
    return max(0, state.timer_duration_seconds - elapsed)


def tick(state: PricingTierState, now: Optional[float] = None) -> PricingTierState:
    """Apply timer expiry once the countdown has reached zero."""
    if state.timer_started_at is None or state.timer_expired:
        return state
    if time_remaining(state, now) > 0:
        return state
    return handle_timer_expired(state)
