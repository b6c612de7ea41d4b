from typing import Iterable

from .schemas import PricingResult, TierPricing, TimeBreakdown
from .utils import round_half_up, safe_div

# Essential is the bare floor; the licensing multiplier only lifts Standard and Premium.
ESSENTIAL_MULTIPLIER = 1.0
STANDARD_MULTIPLIER = 1.25
PREMIUM_MULTIPLIER = 1.6

DEFAULT_MINS_PER_PERSON = 15.0
DEFAULT_TEAM_RETOUCH_MINUTES = 10.0
DEFAULT_RETAINER_HOURS = 10.0


def individual_breakdown(
    shoot_hours: float,
    edit_time_ratio: float,
    images: float,
    retouch_time: float,
    travel_hours: float,
    admin_hours: float,
) -> TimeBreakdown:
    retouch = images * retouch_time / 60.0
    return TimeBreakdown(
        shoot=shoot_hours,
        edit=shoot_hours * edit_time_ratio + retouch,
        travel=travel_hours,
        admin=admin_hours,
        retouch=retouch,
    )


def team_breakdown(
    people_count: float,
    mins_per_person: float,
    edit_time_ratio: float,
    retouch_time: float,
    travel_hours: float,
    admin_hours: float,
) -> TimeBreakdown:
    shoot = people_count * (mins_per_person or DEFAULT_MINS_PER_PERSON) / 60.0
    retouch = people_count * (retouch_time or DEFAULT_TEAM_RETOUCH_MINUTES) / 60.0
    return TimeBreakdown(
        shoot=shoot,
        edit=shoot * edit_time_ratio + retouch,
        travel=travel_hours,
        admin=admin_hours,
        retouch=retouch,
    )


def retainer_breakdown(monthly_hours: float, admin_hours: float) -> TimeBreakdown:
    return TimeBreakdown(shoot=monthly_hours or DEFAULT_RETAINER_HOURS, admin=admin_hours)


def licensing_breakdown(admin_hours: float) -> TimeBreakdown:
    return TimeBreakdown(admin=admin_hours)


def compute_margin(price: float, cost_basis: float, hard_costs: float) -> int:
    # Margin is measured over the break-even cost, not over the labor valuation.
    if price == 0:
        return 0
    return round_half_up((price - (cost_basis + hard_costs)) / price * 100)


def _tier(price: float, total_hours: float, cost_basis: float, hard_costs: float) -> TierPricing:
    return TierPricing(
        price=round_half_up(price),
        hourly_rate_effective=safe_div(price, total_hours),
        margin=compute_margin(price, cost_basis, hard_costs),
    )


def price_tiers(
    breakdown: TimeBreakdown,
    codb_hourly: float,
    target_hourly_rate: float,
    hard_costs: Iterable[float] = (),
    licensing_base: float = 0.0,
    licensing_multiplier: float = 1.0,
) -> PricingResult:
    total_hours = breakdown.total_hours
    cost_basis = total_hours * codb_hourly
    labor_value = total_hours * target_hourly_rate
    hard_total = sum(hard_costs)
    base_price = labor_value + hard_total + licensing_base
    multiplier = licensing_multiplier or 1.0

    prices = (
        base_price * ESSENTIAL_MULTIPLIER,
        base_price * STANDARD_MULTIPLIER * multiplier,
        base_price * PREMIUM_MULTIPLIER * multiplier,
    )
    tiers = tuple(_tier(p, total_hours, cost_basis, hard_total) for p in prices)

    return PricingResult(
        breakdown=breakdown,
        total_hours=total_hours,
        cost_basis=cost_basis,
        labor_value=labor_value,
        hard_costs=hard_total,
        licensing_base=licensing_base,
        base_price=base_price,
        tiers=tiers,
    )
