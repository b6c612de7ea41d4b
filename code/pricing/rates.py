import math
from typing import Iterable

from .schemas import RateInput, RateSummary, VolumeStrategy
from .utils import round_half_up, safe_div

DEFAULT_HYPOTHETICAL_AVG = 1500.0


def annual_fixed_expenses(monthly_expenses: Iterable[float]) -> float:
    return sum(monthly_expenses) * 12


def tax_factor(tax_rate: float) -> float:
    factor = 1 - tax_rate / 100.0
    # A 100%+ tax rate would invert or zero the gross-up; fall back to no gross-up.
    return factor if factor > 0 else 1.0


def derive_rates(rate_input: RateInput) -> RateSummary:
    annual_fixed = annual_fixed_expenses(rate_input.monthly_expenses)
    total_hours = rate_input.work_weeks_per_year * rate_input.days_per_week * rate_input.hours_per_day
    billable_hours = total_hours * (rate_input.percent_billable / 100.0)
    gross = rate_input.annual_income_goal / tax_factor(rate_input.tax_rate) + annual_fixed

    return RateSummary(
        codb_hourly=safe_div(annual_fixed, billable_hours),
        target_hourly_rate=safe_div(gross, billable_hours),
        annual_fixed_expenses=annual_fixed,
        total_hours_available=total_hours,
        annual_billable_hours=billable_hours,
        gross_revenue_needed=gross,
    )


def volume_strategy(
    gross_revenue_needed: float,
    target_shoots_per_year: float,
    hypothetical_avg: float = DEFAULT_HYPOTHETICAL_AVG,
) -> VolumeStrategy:
    """
    Two views of the same revenue goal:
      - the average price each shoot must fetch at the planned volume
      - how many shoots are needed at a hypothetical average price
    A zero volume or price is treated as 1 so the figures stay finite.
    """
    avg_price = round_half_up(gross_revenue_needed / (target_shoots_per_year or 1))
    shoots_needed = math.ceil(gross_revenue_needed / (hypothetical_avg or 1))
    return VolumeStrategy(avg_price_per_shoot=avg_price, shoots_needed=shoots_needed)
