from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class RateInput:
    annual_income_goal: float
    tax_rate: float
    work_weeks_per_year: float
    days_per_week: float
    hours_per_day: float
    percent_billable: float
    monthly_expenses: List[float] = field(default_factory=list)


@dataclass
class RateSummary:
    codb_hourly: float
    target_hourly_rate: float
    annual_fixed_expenses: float
    total_hours_available: float
    annual_billable_hours: float
    gross_revenue_needed: float


@dataclass
class VolumeStrategy:
    avg_price_per_shoot: int
    shoots_needed: int


@dataclass
class TimeBreakdown:
    shoot: float = 0.0
    edit: float = 0.0
    travel: float = 0.0
    admin: float = 0.0
    retouch: float = 0.0  # already included in edit

    @property
    def total_hours(self) -> float:
        return self.shoot + self.edit + self.travel + self.admin


@dataclass
class TierPricing:
    price: int
    hourly_rate_effective: float
    margin: int


@dataclass
class PricingResult:
    breakdown: TimeBreakdown
    total_hours: float
    cost_basis: float
    labor_value: float
    hard_costs: float
    licensing_base: float
    base_price: float
    tiers: Tuple[TierPricing, TierPricing, TierPricing]


@dataclass
class LicensingQuote:
    base_fee: float
    total: float
    usage_fee: float


@dataclass
class PaceResult:
    minutes_per_person: float
    warning: bool

# Outputs are plain dataclasses; the app layer wraps them in pydantic models.
