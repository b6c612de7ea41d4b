from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, BeforeValidator, Field

from pricing.scenario import (
    individual_breakdown,
    licensing_breakdown,
    retainer_breakdown,
    team_breakdown,
)
from pricing.schemas import TimeBreakdown
from pricing.utils import to_number

# Malformed numeric input is coerced to 0 instead of rejected.
Number = Annotated[float, BeforeValidator(lambda v: to_number(v))]

ScenarioType = Literal["individual", "team", "retainer", "licensing"]
ScenarioStatus = Literal["Draft", "Won", "Lost"]

SCENARIO_LABELS = {
    "individual": "Individual Session",
    "team": "Team/Group Headshots",
    "retainer": "Monthly Retainer",
    "licensing": "Licensing Only",
}


class Expense(BaseModel):
    id: str
    name: str = ""
    amount: Number = 0.0


class ProjectExpense(Expense):
    pass


def default_expenses() -> List[Expense]:
    return [
        Expense(id="1", name="Software Subscriptions (Adobe, CRM)", amount=60),
        Expense(id="2", name="Gear Insurance", amount=40),
        Expense(id="3", name="Website Hosting", amount=30),
        Expense(id="4", name="Marketing/Ads", amount=200),
    ]


def default_project_expenses() -> List[ProjectExpense]:
    return [
        ProjectExpense(id="1", name="Assistant / Grip", amount=0),
        ProjectExpense(id="2", name="Studio Rental", amount=0),
        ProjectExpense(id="3", name="Parking / Meals", amount=0),
    ]


class UserProfile(BaseModel):
    name: str = ""
    currency: str = "$"
    annual_income_goal: Number = 80000
    tax_rate: Number = 30
    work_weeks_per_year: Number = 48
    days_per_week: Number = 4
    hours_per_day: Number = 8
    percent_billable: Number = 35
    expenses: List[Expense] = Field(default_factory=default_expenses)
    target_hourly_rate: Number = 0.0
    codb_hourly: Number = 0.0
    target_shoots_per_year: Number = 50


class ProfileRates(BaseModel):
    codb_hourly: float
    target_hourly_rate: float
    annual_fixed_expenses: float
    total_hours_available: float
    annual_billable_hours: float
    gross_revenue_needed: float
    avg_price_per_shoot: int
    shoots_needed: int


class _ScopeBase(BaseModel):
    admin_hours: Number = 2
    licensing_multiplier: Number = 1.0

    @property
    def licensing_base(self) -> float:
        return 0.0


class IndividualInputs(_ScopeBase):
    type: Literal["individual"] = "individual"
    shoot_hours: Number = 2
    edit_time_ratio: Number = 0.5
    images: Number = 5
    retouch_time: Number = 15  # minutes per image
    travel_hours: Number = 1

    def breakdown(self) -> TimeBreakdown:
        return individual_breakdown(
            self.shoot_hours, self.edit_time_ratio, self.images, self.retouch_time, self.travel_hours, self.admin_hours
        )


class TeamInputs(_ScopeBase):
    type: Literal["team"] = "team"
    people_count: Number = 1
    mins_per_person: Number = 15
    edit_time_ratio: Number = 0.5
    retouch_time: Number = 10  # minutes per person
    travel_hours: Number = 1

    def breakdown(self) -> TimeBreakdown:
        return team_breakdown(
            self.people_count, self.mins_per_person, self.edit_time_ratio, self.retouch_time, self.travel_hours, self.admin_hours
        )


class RetainerInputs(_ScopeBase):
    type: Literal["retainer"] = "retainer"
    monthly_hours: Number = 10

    def breakdown(self) -> TimeBreakdown:
        return retainer_breakdown(self.monthly_hours, self.admin_hours)


class LicensingInputs(_ScopeBase):
    type: Literal["licensing"] = "licensing"
    base_license_fee: Number = 500

    def breakdown(self) -> TimeBreakdown:
        return licensing_breakdown(self.admin_hours)

    @property
    def licensing_base(self) -> float:
        return self.base_license_fee


ScenarioInputs = Annotated[
    Union[IndividualInputs, TeamInputs, RetainerInputs, LicensingInputs],
    Field(discriminator="type"),
]


class TierContent(BaseModel):
    name: str
    description: str = ""
    features: List[str] = []


class QuoteTier(TierContent):
    price: int
    hourly_rate_effective: float
    margin: int


class Breakdown(BaseModel):
    shoot: float
    edit: float
    travel: float
    admin: float
    retouch: float
    total_hours: float
    labor_value: float
    cost_basis: float
    hard_costs: float
    licensing_base: float
    base_price: float


class ScenarioData(BaseModel):
    id: str
    date: str
    type: ScenarioType
    title: str
    inputs: ScenarioInputs
    project_expenses: List[ProjectExpense] = []
    tiers: Tuple[QuoteTier, QuoteTier, QuoteTier]
    selected_tier: Optional[str] = None
    status: ScenarioStatus = "Draft"
    final_price: Optional[float] = None


class QuoteRequest(BaseModel):
    title: str = ""
    inputs: ScenarioInputs = Field(default_factory=IndividualInputs)
    project_expenses: List[ProjectExpense] = Field(default_factory=default_project_expenses)
    tier_content: Optional[Tuple[TierContent, TierContent, TierContent]] = None
    profile: Optional[UserProfile] = None


class QuoteResponse(BaseModel):
    tiers: Tuple[QuoteTier, QuoteTier, QuoteTier]
    breakdown: Breakdown


class LicensingRequest(BaseModel):
    base_fee: Number = 500
    media: Union[float, str, None] = 1.0
    duration: Union[float, str, None] = 1.0
    territory: Union[float, str, None] = 1.0
    exclusivity: Union[float, str, None] = 1.0


class LicensingResponse(BaseModel):
    base_fee: float
    total: float
    usage_fee: float


class CorporateRequest(BaseModel):
    headcount: Number = 50
    days: Number = 1
    hours_per_day: Number = 6


class PaceResponse(BaseModel):
    minutes_per_person: float
    warning: bool
    message: str


class NegotiationRequest(BaseModel):
    scenario_id: str
    client_budget: Number = 0


class AdviceResponse(BaseModel):
    text: str
    available: bool
    reason: Optional[str] = None
    tiers_within_budget: List[bool] = []
