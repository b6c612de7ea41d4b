import logging
import time
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from compass.ai.advisor_client import AdvisoryResult, Fallbacks, generate_advice
from pricing.pace import corporate_pace
from pricing.rates import DEFAULT_HYPOTHETICAL_AVG, derive_rates, volume_strategy
from pricing.schemas import PricingResult, RateInput, RateSummary
from pricing.scenario import price_tiers

from .models import (
    SCENARIO_LABELS,
    Breakdown,
    PaceResponse,
    ProfileRates,
    ProjectExpense,
    QuoteRequest,
    QuoteResponse,
    QuoteTier,
    ScenarioData,
    ScenarioInputs,
    UserProfile,
)
from .prompts import build_corporate_prompt, build_negotiation_prompt
from .tiers import TierContents, default_tier_content

logger = logging.getLogger(__name__)

NEGOTIATION_FALLBACKS = Fallbacks(
    missing_key="API Key missing. Cannot generate advice.",
    error="Error connecting to AI advisor.",
    empty="Could not generate advice.",
)
CORPORATE_FALLBACKS = Fallbacks(
    missing_key="API Key missing.",
    error="Error retrieving strategy.",
    empty="No strategy generated.",
)
PACE_WARNING = "WARNING: This pace is extremely fast. Quality may suffer without an assistant."
PACE_OK = "This implies a comfortable pace."


def _rate_input(profile: UserProfile) -> RateInput:
    return RateInput(
        annual_income_goal=profile.annual_income_goal,
        tax_rate=profile.tax_rate,
        work_weeks_per_year=profile.work_weeks_per_year,
        days_per_week=profile.days_per_week,
        hours_per_day=profile.hours_per_day,
        percent_billable=profile.percent_billable,
        monthly_expenses=[e.amount for e in profile.expenses],
    )


def derive_profile_rates(profile: UserProfile) -> RateSummary:
    return derive_rates(_rate_input(profile))


def recompute_profile(profile: UserProfile) -> UserProfile:
    """Return a copy of the profile with its derived hourly rates refreshed."""
    rates = derive_profile_rates(profile)
    return profile.model_copy(
        update={"codb_hourly": rates.codb_hourly, "target_hourly_rate": rates.target_hourly_rate}
    )


def profile_rates(profile: UserProfile, hypothetical_avg: float = DEFAULT_HYPOTHETICAL_AVG) -> ProfileRates:
    rates = derive_profile_rates(profile)
    volume = volume_strategy(rates.gross_revenue_needed, profile.target_shoots_per_year, hypothetical_avg)
    return ProfileRates(
        codb_hourly=rates.codb_hourly,
        target_hourly_rate=rates.target_hourly_rate,
        annual_fixed_expenses=rates.annual_fixed_expenses,
        total_hours_available=rates.total_hours_available,
        annual_billable_hours=rates.annual_billable_hours,
        gross_revenue_needed=rates.gross_revenue_needed,
        avg_price_per_shoot=volume.avg_price_per_shoot,
        shoots_needed=volume.shoots_needed,
    )


def price_scenario(
    profile: UserProfile,
    inputs: ScenarioInputs,
    project_expenses: List[ProjectExpense],
) -> PricingResult:
    return price_tiers(
        inputs.breakdown(),
        codb_hourly=profile.codb_hourly,
        target_hourly_rate=profile.target_hourly_rate,
        hard_costs=[e.amount for e in project_expenses],
        licensing_base=inputs.licensing_base,
        licensing_multiplier=inputs.licensing_multiplier,
    )


def build_tiers(pricing: PricingResult, contents: TierContents) -> tuple:
    # Pricing and tier content are paired by position: Essential, Standard, Premium.
    return tuple(
        QuoteTier(
            **content.model_dump(),
            price=tier.price,
            hourly_rate_effective=tier.hourly_rate_effective,
            margin=tier.margin,
        )
        for content, tier in zip(contents, pricing.tiers)
    )


def _breakdown(pricing: PricingResult) -> Breakdown:
    b = pricing.breakdown
    return Breakdown(
        shoot=b.shoot,
        edit=b.edit,
        travel=b.travel,
        admin=b.admin,
        retouch=b.retouch,
        total_hours=pricing.total_hours,
        labor_value=pricing.labor_value,
        cost_basis=pricing.cost_basis,
        hard_costs=pricing.hard_costs,
        licensing_base=pricing.licensing_base,
        base_price=pricing.base_price,
    )


def quote_scenario(request: QuoteRequest, profile: UserProfile) -> QuoteResponse:
    pricing = price_scenario(profile, request.inputs, request.project_expenses)
    contents = request.tier_content or default_tier_content()
    return QuoteResponse(tiers=build_tiers(pricing, contents), breakdown=_breakdown(pricing))


def create_scenario(
    request: QuoteRequest,
    profile: UserProfile,
    scenario_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ScenarioData:
    quote = quote_scenario(request, profile)
    stamp = now or datetime.now(timezone.utc)
    scenario_type = request.inputs.type
    scenario = ScenarioData(
        id=scenario_id or f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}",
        date=stamp.isoformat(),
        type=scenario_type,
        title=request.title or f"{SCENARIO_LABELS[scenario_type]} Quote",
        inputs=request.inputs,
        project_expenses=request.project_expenses,
        tiers=quote.tiers,
        status="Draft",
    )
    logger.info("Created scenario %s (%s)", scenario.id, scenario_type)
    return scenario


def pace_report(headcount: float, days: float, hours_per_day: float) -> PaceResponse:
    pace = corporate_pace(headcount, days, hours_per_day)
    return PaceResponse(
        minutes_per_person=pace.minutes_per_person,
        warning=pace.warning,
        message=PACE_WARNING if pace.warning else PACE_OK,
    )


def negotiation_advice(scenario: ScenarioData, client_budget: float, profile: UserProfile) -> AdvisoryResult:
    prompt = build_negotiation_prompt(scenario, client_budget, profile)
    return generate_advice(prompt, NEGOTIATION_FALLBACKS)


def corporate_strategy(headcount: float, days: float, hours_per_day: float) -> AdvisoryResult:
    prompt = build_corporate_prompt(headcount, days, hours_per_day)
    return generate_advice(prompt, CORPORATE_FALLBACKS)
