import logging
import os
from typing import List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from compass.ai.advisor_client import check_advisor_online
from compass.core.models import (
    AdviceResponse,
    CorporateRequest,
    LicensingRequest,
    LicensingResponse,
    NegotiationRequest,
    PaceResponse,
    ProfileRates,
    QuoteRequest,
    QuoteResponse,
    ScenarioData,
    UserProfile,
)
from compass.core.pipeline import (
    corporate_strategy,
    create_scenario,
    negotiation_advice,
    pace_report,
    profile_rates,
    quote_scenario,
    recompute_profile,
)
from compass.core.storage import LocalStore
from compass.core.tiers import FEATURE_SUGGESTIONS, default_tier_content
from compass.core.tools import export_scenario_text, tiers_within_budget
from pricing.licensing import LICENSING_MENUS, licensing_fee

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

app = FastAPI(title="Photo Pricing Compass API")

_store = LocalStore()


def get_store() -> LocalStore:
    return _store


def _current_profile(store: LocalStore) -> UserProfile:
    return recompute_profile(store.load_profile() or UserProfile())


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/health/advisor")
def advisor_health():
    return {"online": check_advisor_online()}


@app.post("/rates", response_model=ProfileRates)
def rates(profile: UserProfile, hypothetical_avg: float = 1500.0):
    return profile_rates(profile, hypothetical_avg)


@app.get("/profile", response_model=UserProfile)
def get_profile(store: LocalStore = Depends(get_store)):
    return _current_profile(store)


@app.put("/profile", response_model=UserProfile)
def put_profile(profile: UserProfile, store: LocalStore = Depends(get_store)):
    updated = recompute_profile(profile)
    store.save_profile(updated)
    return updated


@app.get("/tiers/defaults")
def tier_defaults():
    return {"tiers": default_tier_content(), "feature_suggestions": FEATURE_SUGGESTIONS}


@app.post("/quote", response_model=QuoteResponse)
def quote(payload: QuoteRequest, store: LocalStore = Depends(get_store)):
    profile = recompute_profile(payload.profile) if payload.profile else _current_profile(store)
    return quote_scenario(payload, profile)


@app.post("/scenarios", response_model=ScenarioData)
def save_scenario(payload: QuoteRequest, store: LocalStore = Depends(get_store)):
    profile = recompute_profile(payload.profile) if payload.profile else _current_profile(store)
    scenario = create_scenario(payload, profile)
    store.append_scenario(scenario)
    return scenario


@app.get("/scenarios", response_model=List[ScenarioData])
def list_scenarios(store: LocalStore = Depends(get_store)):
    return store.load_scenarios()


def _find_scenario(store: LocalStore, scenario_id: str) -> ScenarioData:
    for scenario in store.load_scenarios():
        if scenario.id == scenario_id:
            return scenario
    raise HTTPException(status_code=404, detail=f"Scenario {scenario_id} not found")


@app.get("/scenarios/{scenario_id}/export", response_class=PlainTextResponse)
def export_scenario(scenario_id: str, store: LocalStore = Depends(get_store)):
    scenario = _find_scenario(store, scenario_id)
    return export_scenario_text(scenario, _current_profile(store).currency)


@app.get("/licensing/options")
def licensing_options():
    return LICENSING_MENUS


@app.post("/licensing", response_model=LicensingResponse)
def licensing(payload: LicensingRequest):
    fee = licensing_fee(payload.base_fee, payload.media, payload.duration, payload.territory, payload.exclusivity)
    return LicensingResponse(base_fee=fee.base_fee, total=fee.total, usage_fee=fee.usage_fee)


@app.post("/corporate/pace", response_model=PaceResponse)
def corporate_pace(payload: CorporateRequest):
    return pace_report(payload.headcount, payload.days, payload.hours_per_day)


@app.post("/corporate/strategy", response_model=AdviceResponse)
def corporate_plan(payload: CorporateRequest):
    result = corporate_strategy(payload.headcount, payload.days, payload.hours_per_day)
    return AdviceResponse(text=result.text, available=result.available, reason=result.reason)


@app.post("/negotiation", response_model=AdviceResponse)
def negotiation(payload: NegotiationRequest, store: LocalStore = Depends(get_store)):
    scenario = _find_scenario(store, payload.scenario_id)
    profile = _current_profile(store)
    result = negotiation_advice(scenario, payload.client_budget, profile)
    return AdviceResponse(
        text=result.text,
        available=result.available,
        reason=result.reason,
        tiers_within_budget=tiers_within_budget(scenario, payload.client_budget),
    )
