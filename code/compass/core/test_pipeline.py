from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from compass.ai.advisor_client import AdvisoryResult
from compass.core.models import (
    IndividualInputs,
    LicensingInputs,
    QuoteRequest,
    RetainerInputs,
    ScenarioData,
    TeamInputs,
    TierContent,
    UserProfile,
)
from compass.core.pipeline import (
    create_scenario,
    negotiation_advice,
    pace_report,
    profile_rates,
    quote_scenario,
    recompute_profile,
)
from compass.core.prompts import build_corporate_prompt, build_negotiation_prompt
from compass.core.sample_payloads import SAMPLE_PROFILE, SAMPLE_QUOTE_REQUEST
from compass.core.tiers import add_feature, default_tier_content, remove_feature, update_tier
from compass.core.tools import export_scenario_text, format_date, tiers_within_budget


@pytest.fixture
def profile():
    return recompute_profile(UserProfile.model_validate(SAMPLE_PROFILE))


@pytest.fixture
def example_profile():
    return UserProfile(codb_hourly=7.37, target_hourly_rate=219.96)


def test_recompute_profile_sets_derived_rates(profile):
    assert profile.codb_hourly == pytest.approx(7.37, abs=0.01)
    assert profile.target_hourly_rate == pytest.approx(219.95, abs=0.01)


def test_recompute_leaves_inputs_untouched():
    original = UserProfile()
    updated = recompute_profile(original)
    assert original.target_hourly_rate == 0
    assert updated.model_dump(exclude={"codb_hourly", "target_hourly_rate"}) == original.model_dump(
        exclude={"codb_hourly", "target_hourly_rate"}
    )


def test_profile_rates_includes_volume(profile):
    rates = profile_rates(profile)
    assert rates.annual_fixed_expenses == 3960
    assert rates.avg_price_per_shoot == 2365
    assert rates.shoots_needed == 79


def test_malformed_numbers_are_coerced():
    p = UserProfile(annual_income_goal="lots", tax_rate="", hours_per_day=None, expenses=[{"id": "x", "amount": "ten"}])
    assert p.annual_income_goal == 0
    assert p.tax_rate == 0
    assert p.hours_per_day == 0
    assert p.expenses[0].amount == 0
    assert recompute_profile(p).target_hourly_rate == 0


def test_quote_individual_example(example_profile):
    quote = quote_scenario(QuoteRequest.model_validate(SAMPLE_QUOTE_REQUEST), example_profile)
    assert [t.price for t in quote.tiers] == [1595, 1993, 2552]
    assert [t.name for t in quote.tiers] == ["Essential", "Standard", "Premium"]
    assert quote.breakdown.total_hours == pytest.approx(7.25)
    assert quote.breakdown.retouch == pytest.approx(1.25)


def test_quote_uses_caller_tier_content(example_profile):
    contents = update_tier(default_tier_content(), 1, name="Signature")
    request = QuoteRequest(inputs=RetainerInputs(monthly_hours=10, admin_hours=2), tier_content=contents)
    quote = quote_scenario(request, example_profile)
    assert quote.tiers[1].name == "Signature"
    assert quote.tiers[0].price == round(12 * 219.96)


@pytest.mark.parametrize(
    "inputs",
    [
        IndividualInputs(),
        TeamInputs(people_count=40, mins_per_person=5),
        RetainerInputs(monthly_hours=20),
        LicensingInputs(base_license_fee=1200, licensing_multiplier=1.5),
    ],
)
def test_every_scenario_type_has_three_ordered_tiers(inputs, example_profile):
    quote = quote_scenario(QuoteRequest(inputs=inputs), example_profile)
    prices = [t.price for t in quote.tiers]
    assert len(prices) == 3
    assert prices == sorted(prices)


def test_licensing_scenario_adds_base_fee(example_profile):
    quote = quote_scenario(QuoteRequest(inputs=LicensingInputs(base_license_fee=500, admin_hours=0)), example_profile)
    assert quote.tiers[0].price == 500
    assert quote.tiers[0].hourly_rate_effective == 0


def test_inputs_union_is_discriminated_by_type():
    request = QuoteRequest.model_validate({"inputs": {"type": "team", "people_count": "12", "mins_per_person": "abc"}})
    assert isinstance(request.inputs, TeamInputs)
    assert request.inputs.people_count == 12
    assert request.inputs.mins_per_person == 0


def test_create_scenario(example_profile):
    now = datetime(2024, 3, 9, 12, 0, tzinfo=timezone.utc)
    scenario = create_scenario(QuoteRequest(inputs=TeamInputs()), example_profile, scenario_id="abc", now=now)
    assert scenario.id == "abc"
    assert scenario.status == "Draft"
    assert scenario.type == "team"
    assert scenario.title == "Team/Group Headshots Quote"
    assert scenario.date.startswith("2024-03-09")
    assert len(scenario.tiers) == 3


def test_tier_content_editing():
    contents = default_tier_content()
    added = add_feature(contents, 0, "RAW Files")
    assert added[0].features[-1] == "RAW Files"
    assert add_feature(added, 0, "RAW Files") == added
    assert add_feature(contents, 0, "   ") == contents
    removed = remove_feature(added, 0, 0)
    assert removed[0].features == ["Web Usage Rights", "Basic Retouching", "RAW Files"]
    assert contents[0].features == ["Standard Turnaround", "Web Usage Rights", "Basic Retouching"]


def _saved(example_profile):
    contents = (
        TierContent(name="Essential", features=["Web Usage Rights"]),
        TierContent(name="Standard", features=["Print & Web Usage", "Strategy Call"]),
        TierContent(name="Premium", features=[]),
    )
    request = QuoteRequest(title="Acme Headshots", inputs=IndividualInputs(), tier_content=contents)
    return create_scenario(
        request, example_profile, scenario_id="1", now=datetime(2024, 3, 9, tzinfo=timezone.utc)
    )


def test_export_layout(example_profile):
    text = export_scenario_text(_saved(example_profile), "$")
    assert text.splitlines() == [
        "QUOTE: Acme Headshots",
        "DATE: 3/9/2024",
        "--------------------------------",
        "OPTION 1: Essential - $1595",
        "Includes: Web Usage Rights",
        "",
        "OPTION 2: Standard - $1993 (Recommended)",
        "Includes: Print & Web Usage, Strategy Call",
        "",
        "OPTION 3: Premium - $2552",
        "Includes: ",
        "--------------------------------",
    ]


def test_format_date_passthrough_on_garbage():
    assert format_date("not a date") == "not a date"


def test_tiers_within_budget(example_profile):
    assert tiers_within_budget(_saved(example_profile), 2000) == [True, True, False]


def test_prompts_interpolate_fields(example_profile):
    scenario = _saved(example_profile)
    prompt = build_negotiation_prompt(scenario, 1200, example_profile)
    assert "Photographer's Target Hourly Rate: $219.96" in prompt
    assert "Acme Headshots (Individual Session)" in prompt
    assert "Standard: $1993" in prompt
    assert "budget of $1200." in prompt
    assert "Headcount: 50 people" in build_corporate_prompt(50, 1, 6)


def test_negotiation_advice_uses_fallbacks(example_profile):
    with patch("compass.core.pipeline.generate_advice") as gen:
        gen.return_value = AdvisoryResult.unavailable("missing_key", "API Key missing. Cannot generate advice.")
        result = negotiation_advice(_saved(example_profile), 1200, example_profile)
    assert result.text == "API Key missing. Cannot generate advice."
    assert gen.call_args.args[1].error == "Error connecting to AI advisor."


def test_pace_report():
    assert pace_report(50, 1, 6).message == "This implies a comfortable pace."
    assert pace_report(200, 1, 6).warning is True


def test_scenario_round_trips_through_json(example_profile):
    scenario = _saved(example_profile)
    restored = ScenarioData.model_validate_json(scenario.model_dump_json())
    assert restored == scenario


def test_generated_scenario_ids_are_unique(example_profile):
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    with patch("compass.core.pipeline.time.time", return_value=1704067200.0):
        first = create_scenario(QuoteRequest(), example_profile, now=now)
        second = create_scenario(QuoteRequest(), example_profile, now=now)
    assert first.id != second.id
    assert first.id.startswith("1704067200000-")
