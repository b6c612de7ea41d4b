# streamlit_app.py
import os
import sys

import streamlit as st

# Ensure `code/` is on sys.path so `compass` and `pricing` import when Streamlit runs this file directly.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from compass.core.models import (  # noqa: E402
    SCENARIO_LABELS,
    Expense,
    IndividualInputs,
    LicensingInputs,
    ProjectExpense,
    QuoteRequest,
    RetainerInputs,
    TeamInputs,
    UserProfile,
    default_project_expenses,
)
from compass.core.pipeline import (  # noqa: E402
    corporate_strategy,
    create_scenario,
    negotiation_advice,
    pace_report,
    profile_rates,
    quote_scenario,
    recompute_profile,
)
from compass.core.storage import LocalStore  # noqa: E402
from compass.core.tiers import FEATURE_SUGGESTIONS, add_feature, default_tier_content, remove_feature, update_tier  # noqa: E402
from compass.core.tools import export_scenario_text, format_currency, format_date, format_rate, tiers_within_budget  # noqa: E402
from pricing.licensing import DURATION_OPTIONS, EXCLUSIVITY_OPTIONS, MEDIA_OPTIONS, TERRITORY_OPTIONS, licensing_fee  # noqa: E402

st.set_page_config(page_title="Pricing Compass", layout="wide")

store = LocalStore()

# Read once at startup, written on every change.
if "profile" not in st.session_state:
    st.session_state.profile = store.load_profile()
    st.session_state.scenarios = store.load_scenarios()
    st.session_state.tier_content = default_tier_content()

PAGES = ["Profile & CODB", "New Quote", "Corp Planner", "Licensing Calc", "Negotiator", "History"]

with st.sidebar:
    st.title("Pricing Compass")
    st.caption("for Photographers")
    page = st.radio("Menu", PAGES if st.session_state.profile else PAGES[:1])
    if st.session_state.profile:
        st.caption(f"Logged in as {st.session_state.profile.name or 'Photographer'}")


def render_profile():
    current = st.session_state.profile or UserProfile()
    st.header("Profile & Cost of Doing Business")
    col_in, col_out = st.columns(2)
    with col_in:
        name = st.text_input("Name", current.name)
        currency = st.text_input("Currency symbol", current.currency)
        goal = st.number_input("Net annual income goal (take home)", value=float(current.annual_income_goal), step=1000.0)
        tax = st.number_input("Tax rate %", value=float(current.tax_rate))
        shoots = st.number_input("Target shoots / year", value=float(current.target_shoots_per_year))
        weeks = st.number_input("Work weeks / year", value=float(current.work_weeks_per_year))
        days = st.number_input("Days / week", value=float(current.days_per_week))
        hours = st.number_input("Hours / day", value=float(current.hours_per_day))
        billable = st.number_input("% billable", value=float(current.percent_billable))
        st.subheader("Monthly expenses")
        rows = st.data_editor(
            [e.model_dump() for e in current.expenses], num_rows="dynamic", key="profile_expenses"
        )
    expenses = [Expense(id=str(r.get("id") or i), name=r.get("name") or "", amount=r.get("amount")) for i, r in enumerate(rows)]
    draft = recompute_profile(
        UserProfile(
            name=name,
            currency=currency,
            annual_income_goal=goal,
            tax_rate=tax,
            work_weeks_per_year=weeks,
            days_per_week=days,
            hours_per_day=hours,
            percent_billable=billable,
            expenses=expenses,
            target_shoots_per_year=shoots,
        )
    )
    with col_out:
        hypothetical = st.number_input("Hypothetical average price per shoot", value=1500.0)
        rates = profile_rates(draft, hypothetical)
        st.metric("Target hourly rate (floor)", format_rate(rates.target_hourly_rate, currency))
        st.metric("CODB hourly", format_rate(rates.codb_hourly, currency))
        st.metric("Billable hours / year", f"{round(rates.annual_billable_hours)}")
        st.caption(
            f"{format_currency(rates.annual_fixed_expenses, currency)} (Exp) / {round(rates.annual_billable_hours)} (Hrs)"
        )
        st.metric("Average price per shoot", format_currency(rates.avg_price_per_shoot, currency))
        st.caption(f"At {format_currency(hypothetical, currency)} per shoot you need {rates.shoots_needed} shoots/yr")
        if st.button("Save profile"):
            st.session_state.profile = draft
            store.save_profile(draft)
            st.success("Profile saved.")


def _scope_inputs(scenario_type: str):
    if scenario_type == "individual":
        return IndividualInputs(
            shoot_hours=st.number_input("Shoot hours", value=2.0),
            edit_time_ratio=st.number_input("Edit time ratio", value=0.5),
            images=st.number_input("Final images", value=5.0),
            retouch_time=st.number_input("Retouch minutes / image", value=15.0),
            travel_hours=st.number_input("Travel hours", value=1.0),
            admin_hours=st.number_input("Admin hours", value=2.0),
            licensing_multiplier=st.number_input("Licensing multiplier", value=1.0),
        )
    if scenario_type == "team":
        return TeamInputs(
            people_count=st.number_input("People", value=1.0),
            mins_per_person=st.number_input("Minutes / person", value=15.0),
            edit_time_ratio=st.number_input("Edit time ratio", value=0.5),
            retouch_time=st.number_input("Retouch minutes / person", value=10.0),
            travel_hours=st.number_input("Travel hours", value=1.0),
            admin_hours=st.number_input("Admin hours", value=2.0),
            licensing_multiplier=st.number_input("Licensing multiplier", value=1.0),
        )
    if scenario_type == "retainer":
        return RetainerInputs(
            monthly_hours=st.number_input("Monthly hours", value=10.0),
            admin_hours=st.number_input("Admin hours", value=2.0),
            licensing_multiplier=st.number_input("Licensing multiplier", value=1.0),
        )
    return LicensingInputs(
        base_license_fee=st.number_input("Base license fee", value=500.0),
        admin_hours=st.number_input("Admin hours", value=2.0),
        licensing_multiplier=st.number_input("Licensing multiplier", value=1.0),
    )


def render_quote():
    profile = st.session_state.profile
    st.header("New Quote")
    col_in, col_out = st.columns([1, 2])
    with col_in:
        title = st.text_input("Client name / project title")
        scenario_type = st.selectbox("Type", list(SCENARIO_LABELS), format_func=SCENARIO_LABELS.get)
        inputs = _scope_inputs(scenario_type)
        st.subheader("Project expenses")
        rows = st.data_editor([e.model_dump() for e in default_project_expenses()], num_rows="dynamic", key="project_expenses")
    project_expenses = [
        ProjectExpense(id=str(r.get("id") or i), name=r.get("name") or "", amount=r.get("amount")) for i, r in enumerate(rows)
    ]
    request = QuoteRequest(
        title=title,
        inputs=inputs,
        project_expenses=project_expenses,
        tier_content=st.session_state.tier_content,
    )
    result = quote_scenario(request, profile)
    with col_out:
        b = result.breakdown
        with st.expander("Pricing breakdown"):
            st.write(
                f"Shoot {b.shoot:.2f}h, edit {b.edit:.2f}h (retouch {b.retouch:.2f}h), "
                f"travel {b.travel:.2f}h, admin {b.admin:.2f}h = {b.total_hours:.2f}h"
            )
            st.write(
                f"Total = ({b.total_hours:.2f}h x {format_rate(profile.target_hourly_rate, profile.currency)}) "
                f"+ hard expenses {format_currency(b.hard_costs, profile.currency)}"
            )
        for idx, (col, tier) in enumerate(zip(st.columns(3), result.tiers)):
            with col:
                new_name = st.text_input("Tier name", tier.name, key=f"tier_name_{idx}")
                st.metric("Price", format_currency(tier.price, profile.currency))
                st.caption(f"{format_rate(tier.hourly_rate_effective, profile.currency)}/hr, margin {tier.margin}%")
                new_desc = st.text_area("Description", tier.description, key=f"tier_desc_{idx}")
                if (new_name, new_desc) != (tier.name, tier.description):
                    st.session_state.tier_content = update_tier(
                        st.session_state.tier_content, idx, name=new_name, description=new_desc
                    )
                for feature_idx, feature in enumerate(tier.features):
                    if st.button(f"✕ {feature}", key=f"tier_feature_rm_{idx}_{feature_idx}", help="Remove feature"):
                        st.session_state.tier_content = remove_feature(st.session_state.tier_content, idx, feature_idx)
                        st.rerun()
                suggestion = st.selectbox("Add feature", [""] + FEATURE_SUGGESTIONS, key=f"tier_feature_{idx}")
                if suggestion:
                    st.session_state.tier_content = add_feature(st.session_state.tier_content, idx, suggestion)
        if st.button("Reset defaults"):
            st.session_state.tier_content = default_tier_content()
        if st.button("Save scenario to history"):
            scenario = create_scenario(request, profile)
            st.session_state.scenarios = store.append_scenario(scenario)
            st.success("Saved.")


def render_corporate():
    st.header("Corporate Headshot Planner")
    headcount = st.number_input("Headcount", value=50.0)
    days = st.number_input("Days", value=1.0)
    hours = st.number_input("Shooting hours / day", value=6.0)
    pace = pace_report(headcount, days, hours)
    st.metric("Minutes per person", f"{pace.minutes_per_person:.1f}")
    (st.warning if pace.warning else st.success)(pace.message)
    if st.button("Generate plan"):
        with st.spinner("Asking the advisor..."):
            st.info(corporate_strategy(headcount, days, hours).text)


def render_licensing():
    st.header("Licensing Calculator")
    base_fee = st.number_input("Base creative fee", value=500.0)
    media = st.radio("Media", list(MEDIA_OPTIONS), horizontal=True)
    duration = st.radio("Duration", list(DURATION_OPTIONS), horizontal=True)
    territory = st.radio("Territory", list(TERRITORY_OPTIONS), horizontal=True)
    exclusivity = st.radio("Exclusivity", list(EXCLUSIVITY_OPTIONS), horizontal=True)
    fee = licensing_fee(base_fee, media, duration, territory, exclusivity)
    st.metric("Usage fee", format_currency(fee.usage_fee))
    st.caption(f"Total w/ base: {format_currency(fee.total)}")


def render_negotiation():
    st.header("Negotiator")
    scenarios = st.session_state.scenarios
    if not scenarios:
        st.warning("Save a quote first to get negotiation help.")
        return
    scenario = st.selectbox(
        "Quote", scenarios, format_func=lambda s: f"{s.title} ({format_date(s.date)})"
    )
    budget = st.number_input("Client budget", value=0.0)
    profile = st.session_state.profile
    for tier, fits in zip(scenario.tiers, tiers_within_budget(scenario, budget)):
        st.write(f"{tier.name}: {format_currency(tier.price, profile.currency)} {'(fits)' if fits else ''}")
    if st.button("Get AI strategy", disabled=not budget):
        with st.spinner("Asking the advisor..."):
            st.markdown(negotiation_advice(scenario, budget, profile).text)


def render_history():
    st.header("History")
    scenarios = st.session_state.scenarios
    if not scenarios:
        st.info("No saved quotes yet.")
        return
    for scenario in reversed(scenarios):
        with st.expander(f"{scenario.title} | {SCENARIO_LABELS[scenario.type]} | {format_date(scenario.date)}"):
            st.code(export_scenario_text(scenario, st.session_state.profile.currency), language=None)


if page == "Profile & CODB" or not st.session_state.profile:
    render_profile()
elif page == "New Quote":
    render_quote()
elif page == "Corp Planner":
    render_corporate()
elif page == "Licensing Calc":
    render_licensing()
elif page == "Negotiator":
    render_negotiation()
else:
    render_history()
