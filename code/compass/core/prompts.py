from .models import SCENARIO_LABELS, ScenarioData, UserProfile
from .tools import format_rate


def build_negotiation_prompt(scenario: ScenarioData, client_budget: float, profile: UserProfile) -> str:
    cur = profile.currency
    essential, standard, premium = scenario.tiers
    return f"""
You are a pricing strategist for a photographer.

CONTEXT:
Photographer's Target Hourly Rate: {format_rate(profile.target_hourly_rate, cur)}
Scenario: {scenario.title} ({SCENARIO_LABELS[scenario.type]})

PRICING TIERS:
Essential: {cur}{essential.price}
Standard: {cur}{standard.price}
Premium: {cur}{premium.price}

SITUATION:
The client has a budget of {cur}{client_budget:g}.

TASK:
Provide 3 specific, tactical suggestions to adjust the scope of work to meet the client's budget without devaluing the photographer's time.
Do not just say "offer less". Be specific based on typical photography costs (e.g., fewer images, reduced licensing duration, remove advanced retouching, client comes to studio instead of on-location).
Keep it bulleted and concise.
""".strip()


def build_corporate_prompt(headcount: float, days: float, hours_per_day: float) -> str:
    return f"""
Act as a corporate photography logistics planner.

Scenario:
Headcount: {headcount:g} people
Days allocated: {days:g}
Shooting hours/day: {hours_per_day:g}

Task:
Provide a brief, 2-sentence strategic recommendation on how to structure the flow (e.g., "Schedule 5 mins per person with 2 styling stations...") to ensure efficiency and high quality.
""".strip()
