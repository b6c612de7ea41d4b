from datetime import datetime
from typing import List

from .models import ScenarioData

EXPORT_DIVIDER = "-" * 32


def format_currency(value: float, symbol: str = "$") -> str:
    return f"{symbol}{value:,.0f}"


def format_rate(value: float, symbol: str = "$") -> str:
    return f"{symbol}{value:,.2f}"


def format_date(iso_date: str) -> str:
    try:
        parsed = datetime.fromisoformat(iso_date.replace("Z", "+00:00"))
    except ValueError:
        return iso_date
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def tiers_within_budget(scenario: ScenarioData, client_budget: float) -> List[bool]:
    return [client_budget >= tier.price for tier in scenario.tiers]


def export_scenario_text(scenario: ScenarioData, currency: str = "$") -> str:
    essential, standard, premium = scenario.tiers
    lines = [
        f"QUOTE: {scenario.title}",
        f"DATE: {format_date(scenario.date)}",
        EXPORT_DIVIDER,
        f"OPTION 1: {essential.name} - {currency}{essential.price}",
        f"Includes: {', '.join(essential.features)}",
        "",
        f"OPTION 2: {standard.name} - {currency}{standard.price} (Recommended)",
        f"Includes: {', '.join(standard.features)}",
        "",
        f"OPTION 3: {premium.name} - {currency}{premium.price}",
        f"Includes: {', '.join(premium.features)}",
        EXPORT_DIVIDER,
    ]
    return "\n".join(lines)
