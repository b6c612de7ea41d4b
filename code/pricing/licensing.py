from typing import Dict, Union

from .schemas import LicensingQuote
from .utils import to_number

MEDIA_OPTIONS: Dict[str, float] = {
    "Web/Social Only": 1.0,
    "Print + Web (Small)": 1.5,
    "Advertising / Billboard": 3.0,
}
DURATION_OPTIONS: Dict[str, float] = {
    "1 Year": 1.0,
    "3-5 Years": 1.5,
    "Perpetual": 2.5,
}
TERRITORY_OPTIONS: Dict[str, float] = {
    "Local/Regional": 1.0,
    "National": 1.5,
    "Worldwide": 2.0,
}
EXCLUSIVITY_OPTIONS: Dict[str, float] = {
    "Non-exclusive": 1.0,
    "Exclusive": 2.0,
}

LICENSING_MENUS: Dict[str, Dict[str, float]] = {
    "media": MEDIA_OPTIONS,
    "duration": DURATION_OPTIONS,
    "territory": TERRITORY_OPTIONS,
    "exclusivity": EXCLUSIVITY_OPTIONS,
}

Factor = Union[float, str, None]


def resolve_factor(menu: str, choice: Factor) -> float:
    """Accept a label on the named menu or anything numeric; unusable input is the neutral 1.0."""
    if isinstance(choice, str) and choice in LICENSING_MENUS[menu]:
        return LICENSING_MENUS[menu][choice]
    return to_number(choice, default=1.0)


def licensing_fee(
    base_fee: float,
    media: Factor = 1.0,
    duration: Factor = 1.0,
    territory: Factor = 1.0,
    exclusivity: Factor = 1.0,
) -> LicensingQuote:
    total = (
        base_fee
        * resolve_factor("media", media)
        * resolve_factor("duration", duration)
        * resolve_factor("territory", territory)
        * resolve_factor("exclusivity", exclusivity)
    )
    return LicensingQuote(base_fee=base_fee, total=total, usage_fee=total - base_fee)
