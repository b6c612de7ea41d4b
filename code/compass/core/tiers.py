from typing import List, Tuple

from .models import TierContent

TierContents = Tuple[TierContent, TierContent, TierContent]

FEATURE_SUGGESTIONS = [
    "High-End Retouching",
    "24h Rush Delivery",
    "Full Buyout",
    "RAW Files",
    "Social Media Crops",
    "Print Release",
    "Online Gallery",
    "Wardrobe Styling",
    "Hair & Makeup",
    "Commercial License",
    "Same-Day Selects",
]


def default_tier_content() -> TierContents:
    return (
        TierContent(
            name="Essential",
            description="Efficient coverage to get the job done.",
            features=["Standard Turnaround", "Web Usage Rights", "Basic Retouching"],
        ),
        TierContent(
            name="Standard",
            description="Recommended balance of value and impact.",
            features=["Priority Turnaround", "Print & Web Usage", "High-End Retouching", "Strategy Call"],
        ),
        TierContent(
            name="Premium",
            description="White-glove service with maximum flexibility.",
            features=["Rush Delivery (24h)", "Full Buyout / Extensive Usage", "Unlimited Looks", "Hair & Makeup Included"],
        ),
    )


def _replace(contents: TierContents, index: int, tier: TierContent) -> TierContents:
    updated: List[TierContent] = list(contents)
    updated[index] = tier
    return tuple(updated)  # type: ignore[return-value]


def update_tier(contents: TierContents, index: int, **changes) -> TierContents:
    return _replace(contents, index, contents[index].model_copy(update=changes))


def add_feature(contents: TierContents, index: int, feature: str) -> TierContents:
    feature = feature.strip()
    current = contents[index].features
    if not feature or feature in current:
        return contents
    return update_tier(contents, index, features=[*current, feature])


def remove_feature(contents: TierContents, index: int, feature_index: int) -> TierContents:
    features = [f for i, f in enumerate(contents[index].features) if i != feature_index]
    return update_tier(contents, index, features=features)
