from .schemas import PaceResult

MIN_COMFORTABLE_MINUTES = 5.0


def minutes_per_person(headcount: float, days: float, hours_per_day: float) -> float:
    if headcount <= 0:
        return 0.0
    return days * hours_per_day * 60.0 / headcount


def corporate_pace(headcount: float, days: float, hours_per_day: float) -> PaceResult:
    minutes = minutes_per_person(headcount, days, hours_per_day)
    warning = headcount > 0 and minutes < MIN_COMFORTABLE_MINUTES
    return PaceResult(minutes_per_person=minutes, warning=warning)
