import math


def to_number(value, default=0.0):
    # Form fields arrive as numbers, numeric strings, blanks or junk; junk becomes 0.
    if value is None:
        return default
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def safe_div(a, b, default=0.0):
    if b <= 0:
        return default
    return a / b


def round_half_up(v):
    # Matches Math.round: halves go up, including for negatives (-2.5 -> -2).
    return int(math.floor(v + 0.5))
