import pytest

from pricing.licensing import licensing_fee, resolve_factor
from pricing.pace import corporate_pace
from pricing.utils import round_half_up, to_number


def test_licensing_example():
    q = licensing_fee(500, media=1.5, duration=2.5, territory=1.5)
    assert q.total == pytest.approx(2812.5)
    assert q.usage_fee == pytest.approx(2312.5)


def test_licensing_by_label():
    q = licensing_fee(500, media="Print + Web (Small)", duration="Perpetual", territory="National", exclusivity="Exclusive")
    assert q.total == pytest.approx(5625.0)


def test_licensing_defaults_are_base_fee():
    q = licensing_fee(750)
    assert q.total == 750
    assert q.usage_fee == 0


@pytest.mark.parametrize(
    "choice, expected",
    [("National", 1.5), ("1.5", 1.5), (" 2 ", 2.0), ("Mars", 1.0), ("", 1.0), (None, 1.0), (3, 3.0)],
)
def test_factor_form_input(choice, expected):
    assert resolve_factor("territory", choice) == expected


def test_licensing_with_string_factors():
    q = licensing_fee(500, media="1.5", duration="abc")
    assert q.total == pytest.approx(750)


def test_pace_example():
    p = corporate_pace(headcount=50, days=1, hours_per_day=6)
    assert p.minutes_per_person == pytest.approx(7.2)
    assert p.warning is False


def test_pace_warning():
    p = corporate_pace(headcount=100, days=1, hours_per_day=6)
    assert p.minutes_per_person == pytest.approx(3.6)
    assert p.warning is True


def test_pace_without_headcount():
    p = corporate_pace(headcount=0, days=1, hours_per_day=6)
    assert p.minutes_per_person == 0
    assert p.warning is False


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 0.0), ("", 0.0), ("abc", 0.0), ("12.5", 12.5), (" 3 ", 3.0), (7, 7.0), (float("nan"), 0.0), ("inf", 0.0)],
)
def test_to_number(raw, expected):
    assert to_number(raw) == expected


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(1594.5) == 1595
    assert round_half_up(-2.5) == -2
