from datetime import date

from salon_deposits.domain.reliability.weekend import is_weekend_premium_date
from salon_deposits.settings import settings

SATURDAY = date(2026, 10, 17)
SUNDAY = date(2026, 10, 18)
WEDNESDAY = date(2026, 10, 14)


def test_saturday_is_premium_by_default():
    assert is_weekend_premium_date(SATURDAY) is True
    assert is_weekend_premium_date(SUNDAY) is False
    assert is_weekend_premium_date(WEDNESDAY) is False


def test_premium_weekdays_follow_settings():
    settings.reliability_weekend_premium_weekdays = "sat,sun"

    assert is_weekend_premium_date(SUNDAY) is True


def test_explicit_weekdays_override_settings():
    assert is_weekend_premium_date(WEDNESDAY, weekdays=[2]) is True
    assert is_weekend_premium_date(SATURDAY, weekdays=[]) is False
