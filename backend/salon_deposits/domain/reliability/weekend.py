from datetime import date
from typing import Iterable

from salon_deposits.settings import settings


def is_weekend_premium_date(day: date, weekdays: Iterable[int] | None = None) -> bool:
    """True when ``day`` falls on a premium weekday (Monday is 0, Saturday by default)."""
    premium = set(weekdays) if weekdays is not None else set(settings.reliability_weekend_premium_weekdays)
    return day.weekday() in premium
