import logging
import sys
from datetime import date, time
from decimal import Decimal
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from salon_deposits.domain.reliability.schemas import AppointmentContext, ClientReliabilityRecord
from salon_deposits.infra.logging import RedactingJsonFormatter, clear_log_context
from salon_deposits.settings import settings

WEEKDAY_DATE = date(2026, 10, 14)  # Wednesday


@pytest.fixture(autouse=True)
def restore_reliability_settings():
    original_weekdays = settings.reliability_weekend_premium_weekdays_raw
    original_decision_logging = settings.reliability_decision_logging
    original_log_level = settings.log_level
    yield
    settings.reliability_weekend_premium_weekdays_raw = original_weekdays
    settings.reliability_decision_logging = original_decision_logging
    settings.log_level = original_log_level
    clear_log_context()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, RedactingJsonFormatter):
            root.removeHandler(handler)


@pytest.fixture
def make_record():
    def _make(client_id: str = "client-1", **overrides) -> ClientReliabilityRecord:
        return ClientReliabilityRecord(client_id=client_id, **overrides)

    return _make


@pytest.fixture
def make_appointment():
    counter = {"next": 1}

    def _make(client_id: str = "client-1", **overrides) -> AppointmentContext:
        appointment_id = overrides.pop("appointment_id", counter["next"])
        counter["next"] += 1
        payload = {
            "appointment_id": appointment_id,
            "client_id": client_id,
            "service_price": Decimal("45.00"),
            "scheduled_date": WEEKDAY_DATE,
            "start_time": time(hour=10),
            "is_weekend_premium": False,
            "status": "confirmed",
        }
        payload.update(overrides)
        return AppointmentContext(**payload)

    return _make
