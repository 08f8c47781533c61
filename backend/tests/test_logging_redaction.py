import json
import logging

from salon_deposits.domain.errors import RecordLookupError
from salon_deposits.domain.reliability.policy import evaluate_for_client
from salon_deposits.infra.logging import configure_logging, redact_pii, update_log_context


def _last_payload(capsys, message: str) -> dict:
    captured = capsys.readouterr()
    lines = (captured.out + captured.err).strip().splitlines()
    assert lines
    return json.loads(next(line for line in reversed(lines) if message in line))


def test_logging_redacts_contact_details(capsys):
    configure_logging()
    logger = logging.getLogger("pii-test")

    logger.info(
        "booking note from camille@example.com",
        extra={
            "client_name": "Camille Martin",
            "extra": {"note": "call back on 06 12 34 56 78", "phone": "780-555-1234"},
        },
    )

    payload = _last_payload(capsys, "booking note")
    assert payload["message"] == "booking note from [REDACTED_EMAIL]"
    assert payload["client_name"] == "[REDACTED]"
    assert payload["phone"] == "[REDACTED]"
    assert payload["note"] == "call back on [REDACTED_PHONE]"


def test_log_context_is_attached(capsys):
    configure_logging()
    update_log_context(request_id="req-123", salon_id="salon-9")

    logging.getLogger("context-test").warning("context check")

    payload = _last_payload(capsys, "context check")
    assert payload["request_id"] == "req-123"
    assert payload["salon_id"] == "salon-9"
    assert payload["level"] == "WARNING"


def test_lookup_fallback_is_logged_as_json(capsys, make_appointment):
    configure_logging()

    def lookup(client_id: str):
        raise RecordLookupError(detail="reliability store timed out")

    evaluate_for_client(make_appointment(client_id="client-4", appointment_id="apt-1"), lookup)

    payload = _last_payload(capsys, "reliability_lookup_failed")
    assert payload["event"] == "reliability_lookup_failed"
    assert payload["client_id"] == "client-4"
    assert payload["appointment_id"] == "apt-1"
    assert payload["detail"] == "reliability store timed out"


def test_redact_pii_leaves_dates_alone():
    assert redact_pii("cancelled on 2026-10-17") == "cancelled on 2026-10-17"
