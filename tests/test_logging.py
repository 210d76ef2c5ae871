"""Log formatting."""

import json
import logging

from app.core.logging import BookingJsonFormatter, get_logger, redact_sensitive


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("app.services.booking", logging.INFO, __file__, 10, "Creating booking", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_redacts_guest_contacts():
    formatter = BookingJsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s")

    line = json.loads(
        formatter.format(
            make_record(
                booking_id="b-1",
                guest_phone="+91 98450 12345",
                guest={"guest_email": "meera@example.com", "name": "Meera Nair"},
            )
        )
    )

    assert line["message"] == "Creating booking"
    assert line["booking_id"] == "b-1"
    assert line["guest_phone"] == "[REDACTED]"
    assert line["guest"] == {"guest_email": "[REDACTED]", "name": "Meera Nair"}


def test_redact_sensitive_leaves_other_fields():
    fields = {"room_id": "r-1", "api_token": "abc"}

    assert redact_sensitive(fields) == {"room_id": "r-1", "api_token": "[REDACTED]"}


def test_bound_context_reaches_the_record(caplog):
    log = get_logger("app.tests.booking").bind(booking_id="b-2")

    with caplog.at_level(logging.INFO, logger="app.tests.booking"):
        log.info("Booking confirmed", extra={"room_id": "r-9"})

    record = caplog.records[-1]
    assert record.booking_id == "b-2"
    assert record.room_id == "r-9"
