"""
Tests for booking notices.
"""

import pytest

from slotbroker.domain.exceptions import InputValidationError
from slotbroker.notifications import BookingNotice, compose_booking_message, send_booking_notice

DETAILS = {
    "name": "Alex",
    "event_time": "Tuesday, October 20 at 9:30 AM",
    "event_duration": 30,
    "scheduling_url": "https://calendly.com/acme/30min/2026-10-20T13:30",
}


class RecordingDispatcher:
    def __init__(self):
        self.sent = []

    def send(self, phone_number, body):
        self.sent.append((phone_number, body))
        return {"success": True, "messageId": "SM123"}


def test_compose_booking_message():
    message = compose_booking_message(BookingNotice(**DETAILS))

    assert message == (
        "Thank you Alex for booking a 30-minute consultation for "
        "Tuesday, October 20 at 9:30 AM. Please confirm your booking here: "
        "https://calendly.com/acme/30min/2026-10-20T13:30"
    )


def test_send_booking_notice_dispatches_message():
    dispatcher = RecordingDispatcher()

    result = send_booking_notice(dispatcher, "+16502530000", DETAILS)

    assert result["success"] is True
    assert dispatcher.sent[0][0] == "+16502530000"
    assert "Alex" in dispatcher.sent[0][1]


def test_invalid_phone_number_is_rejected():
    dispatcher = RecordingDispatcher()

    with pytest.raises(InputValidationError, match="phone"):
        send_booking_notice(dispatcher, "12345", DETAILS)

    assert dispatcher.sent == []


@pytest.mark.parametrize("missing", ["name", "event_time", "event_duration", "scheduling_url"])
def test_incomplete_details_are_rejected(missing):
    details = {key: value for key, value in DETAILS.items() if key != missing}

    with pytest.raises(InputValidationError, match="Invalid booking details"):
        send_booking_notice(RecordingDispatcher(), "+16502530000", details)
