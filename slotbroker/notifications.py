"""
Booking notices sent to a caller after a slot has been chosen.

Delivery (SMS gateway) lives outside this package; anything implementing
``NotificationDispatcher`` can be plugged in. The ``notify`` CLI command
uses a preview-only dispatcher to show the message.
"""

from __future__ import annotations

from typing import Any, Dict, Protocol

from pydantic import BaseModel, ValidationError, field_validator

from .adapters.timezone_lookup import is_valid_phone_number
from .domain.exceptions import InputValidationError


class BookingNotice(BaseModel):
    """Details of the slot the caller picked."""
    name: str
    event_time: str
    event_duration: int
    scheduling_url: str

    @field_validator("name", "event_time", "scheduling_url")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("event_duration")
    @classmethod
    def positive_duration(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("event_duration must be greater than zero")
        return value


class NotificationDispatcher(Protocol):
    """Sends a text message and reports the delivery result."""

    def send(self, phone_number: str, body: str) -> Dict[str, Any]:
        ...


def compose_booking_message(notice: BookingNotice) -> str:
    """Text asking the caller to finalize the booking via the provider link."""
    return (
        f"Thank you {notice.name} for booking a {notice.event_duration}-minute "
        f"consultation for {notice.event_time}. "
        f"Please confirm your booking here: {notice.scheduling_url}"
    )


def send_booking_notice(
    dispatcher: NotificationDispatcher,
    phone_number: str,
    details: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Validate a booking notice and hand it to the dispatcher.

    Raises:
        InputValidationError: If the phone number or booking details are invalid
    """
    if not is_valid_phone_number(phone_number):
        raise InputValidationError("Invalid phone number")

    try:
        notice = BookingNotice(**details)
    except ValidationError as e:
        raise InputValidationError(f"Invalid booking details: {e.error_count()} problem(s)") from e

    return dispatcher.send(phone_number, compose_booking_message(notice))
