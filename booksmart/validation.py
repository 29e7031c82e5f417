"""Booking form checks shared by the appointment and trip routes."""

import re
from datetime import date, datetime, time

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"
INVALID_EMAIL_MESSAGE = "Please enter a valid email address"
PAST_SLOT_MESSAGE = "Please select a future date and time"
SLOT_TAKEN_MESSAGE = "This time slot is already booked. Please select another."

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def require_text(value: str | None) -> str:
    normalized = (value or "").strip()
    if not normalized:
        raise ValueError(REQUIRED_FIELDS_MESSAGE)
    return normalized


def optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    return normalized or None


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_email(value: str | None) -> str:
    normalized = require_text(value)
    if not is_valid_email(normalized):
        raise ValueError(INVALID_EMAIL_MESSAGE)
    return normalized


def to_record_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def to_record_time(value: time) -> str:
    return value.strftime(TIME_FORMAT)


def is_future_slot(slot_date: date, slot_time: time, now: datetime | None = None) -> bool:
    now = now or datetime.now()
    return datetime.combine(slot_date, slot_time.replace(second=0, microsecond=0)) > now


def is_slot_taken(
    bookings: list[dict],
    slot_date: str,
    slot_time: str,
    exclude_id: int | None = None,
) -> bool:
    """Return True if any loaded booking already holds this date and time.

    Only the bookings passed in are scanned. Nothing here reserves the slot,
    so two concurrent submissions can both pass.
    """
    return any(
        booking.get("date") == slot_date
        and booking.get("time") == slot_time
        and (exclude_id is None or booking.get("id") != exclude_id)
        for booking in bookings
    )


def format_booking_datetime(date_value: str, time_value: str) -> str:
    try:
        moment = datetime.strptime(f"{date_value}T{time_value}", f"{DATE_FORMAT}T{TIME_FORMAT}")
    except (TypeError, ValueError):
        return f"{date_value} at {time_value}"

    hour = moment.hour % 12 or 12
    return f"{moment:%A}, {moment:%B} {moment.day}, {moment.year} - {hour}:{moment:%M} {moment:%p}"
