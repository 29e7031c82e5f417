"""Request and response models for service appointments."""

import datetime

from pydantic import BaseModel, field_validator

from booksmart import validation

APPOINTMENT_STATUS_CONFIRMED = "confirmed"
UNKNOWN_SERVICE_NAME = "Unknown Service"

SERVICES = {
    "Initial Consultation": ("Initial Consultation", 30),
    "Haircut & Styling": ("Haircut & Styling", 60),
    "Massage Therapy": ("Massage Therapy", 90),
    "Facial Treatment": ("Facial Treatment", 60),
    "Coaching Session": ("Coaching Session", 45),
}

TIME_SLOTS = (
    datetime.time(9, 0), datetime.time(10, 0), datetime.time(11, 0), datetime.time(12, 0), datetime.time(13, 0),
    datetime.time(14, 0), datetime.time(15, 0), datetime.time(16, 0), datetime.time(17, 0),
)


def get_service_name(service_id: str | None) -> str:
    service = SERVICES.get(service_id or "")
    return service[0] if service else UNKNOWN_SERVICE_NAME


def get_service_duration(service_id: str | None) -> int:
    service = SERVICES.get(service_id or "")
    return service[1] if service else 0


def _validate_service(value: str) -> str:
    normalized = validation.require_text(value)
    if normalized not in SERVICES:
        raise ValueError("Please choose one of the available services")
    return normalized


def _validate_time_slot(value: datetime.time) -> datetime.time:
    if value.replace(tzinfo=None) not in TIME_SLOTS:
        raise ValueError("Please choose one of the available time slots")
    return value


class CreateAppointmentRequest(BaseModel):
    name: str
    email: str
    phone: str | None = None
    service: str
    date: datetime.date
    time: datetime.time
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return validation.require_text(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return validation.validate_email(value)

    @field_validator("service")
    @classmethod
    def validate_service(cls, value: str) -> str:
        return _validate_service(value)

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: datetime.time) -> datetime.time:
        return _validate_time_slot(value)

    @field_validator("phone", "notes")
    @classmethod
    def normalize_optional(cls, value: str | None) -> str | None:
        return validation.optional_text(value)


class UpdateAppointmentRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    service: str | None = None
    date: datetime.date | None = None
    time: datetime.time | None = None
    notes: str | None = None
    status: str | None = None

    @field_validator("name", "status")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return None if value is None else validation.require_text(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        return None if value is None else validation.validate_email(value)

    @field_validator("service")
    @classmethod
    def validate_service(cls, value: str | None) -> str | None:
        return None if value is None else _validate_service(value)

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: datetime.time | None) -> datetime.time | None:
        return None if value is None else _validate_time_slot(value)

    @field_validator("phone", "notes")
    @classmethod
    def normalize_optional(cls, value: str | None) -> str | None:
        # An explicit empty string clears the field.
        return None if value is None else value.strip()


class AppointmentResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str = ""
    service: str
    service_name: str
    duration_minutes: int
    date: str
    time: str
    display_datetime: str
    notes: str = ""
    status: str
    created_at: str | None = None

    @classmethod
    def from_record(cls, record: dict) -> "AppointmentResponse":
        return cls(
            id=record["Id"],
            name=record.get("Name") or "",
            email=record.get("email") or "",
            phone=record.get("phone") or "",
            service=record.get("service") or "",
            service_name=get_service_name(record.get("service")),
            duration_minutes=get_service_duration(record.get("service")),
            date=record.get("date") or "",
            time=record.get("time") or "",
            display_datetime=validation.format_booking_datetime(record.get("date"), record.get("time")),
            notes=record.get("notes") or "",
            status=record.get("status") or APPOINTMENT_STATUS_CONFIRMED,
            created_at=record.get("CreatedOn"),
        )


class ServiceOptionResponse(BaseModel):
    id: str
    name: str
    duration_minutes: int


class TimeSlotResponse(BaseModel):
    time: str
    is_booked: bool
