"""Request and response models for bus and train bookings."""

import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from booksmart import validation

SEAT_TYPES = {
    "regular": "Regular",
    "business": "Business",
    "sleeper": "Sleeper",
}
CLASS_TYPES = {
    "economy": "Economy",
    "business": "Business",
    "first": "First Class",
}

SeatType = Literal["regular", "business", "sleeper"]
ClassType = Literal["economy", "business", "first"]


def route_name(origin: str, destination: str) -> str:
    return f"{origin} to {destination}"


class CreateTripBookingRequest(BaseModel):
    origin: str
    destination: str
    date: datetime.date
    time: datetime.time
    passenger_name: str
    passenger_count: int = Field(default=1, ge=1)
    contact_number: str | None = None

    @field_validator("origin", "destination", "passenger_name")
    @classmethod
    def validate_required(cls, value: str) -> str:
        return validation.require_text(value)

    @field_validator("contact_number")
    @classmethod
    def normalize_contact_number(cls, value: str | None) -> str | None:
        return validation.optional_text(value)


class CreateBusBookingRequest(CreateTripBookingRequest):
    seat_type: SeatType = "regular"


class CreateTrainBookingRequest(CreateTripBookingRequest):
    class_type: ClassType = "economy"


class UpdateTripBookingRequest(BaseModel):
    """Only the passenger name and the departure date/time may change after booking."""

    passenger_name: str | None = None
    date: datetime.date | None = None
    time: datetime.time | None = None

    @field_validator("passenger_name")
    @classmethod
    def validate_passenger_name(cls, value: str | None) -> str | None:
        return None if value is None else validation.require_text(value)


class TripBookingResponse(BaseModel):
    id: int
    name: str
    origin: str
    destination: str
    date: str
    time: str
    display_datetime: str
    passenger_name: str
    passenger_count: int
    contact_number: str = ""
    created_at: str | None = None

    @classmethod
    def base_fields(cls, record: dict) -> dict:
        origin = record.get("origin") or ""
        destination = record.get("destination") or ""
        return {
            "id": record["Id"],
            "name": record.get("Name") or route_name(origin, destination),
            "origin": origin,
            "destination": destination,
            "date": record.get("date") or "",
            "time": record.get("time") or "",
            "display_datetime": validation.format_booking_datetime(record.get("date"), record.get("time")),
            "passenger_name": record.get("passenger_name") or "",
            "passenger_count": record.get("passenger_count") or 1,
            "contact_number": record.get("contact_number") or "",
            "created_at": record.get("CreatedOn"),
        }


class BusBookingResponse(TripBookingResponse):
    seat_type: str

    @classmethod
    def from_record(cls, record: dict) -> "BusBookingResponse":
        return cls(**cls.base_fields(record), seat_type=record.get("seat_type") or "regular")


class TrainBookingResponse(TripBookingResponse):
    class_type: str

    @classmethod
    def from_record(cls, record: dict) -> "TrainBookingResponse":
        return cls(**cls.base_fields(record), class_type=record.get("class_type") or "economy")


class TripOptionResponse(BaseModel):
    id: str
    label: str
