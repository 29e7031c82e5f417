"""Data operations for the ``bus_booking`` table."""

import logging

from booksmart import validation
from booksmart.schemas.trip import CreateBusBookingRequest, UpdateTripBookingRequest, route_name
from booksmart.services.common import build_fetch_params, drop_unset, first_result_data

logger = logging.getLogger(__name__)

TABLE_NAME = "bus_booking"
FIELDS = (
    "Id", "Name", "origin", "destination", "date", "time",
    "passenger_name", "passenger_count", "seat_type", "contact_number", "CreatedOn",
)


def fetch_bus_bookings(client, filters: dict | None = None) -> list[dict]:
    try:
        response = client.fetch_records(TABLE_NAME, build_fetch_params(FIELDS, filters))
    except Exception:
        logger.exception("Error fetching bus bookings")
        raise

    if not response or not response.get("data"):
        return []
    return response["data"]


def create_bus_booking(client, data: CreateBusBookingRequest) -> dict:
    params = {
        "records": [{
            "Name": route_name(data.origin, data.destination),
            "origin": data.origin,
            "destination": data.destination,
            "date": validation.to_record_date(data.date),
            "time": validation.to_record_time(data.time),
            "passenger_name": data.passenger_name,
            "passenger_count": data.passenger_count,
            "seat_type": data.seat_type,
            "contact_number": data.contact_number or "",
        }]
    }
    try:
        response = client.create_record(TABLE_NAME, params)
        return first_result_data(response, "Failed to create bus booking")
    except Exception:
        logger.exception("Error creating bus booking")
        raise


def update_bus_booking(client, booking_id: int, data: UpdateTripBookingRequest) -> dict:
    # Route, seat and passenger count are fixed once booked.
    fields = drop_unset({
        "passenger_name": data.passenger_name,
        "date": validation.to_record_date(data.date) if data.date is not None else None,
        "time": validation.to_record_time(data.time) if data.time is not None else None,
    })
    params = {"records": [{"Id": booking_id, **fields}]}
    try:
        response = client.update_record(TABLE_NAME, params)
        return first_result_data(response, "Failed to update bus booking")
    except Exception:
        logger.exception("Error updating bus booking %s", booking_id)
        raise


def delete_bus_booking(client, booking_id: int) -> bool:
    try:
        response = client.delete_record(TABLE_NAME, {"RecordIds": [booking_id]})
    except Exception:
        logger.exception("Error deleting bus booking %s", booking_id)
        raise
    return bool(response and response.get("success"))
