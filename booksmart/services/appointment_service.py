"""Data operations for the ``appointment1`` table."""

import logging

from booksmart import validation
from booksmart.schemas.appointment import (
    APPOINTMENT_STATUS_CONFIRMED,
    CreateAppointmentRequest,
    UpdateAppointmentRequest,
)
from booksmart.services.common import build_fetch_params, drop_unset, first_result_data

logger = logging.getLogger(__name__)

TABLE_NAME = "appointment1"
FIELDS = (
    "Id", "Name", "email", "phone", "service", "date", "time", "notes", "status", "CreatedOn",
)


def fetch_appointments(client, filters: dict | None = None) -> list[dict]:
    try:
        response = client.fetch_records(TABLE_NAME, build_fetch_params(FIELDS, filters))
    except Exception:
        logger.exception("Error fetching appointments")
        raise

    if not response or not response.get("data"):
        return []
    return response["data"]


def create_appointment(client, data: CreateAppointmentRequest) -> dict:
    params = {
        "records": [{
            "Name": data.name,
            "email": data.email,
            "phone": data.phone or "",
            "service": data.service,
            "date": validation.to_record_date(data.date),
            "time": validation.to_record_time(data.time),
            "notes": data.notes or "",
            "status": APPOINTMENT_STATUS_CONFIRMED,
        }]
    }
    try:
        response = client.create_record(TABLE_NAME, params)
        return first_result_data(response, "Failed to create appointment")
    except Exception:
        logger.exception("Error creating appointment")
        raise


def update_appointment(client, appointment_id: int, data: UpdateAppointmentRequest) -> dict:
    fields = drop_unset({
        "Name": data.name,
        "email": data.email,
        "phone": data.phone,
        "service": data.service,
        "date": validation.to_record_date(data.date) if data.date is not None else None,
        "time": validation.to_record_time(data.time) if data.time is not None else None,
        "notes": data.notes,
        "status": data.status,
    })
    params = {"records": [{"Id": appointment_id, **fields}]}
    try:
        response = client.update_record(TABLE_NAME, params)
        return first_result_data(response, "Failed to update appointment")
    except Exception:
        logger.exception("Error updating appointment %s", appointment_id)
        raise


def delete_appointment(client, appointment_id: int) -> bool:
    try:
        response = client.delete_record(TABLE_NAME, {"RecordIds": [appointment_id]})
    except Exception:
        logger.exception("Error deleting appointment %s", appointment_id)
        raise
    return bool(response and response.get("success"))
