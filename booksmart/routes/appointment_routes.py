import logging
from datetime import date, time

from fastapi import APIRouter, Depends, HTTPException, Query, status

from booksmart import validation
from booksmart.records.client import SqlRecordClient, get_record_client
from booksmart.routes.errors import record_store_errors
from booksmart.schemas.appointment import (
    SERVICES,
    TIME_SLOTS,
    AppointmentResponse,
    CreateAppointmentRequest,
    ServiceOptionResponse,
    TimeSlotResponse,
    UpdateAppointmentRequest,
)
from booksmart.services import appointment_service
from booksmart.services.common import drop_unset

router = APIRouter(tags=['appointments'])

logger = logging.getLogger(__name__)

APPOINTMENT_NOT_FOUND = 'Appointment not found.'


def to_appointments(records: list[dict]) -> list[AppointmentResponse]:
    appointments = [AppointmentResponse.from_record(record) for record in records]
    return sorted(appointments, key=lambda appointment: (appointment.date, appointment.time))


def booked_on(client: SqlRecordClient, slot_date: date) -> list[dict]:
    records = appointment_service.fetch_appointments(
        client,
        {'date': validation.to_record_date(slot_date)},
    )
    return [appointment.model_dump() for appointment in to_appointments(records)]


def ensure_slot_available(
    client: SqlRecordClient,
    slot_date: date,
    slot_time: time,
    exclude_id: int | None = None,
) -> None:
    if not validation.is_future_slot(slot_date, slot_time):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=validation.PAST_SLOT_MESSAGE,
        )

    if validation.is_slot_taken(
        booked_on(client, slot_date),
        validation.to_record_date(slot_date),
        validation.to_record_time(slot_time),
        exclude_id=exclude_id,
    ):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=validation.SLOT_TAKEN_MESSAGE,
        )


@router.get('', response_model=list[AppointmentResponse])
def list_appointments(
    booking_date: date | None = Query(default=None, alias='date'),
    email: str | None = Query(default=None),
    service: str | None = Query(default=None),
    client: SqlRecordClient = Depends(get_record_client),
):
    filters = drop_unset({
        'date': validation.to_record_date(booking_date) if booking_date else None,
        'email': email.strip() if email and email.strip() else None,
        'service': service.strip() if service and service.strip() else None,
    })

    with record_store_errors('load appointments'):
        records = appointment_service.fetch_appointments(client, filters)

    return to_appointments(records)


@router.get('/services', response_model=list[ServiceOptionResponse])
def list_services():
    return [
        ServiceOptionResponse(id=service_id, name=name, duration_minutes=duration_minutes)
        for service_id, (name, duration_minutes) in SERVICES.items()
    ]


@router.get('/time-slots', response_model=list[TimeSlotResponse])
def list_time_slots(
    booking_date: date = Query(..., alias='date'),
    client: SqlRecordClient = Depends(get_record_client),
):
    with record_store_errors('load appointments'):
        booked = booked_on(client, booking_date)

    record_date = validation.to_record_date(booking_date)
    return [
        TimeSlotResponse(
            time=validation.to_record_time(slot),
            is_booked=validation.is_slot_taken(booked, record_date, validation.to_record_time(slot)),
        )
        for slot in TIME_SLOTS
    ]


@router.post('', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(data: CreateAppointmentRequest, client: SqlRecordClient = Depends(get_record_client)):
    with record_store_errors('create appointment'):
        ensure_slot_available(client, data.date, data.time)
        record = appointment_service.create_appointment(client, data)

    logger.info('Appointment %s booked for %s %s', record.get('Id'), record.get('date'), record.get('time'))
    return AppointmentResponse.from_record(record)


@router.patch('/{appointment_id}', response_model=AppointmentResponse)
def update_appointment(
    appointment_id: int,
    data: UpdateAppointmentRequest,
    client: SqlRecordClient = Depends(get_record_client),
):
    with record_store_errors('update appointment'):
        existing = appointment_service.fetch_appointments(client, {'Id': appointment_id})
        if not existing:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=APPOINTMENT_NOT_FOUND,
            )

        if data.date is not None or data.time is not None:
            current = AppointmentResponse.from_record(existing[0])
            try:
                slot_date = data.date or date.fromisoformat(current.date)
                slot_time = data.time or time.fromisoformat(current.time)
            except ValueError as exc:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=validation.REQUIRED_FIELDS_MESSAGE,
                ) from exc
            ensure_slot_available(client, slot_date, slot_time, exclude_id=appointment_id)

        record = appointment_service.update_appointment(client, appointment_id, data)

    return AppointmentResponse.from_record(record)


@router.delete('/{appointment_id}', status_code=status.HTTP_204_NO_CONTENT)
def cancel_appointment(appointment_id: int, client: SqlRecordClient = Depends(get_record_client)):
    with record_store_errors('cancel appointment'):
        deleted = appointment_service.delete_appointment(client, appointment_id)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=APPOINTMENT_NOT_FOUND,
        )
    logger.info('Appointment %s cancelled', appointment_id)
