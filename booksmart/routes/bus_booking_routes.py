import logging

from fastapi import APIRouter, Depends, HTTPException, status

from booksmart.records.client import SqlRecordClient, get_record_client
from booksmart.routes.errors import record_store_errors
from booksmart.schemas.trip import (
    SEAT_TYPES,
    BusBookingResponse,
    CreateBusBookingRequest,
    TripOptionResponse,
    UpdateTripBookingRequest,
)
from booksmart.services import bus_booking_service

router = APIRouter(tags=['bus-bookings'])

logger = logging.getLogger(__name__)

BUS_BOOKING_NOT_FOUND = 'Bus booking not found.'


@router.get('', response_model=list[BusBookingResponse])
def list_bus_bookings(client: SqlRecordClient = Depends(get_record_client)):
    with record_store_errors('load bus bookings'):
        records = bus_booking_service.fetch_bus_bookings(client)

    return [BusBookingResponse.from_record(record) for record in records]


@router.get('/seat-types', response_model=list[TripOptionResponse])
def list_seat_types():
    return [TripOptionResponse(id=seat_type, label=label) for seat_type, label in SEAT_TYPES.items()]


@router.post('', response_model=BusBookingResponse, status_code=status.HTTP_201_CREATED)
def create_bus_booking(data: CreateBusBookingRequest, client: SqlRecordClient = Depends(get_record_client)):
    with record_store_errors('create booking'):
        record = bus_booking_service.create_bus_booking(client, data)

    logger.info('Bus booking %s added: %s', record.get('Id'), record.get('Name'))
    return BusBookingResponse.from_record(record)


@router.patch('/{booking_id}', response_model=BusBookingResponse)
def update_bus_booking(
    booking_id: int,
    data: UpdateTripBookingRequest,
    client: SqlRecordClient = Depends(get_record_client),
):
    with record_store_errors('update booking'):
        if not bus_booking_service.fetch_bus_bookings(client, {'Id': booking_id}):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=BUS_BOOKING_NOT_FOUND,
            )
        record = bus_booking_service.update_bus_booking(client, booking_id, data)

    return BusBookingResponse.from_record(record)


@router.delete('/{booking_id}', status_code=status.HTTP_204_NO_CONTENT)
def cancel_bus_booking(booking_id: int, client: SqlRecordClient = Depends(get_record_client)):
    with record_store_errors('cancel booking'):
        deleted = bus_booking_service.delete_bus_booking(client, booking_id)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=BUS_BOOKING_NOT_FOUND,
        )
    logger.info('Bus booking %s cancelled', booking_id)
