import logging

from fastapi import APIRouter, Depends, HTTPException, status

from booksmart.records.client import SqlRecordClient, get_record_client
from booksmart.routes.errors import record_store_errors
from booksmart.schemas.trip import (
    CLASS_TYPES,
    CreateTrainBookingRequest,
    TrainBookingResponse,
    TripOptionResponse,
    UpdateTripBookingRequest,
)
from booksmart.services import train_booking_service

router = APIRouter(tags=['train-bookings'])

logger = logging.getLogger(__name__)

TRAIN_BOOKING_NOT_FOUND = 'Train booking not found.'


@router.get('', response_model=list[TrainBookingResponse])
def list_train_bookings(client: SqlRecordClient = Depends(get_record_client)):
    with record_store_errors('load train bookings'):
        records = train_booking_service.fetch_train_bookings(client)

    return [TrainBookingResponse.from_record(record) for record in records]


@router.get('/class-types', response_model=list[TripOptionResponse])
def list_class_types():
    return [TripOptionResponse(id=class_type, label=label) for class_type, label in CLASS_TYPES.items()]


@router.post('', response_model=TrainBookingResponse, status_code=status.HTTP_201_CREATED)
def create_train_booking(data: CreateTrainBookingRequest, client: SqlRecordClient = Depends(get_record_client)):
    with record_store_errors('create booking'):
        record = train_booking_service.create_train_booking(client, data)

    logger.info('Train booking %s added: %s', record.get('Id'), record.get('Name'))
    return TrainBookingResponse.from_record(record)


@router.patch('/{booking_id}', response_model=TrainBookingResponse)
def update_train_booking(
    booking_id: int,
    data: UpdateTripBookingRequest,
    client: SqlRecordClient = Depends(get_record_client),
):
    with record_store_errors('update booking'):
        if not train_booking_service.fetch_train_bookings(client, {'Id': booking_id}):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=TRAIN_BOOKING_NOT_FOUND,
            )
        record = train_booking_service.update_train_booking(client, booking_id, data)

    return TrainBookingResponse.from_record(record)


@router.delete('/{booking_id}', status_code=status.HTTP_204_NO_CONTENT)
def cancel_train_booking(booking_id: int, client: SqlRecordClient = Depends(get_record_client)):
    with record_store_errors('cancel booking'):
        deleted = train_booking_service.delete_train_booking(client, booking_id)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=TRAIN_BOOKING_NOT_FOUND,
        )
    logger.info('Train booking %s cancelled', booking_id)
