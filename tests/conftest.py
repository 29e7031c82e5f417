import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')

from booksmart.database import Base  # noqa: E402
from booksmart.models.appointment import Appointment  # noqa: E402
from booksmart.models.bus_booking import BusBooking  # noqa: E402
from booksmart.models.train_booking import TrainBooking  # noqa: E402
from booksmart.models.user import User  # noqa: E402
from booksmart.records.client import SqlRecordClient  # noqa: E402

TABLES = [User.__table__, Appointment.__table__, BusBooking.__table__, TrainBooking.__table__]


@pytest.fixture
def db_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=TABLES)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=TABLES)
        engine.dispose()


@pytest.fixture
def booking_db(db_engine):
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def record_client(booking_db):
    return SqlRecordClient(booking_db)
