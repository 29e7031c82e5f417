import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from booksmart.auth.dependencies import get_current_user
from booksmart.core import config
from booksmart.database import create_all_tables
from booksmart.routes import appointment_routes, auth_routes, bus_booking_routes, train_booking_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

app = FastAPI(title='BookSmart API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        create_all_tables()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.get('/')
def root():
    return {'status': 'BookSmart API Running'}


signed_in = [Depends(get_current_user)]

app.include_router(auth_routes.router, prefix='/auth')
app.include_router(appointment_routes.router, prefix='/appointments', dependencies=signed_in)
app.include_router(bus_booking_routes.router, prefix='/bus-bookings', dependencies=signed_in)
app.include_router(train_booking_routes.router, prefix='/train-bookings', dependencies=signed_in)
