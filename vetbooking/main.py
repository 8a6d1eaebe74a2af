import logging

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from vetbooking.core import config
from vetbooking.database import Base, engine, ensure_booking_schema
from vetbooking.models import appointment, blackout, directory, slot_template, token_counter  # noqa: F401
from vetbooking.routes import appointment_routes, availability_routes, slot_routes
from vetbooking.routes.exception_handlers import request_validation_handler

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

config.validate_runtime_config()

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.add_exception_handler(RequestValidationError, request_validation_handler)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
        ensure_booking_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Vet Booking API Running'}


app.include_router(availability_routes.router, prefix='/availability')
app.include_router(slot_routes.router, prefix='/slots')
app.include_router(appointment_routes.router, prefix='/appointments')


def run() -> None:
    logger.info('Starting Vet Booking API on %s:%s (%s)', config.APP_HOST, config.APP_PORT, config.APP_ENV)
    uvicorn.run(
        'vetbooking.main:app',
        host=config.APP_HOST,
        port=config.APP_PORT,
        reload=config.APP_RELOAD,
    )


if __name__ == '__main__':
    run()
