from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vetbooking.core.errors import SchedulingError
from vetbooking.routes.dependencies import database_unavailable, ensure_database_ready, get_db
from vetbooking.schemas import AppointmentResponse, BookingResponse, CreateBookingRequest, UpdateStatusRequest
from vetbooking.services.booking import book_appointment
from vetbooking.services.status import get_appointment, set_status

router = APIRouter(tags=['appointments'])


@router.post('', response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(data: CreateBookingRequest, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        result = book_appointment(db, data)
        return BookingResponse(
            appointment=AppointmentResponse.model_validate(result.appointment),
            token_number=result.token_number,
        )
    except SchedulingError as exc:
        raise exc.to_http() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc


@router.get('/{appointment_id}', response_model=AppointmentResponse)
def read_appointment(appointment_id: int, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        return get_appointment(db, appointment_id)
    except SchedulingError as exc:
        raise exc.to_http() from exc
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.patch('/{appointment_id}/status', response_model=AppointmentResponse)
def update_appointment_status(
    appointment_id: int,
    data: UpdateStatusRequest,
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        return set_status(db, appointment_id, data.status, changed_by=data.changed_by)
    except SchedulingError as exc:
        raise exc.to_http() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc
