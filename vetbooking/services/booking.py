"""The booking transaction.

A booking resolves the provider's hospital, issues the next daily token for
that hospital and inserts the appointment. The ledger's unique index on
(provider_id, appointment_date, slot_id) is what guarantees one appointment
per slot: the lookup before the insert only spares a token on obvious
duplicates, and a losing concurrent insert is reported the same way.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vetbooking.core.errors import ConflictError, InputValidationError, NotFoundError
from vetbooking.core.validation import is_identity, weekday_name
from vetbooking.models.appointment import Appointment
from vetbooking.schemas import AppointmentResponse, CreateBookingRequest
from vetbooking.services import directory
from vetbooking.services.tokens import format_token, hospital_initials, next_token

logger = logging.getLogger(__name__)

DUPLICATE_SLOT = 'duplicate-slot'


@dataclass
class BookingResult:
    appointment: Appointment
    token_number: str


def serialize_appointment(appointment: Appointment) -> dict[str, Any]:
    return AppointmentResponse.model_validate(appointment).model_dump(mode='json')


def find_existing_booking(db: Session, provider_id: str, appointment_date: date, slot_id: int) -> Appointment | None:
    return db.query(Appointment).filter(
        Appointment.provider_id == provider_id,
        Appointment.appointment_date == appointment_date,
        Appointment.slot_id == slot_id,
    ).first()


def _duplicate_slot_error(existing: Appointment | None) -> ConflictError:
    return ConflictError(
        DUPLICATE_SLOT,
        'An appointment already exists for this time slot.',
        existing=serialize_appointment(existing) if existing is not None else None,
    )


def book_appointment(db: Session, request: CreateBookingRequest) -> BookingResult:
    appointment_date = request.parsed_date

    hospital_id = directory.resolve_business_for_provider(db, request.provider_id)
    if not hospital_id:
        raise NotFoundError('business', 'User or hospital information not found.')
    if not is_identity(hospital_id):
        raise InputValidationError('Invalid hospitalId format.', code='invalid-hospital-id', fields=['hospital_id'])

    hospital = directory.resolve_hospital_display_name(db, hospital_id)
    if hospital is None:
        raise NotFoundError('hospital', 'Hospital information not found.')

    existing = find_existing_booking(db, request.provider_id, appointment_date, request.slot_id)
    if existing is not None:
        logger.warning(
            'Slot %s for provider %s on %s is already booked by appointment %s',
            request.slot_id,
            request.provider_id,
            request.appointment_date,
            existing.id,
        )
        raise _duplicate_slot_error(existing)

    slot = directory.get_slot_definition(db, request.provider_id, request.slot_id)
    if slot is None:
        raise NotFoundError('slot', 'Selected time slot not found.')

    count = next_token(db, hospital_id, appointment_date)
    token_number = format_token(hospital_initials(hospital.business_name), count, request.appointment_date)

    appointment = Appointment(
        hospital_id=hospital_id,
        provider_id=request.provider_id,
        appointment_date=appointment_date,
        weekday=weekday_name(appointment_date),
        slot_id=slot.id,
        appointment_time=slot.display_time,
        appointment_time_24=slot.machine_time,
        token_number=token_number,
        companion_id=request.companion_id,
        companion_name=request.companion_name,
        owner_id=request.owner_id,
        owner_name=request.owner_name,
        purpose=request.purpose,
        appointment_type=request.appointment_type,
        department=request.department,
        source=request.source,
        status='booked',
    )

    try:
        db.add(appointment)
        db.commit()
    except IntegrityError as exc:
        # Another request took the slot between the lookup and this insert.
        db.rollback()
        winner = find_existing_booking(db, request.provider_id, appointment_date, request.slot_id)
        if winner is None:
            raise
        logger.warning(
            'Lost booking race for slot %s of provider %s on %s; token %s left unused',
            request.slot_id,
            request.provider_id,
            request.appointment_date,
            token_number,
        )
        raise _duplicate_slot_error(winner) from exc

    db.refresh(appointment)
    logger.info(
        'Booked appointment %s (%s) for provider %s on %s at %s',
        appointment.id,
        token_number,
        appointment.provider_id,
        request.appointment_date,
        appointment.appointment_time,
    )
    return BookingResult(appointment=appointment, token_number=token_number)
