"""Appointment lifecycle.

booked -> accepted -> checkedIn -> inProgress -> fulfilled, with cancelled and
noshow reachable from any state that is not terminal.
"""

import logging

from sqlalchemy.orm import Session

from vetbooking.core import config
from vetbooking.core.errors import ConflictError, InputValidationError, NotFoundError
from vetbooking.models.appointment import Appointment

logger = logging.getLogger(__name__)

BOOKED = 'booked'
ACCEPTED = 'accepted'
CHECKED_IN = 'checkedIn'
IN_PROGRESS = 'inProgress'
FULFILLED = 'fulfilled'
CANCELLED = 'cancelled'
NO_SHOW = 'noshow'

VALID_STATUSES = (BOOKED, FULFILLED, CANCELLED, ACCEPTED, IN_PROGRESS, CHECKED_IN, NO_SHOW)
TERMINAL_STATUSES = frozenset({FULFILLED, CANCELLED, NO_SHOW})

_FORWARD = {
    BOOKED: ACCEPTED,
    ACCEPTED: CHECKED_IN,
    CHECKED_IN: IN_PROGRESS,
    IN_PROGRESS: FULFILLED,
}

TRANSITIONS: dict[str, frozenset[str]] = {
    current: frozenset({_FORWARD[current], CANCELLED, NO_SHOW}) for current in _FORWARD
}
for _terminal in TERMINAL_STATUSES:
    TRANSITIONS[_terminal] = frozenset()


def can_transition(current: str, new_status: str) -> bool:
    return new_status in TRANSITIONS.get(current, frozenset())


def get_appointment(db: Session, appointment_id: int) -> Appointment:
    appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
    if appointment is None:
        raise NotFoundError('appointment', 'Appointment not found.')
    return appointment


def set_status(
    db: Session,
    appointment_id: int,
    new_status: str,
    changed_by: str | None = None,
    allow_override: bool | None = None,
) -> Appointment:
    if new_status not in VALID_STATUSES:
        raise InputValidationError(
            f"Invalid or missing status. Valid statuses: {', '.join(VALID_STATUSES)}",
            code='invalid-status',
            fields=['status'],
        )

    if allow_override is None:
        allow_override = config.ALLOW_MANUAL_STATUS_OVERRIDE

    appointment = get_appointment(db, appointment_id)
    current = appointment.status or BOOKED

    if current == new_status:
        return appointment

    if not allow_override and not can_transition(current, new_status):
        raise ConflictError(
            'invalid-transition',
            f'Cannot move an appointment from {current} to {new_status}.',
        )

    appointment.status = new_status
    if new_status == CANCELLED:
        appointment.cancelled_by = changed_by

    db.commit()
    db.refresh(appointment)

    logger.info('Appointment %s moved from %s to %s', appointment.id, current, new_status)
    return appointment
