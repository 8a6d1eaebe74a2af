"""Client-facing slot availability.

Availability for one provider on one date is the weekly template for the
weekday, minus the display times blacked out for that date, with every
remaining slot flagged as booked when the ledger already holds an appointment
for it. Reads only; safe to call concurrently and repeatedly.
"""

from dataclasses import asdict, dataclass
from datetime import date

from sqlalchemy.orm import Session

from vetbooking.core.errors import InputValidationError
from vetbooking.core.validation import is_identity, parse_calendar_date, WEEKDAYS
from vetbooking.models.appointment import Appointment
from vetbooking.services import directory


@dataclass(frozen=True)
class SlotView:
    slot_id: int
    display_time: str
    machine_time: str
    is_booked: bool
    selected: bool

    def as_dict(self) -> dict:
        return asdict(self)


def validate_availability_params(
    provider_id: str | None,
    weekday: str | None,
    date_value: str | None,
) -> date:
    missing = [
        name
        for name, value in (('provider_id', provider_id), ('weekday', weekday), ('date', date_value))
        if not value
    ]
    if missing:
        raise InputValidationError(
            f"Missing required parameter(s): {', '.join(missing)}",
            code='missing-parameter',
            fields=missing,
        )

    invalid = []
    if not is_identity(provider_id):
        invalid.append('provider_id')
    if weekday not in WEEKDAYS:
        invalid.append('weekday')
    try:
        parsed_date = parse_calendar_date(date_value)
    except InputValidationError:
        invalid.append('date')
        parsed_date = None

    if invalid:
        raise InputValidationError(f"Invalid parameter(s): {', '.join(invalid)}", fields=invalid)

    return parsed_date


def get_booked_slot_ids(db: Session, provider_id: str, appointment_date: date) -> set[int]:
    rows = db.query(Appointment.slot_id).filter(
        Appointment.provider_id == provider_id,
        Appointment.appointment_date == appointment_date,
    ).all()
    return {slot_id for (slot_id,) in rows}


def compute_availability(
    db: Session,
    provider_id: str | None,
    weekday: str | None,
    date_value: str | None,
) -> list[SlotView]:
    appointment_date = validate_availability_params(provider_id, weekday, date_value)

    template = directory.get_slot_template(db, provider_id, weekday)
    if not template:
        return []

    blackout = directory.get_blackout(db, provider_id, appointment_date)
    blocked_times = set(blackout.blocked_times or []) if blackout else set()

    booked_slot_ids = get_booked_slot_ids(db, provider_id, appointment_date)

    views: list[SlotView] = []
    for slot in template:
        if slot.display_time in blocked_times:
            continue

        is_booked = slot.id in booked_slot_ids
        views.append(
            SlotView(
                slot_id=slot.id,
                display_time=slot.display_time,
                machine_time=slot.machine_time,
                is_booked=is_booked,
                selected=is_booked or bool(slot.is_default_selected),
            )
        )

    return views
