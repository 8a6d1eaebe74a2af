from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vetbooking.core.errors import SchedulingError
from vetbooking.core.validation import parse_calendar_date
from vetbooking.routes.dependencies import database_unavailable, ensure_database_ready, get_db
from vetbooking.schemas import ReplaceSlotTemplateRequest, SlotDefinitionResponse
from vetbooking.services.templates import list_template_with_bookings, replace_slot_template

router = APIRouter(tags=['slots'])


def _to_response(slot, is_booked: bool | None = None) -> SlotDefinitionResponse:
    response = SlotDefinitionResponse.model_validate(slot)
    response.is_booked = is_booked
    return response


@router.get('/{provider_id}/{weekday}', response_model=list[SlotDefinitionResponse])
def list_slot_template(
    provider_id: str,
    weekday: str,
    date: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        booking_date = parse_calendar_date(date) if date is not None else None
        rows = list_template_with_bookings(db, provider_id, weekday, booking_date)
        return [_to_response(slot, is_booked) for slot, is_booked in rows]
    except SchedulingError as exc:
        raise exc.to_http() from exc
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.put('/{provider_id}/{weekday}', response_model=list[SlotDefinitionResponse])
def put_slot_template(
    provider_id: str,
    weekday: str,
    data: ReplaceSlotTemplateRequest,
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        slots = replace_slot_template(db, provider_id, weekday, data.slots)
        return [_to_response(slot) for slot in slots]
    except SchedulingError as exc:
        raise exc.to_http() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc
