from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vetbooking.core.errors import SchedulingError
from vetbooking.core.validation import parse_calendar_date, require_identity
from vetbooking.routes.dependencies import database_unavailable, ensure_database_ready, get_db
from vetbooking.schemas import BlackoutResponse, SetBlackoutRequest, SlotViewResponse
from vetbooking.services import directory
from vetbooking.services.availability import compute_availability
from vetbooking.services.templates import set_blackout

router = APIRouter(tags=['availability'])


@router.get('/slots', response_model=list[SlotViewResponse])
def list_available_slots(
    provider_id: str | None = Query(default=None),
    weekday: str | None = Query(default=None),
    date: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        views = compute_availability(db, provider_id, weekday, date)
        return [SlotViewResponse(**view.as_dict()) for view in views]
    except SchedulingError as exc:
        raise exc.to_http() from exc
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.get('/blackouts/{provider_id}/{blackout_date}', response_model=BlackoutResponse)
def get_blackout(provider_id: str, blackout_date: str, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        require_identity(provider_id, 'provider_id')
        parsed_date = parse_calendar_date(blackout_date)

        entry = directory.get_blackout(db, provider_id, parsed_date)
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail='No blocked times for this date.',
            )

        return entry
    except SchedulingError as exc:
        raise exc.to_http() from exc
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.put('/blackouts/{provider_id}/{blackout_date}', response_model=BlackoutResponse | None)
def put_blackout(
    provider_id: str,
    blackout_date: str,
    data: SetBlackoutRequest,
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        parsed_date = parse_calendar_date(blackout_date)
        return set_blackout(db, provider_id, parsed_date, data.blocked_times)
    except SchedulingError as exc:
        raise exc.to_http() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc
