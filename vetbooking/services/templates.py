"""Provider-side maintenance of weekly templates and date blackouts."""

import logging
from datetime import date

from sqlalchemy.orm import Session

from vetbooking.core.validation import require_identity, require_weekday, to_display_time, weekday_name
from vetbooking.models.blackout import BlackoutEntry
from vetbooking.models.slot_template import SlotDefinition
from vetbooking.schemas import SlotEntryRequest
from vetbooking.services import directory
from vetbooking.services.availability import get_booked_slot_ids

logger = logging.getLogger(__name__)


def replace_slot_template(
    db: Session,
    provider_id: str,
    weekday: str,
    entries: list[SlotEntryRequest],
) -> list[SlotDefinition]:
    """Make the provider's template for ``weekday`` match ``entries``.

    Slots are matched on display time. Matched slots keep their ids, since
    booked appointments point at them; unmatched existing slots are removed and
    new times are added. The resulting order is the order of ``entries``.
    """
    require_identity(provider_id, 'provider_id')
    require_weekday(weekday)

    incoming: dict[str, SlotEntryRequest] = {}
    for entry in entries:
        incoming.setdefault(to_display_time(entry.machine_time), entry)

    existing = {slot.display_time: slot for slot in directory.get_slot_template(db, provider_id, weekday)}

    for display_time, slot in existing.items():
        if display_time not in incoming:
            db.delete(slot)

    for position, (display_time, entry) in enumerate(incoming.items()):
        slot = existing.get(display_time)
        if slot is None:
            slot = SlotDefinition(provider_id=provider_id, weekday=weekday, display_time=display_time)
            db.add(slot)
        slot.position = position
        slot.machine_time = entry.machine_time
        slot.is_default_selected = entry.selected

    db.commit()
    logger.info('Saved %s slot(s) for provider %s on %s', len(incoming), provider_id, weekday)
    return directory.get_slot_template(db, provider_id, weekday)


def list_template_with_bookings(
    db: Session,
    provider_id: str,
    weekday: str,
    booking_date: date | None = None,
) -> list[tuple[SlotDefinition, bool | None]]:
    """The raw template, blackouts not applied, flagged with bookings for ``booking_date``."""
    require_identity(provider_id, 'provider_id')
    require_weekday(weekday)

    template = directory.get_slot_template(db, provider_id, weekday)
    if booking_date is None:
        return [(slot, None) for slot in template]

    booked_slot_ids = get_booked_slot_ids(db, provider_id, booking_date)
    return [(slot, slot.id in booked_slot_ids) for slot in template]


def set_blackout(db: Session, provider_id: str, blackout_date: date, blocked_times: list[str]) -> BlackoutEntry | None:
    require_identity(provider_id, 'provider_id')

    entry = directory.get_blackout(db, provider_id, blackout_date)

    if not blocked_times:
        if entry is not None:
            db.delete(entry)
            db.commit()
            logger.info('Cleared blackout for provider %s on %s', provider_id, blackout_date)
        return None

    if entry is None:
        entry = BlackoutEntry(provider_id=provider_id, blackout_date=blackout_date)
        db.add(entry)

    entry.weekday = weekday_name(blackout_date)
    entry.blocked_times = list(blocked_times)
    db.commit()
    db.refresh(entry)

    logger.info('Blocked %s time(s) for provider %s on %s', len(blocked_times), provider_id, blackout_date)
    return entry
