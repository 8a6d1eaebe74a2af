import logging
from datetime import date

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from vetbooking.models.token_counter import DailyTokenCounter

logger = logging.getLogger(__name__)

FALLBACK_INITIALS = 'XX'

_UPSERT_DIALECTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


def hospital_initials(name: str | None) -> str:
    if not name or not name.strip():
        return FALLBACK_INITIALS
    return ''.join(word[0] for word in name.split()).upper()


def format_token(initials: str, count: int, date_str: str) -> str:
    return f'{initials}00{count}-{date_str}'


def next_token(db: Session, hospital_id: str, token_date: date) -> int:
    """Increment the hospital's counter for ``token_date`` and return the new value.

    The counter row is created on first use. Increment and creation happen in
    one INSERT .. ON CONFLICT DO UPDATE statement, so concurrent callers never
    read the same value. The increment is committed immediately; a later
    failure leaves a gap in the sequence, never a duplicate.
    """
    dialect_name = db.get_bind().dialect.name
    insert = _UPSERT_DIALECTS.get(dialect_name)
    if insert is None:
        raise RuntimeError(f'Atomic token issuance is not supported on {dialect_name}.')

    table = DailyTokenCounter.__table__
    statement = insert(table).values(hospital_id=hospital_id, token_date=token_date, count=1)
    statement = statement.on_conflict_do_update(
        index_elements=[table.c.hospital_id, table.c.token_date],
        set_={'count': table.c.count + 1},
    ).returning(table.c.count)

    count = db.execute(statement).scalar_one()
    db.commit()

    logger.debug('Issued token %s for hospital %s on %s', count, hospital_id, token_date)
    return count
