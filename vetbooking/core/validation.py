import re
from datetime import date, datetime

from vetbooking.core.errors import InputValidationError

IDENTITY_PATTERN = re.compile(r'[a-fA-F0-9-]{36}')
DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}')
MACHINE_TIME_PATTERN = re.compile(r'([01]\d|2[0-3]):[0-5]\d')

WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')


def is_identity(value: object) -> bool:
    return isinstance(value, str) and bool(IDENTITY_PATTERN.fullmatch(value))


def require_identity(value: object, field: str, code: str = 'invalid-provider-id') -> str:
    if not is_identity(value):
        raise InputValidationError(f'Invalid {field} format.', code=code, fields=[field])
    return value


def parse_calendar_date(value: object, field: str = 'date') -> date:
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise InputValidationError(f'{field} must be in YYYY-MM-DD format.', code='invalid-date', fields=[field])

    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError as exc:
        raise InputValidationError(f'{field} is not a real calendar date.', code='invalid-date', fields=[field]) from exc


def require_weekday(value: object, field: str = 'weekday') -> str:
    if value not in WEEKDAYS:
        raise InputValidationError('Invalid day value.', code='invalid-weekday', fields=[field])
    return value


def require_reference_id(value: object, field: str, code: str = 'invalid-slot-id') -> int:
    # Booleans are ints in Python; they are never valid row references.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InputValidationError(f'Invalid or missing {field} format.', code=code, fields=[field])
    return value


def weekday_name(value: date) -> str:
    return WEEKDAYS[value.weekday()]


def to_display_time(machine_time: str) -> str:
    """Render a 24-hour ``HH:MM`` string the way providers see it, e.g. ``9:00 AM``."""
    if not MACHINE_TIME_PATTERN.fullmatch(machine_time):
        raise InputValidationError('machine_time must be HH:MM in 24-hour time.', code='invalid-time', fields=['machine_time'])

    hours, minutes = (int(part) for part in machine_time.split(':'))
    period = 'PM' if hours >= 12 else 'AM'
    hours = hours % 12 or 12
    return f'{hours}:{minutes:02d} {period}'
