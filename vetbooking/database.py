from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker

from vetbooking.core import config


def _engine_kwargs(database_url: str) -> dict:
    kwargs = {'echo': config.DATABASE_ECHO}
    if database_url.startswith('sqlite'):
        # FastAPI runs sync handlers in a threadpool.
        kwargs['connect_args'] = {'check_same_thread': False}
    return kwargs


engine = create_engine(config.DATABASE_URL, **_engine_kwargs(config.DATABASE_URL))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_booking_schema_checked = False

# Tables created before the constraints existed are upgraded in place.
BOOKING_INDEXES = [
    (
        'appointments',
        'uq_appointments_provider_date_slot',
        'CREATE UNIQUE INDEX IF NOT EXISTS uq_appointments_provider_date_slot '
        'ON appointments(provider_id, appointment_date, slot_id)',
    ),
    (
        'appointments',
        'idx_appointments_hospital_date',
        'CREATE INDEX IF NOT EXISTS idx_appointments_hospital_date ON appointments(hospital_id, appointment_date)',
    ),
    (
        'daily_token_counters',
        'uq_daily_token_counters_hospital_date',
        'CREATE UNIQUE INDEX IF NOT EXISTS uq_daily_token_counters_hospital_date '
        'ON daily_token_counters(hospital_id, token_date)',
    ),
]


def ensure_booking_schema() -> None:
    global _booking_schema_checked

    if _booking_schema_checked:
        return

    with _schema_lock:
        if _booking_schema_checked:
            return

        inspector = inspect(engine)
        table_names = set(inspector.get_table_names())

        with engine.begin() as connection:
            for table_name, _index_name, statement in BOOKING_INDEXES:
                if table_name in table_names:
                    connection.execute(text(statement))

        _booking_schema_checked = True
