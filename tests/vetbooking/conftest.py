import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from vetbooking.database import Base  # noqa: E402
from vetbooking.models.appointment import Appointment  # noqa: E402
from vetbooking.models.blackout import BlackoutEntry  # noqa: E402
from vetbooking.models.directory import HospitalProfile, ProviderAffiliation  # noqa: E402
from vetbooking.models.slot_template import SlotDefinition  # noqa: E402
from vetbooking.models.token_counter import DailyTokenCounter  # noqa: E402

PROVIDER_ID = '3f2b8c1e-9a4d-4e7b-8c2f-1a2b3c4d5e6f'
OTHER_PROVIDER_ID = '7c9e6679-7425-40de-944b-e07fc1f90ae7'
HOSPITAL_ID = 'a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d'

TABLES = [
    SlotDefinition.__table__,
    BlackoutEntry.__table__,
    Appointment.__table__,
    DailyTokenCounter.__table__,
    ProviderAffiliation.__table__,
    HospitalProfile.__table__,
]


@pytest.fixture
def booking_db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=TABLES)

    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine, tables=TABLES)


@pytest.fixture
def clinic(booking_db):
    """Happy Paws Clinic with one provider whose Monday has 9:00 AM and 9:30 AM."""
    booking_db.add(ProviderAffiliation(provider_id=PROVIDER_ID, business_id=HOSPITAL_ID))
    booking_db.add(HospitalProfile(hospital_id=HOSPITAL_ID, business_name='Happy Paws Clinic'))

    nine = SlotDefinition(
        provider_id=PROVIDER_ID,
        weekday='Monday',
        position=0,
        display_time='9:00 AM',
        machine_time='09:00',
        is_default_selected=False,
    )
    nine_thirty = SlotDefinition(
        provider_id=PROVIDER_ID,
        weekday='Monday',
        position=1,
        display_time='9:30 AM',
        machine_time='09:30',
        is_default_selected=False,
    )
    booking_db.add_all([nine, nine_thirty])
    booking_db.commit()

    return {'db': booking_db, 'nine': nine, 'nine_thirty': nine_thirty}


@pytest.fixture
def routes_without_schema_check(monkeypatch: pytest.MonkeyPatch) -> None:
    for module in ('availability_routes', 'slot_routes', 'appointment_routes'):
        monkeypatch.setattr(f'vetbooking.routes.{module}.ensure_database_ready', lambda: None)
