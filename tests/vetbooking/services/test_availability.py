from datetime import date

import pytest

from conftest import OTHER_PROVIDER_ID, PROVIDER_ID
from vetbooking.core.errors import InputValidationError
from vetbooking.models.blackout import BlackoutEntry
from vetbooking.models.slot_template import SlotDefinition
from vetbooking.schemas import CreateBookingRequest
from vetbooking.services.availability import compute_availability
from vetbooking.services.booking import book_appointment


def _book(db, slot_id: int, appointment_date: str = '2025-09-01'):
    return book_appointment(
        db,
        CreateBookingRequest(
            provider_id=PROVIDER_ID,
            appointment_date=appointment_date,
            slot_id=slot_id,
            companion_id='companion-1',
            owner_id='owner-1',
        ),
    )


def test_open_day_returns_every_template_slot_unbooked(clinic) -> None:
    views = compute_availability(clinic['db'], PROVIDER_ID, 'Monday', '2025-09-01')

    assert [(view.display_time, view.is_booked) for view in views] == [
        ('9:00 AM', False),
        ('9:30 AM', False),
    ]


def test_booked_slot_is_flagged_and_other_slot_unchanged(clinic) -> None:
    db = clinic['db']
    _book(db, clinic['nine'].id)

    views = compute_availability(db, PROVIDER_ID, 'Monday', '2025-09-01')

    assert [(view.display_time, view.is_booked, view.selected) for view in views] == [
        ('9:00 AM', True, True),
        ('9:30 AM', False, False),
    ]


def test_booking_on_another_date_does_not_mark_slot(clinic) -> None:
    db = clinic['db']
    _book(db, clinic['nine'].id, appointment_date='2025-09-08')

    views = compute_availability(db, PROVIDER_ID, 'Monday', '2025-09-01')

    assert not any(view.is_booked for view in views)


def test_blacked_out_time_is_omitted(clinic) -> None:
    db = clinic['db']
    db.add(
        BlackoutEntry(
            provider_id=PROVIDER_ID,
            blackout_date=date(2025, 9, 1),
            weekday='Monday',
            blocked_times=['9:00 AM'],
        )
    )
    db.commit()

    views = compute_availability(db, PROVIDER_ID, 'Monday', '2025-09-01')

    assert [view.display_time for view in views] == ['9:30 AM']

    next_week = compute_availability(db, PROVIDER_ID, 'Monday', '2025-09-08')
    assert [view.display_time for view in next_week] == ['9:00 AM', '9:30 AM']


def test_blackout_wins_over_an_existing_booking(clinic) -> None:
    db = clinic['db']
    _book(db, clinic['nine'].id)
    db.add(
        BlackoutEntry(
            provider_id=PROVIDER_ID,
            blackout_date=date(2025, 9, 1),
            weekday='Monday',
            blocked_times=['9:00 AM'],
        )
    )
    db.commit()

    views = compute_availability(db, PROVIDER_ID, 'Monday', '2025-09-01')

    assert [view.display_time for view in views] == ['9:30 AM']


def test_default_selected_flag_is_kept_for_open_slots(clinic) -> None:
    db = clinic['db']
    clinic['nine_thirty'].is_default_selected = True
    db.commit()

    views = compute_availability(db, PROVIDER_ID, 'Monday', '2025-09-01')

    assert [view.selected for view in views] == [False, True]
    assert [view.is_booked for view in views] == [False, False]


def test_template_order_is_preserved(booking_db) -> None:
    booking_db.add_all(
        [
            SlotDefinition(provider_id=PROVIDER_ID, weekday='Tuesday', position=0, display_time='2:00 PM', machine_time='14:00'),
            SlotDefinition(provider_id=PROVIDER_ID, weekday='Tuesday', position=1, display_time='8:00 AM', machine_time='08:00'),
            SlotDefinition(provider_id=PROVIDER_ID, weekday='Tuesday', position=2, display_time='11:15 AM', machine_time='11:15'),
        ]
    )
    booking_db.commit()

    views = compute_availability(booking_db, PROVIDER_ID, 'Tuesday', '2025-09-02')

    assert [view.display_time for view in views] == ['2:00 PM', '8:00 AM', '11:15 AM']


def test_no_template_returns_empty_list(clinic) -> None:
    assert compute_availability(clinic['db'], OTHER_PROVIDER_ID, 'Monday', '2025-09-01') == []
    assert compute_availability(clinic['db'], PROVIDER_ID, 'Sunday', '2025-09-07') == []


def test_repeated_reads_are_identical(clinic) -> None:
    db = clinic['db']
    _book(db, clinic['nine_thirty'].id)

    first = compute_availability(db, PROVIDER_ID, 'Monday', '2025-09-01')
    second = compute_availability(db, PROVIDER_ID, 'Monday', '2025-09-01')

    assert first == second


def test_missing_parameters_are_all_named(clinic) -> None:
    with pytest.raises(InputValidationError) as exception_info:
        compute_availability(clinic['db'], None, '', '2025-09-01')

    assert exception_info.value.fields == ['provider_id', 'weekday']
    assert exception_info.value.code == 'missing-parameter'


@pytest.mark.parametrize(
    ('provider_id', 'weekday', 'date_value', 'fields'),
    [
        ('not-a-uuid', 'Monday', '2025-09-01', ['provider_id']),
        (PROVIDER_ID, 'monday', '2025-09-01', ['weekday']),
        (PROVIDER_ID, 'Monday', '2025-02-30', ['date']),
        (PROVIDER_ID, 'Monday', '01-09-2025', ['date']),
        ('x', 'Funday', 'tomorrow', ['provider_id', 'weekday', 'date']),
    ],
)
def test_invalid_parameters_are_rejected(clinic, provider_id, weekday, date_value, fields) -> None:
    with pytest.raises(InputValidationError) as exception_info:
        compute_availability(clinic['db'], provider_id, weekday, date_value)

    assert exception_info.value.fields == fields
