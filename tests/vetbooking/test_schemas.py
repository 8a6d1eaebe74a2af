from datetime import date

import pytest
from pydantic import ValidationError

from conftest import PROVIDER_ID
from vetbooking.core.errors import InputValidationError
from vetbooking.core.validation import (
    is_identity,
    parse_calendar_date,
    require_reference_id,
    to_display_time,
    weekday_name,
)
from vetbooking.schemas import CreateBookingRequest, SetBlackoutRequest, SlotEntryRequest, UpdateStatusRequest


def _payload(**overrides) -> dict:
    payload = {
        'provider_id': PROVIDER_ID,
        'appointment_date': '2025-09-01',
        'slot_id': 7,
        'companion_id': 'companion-1',
        'owner_id': 'owner-1',
    }
    payload.update(overrides)
    return payload


def test_create_booking_request_normalizes_fields() -> None:
    request = CreateBookingRequest(
        **_payload(
            provider_id=f' {PROVIDER_ID} ',
            appointment_date=' 2025-09-01 ',
            purpose='  Vaccination  ',
            department='   ',
            source=' WEB ',
        )
    )

    assert request.provider_id == PROVIDER_ID
    assert request.appointment_date == '2025-09-01'
    assert request.parsed_date == date(2025, 9, 1)
    assert request.purpose == 'Vaccination'
    assert request.department is None
    assert request.source == 'web'


@pytest.mark.parametrize(
    ('overrides', 'field', 'message'),
    [
        ({'appointment_date': '2025/09/01'}, 'appointment_date', 'YYYY-MM-DD'),
        ({'appointment_date': '2025-13-01'}, 'appointment_date', 'real calendar date'),
        ({'provider_id': 'vet-1'}, 'provider_id', 'Invalid provider_id format'),
        ({'slot_id': 0}, 'slot_id', 'Invalid or missing slot_id'),
        ({'owner_id': '   '}, 'owner_id', 'required'),
        ({'purpose': 'x' * 601}, 'purpose', '600 characters'),
    ],
)
def test_create_booking_request_rejects_bad_fields(overrides: dict, field: str, message: str) -> None:
    with pytest.raises(ValidationError) as exception_info:
        CreateBookingRequest(**_payload(**overrides))

    errors = exception_info.value.errors()
    assert [error['loc'][0] for error in errors] == [field]
    assert message in errors[0]['msg']


def test_update_status_request_rejects_malformed_actor() -> None:
    with pytest.raises(ValidationError):
        UpdateStatusRequest(status='cancelled', changed_by='front-desk')

    assert UpdateStatusRequest(status='cancelled').changed_by is None


def test_slot_entry_request_requires_24_hour_time() -> None:
    assert SlotEntryRequest(machine_time=' 17:45 ').machine_time == '17:45'

    with pytest.raises(ValidationError):
        SlotEntryRequest(machine_time='5:45 PM')


def test_set_blackout_request_drops_blanks_and_duplicates() -> None:
    request = SetBlackoutRequest(blocked_times=['9:00 AM', ' 9:00 AM ', '', '9:30 AM'])

    assert request.blocked_times == ['9:00 AM', '9:30 AM']


@pytest.mark.parametrize(
    ('machine_time', 'display_time'),
    [
        ('00:00', '12:00 AM'),
        ('09:05', '9:05 AM'),
        ('12:00', '12:00 PM'),
        ('23:59', '11:59 PM'),
    ],
)
def test_to_display_time(machine_time: str, display_time: str) -> None:
    assert to_display_time(machine_time) == display_time


def test_validation_helpers_report_codes() -> None:
    with pytest.raises(InputValidationError) as exception_info:
        parse_calendar_date('2024-02-30', 'appointment_date')
    assert exception_info.value.code == 'invalid-date'
    assert exception_info.value.fields == ['appointment_date']

    with pytest.raises(InputValidationError) as exception_info:
        require_reference_id(True, 'slot_id')
    assert exception_info.value.code == 'invalid-slot-id'

    assert parse_calendar_date('2024-02-29') == date(2024, 2, 29)
    assert weekday_name(date(2025, 9, 1)) == 'Monday'


def test_validation_patterns_reject_trailing_newline() -> None:
    assert is_identity(PROVIDER_ID)
    assert not is_identity(PROVIDER_ID + '\n')

    with pytest.raises(InputValidationError):
        parse_calendar_date('2025-09-01\n')

    with pytest.raises(InputValidationError):
        to_display_time('09:00\n')
