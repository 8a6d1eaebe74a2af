from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from vetbooking.core.validation import (
    parse_calendar_date,
    require_identity,
    require_reference_id,
    to_display_time,
)

MAX_FREE_TEXT_LENGTH = 600


def _normalize_optional_text(value: str | None) -> str | None:
    if value is None:
        return None

    normalized = value.strip()
    if not normalized:
        return None

    if len(normalized) > MAX_FREE_TEXT_LENGTH:
        raise ValueError(f'Must be {MAX_FREE_TEXT_LENGTH} characters or fewer.')

    return normalized


class CreateBookingRequest(BaseModel):
    provider_id: str
    appointment_date: str
    slot_id: int
    companion_id: str
    owner_id: str
    companion_name: str | None = None
    owner_name: str | None = None
    purpose: str | None = None
    appointment_type: str | None = None
    department: str | None = None
    source: str = 'web'

    @field_validator('provider_id')
    @classmethod
    def validate_provider_id(cls, value: str) -> str:
        return require_identity(value.strip(), 'provider_id')

    @field_validator('appointment_date')
    @classmethod
    def validate_appointment_date(cls, value: str) -> str:
        normalized = value.strip()
        parse_calendar_date(normalized, 'appointment_date')
        return normalized

    @field_validator('slot_id')
    @classmethod
    def validate_slot_id(cls, value: int) -> int:
        return require_reference_id(value, 'slot_id')

    @field_validator('companion_id', 'owner_id')
    @classmethod
    def validate_party_id(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Companion and owner ids are required.')
        return normalized

    @field_validator('companion_name', 'owner_name', 'purpose', 'appointment_type', 'department')
    @classmethod
    def validate_free_text(cls, value: str | None) -> str | None:
        return _normalize_optional_text(value)

    @field_validator('source')
    @classmethod
    def validate_source(cls, value: str) -> str:
        normalized = value.strip().lower()
        return normalized or 'web'

    @property
    def parsed_date(self) -> date:
        return parse_calendar_date(self.appointment_date, 'appointment_date')


class AppointmentResponse(BaseModel):
    id: int
    hospital_id: str
    provider_id: str
    appointment_date: date
    weekday: str | None = None
    slot_id: int
    appointment_time: str | None = None
    appointment_time_24: str | None = None
    token_number: str
    companion_id: str
    companion_name: str | None = None
    owner_id: str
    owner_name: str | None = None
    purpose: str | None = None
    appointment_type: str | None = None
    department: str | None = None
    source: str
    status: str
    cancelled_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class BookingResponse(BaseModel):
    appointment: AppointmentResponse
    token_number: str


class UpdateStatusRequest(BaseModel):
    status: str
    changed_by: str | None = None

    @field_validator('changed_by')
    @classmethod
    def validate_changed_by(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return require_identity(value.strip(), 'changed_by', code='invalid-user-id')


class SlotViewResponse(BaseModel):
    slot_id: int
    display_time: str
    machine_time: str
    is_booked: bool
    selected: bool


class SlotEntryRequest(BaseModel):
    machine_time: str
    selected: bool = False

    @field_validator('machine_time')
    @classmethod
    def validate_machine_time(cls, value: str) -> str:
        normalized = value.strip()
        to_display_time(normalized)
        return normalized


class ReplaceSlotTemplateRequest(BaseModel):
    slots: list[SlotEntryRequest] = Field(default_factory=list)


class SlotDefinitionResponse(BaseModel):
    id: int
    provider_id: str
    weekday: str
    display_time: str
    machine_time: str
    is_default_selected: bool
    is_booked: bool | None = None

    class Config:
        from_attributes = True


class SetBlackoutRequest(BaseModel):
    blocked_times: list[str] = Field(default_factory=list)

    @field_validator('blocked_times')
    @classmethod
    def validate_blocked_times(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for item in value:
            stripped = item.strip()
            if stripped and stripped not in normalized:
                normalized.append(stripped)
        return normalized


class BlackoutResponse(BaseModel):
    provider_id: str
    blackout_date: date
    weekday: str
    blocked_times: list[str]

    class Config:
        from_attributes = True
