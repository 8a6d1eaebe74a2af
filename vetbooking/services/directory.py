"""Readers for data owned outside the booking core.

Slot templates and blackouts are maintained by provider configuration;
affiliations and hospital names come from the practice profile system.
"""

from datetime import date

from sqlalchemy.orm import Session

from vetbooking.models.blackout import BlackoutEntry
from vetbooking.models.directory import HospitalProfile, ProviderAffiliation
from vetbooking.models.slot_template import SlotDefinition


def get_slot_template(db: Session, provider_id: str, weekday: str) -> list[SlotDefinition]:
    return db.query(SlotDefinition).filter(
        SlotDefinition.provider_id == provider_id,
        SlotDefinition.weekday == weekday,
    ).order_by(SlotDefinition.position.asc(), SlotDefinition.id.asc()).all()


def get_slot_definition(db: Session, provider_id: str, slot_id: int) -> SlotDefinition | None:
    return db.query(SlotDefinition).filter(
        SlotDefinition.id == slot_id,
        SlotDefinition.provider_id == provider_id,
    ).first()


def get_blackout(db: Session, provider_id: str, blackout_date: date) -> BlackoutEntry | None:
    return db.query(BlackoutEntry).filter(
        BlackoutEntry.provider_id == provider_id,
        BlackoutEntry.blackout_date == blackout_date,
    ).first()


def resolve_business_for_provider(db: Session, provider_id: str) -> str | None:
    affiliation = db.query(ProviderAffiliation).filter(ProviderAffiliation.provider_id == provider_id).first()
    if affiliation is None:
        return None
    return affiliation.business_id or None


def resolve_hospital_display_name(db: Session, hospital_id: str) -> HospitalProfile | None:
    return db.query(HospitalProfile).filter(HospitalProfile.hospital_id == hospital_id).first()
