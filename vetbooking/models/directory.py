"""Reference records owned by the practice profile system.

This service only reads them to resolve a provider's hospital.
"""

from sqlalchemy import Column, String
from vetbooking.database import Base


class ProviderAffiliation(Base):
    __tablename__ = "provider_affiliations"

    provider_id = Column(String(36), primary_key=True)
    business_id = Column(String(36), nullable=True)


class HospitalProfile(Base):
    __tablename__ = "hospital_profiles"

    hospital_id = Column(String(36), primary_key=True)
    business_name = Column(String, nullable=True)
