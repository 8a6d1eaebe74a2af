"""Appointment model definitions."""

from sqlalchemy import Column, Date, DateTime, Index, Integer, String, func
from vetbooking.database import Base


class Appointment(Base):
    """A booked appointment; one per provider, date and slot."""
    __tablename__ = "appointments"
    __table_args__ = (
        Index("uq_appointments_provider_date_slot", "provider_id", "appointment_date", "slot_id", unique=True),
        Index("idx_appointments_hospital_date", "hospital_id", "appointment_date"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True)
    hospital_id = Column(String(36), nullable=False)
    provider_id = Column(String(36), nullable=False)
    appointment_date = Column(Date, nullable=False)
    weekday = Column(String)
    slot_id = Column(Integer, nullable=False)
    appointment_time = Column(String)
    appointment_time_24 = Column(String)
    token_number = Column(String, nullable=False)
    companion_id = Column(String, nullable=False)
    companion_name = Column(String)
    owner_id = Column(String, nullable=False)
    owner_name = Column(String)
    purpose = Column(String)
    appointment_type = Column(String)
    department = Column(String)
    source = Column(String, nullable=False, default="web")
    status = Column(String, nullable=False, default="booked")
    cancelled_by = Column(String(36))
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
