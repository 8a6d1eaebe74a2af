"""Recurring weekly slot template definitions."""

from sqlalchemy import Boolean, Column, Index, Integer, String
from vetbooking.database import Base


class SlotDefinition(Base):
    """One bookable point in a provider's weekly schedule."""
    __tablename__ = "slot_definitions"
    __table_args__ = (
        Index("uq_slot_definitions_provider_day_time", "provider_id", "weekday", "display_time", unique=True),
        # Appointments reference slot ids; a removed slot must never hand its id to a new time.
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True)
    provider_id = Column(String(36), nullable=False, index=True)
    weekday = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    display_time = Column(String, nullable=False)  # "9:00 AM"
    machine_time = Column(String, nullable=False)  # "09:00"
    is_default_selected = Column(Boolean, nullable=False, default=False)
