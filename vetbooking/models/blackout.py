"""Per-date blackout entry definitions."""

from sqlalchemy import JSON, Column, Date, Index, Integer, String
from vetbooking.database import Base


class BlackoutEntry(Base):
    """Display times a provider has blocked on one calendar date."""
    __tablename__ = "blackout_entries"
    __table_args__ = (
        Index("uq_blackout_entries_provider_date", "provider_id", "blackout_date", unique=True),
    )

    id = Column(Integer, primary_key=True)
    provider_id = Column(String(36), nullable=False)
    blackout_date = Column(Date, nullable=False)
    weekday = Column(String, nullable=False)
    blocked_times = Column(JSON, nullable=False, default=list)
