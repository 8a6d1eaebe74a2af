"""Daily token counter definitions."""

from sqlalchemy import Column, Date, Index, Integer, String
from vetbooking.database import Base


class DailyTokenCounter(Base):
    """Per-hospital, per-day ticket sequence."""
    __tablename__ = "daily_token_counters"
    __table_args__ = (
        Index("uq_daily_token_counters_hospital_date", "hospital_id", "token_date", unique=True),
    )

    id = Column(Integer, primary_key=True)
    hospital_id = Column(String(36), nullable=False)
    token_date = Column(Date, nullable=False)
    count = Column(Integer, nullable=False, default=0)
