"""
Database Models (SQLAlchemy ORM)
Work log keyed by calendar date
"""

from sqlalchemy import Column, Date, DateTime, Integer, JSON, Numeric
from sqlalchemy.sql import func

from weathercraft.infrastructure.db.database import Base


class WorkLogEntryModel(Base):
    """Labor hours logged for one day"""
    __tablename__ = "work_log_entry"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    labor_hours = Column(Numeric(8, 2), nullable=False)
    categories = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
