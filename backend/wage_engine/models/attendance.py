import uuid

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from wage_engine.db.session import Base

from .types import UTCDateTime


class AttendanceInterval(Base):
    """A clock-in/clock-out pair; ``clock_out`` stays null while the shift is open."""

    __tablename__ = "attendance_intervals"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    organization_id = Column(String(64), ForeignKey("organizations.id"), nullable=False, index=True)
    worker_id = Column(String(64), ForeignKey("workers.id"), nullable=False, index=True)
    clock_in = Column(UTCDateTime, nullable=False, index=True)
    clock_out = Column(UTCDateTime, nullable=True)

    worker = relationship("Worker")
