import uuid
from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from wage_engine.db.session import Base


class RateSchedule(Base):
    __tablename__ = "rate_schedules"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    organization_id = Column(String(64), ForeignKey("organizations.id"), nullable=False, index=True)
    worker_id = Column(String(64), ForeignKey("workers.id"), nullable=False, index=True)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    effective_from = Column(Date, nullable=False)
    effective_to = Column(Date, nullable=True)  # exclusive; null means open-ended
    created_at = Column(DateTime, default=datetime.utcnow)

    worker = relationship("Worker")
