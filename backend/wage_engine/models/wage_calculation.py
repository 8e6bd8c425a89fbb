import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from wage_engine.db.session import Base

STATUS_CALCULATED = "calculated"
STATUS_APPROVED = "approved"


class WageCalculation(Base):
    __tablename__ = "wage_calculations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    organization_id = Column(String(64), ForeignKey("organizations.id"), nullable=False, index=True)
    worker_id = Column(String(64), ForeignKey("workers.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    total_hours = Column(Numeric(10, 2), nullable=False)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    gross_amount = Column(Integer, nullable=False)
    deductions = Column(Integer, nullable=False, default=0)
    net_amount = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=STATUS_CALCULATED)  # calculated|approved
    approved_by = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    worker = relationship("Worker")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "organization_id": self.organization_id,
            "worker_id": self.worker_id,
            "year": self.year,
            "month": self.month,
            "total_hours": float(self.total_hours),
            "hourly_rate": float(self.hourly_rate),
            "gross_amount": self.gross_amount,
            "deductions": self.deductions,
            "net_amount": self.net_amount,
            "status": self.status,
            "approved_by": self.approved_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
