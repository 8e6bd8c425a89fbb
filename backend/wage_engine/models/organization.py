from datetime import datetime

from sqlalchemy import Column, DateTime, String

from wage_engine.db.session import Base


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    @staticmethod
    def display_name_for(organization_id: str, organization: "Organization | None") -> str:
        if organization is not None and organization.name:
            return organization.name
        return f"Organization ({organization_id})"
