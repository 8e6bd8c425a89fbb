from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from wage_engine.core.identity import Caller, Role
from wage_engine.models import AttendanceInterval, RateSchedule, WageCalculation

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def add_interval(
    session: Session,
    worker_id: str,
    clock_in: datetime,
    clock_out: datetime | None,
    organization_id: str = "org-1",
) -> AttendanceInterval:
    interval = AttendanceInterval(
        organization_id=organization_id,
        worker_id=worker_id,
        clock_in=clock_in,
        clock_out=clock_out,
    )
    session.add(interval)
    session.commit()
    return interval


def add_rate(
    session: Session,
    worker_id: str,
    hourly_rate: str,
    effective_from: date,
    effective_to: date | None = None,
    organization_id: str = "org-1",
) -> RateSchedule:
    rate = RateSchedule(
        organization_id=organization_id,
        worker_id=worker_id,
        hourly_rate=Decimal(hourly_rate),
        effective_from=effective_from,
        effective_to=effective_to,
    )
    session.add(rate)
    session.commit()
    return rate


def add_calculation(
    session: Session,
    worker_id: str = "w-1",
    organization_id: str = "org-1",
    status: str = "calculated",
    year: int = 2026,
    month: int = 2,
) -> WageCalculation:
    calculation = WageCalculation(
        organization_id=organization_id,
        worker_id=worker_id,
        year=year,
        month=month,
        total_hours=Decimal("8.00"),
        hourly_rate=Decimal("1200"),
        gross_amount=9600,
        deductions=0,
        net_amount=9600,
        status=status,
    )
    session.add(calculation)
    session.commit()
    return calculation


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def caller(
    role: Role = Role.ADMIN,
    organization_id: str = "org-1",
    caller_id: str = "staff-admin",
    worker_id: str | None = None,
) -> Caller:
    return Caller(id=caller_id, role=role, organization_id=organization_id, worker_id=worker_id)


def identity_headers(
    role: str = "admin",
    organization_id: str = "org-1",
    caller_id: str = "staff-admin",
    worker_id: str | None = None,
) -> dict[str, str]:
    headers = {
        "X-Caller-Id": caller_id,
        "X-Caller-Role": role,
        "X-Organization-Id": organization_id,
    }
    if worker_id:
        headers["X-Worker-Id"] = worker_id
    return headers
