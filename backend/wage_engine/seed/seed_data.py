from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from wage_engine.models import AttendanceInterval, Organization, RateSchedule, Worker


def _shifts(worker_id: str, organization_id: str, year: int, month: int, days: int, hours: int):
    for day in range(1, days + 1):
        clock_in = datetime(year, month, day, 9, 0, tzinfo=timezone.utc)
        yield AttendanceInterval(
            organization_id=organization_id,
            worker_id=worker_id,
            clock_in=clock_in,
            clock_out=clock_in + timedelta(hours=hours),
        )


def seed(session: Session, year: int = 2026, month: int = 2) -> None:
    main_office = Organization(id="org-1", name="Type A Office - Main")
    branch = Organization(id="org-2", name="Type A Office - Second Site")
    session.add_all([main_office, branch])
    session.flush()

    hanako = Worker(id="worker-1", organization_id=main_office.id, full_name="Hanako Sato")
    taro = Worker(id="worker-2", organization_id=main_office.id, full_name="Taro Suzuki")
    jiro = Worker(id="worker-3", organization_id=branch.id, full_name="Jiro Tanaka")
    session.add_all([hanako, taro, jiro])
    session.flush()

    session.add_all(
        [
            RateSchedule(
                organization_id=main_office.id,
                worker_id=hanako.id,
                hourly_rate=Decimal("1000"),
                effective_from=date(2025, 4, 1),
                effective_to=date(2026, 1, 1),
            ),
            RateSchedule(
                organization_id=main_office.id,
                worker_id=hanako.id,
                hourly_rate=Decimal("1200"),
                effective_from=date(2026, 1, 1),
            ),
            RateSchedule(
                organization_id=branch.id,
                worker_id=jiro.id,
                hourly_rate=Decimal("1100"),
                effective_from=date(2025, 10, 1),
            ),
        ]
    )

    session.add_all(list(_shifts(hanako.id, main_office.id, year, month, days=10, hours=6)))
    session.add_all(list(_shifts(taro.id, main_office.id, year, month, days=5, hours=4)))
    session.add_all(list(_shifts(jiro.id, branch.id, year, month, days=8, hours=5)))
    session.add(
        AttendanceInterval(
            organization_id=main_office.id,
            worker_id=taro.id,
            clock_in=datetime(year, month, 20, 9, 0, tzinfo=timezone.utc),
            clock_out=None,
        )
    )
    session.commit()
