from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from wage_engine.core.audit import AuditSink
from wage_engine.core.config import settings
from wage_engine.core.errors import InvalidInput, storage_errors
from wage_engine.core.logging import get_logger
from wage_engine.core.observability import calculations_created, tracer
from wage_engine.models.attendance import AttendanceInterval
from wage_engine.models.wage_calculation import STATUS_CALCULATED, WageCalculation
from wage_engine.models.wage_rate import RateSchedule

from .aggregation import aggregate_monthly_hours, month_bounds
from .rates import resolve_hourly_rate

logger = get_logger(__name__)

MIN_YEAR = 2020
MAX_YEAR = 2100
HOURS_QUANTUM = Decimal("0.01")
YEN_QUANTUM = Decimal("1")


@dataclass(frozen=True)
class WageFigures:
    total_hours: Decimal
    hourly_rate: Decimal
    gross_amount: int
    deductions: int
    net_amount: int


@dataclass
class CalculationRun:
    year: int
    month: int
    items: List[WageCalculation] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)


def validate_period(year: int, month: int) -> None:
    if not isinstance(year, int) or not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidInput(f"year must be between {MIN_YEAR} and {MAX_YEAR}")
    if not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidInput("month must be between 1 and 12")


def compute_figures(hours: float, rate: Decimal) -> WageFigures:
    """Gross is rounded half-up to whole yen from the unrounded hours."""
    exact_hours = Decimal(str(hours))
    rate = Decimal(rate)
    gross = int((exact_hours * rate).quantize(YEN_QUANTUM, rounding=ROUND_HALF_UP))
    deductions = 0
    return WageFigures(
        total_hours=exact_hours.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP),
        hourly_rate=rate,
        gross_amount=gross,
        deductions=deductions,
        net_amount=gross - deductions,
    )


class WageCalculator:
    def __init__(self, session: Session, audit: AuditSink, fallback_rate: Decimal | None = None):
        self.session = session
        self.audit = audit
        self.fallback_rate = Decimal(
            fallback_rate if fallback_rate is not None else settings.fallback_hourly_rate
        )

    def _intervals(self, organization_id: str, start: datetime, end: datetime) -> List[AttendanceInterval]:
        return (
            self.session.query(AttendanceInterval)
            .filter(
                AttendanceInterval.organization_id == organization_id,
                AttendanceInterval.clock_in >= start,
                AttendanceInterval.clock_in < end,
            )
            .order_by(AttendanceInterval.worker_id.asc())
            .all()
        )

    def _rate_entries(
        self, organization_id: str, worker_id: str, start: datetime, end: datetime
    ) -> List[RateSchedule]:
        return (
            self.session.query(RateSchedule)
            .filter(
                RateSchedule.organization_id == organization_id,
                RateSchedule.worker_id == worker_id,
                RateSchedule.effective_from <= end.date(),
                or_(RateSchedule.effective_to.is_(None), RateSchedule.effective_to > start.date()),
            )
            .all()
        )

    def resolve_rate(self, organization_id: str, worker_id: str, start: datetime, end: datetime) -> Decimal:
        entries = self._rate_entries(organization_id, worker_id, start, end)
        return resolve_hourly_rate(entries, start, end, self.fallback_rate)

    def monthly_hours(self, organization_id: str, year: int, month: int) -> Dict[str, float]:
        start, end = month_bounds(year, month)
        return aggregate_monthly_hours(self._intervals(organization_id, start, end))

    def calculate_monthly(self, organization_id: str, year: int, month: int, actor_id: str) -> CalculationRun:
        """Create one ``calculated`` row per worker with attendance in the month.

        The run, including its audit record, commits as a single unit. Earlier
        rows for the same period are left in place.
        """
        validate_period(year, month)
        start, end = month_bounds(year, month)
        run = CalculationRun(year=year, month=month)

        with tracer.start_as_current_span("wages.calculate_monthly") as span:
            span.set_attribute("wages.organization_id", organization_id)
            span.set_attribute("wages.period", f"{year}-{month:02d}")
            with storage_errors():
                try:
                    hours_by_worker = aggregate_monthly_hours(self._intervals(organization_id, start, end))
                    for worker_id, hours in hours_by_worker.items():
                        rate = self.resolve_rate(organization_id, worker_id, start, end)
                        figures = compute_figures(hours, rate)
                        calculation = WageCalculation(
                            organization_id=organization_id,
                            worker_id=worker_id,
                            year=year,
                            month=month,
                            total_hours=figures.total_hours,
                            hourly_rate=figures.hourly_rate,
                            gross_amount=figures.gross_amount,
                            deductions=figures.deductions,
                            net_amount=figures.net_amount,
                            status=STATUS_CALCULATED,
                        )
                        self.session.add(calculation)
                        run.items.append(calculation)

                    self.session.flush()
                    self.audit.record(
                        actor_id=actor_id,
                        organization_id=organization_id,
                        action="CALCULATE",
                        entity="wage_calculations",
                        entity_id=f"{year}-{month}",
                        detail={"count": run.count},
                    )
                    self.session.commit()
                except Exception:
                    self.session.rollback()
                    raise

            span.set_attribute("wages.count", run.count)

        calculations_created.add(run.count, {"organization_id": organization_id})
        logger.info(
            "wage_calculation_completed",
            organization_id=organization_id,
            year=year,
            month=month,
            count=run.count,
        )
        return run
