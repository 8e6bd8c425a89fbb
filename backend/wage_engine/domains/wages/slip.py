from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict

from sqlalchemy.orm import Session

from wage_engine.core.errors import Forbidden, NotFound, storage_errors
from wage_engine.core.identity import Caller
from wage_engine.models.organization import Organization
from wage_engine.models.wage_calculation import STATUS_APPROVED, STATUS_CALCULATED, WageCalculation
from wage_engine.models.worker import Worker

from .approval import ensure_same_organization, get_calculation

STATUS_LABELS = {
    STATUS_CALCULATED: "computed/unconfirmed",
    STATUS_APPROVED: "finalized",
}


@dataclass(frozen=True)
class WageSlipView:
    slip_id: str
    organization_id: str
    organization_name: str
    worker_id: str
    worker_name: str
    month: str
    closing_date: str
    total_hours: float
    hourly_rate: float
    gross_amount: int
    deductions: int
    net_amount: int
    status: str
    status_label: str
    remarks: str
    approver_id: str
    issued_at: str

    @property
    def compact_month(self) -> str:
        return self.month.replace("-", "")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def closing_date(year: int, month: int) -> date:
    """Last calendar day of the month: day zero of the following month."""
    if month == 12:
        first_of_next = date(year + 1, 1, 1)
    else:
        first_of_next = date(year, month + 1, 1)
    return first_of_next - timedelta(days=1)


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def remarks_for(status: str) -> str:
    if status == STATUS_APPROVED:
        return "approved by administrator"
    if status == STATUS_CALCULATED:
        return "computed, not yet finalized"
    return "under review"


def _number(value: Any) -> float | int:
    as_float = float(value)
    return int(as_float) if as_float.is_integer() else as_float


def build_slip_view(
    calculation: WageCalculation,
    worker_name: str,
    organization_name: str,
    issued_at: datetime | None = None,
) -> WageSlipView:
    issued = issued_at or datetime.now(timezone.utc)
    return WageSlipView(
        slip_id=calculation.id,
        organization_id=calculation.organization_id,
        organization_name=organization_name,
        worker_id=calculation.worker_id,
        worker_name=worker_name,
        month=f"{calculation.year}-{calculation.month:02d}",
        closing_date=closing_date(calculation.year, calculation.month).isoformat(),
        total_hours=_number(calculation.total_hours),
        hourly_rate=_number(calculation.hourly_rate),
        gross_amount=calculation.gross_amount,
        deductions=calculation.deductions,
        net_amount=calculation.net_amount,
        status=calculation.status,
        status_label=status_label(calculation.status),
        remarks=remarks_for(calculation.status),
        approver_id=calculation.approved_by or "",
        issued_at=issued.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )


def ensure_can_view(calculation: WageCalculation, caller: Caller) -> None:
    ensure_same_organization(calculation, caller)
    if caller.is_worker and calculation.worker_id != caller.worker_id:
        raise Forbidden("forbidden")


def load_slip_view(session: Session, calculation_id: str, caller: Caller) -> WageSlipView:
    calculation = get_calculation(session, calculation_id)
    ensure_can_view(calculation, caller)

    with storage_errors():
        worker = session.get(Worker, calculation.worker_id)
        organization = session.get(Organization, calculation.organization_id)
    if worker is None:
        raise NotFound("worker_not_found")

    return build_slip_view(
        calculation,
        worker_name=worker.full_name,
        organization_name=Organization.display_name_for(calculation.organization_id, organization),
    )
