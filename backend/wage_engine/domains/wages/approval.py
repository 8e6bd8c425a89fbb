from __future__ import annotations

from sqlalchemy.orm import Session

from wage_engine.core.audit import AuditSink
from wage_engine.core.errors import Forbidden, NotFound, storage_errors
from wage_engine.core.identity import Caller
from wage_engine.core.logging import get_logger
from wage_engine.models.wage_calculation import STATUS_APPROVED, WageCalculation

logger = get_logger(__name__)


def get_calculation(session: Session, calculation_id: str) -> WageCalculation:
    with storage_errors():
        calculation = session.get(WageCalculation, calculation_id)
    if calculation is None:
        raise NotFound("not_found")
    return calculation


def ensure_same_organization(calculation: WageCalculation, caller: Caller) -> None:
    if calculation.organization_id != caller.organization_id:
        raise Forbidden("organization_forbidden")


def approve_calculation(
    session: Session, calculation_id: str, caller: Caller, audit: AuditSink
) -> WageCalculation:
    """Move a calculation to ``approved``. There is no way back to ``calculated``."""
    calculation = get_calculation(session, calculation_id)
    ensure_same_organization(calculation, caller)

    with storage_errors():
        try:
            calculation.status = STATUS_APPROVED
            calculation.approved_by = caller.id
            session.flush()
            session.refresh(calculation)
            audit.record(
                actor_id=caller.id,
                organization_id=caller.organization_id,
                action="APPROVE",
                entity="wage_calculations",
                entity_id=calculation.id,
                detail=calculation.to_dict(),
            )
            session.commit()
        except Exception:
            session.rollback()
            raise
        session.refresh(calculation)

    logger.info("wage_calculation_approved", calculation_id=calculation.id, approved_by=caller.id)
    return calculation
