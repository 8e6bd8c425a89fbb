from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from wage_engine.core.audit import AuditSink, DatabaseAuditSink
from wage_engine.core.identity import Caller, Role, get_caller, require_roles
from wage_engine.core.logging import get_logger
from wage_engine.core.observability import slips_rendered, tracer
from wage_engine.db.session import get_session

from .approval import approve_calculation
from .calculator import WageCalculator
from .documents import RenderedDocument, render_csv, render_pdf
from .schemas import (
    CalculateMonthlyRequest,
    CalculateMonthlyResponse,
    TemplateOption,
    TemplatesResponse,
    WageCalculationOut,
    WageSlipOut,
)
from .slip import load_slip_view
from .templates import MunicipalityTemplate, TemplateRegistry, list_template_options, resolve_template

router = APIRouter(prefix="/wages", tags=["wages"])
logger = get_logger(__name__)

managers = require_roles(Role.ADMIN, Role.MANAGER)
staff_and_managers = require_roles(Role.ADMIN, Role.MANAGER, Role.STAFF)


def get_template_registry(request: Request) -> TemplateRegistry:
    return request.app.state.templates


def get_active_template(request: Request) -> MunicipalityTemplate:
    return resolve_template(request.app.state.templates, request.app.state.template_code)


def get_audit_sink(db: Session = Depends(get_session)) -> AuditSink:
    return DatabaseAuditSink(db)


def _attachment(document: RenderedDocument) -> Response:
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )


@router.get("/templates", response_model=TemplatesResponse)
def list_templates(
    _: Caller = Depends(staff_and_managers),
    registry: TemplateRegistry = Depends(get_template_registry),
    current: MunicipalityTemplate = Depends(get_active_template),
) -> TemplatesResponse:
    return TemplatesResponse(
        current=TemplateOption(**current.option()),
        available=[TemplateOption(**option) for option in list_template_options(registry)],
    )


@router.post("/calculate-monthly", response_model=CalculateMonthlyResponse)
def calculate_monthly(
    payload: CalculateMonthlyRequest,
    caller: Caller = Depends(managers),
    db: Session = Depends(get_session),
    audit: AuditSink = Depends(get_audit_sink),
) -> CalculateMonthlyResponse:
    run = WageCalculator(db, audit).calculate_monthly(
        caller.organization_id, payload.year, payload.month, actor_id=caller.id
    )
    return CalculateMonthlyResponse(
        count=run.count,
        items=[WageCalculationOut.from_row(item) for item in run.items],
    )


@router.post("/{calculation_id}/approve", response_model=WageCalculationOut)
def approve(
    calculation_id: str,
    caller: Caller = Depends(managers),
    db: Session = Depends(get_session),
    audit: AuditSink = Depends(get_audit_sink),
) -> WageCalculationOut:
    calculation = approve_calculation(db, calculation_id, caller, audit)
    return WageCalculationOut.from_row(calculation)


@router.get("/{calculation_id}/slip", response_model=WageSlipOut)
def slip(
    calculation_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_session),
) -> WageSlipOut:
    view = load_slip_view(db, calculation_id, caller)
    slips_rendered.add(1, {"format": "json"})
    return WageSlipOut.from_view(view)


@router.get("/{calculation_id}/slip.csv")
def slip_csv(
    calculation_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_session),
    template: MunicipalityTemplate = Depends(get_active_template),
) -> Response:
    view = load_slip_view(db, calculation_id, caller)
    with tracer.start_as_current_span("wages.render_slip", attributes={"wages.format": "csv"}):
        document = render_csv(view, template)
    slips_rendered.add(1, {"format": "csv"})
    logger.info("wage_slip_rendered", calculation_id=calculation_id, format="csv", template=template.code)
    return _attachment(document)


@router.get("/{calculation_id}/slip.pdf")
def slip_pdf(
    calculation_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_session),
    template: MunicipalityTemplate = Depends(get_active_template),
) -> Response:
    view = load_slip_view(db, calculation_id, caller)
    with tracer.start_as_current_span("wages.render_slip", attributes={"wages.format": "pdf"}):
        document = render_pdf(view, template)
    slips_rendered.add(1, {"format": "pdf"})
    logger.info("wage_slip_rendered", calculation_id=calculation_id, format="pdf", template=template.code)
    return _attachment(document)
