from datetime import datetime

from pydantic import BaseModel

from wage_engine.models.wage_calculation import WageCalculation

from .slip import WageSlipView


class CalculateMonthlyRequest(BaseModel):
    """Range checks happen in the calculator so they answer 400, not 422."""

    year: int
    month: int


class WageCalculationOut(BaseModel):
    id: str
    organization_id: str
    worker_id: str
    year: int
    month: int
    total_hours: float
    hourly_rate: float
    gross_amount: int
    deductions: int
    net_amount: int
    status: str
    approved_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: WageCalculation) -> "WageCalculationOut":
        return cls(
            id=row.id,
            organization_id=row.organization_id,
            worker_id=row.worker_id,
            year=row.year,
            month=row.month,
            total_hours=float(row.total_hours),
            hourly_rate=float(row.hourly_rate),
            gross_amount=row.gross_amount,
            deductions=row.deductions,
            net_amount=row.net_amount,
            status=row.status,
            approved_by=row.approved_by,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class CalculateMonthlyResponse(BaseModel):
    count: int
    items: list[WageCalculationOut]


class TemplateOption(BaseModel):
    code: str
    label: str


class TemplatesResponse(BaseModel):
    current: TemplateOption
    available: list[TemplateOption]


class WageSlipOut(BaseModel):
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

    @classmethod
    def from_view(cls, view: WageSlipView) -> "WageSlipOut":
        return cls(**view.to_dict())
