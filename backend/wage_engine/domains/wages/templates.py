from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, List, Mapping, Tuple

from .slip import WageSlipView

DEFAULT_TEMPLATE_CODE = "fukuoka"
RULE = "-" * 42

BASE_CSV_HEADERS: Tuple[str, ...] = (
    "Slip ID",
    "Municipality Format",
    "Organization",
    "Worker ID",
    "Worker Name",
    "Target Month",
    "Closing Date",
    "Total Hours",
    "Hourly Rate",
    "Gross Amount",
    "Deductions",
    "Net Amount",
    "Status",
    "Remarks",
    "Approver ID",
    "Issued At",
)


@dataclass(frozen=True)
class MunicipalityTemplate:
    code: str
    label: str
    csv_headers: Tuple[str, ...]
    csv_row: Callable[[WageSlipView], List[str]]
    pdf_lines: Callable[[WageSlipView], List[str]]

    def option(self) -> dict[str, str]:
        return {"code": self.code, "label": self.label}


TemplateRegistry = Mapping[str, MunicipalityTemplate]


def format_yen(value: float | int) -> str:
    if float(value).is_integer():
        return f"JPY {int(value):,}"
    return f"JPY {value:,}"


def format_hours(value: float | int) -> str:
    return f"{float(value):.2f}".rstrip("0").rstrip(".")


def _plain(value: float | int) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _create_template(code: str, label: str, prefecture: str) -> MunicipalityTemplate:
    def csv_row(view: WageSlipView) -> List[str]:
        return [
            view.slip_id,
            prefecture,
            view.organization_name,
            view.worker_id,
            view.worker_name,
            view.month,
            view.closing_date,
            _plain(view.total_hours),
            _plain(view.hourly_rate),
            str(view.gross_amount),
            str(view.deductions),
            str(view.net_amount),
            view.status_label,
            view.remarks,
            view.approver_id,
            view.issued_at,
        ]

    def pdf_lines(view: WageSlipView) -> List[str]:
        return [
            "WAGE SLIP STATEMENT",
            f"Municipality Format: {prefecture}",
            RULE,
            f"Issued At: {view.issued_at}",
            f"Organization: {view.organization_name} ({view.organization_id})",
            f"Slip ID: {view.slip_id}",
            f"Worker: {view.worker_name} ({view.worker_id})",
            f"Target Month: {view.month}",
            f"Closing Date: {view.closing_date}",
            RULE,
            "PAYMENT BREAKDOWN",
            f"Total Hours    : {format_hours(view.total_hours)} h",
            f"Hourly Rate    : {format_yen(view.hourly_rate)}",
            f"Gross Amount   : {format_yen(view.gross_amount)}",
            f"Deductions     : {format_yen(view.deductions)}",
            f"Net Amount     : {format_yen(view.net_amount)}",
            RULE,
            f"Status         : {view.status_label}",
            f"Remarks        : {view.remarks}",
            f"Approver ID    : {view.approver_id or '-'}",
            "Approval Stamp : [                           ]",
            "Checked By     : [                           ]",
        ]

    return MunicipalityTemplate(
        code=code,
        label=label,
        csv_headers=BASE_CSV_HEADERS,
        csv_row=csv_row,
        pdf_lines=pdf_lines,
    )


def build_template_registry() -> TemplateRegistry:
    """Built once at start-up; the returned mapping is read-only."""
    templates = [
        _create_template("fukuoka", "Fukuoka Prefecture format", "Fukuoka"),
        _create_template("kumamoto", "Kumamoto Prefecture format", "Kumamoto"),
        _create_template("saga", "Saga Prefecture format", "Saga"),
    ]
    return MappingProxyType({template.code: template for template in templates})


def resolve_template(registry: TemplateRegistry, code: str | None) -> MunicipalityTemplate:
    source = (code or DEFAULT_TEMPLATE_CODE).strip().lower()
    return registry.get(source) or registry[DEFAULT_TEMPLATE_CODE]


def list_template_options(registry: TemplateRegistry) -> List[dict[str, str]]:
    return [template.option() for template in registry.values()]
