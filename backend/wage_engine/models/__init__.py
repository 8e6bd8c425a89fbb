from .attendance import AttendanceInterval
from .audit_log import AuditLog
from .organization import Organization
from .wage_calculation import WageCalculation
from .wage_rate import RateSchedule
from .worker import Worker

__all__ = [
    "Organization",
    "Worker",
    "AttendanceInterval",
    "RateSchedule",
    "WageCalculation",
    "AuditLog",
]
