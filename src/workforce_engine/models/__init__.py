"""SQLAlchemy models for the workforce store."""

from workforce_engine.models.base import Base, TimestampMixin
from workforce_engine.models.company import Company, CompanySetting, Employee
from workforce_engine.models.payroll import PayrollPeriod
from workforce_engine.models.scheduling import ScheduledShift, ShiftAssignment, TimeEntry

__all__ = [
    "Base",
    "TimestampMixin",
    "Company",
    "CompanySetting",
    "Employee",
    "PayrollPeriod",
    "ScheduledShift",
    "ShiftAssignment",
    "TimeEntry",
]
