"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReadModel(BaseModel):
    """Base for responses built from calculator results."""

    model_config = ConfigDict(from_attributes=True, frozen=True)


# ============================================================================
# Coverage schemas
# ============================================================================


class EmployeeRefResponse(ReadModel):
    """Employee with resolved display name."""

    employee_id: UUID
    name: str


class ClockedEmployeeResponse(ReadModel):
    """Employee who clocked in, with hours worked."""

    employee_id: UUID
    name: str
    hours: Decimal


class CoverageItemResponse(ReadModel):
    """Coverage of one shift."""

    shift_id: UUID
    shift_title: str
    shift_code: str | None = None
    shift_date: date = Field(validation_alias="date")
    client_id: UUID | None = None
    assigned_employees: list[EmployeeRefResponse]
    clocked_employees: list[ClockedEmployeeResponse]
    missing_employees: list[EmployeeRefResponse]
    extra_employees: list[ClockedEmployeeResponse]
    coverage_percent: int
    total_assigned: int
    total_clocked: int


class CoverageSummaryResponse(ReadModel):
    """Coverage over a date range."""

    date_from: date
    date_to: date
    total_shifts: int
    fully_covered: int
    partially_covered: int
    uncovered: int
    overall_percent: int
    items: list[CoverageItemResponse]
    issues: list[CoverageItemResponse]


class ShiftCoverageStatusResponse(ReadModel):
    """Coverage badge for one shift."""

    shift_id: UUID
    percent: int
    missing: int
    extra: int


# ============================================================================
# Payroll schemas
# ============================================================================


class PayrollConfigPayload(BaseModel):
    """Company payroll configuration (weekdays: 0=Sunday..6=Saturday)."""

    payroll_week_start_day: int = Field(default=3, ge=0, le=6)
    expected_close_day: int = Field(default=2, ge=0, le=6)
    expected_close_time: str = Field(default="23:59", pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    overdue_grace_days: int = Field(default=2, ge=0)
    timezone: str = Field(default="America/New_York", min_length=1)


class PayrollConfigResponse(ReadModel):
    """Effective company payroll configuration."""

    payroll_week_start_day: int
    expected_close_day: int
    expected_close_time: str
    overdue_grace_days: int
    timezone: str


class PeriodOverdueResponse(ReadModel):
    """Overdue state of one payroll period."""

    period_id: UUID
    start_date: date
    end_date: date
    status: str
    expected_close: datetime
    deadline: datetime
    overdue_days: int
    is_overdue: bool


class PeriodOverdueListResponse(BaseModel):
    """Overdue state of all payroll periods."""

    items: list[PeriodOverdueResponse]
    total: int
    overdue_count: int


class PeriodStatusSummaryResponse(ReadModel):
    """Period counts by status with overdue totals."""

    open: int
    closed: int
    published: int
    paid: int
    overdue_count: int
    max_overdue_days: int | None = None
    overdue: list[PeriodOverdueResponse]


class PayrollWeekResponse(ReadModel):
    """Current payroll week boundaries."""

    start: datetime
    end: datetime


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    context: dict[str, Any] | None = None
