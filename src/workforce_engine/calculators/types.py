"""Type definitions for the coverage and payroll period calculators."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping
from uuid import UUID

UNKNOWN_EMPLOYEE_NAME = "Unknown"


class AssignmentStatus(str, Enum):
    """Shift assignment approval status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# Assignment statuses that count as planned coverage
PLANNED_STATUSES = frozenset({AssignmentStatus.PENDING.value, AssignmentStatus.ACCEPTED.value})

REJECTED_ENTRY_STATUS = "rejected"


class PeriodStatus(str, Enum):
    """Payroll period status values."""

    OPEN = "open"
    CLOSED = "closed"
    PUBLISHED = "published"
    PAID = "paid"


# ===== Snapshots =====


@dataclass(frozen=True)
class ScheduledShift:
    """A planned shift on a local civil date."""

    shift_id: UUID
    title: str
    date: date
    shift_code: str | None = None
    client_id: UUID | None = None


@dataclass(frozen=True)
class ShiftAssignment:
    """A planned employee-to-shift link."""

    shift_id: UUID
    employee_id: UUID
    status: str

    @property
    def is_planned(self) -> bool:
        return _status_value(self.status) in PLANNED_STATUSES


@dataclass(frozen=True)
class TimeEntry:
    """A clock session for an employee against a shift."""

    shift_id: UUID | None
    employee_id: UUID
    clock_in: datetime
    clock_out: datetime | None = None
    break_minutes: int | None = 0
    status: str = "approved"

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    @property
    def is_rejected(self) -> bool:
        return _status_value(self.status) == REJECTED_ENTRY_STATUS


@dataclass(frozen=True)
class EmployeeIdentity:
    """Employee directory entry used to resolve display names."""

    employee_id: UUID
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# ===== Coverage results =====


@dataclass(frozen=True)
class EmployeeRef:
    """Employee id with its resolved display name."""

    employee_id: UUID
    name: str


@dataclass(frozen=True)
class ClockedEmployee:
    """Employee who clocked in, with the hours worked on the shift."""

    employee_id: UUID
    name: str
    hours: Decimal


@dataclass(frozen=True)
class CoverageItem:
    """Coverage of a single shift."""

    shift_id: UUID
    shift_title: str
    shift_code: str | None
    date: date
    client_id: UUID | None
    assigned_employees: tuple[EmployeeRef, ...]
    clocked_employees: tuple[ClockedEmployee, ...]
    missing_employees: tuple[EmployeeRef, ...]
    extra_employees: tuple[ClockedEmployee, ...]
    coverage_percent: int
    total_assigned: int
    total_clocked: int

    @property
    def is_fully_covered(self) -> bool:
        return self.coverage_percent >= 100 and not self.missing_employees

    @property
    def is_uncovered(self) -> bool:
        return self.total_clocked == 0 and self.total_assigned > 0

    @property
    def has_discrepancies(self) -> bool:
        return bool(self.missing_employees or self.extra_employees)


@dataclass(frozen=True)
class CoverageSummary:
    """Aggregate coverage over a date range.

    ``overall_percent`` is 100 for an empty range; check ``total_shifts``
    before reading it as a good result.
    """

    total_shifts: int
    fully_covered: int
    partially_covered: int
    uncovered: int
    overall_percent: int
    items: tuple[CoverageItem, ...] = ()
    company_id: UUID | None = None
    date_from: date | None = None
    date_to: date | None = None

    @property
    def issues(self) -> tuple[CoverageItem, ...]:
        """Shifts with missing or extra employees."""
        return tuple(item for item in self.items if item.has_discrepancies)


@dataclass(frozen=True)
class ShiftCoverageStatus:
    """Compact coverage badge for one shift."""

    percent: int
    missing: int
    extra: int


# ===== Payroll periods =====


@dataclass(frozen=True)
class PayrollConfig:
    """Company payroll cycle configuration.

    Weekdays use 0=Sunday..6=Saturday. Defaults apply when a company has no
    stored override.
    """

    payroll_week_start_day: int = 3
    expected_close_day: int = 2
    expected_close_time: str = "23:59"
    overdue_grace_days: int = 2
    timezone: str = "America/New_York"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> PayrollConfig:
        """Merge a stored mapping over the defaults.

        Missing or invalid fields keep their default value; this never raises.
        """
        defaults = cls()
        if not isinstance(data, Mapping):
            return defaults

        return cls(
            payroll_week_start_day=_weekday_or(
                data.get("payroll_week_start_day"), defaults.payroll_week_start_day
            ),
            expected_close_day=_weekday_or(
                data.get("expected_close_day"), defaults.expected_close_day
            ),
            expected_close_time=_str_or(
                data.get("expected_close_time"), defaults.expected_close_time
            ),
            overdue_grace_days=_non_negative_or(
                data.get("overdue_grace_days"), defaults.overdue_grace_days
            ),
            timezone=_str_or(data.get("timezone"), defaults.timezone),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable stored form."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class PayrollPeriod:
    """Payroll period boundaries and status."""

    period_id: UUID
    start_date: date
    end_date: date
    status: str


@dataclass(frozen=True)
class PeriodOverdueInfo:
    """Lateness of a payroll period's administrative close."""

    period_id: UUID
    start_date: date
    end_date: date
    status: str
    expected_close: datetime
    deadline: datetime
    overdue_days: int
    is_overdue: bool


@dataclass(frozen=True)
class PayrollWeek:
    """Current payroll week boundaries (local wall clock)."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class PeriodStatusSummary:
    """Period counts by status plus overdue totals."""

    open: int = 0
    closed: int = 0
    published: int = 0
    paid: int = 0
    overdue_count: int = 0
    max_overdue_days: int | None = None
    overdue: tuple[PeriodOverdueInfo, ...] = field(default_factory=tuple)


def _int_or(value: Any, default: int) -> int:
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _weekday_or(value: Any, default: int) -> int:
    day = _int_or(value, default)
    return day if 0 <= day <= 6 else default


def _non_negative_or(value: Any, default: int) -> int:
    number = _int_or(value, default)
    return number if number >= 0 else default


def _str_or(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _status_value(status: Any) -> str:
    return status.value if isinstance(status, Enum) else status
