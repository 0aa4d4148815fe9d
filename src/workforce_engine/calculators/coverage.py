"""Shift coverage reconciliation: planned assignments vs. clock-ins."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence
from uuid import UUID

from workforce_engine.calculators.types import (
    UNKNOWN_EMPLOYEE_NAME,
    ClockedEmployee,
    CoverageItem,
    CoverageSummary,
    EmployeeIdentity,
    EmployeeRef,
    ScheduledShift,
    ShiftAssignment,
    ShiftCoverageStatus,
    TimeEntry,
)


class CoverageAnalyzer:
    """Reconciles shift assignments against time entries for a date range.

    For each shift in ``[date_from, date_to]``:
    1) assigned = employees with a pending/accepted assignment
    2) clocked = employees with a non-rejected time entry (open or closed)
    3) missing = assigned - clocked, extra = clocked - assigned
    4) coverage % = min(clocked, assigned) / assigned, capped at 100

    Rounding (pinned):
    - Hours to 2 decimals, half away from zero
    - Percentages to whole numbers, halves up

    The analyzer is pure: identical snapshots give equal summaries.
    """

    HOURS_PRECISION = Decimal("0.01")
    PERCENT_PRECISION = Decimal("1")

    def __init__(self, company_id: UUID | None, date_from: date, date_to: date):
        self.company_id = company_id
        self.date_from = date_from
        self.date_to = date_to

    def analyze(
        self,
        shifts: Iterable[ScheduledShift],
        assignments: Iterable[ShiftAssignment],
        time_entries: Iterable[TimeEntry],
        employees: Iterable[EmployeeIdentity],
    ) -> CoverageSummary:
        """Build the coverage summary for all shifts in range."""
        in_range = [s for s in shifts if self.date_from <= s.date <= self.date_to]
        # Stable: shifts on the same date keep snapshot order
        in_range.sort(key=lambda s: s.date)

        if not in_range:
            return self._summarize([])

        names = {e.employee_id: e.full_name for e in employees}

        assignments_by_shift: dict[UUID, list[ShiftAssignment]] = defaultdict(list)
        for assignment in assignments:
            if assignment.is_planned:
                assignments_by_shift[assignment.shift_id].append(assignment)

        entries_by_shift: dict[UUID, list[TimeEntry]] = defaultdict(list)
        for entry in time_entries:
            if entry.shift_id is not None and not entry.is_rejected:
                entries_by_shift[entry.shift_id].append(entry)

        items = [
            self._build_item(
                shift,
                assignments_by_shift.get(shift.shift_id, []),
                entries_by_shift.get(shift.shift_id, []),
                names,
            )
            for shift in in_range
        ]
        return self._summarize(items)

    def _build_item(
        self,
        shift: ScheduledShift,
        assignments: Sequence[ShiftAssignment],
        entries: Sequence[TimeEntry],
        names: dict[UUID, str],
    ) -> CoverageItem:
        """Reconcile one shift."""
        assigned = _unique(a.employee_id for a in assignments)
        clocked = _unique(e.employee_id for e in entries)

        hours: dict[UUID, Decimal] = {employee_id: Decimal("0") for employee_id in clocked}
        for entry in entries:
            hours[entry.employee_id] += self.compute_hours(entry)

        assigned_set = set(assigned)
        clocked_set = set(clocked)

        assigned_employees = tuple(
            EmployeeRef(employee_id, _name(names, employee_id)) for employee_id in assigned
        )
        clocked_employees = tuple(
            ClockedEmployee(
                employee_id,
                _name(names, employee_id),
                self.round_hours(hours[employee_id]),
            )
            for employee_id in clocked
        )

        return CoverageItem(
            shift_id=shift.shift_id,
            shift_title=shift.title,
            shift_code=shift.shift_code,
            date=shift.date,
            client_id=shift.client_id,
            assigned_employees=assigned_employees,
            clocked_employees=clocked_employees,
            missing_employees=tuple(
                ref for ref in assigned_employees if ref.employee_id not in clocked_set
            ),
            extra_employees=tuple(
                emp for emp in clocked_employees if emp.employee_id not in assigned_set
            ),
            coverage_percent=self.coverage_percent(len(assigned), len(clocked)),
            total_assigned=len(assigned),
            total_clocked=len(clocked),
        )

    def _summarize(self, items: list[CoverageItem]) -> CoverageSummary:
        """Aggregate per-shift items into the range summary."""
        fully_covered = sum(1 for item in items if item.is_fully_covered)
        uncovered = sum(1 for item in items if item.is_uncovered)

        total_assigned = sum(item.total_assigned for item in items)
        total_matched = sum(min(item.total_clocked, item.total_assigned) for item in items)
        if total_assigned > 0:
            overall_percent = self.round_percent(total_matched, total_assigned)
        else:
            overall_percent = 100

        return CoverageSummary(
            total_shifts=len(items),
            fully_covered=fully_covered,
            partially_covered=len(items) - fully_covered - uncovered,
            uncovered=uncovered,
            overall_percent=overall_percent,
            items=tuple(items),
            company_id=self.company_id,
            date_from=self.date_from,
            date_to=self.date_to,
        )

    @staticmethod
    def compute_hours(entry: TimeEntry) -> Decimal:
        """Worked hours for one entry, net of breaks; 0 while the entry is open."""
        if entry.is_open:
            return Decimal("0")
        seconds = Decimal(str((entry.clock_out - entry.clock_in).total_seconds()))
        hours = seconds / Decimal("3600") - Decimal(entry.break_minutes or 0) / Decimal("60")
        return CoverageAnalyzer.round_hours(hours)

    @staticmethod
    def round_hours(hours: Decimal) -> Decimal:
        """Round hours to 2 decimal places, half away from zero."""
        return hours.quantize(CoverageAnalyzer.HOURS_PRECISION, rounding=ROUND_HALF_UP)

    @staticmethod
    def round_percent(numerator: int, denominator: int) -> int:
        """Whole-number percentage of ``numerator / denominator``."""
        ratio = Decimal(numerator * 100) / Decimal(denominator)
        return int(ratio.quantize(CoverageAnalyzer.PERCENT_PRECISION, rounding=ROUND_HALF_UP))

    @staticmethod
    def coverage_percent(total_assigned: int, total_clocked: int) -> int:
        """Coverage of a single shift.

        With no assignments, a shift someone clocked into counts as covered
        and an empty one as 0.
        """
        if total_assigned > 0:
            return CoverageAnalyzer.round_percent(
                min(total_clocked, total_assigned), total_assigned
            )
        return 100 if total_clocked > 0 else 0


def get_shift_coverage_status(
    shift_id: UUID, items: Sequence[CoverageItem] | None
) -> ShiftCoverageStatus | None:
    """Look up the coverage badge for one shift.

    Returns None when coverage has not been computed or the shift is not
    part of it.
    """
    if items is None:
        return None
    for item in items:
        if item.shift_id == shift_id:
            return ShiftCoverageStatus(
                percent=item.coverage_percent,
                missing=len(item.missing_employees),
                extra=len(item.extra_employees),
            )
    return None


def _unique(employee_ids: Iterable[UUID]) -> list[UUID]:
    """Distinct ids in first-seen order."""
    return list(dict.fromkeys(employee_ids))


def _name(names: dict[UUID, str], employee_id: UUID) -> str:
    return names.get(employee_id, UNKNOWN_EMPLOYEE_NAME)
