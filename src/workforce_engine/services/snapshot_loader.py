"""Loads read-only coverage snapshots for one company and date range."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from workforce_engine.calculators.types import (
    PLANNED_STATUSES,
    REJECTED_ENTRY_STATUS,
    EmployeeIdentity,
    ScheduledShift,
    ShiftAssignment,
    TimeEntry,
)
from workforce_engine.models import Employee as EmployeeModel
from workforce_engine.models import ScheduledShift as ScheduledShiftModel
from workforce_engine.models import ShiftAssignment as ShiftAssignmentModel
from workforce_engine.models import TimeEntry as TimeEntryModel


@dataclass(frozen=True)
class CoverageSnapshot:
    """Fully materialized inputs for one coverage analysis."""

    shifts: tuple[ScheduledShift, ...] = ()
    assignments: tuple[ShiftAssignment, ...] = ()
    time_entries: tuple[TimeEntry, ...] = ()
    employees: tuple[EmployeeIdentity, ...] = ()


class SnapshotLoader:
    """Reads shifts, assignments, time entries and employees.

    All queries are company scoped. Soft-deleted shifts, rejected
    assignments and rejected time entries are never returned.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def load(self, company_id: UUID, date_from: date, date_to: date) -> CoverageSnapshot:
        """Load every snapshot needed to analyze coverage in the range."""
        shifts = await self.load_shifts(company_id, date_from, date_to)
        if not shifts:
            return CoverageSnapshot()

        shift_ids = [s.shift_id for s in shifts]
        assignments = await self.load_assignments(company_id, shift_ids)
        time_entries = await self.load_time_entries(company_id, shift_ids)
        employees = await self.load_employees(company_id)

        return CoverageSnapshot(
            shifts=tuple(shifts),
            assignments=tuple(assignments),
            time_entries=tuple(time_entries),
            employees=tuple(employees),
        )

    async def load_shifts(
        self, company_id: UUID, date_from: date, date_to: date
    ) -> list[ScheduledShift]:
        query = (
            select(ScheduledShiftModel)
            .where(
                ScheduledShiftModel.company_id == company_id,
                ScheduledShiftModel.deleted_at.is_(None),
                ScheduledShiftModel.shift_date >= date_from,
                ScheduledShiftModel.shift_date <= date_to,
            )
            .order_by(ScheduledShiftModel.shift_date)
        )
        result = await self.session.execute(query)
        return [
            ScheduledShift(
                shift_id=row.shift_id,
                title=row.title,
                date=row.shift_date,
                shift_code=row.shift_code,
                client_id=row.client_id,
            )
            for row in result.scalars()
        ]

    async def load_assignments(
        self, company_id: UUID, shift_ids: list[UUID]
    ) -> list[ShiftAssignment]:
        if not shift_ids:
            return []
        query = select(ShiftAssignmentModel).where(
            ShiftAssignmentModel.company_id == company_id,
            ShiftAssignmentModel.shift_id.in_(shift_ids),
            ShiftAssignmentModel.status.in_(sorted(PLANNED_STATUSES)),
        )
        result = await self.session.execute(query)
        return [
            ShiftAssignment(
                shift_id=row.shift_id,
                employee_id=row.employee_id,
                status=row.status,
            )
            for row in result.scalars()
        ]

    async def load_time_entries(
        self, company_id: UUID, shift_ids: list[UUID]
    ) -> list[TimeEntry]:
        if not shift_ids:
            return []
        query = (
            select(TimeEntryModel)
            .where(
                TimeEntryModel.company_id == company_id,
                TimeEntryModel.shift_id.in_(shift_ids),
                TimeEntryModel.status != REJECTED_ENTRY_STATUS,
            )
            .order_by(TimeEntryModel.clock_in)
        )
        result = await self.session.execute(query)
        return [
            TimeEntry(
                shift_id=row.shift_id,
                employee_id=row.employee_id,
                clock_in=row.clock_in,
                clock_out=row.clock_out,
                break_minutes=row.break_minutes,
                status=row.status,
            )
            for row in result.scalars()
        ]

    async def load_employees(self, company_id: UUID) -> list[EmployeeIdentity]:
        query = select(EmployeeModel).where(EmployeeModel.company_id == company_id)
        result = await self.session.execute(query)
        return [
            EmployeeIdentity(
                employee_id=row.employee_id,
                first_name=row.first_name,
                last_name=row.last_name,
            )
            for row in result.scalars()
        ]
