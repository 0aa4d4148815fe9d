"""Scheduled shift, assignment and time clock models."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from workforce_engine.models.base import Base, TimestampMixin


class ScheduledShift(Base, TimestampMixin):
    """Planned shift on a calendar day."""

    __tablename__ = "scheduled_shift"

    shift_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    company_id: Mapped[UUID] = mapped_column(
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    shift_code: Mapped[str | None] = mapped_column(String, nullable=True)
    shift_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    client_id: Mapped[UUID | None] = mapped_column(nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    assignments: Mapped[list[ShiftAssignment]] = relationship(back_populates="shift")


class ShiftAssignment(Base, TimestampMixin):
    """Planned link between an employee and a shift."""

    __tablename__ = "shift_assignment"

    shift_assignment_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    company_id: Mapped[UUID] = mapped_column(
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    shift_id: Mapped[UUID] = mapped_column(
        ForeignKey("scheduled_shift.shift_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="shift_assignment_status_check",
        ),
    )

    # Relationships
    shift: Mapped[ScheduledShift] = relationship(back_populates="assignments")


class TimeEntry(Base, TimestampMixin):
    """Clock-in/clock-out record. A null clock_out is an open session."""

    __tablename__ = "time_entry"

    time_entry_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    company_id: Mapped[UUID] = mapped_column(
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    shift_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("scheduled_shift.shift_id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    clock_in: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    clock_out: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    break_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="time_entry_status_check",
        ),
    )
