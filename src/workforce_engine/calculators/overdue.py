"""Payroll period overdue and payroll week calculations."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterable

from workforce_engine.calculators.types import (
    PayrollConfig,
    PayrollPeriod,
    PayrollWeek,
    PeriodOverdueInfo,
    PeriodStatus,
    PeriodStatusSummary,
)

DEFAULT_CLOSE_HOUR = 23
DEFAULT_CLOSE_MINUTE = 59


class PeriodOverdueCalculator:
    """Deadline math for payroll period closes.

    A period is overdue once ``now`` passes
    ``end_date @ expected_close_time + overdue_grace_days`` while it is
    still neither closed nor published. Overdue days are whole days past
    the deadline, truncated.

    All times are naive local wall-clock datetimes. Callers pick the clock
    (server local or company timezone) and pass ``now`` explicitly.
    Incomplete configuration is defaulted, never rejected.
    """

    # Statuses that can never be late
    TERMINAL_STATUSES = frozenset({PeriodStatus.CLOSED.value, PeriodStatus.PUBLISHED.value})

    ONE_DAY = timedelta(days=1)

    @staticmethod
    def parse_close_time(value: str | None) -> time:
        """Parse ``HH:MM``, defaulting each component separately."""
        if not isinstance(value, str):
            return time(DEFAULT_CLOSE_HOUR, DEFAULT_CLOSE_MINUTE)

        parts = value.strip().split(":")
        hour = _component(parts[0] if parts else None, 23, DEFAULT_CLOSE_HOUR)
        minute = _component(parts[1] if len(parts) > 1 else None, 59, DEFAULT_CLOSE_MINUTE)
        return time(hour, minute)

    @classmethod
    def expected_close(cls, end_date: date, config: PayrollConfig) -> datetime:
        """When the period is expected to be closed."""
        return datetime.combine(end_date, cls.parse_close_time(config.expected_close_time))

    @classmethod
    def deadline(cls, end_date: date, config: PayrollConfig) -> datetime:
        """Expected close plus the grace window."""
        grace_days = config.overdue_grace_days if isinstance(config.overdue_grace_days, int) else 0
        return cls.expected_close(end_date, config) + timedelta(days=grace_days)

    @classmethod
    def is_terminal(cls, status: str) -> bool:
        return status in cls.TERMINAL_STATUSES

    @classmethod
    def calculate(
        cls,
        period: PayrollPeriod,
        config: PayrollConfig,
        now: datetime | None = None,
    ) -> PeriodOverdueInfo:
        """Compute overdue info for a period."""
        if now is None:
            now = datetime.now()

        expected_close = cls.expected_close(period.end_date, config)
        deadline = cls.deadline(period.end_date, config)
        is_overdue = not cls.is_terminal(period.status) and now > deadline

        overdue_days = 0
        if is_overdue:
            overdue_days = (now - deadline) // cls.ONE_DAY

        return PeriodOverdueInfo(
            period_id=period.period_id,
            start_date=period.start_date,
            end_date=period.end_date,
            status=period.status,
            expected_close=expected_close,
            deadline=deadline,
            overdue_days=overdue_days,
            is_overdue=is_overdue,
        )

    @classmethod
    def summarize(
        cls,
        periods: Iterable[PayrollPeriod],
        config: PayrollConfig,
        now: datetime | None = None,
    ) -> PeriodStatusSummary:
        """Count periods by status and collect the overdue ones."""
        if now is None:
            now = datetime.now()

        counts = {status.value: 0 for status in PeriodStatus}
        overdue: list[PeriodOverdueInfo] = []
        for period in periods:
            if period.status in counts:
                counts[period.status] += 1
            info = cls.calculate(period, config, now)
            if info.is_overdue:
                overdue.append(info)

        return PeriodStatusSummary(
            open=counts[PeriodStatus.OPEN.value],
            closed=counts[PeriodStatus.CLOSED.value],
            published=counts[PeriodStatus.PUBLISHED.value],
            paid=counts[PeriodStatus.PAID.value],
            overdue_count=len(overdue),
            max_overdue_days=max((info.overdue_days for info in overdue), default=None),
            overdue=tuple(overdue),
        )

    @staticmethod
    def current_week(config: PayrollConfig, today: date | None = None) -> PayrollWeek:
        """Payroll week containing ``today``.

        ``payroll_week_start_day`` uses 0=Sunday; out-of-range values fall
        back to the default start day.
        """
        if today is None:
            today = date.today()
        elif isinstance(today, datetime):
            today = today.date()

        start_day = config.payroll_week_start_day
        if not isinstance(start_day, int) or not 0 <= start_day <= 6:
            start_day = PayrollConfig().payroll_week_start_day

        diff = (sunday_based_weekday(today) - start_day) % 7
        start = datetime.combine(today - timedelta(days=diff), time.min)
        end = datetime.combine(start.date() + timedelta(days=6), time(23, 59, 59, 999000))
        return PayrollWeek(start=start, end=end)


def sunday_based_weekday(day: date) -> int:
    """Weekday with 0=Sunday..6=Saturday."""
    return day.isoweekday() % 7


def _component(raw: str | None, upper: int, default: int) -> int:
    if raw is None:
        return default
    raw = raw.strip()
    if not raw.isdecimal():
        return default
    value = int(raw)
    return value if 0 <= value <= upper else default
