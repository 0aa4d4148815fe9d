"""Payroll period overdue tracking."""

from __future__ import annotations

import logging
from datetime import date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from workforce_engine.calculators.overdue import PeriodOverdueCalculator
from workforce_engine.calculators.types import (
    PayrollConfig,
    PayrollPeriod,
    PayrollWeek,
    PeriodOverdueInfo,
    PeriodStatusSummary,
)
from workforce_engine.config import Settings, get_settings
from workforce_engine.models import PayrollPeriod as PayrollPeriodModel
from workforce_engine.services.payroll_config_service import PayrollConfigService

logger = logging.getLogger(__name__)


def company_zone(config: PayrollConfig) -> ZoneInfo | None:
    """The company's configured zone, or None (server local) when unknown."""
    try:
        return ZoneInfo(config.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(
            "Unknown payroll timezone %r, using server local time", config.timezone
        )
        return None


def wall_clock_now(
    config: PayrollConfig,
    use_company_timezone: bool,
    now: datetime | None = None,
) -> datetime:
    """Naive wall-clock time used for deadline comparisons.

    Server local time unless ``use_company_timezone`` is set, in which case
    the company's configured timezone is used. An explicit ``now`` with a
    UTC offset is converted to that same clock; a naive ``now`` is taken
    as already being on it.
    """
    if now is not None and now.tzinfo is None:
        return now

    zone = company_zone(config) if use_company_timezone else None
    if now is None:
        return datetime.now(zone).replace(tzinfo=None)
    return now.astimezone(zone).replace(tzinfo=None)


class PeriodService:
    """Overdue info and status summaries for a company's payroll periods."""

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings | None = None,
        config_service: PayrollConfigService | None = None,
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.config_service = config_service or PayrollConfigService(session)

    async def load_periods(self, company_id: UUID) -> list[PayrollPeriod]:
        query = (
            select(PayrollPeriodModel)
            .where(PayrollPeriodModel.company_id == company_id)
            .order_by(PayrollPeriodModel.end_date.desc())
        )
        result = await self.session.execute(query)
        return [
            PayrollPeriod(
                period_id=row.payroll_period_id,
                start_date=row.start_date,
                end_date=row.end_date,
                status=row.status,
            )
            for row in result.scalars()
        ]

    def now_for(self, config: PayrollConfig, now: datetime | None = None) -> datetime:
        """Wall clock the deadlines are built on; converts an aware ``now`` onto it."""
        return wall_clock_now(config, self.settings.use_company_timezone, now)

    async def list_overdue_info(
        self, company_id: UUID, now: datetime | None = None
    ) -> list[PeriodOverdueInfo]:
        """Overdue info for every period, most recent first."""
        config = await self.config_service.get_config(company_id)
        periods = await self.load_periods(company_id)
        now = self.now_for(config, now)
        return [PeriodOverdueCalculator.calculate(p, config, now) for p in periods]

    async def summarize(
        self, company_id: UUID, now: datetime | None = None
    ) -> PeriodStatusSummary:
        config = await self.config_service.get_config(company_id)
        periods = await self.load_periods(company_id)
        now = self.now_for(config, now)
        return PeriodOverdueCalculator.summarize(periods, config, now)

    async def current_week(
        self, company_id: UUID, today: date | None = None
    ) -> PayrollWeek:
        config = await self.config_service.get_config(company_id)
        if today is None:
            today = self.now_for(config).date()
        return PeriodOverdueCalculator.current_week(config, today)
