"""Company payroll configuration storage."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from workforce_engine.calculators.types import PayrollConfig
from workforce_engine.models import CompanySetting

logger = logging.getLogger(__name__)

PAYROLL_CONFIG_KEY = "payroll_config"


class PayrollConfigService:
    """Reads and writes the ``payroll_config`` company setting."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_setting(self, company_id: UUID) -> CompanySetting | None:
        return await self.session.scalar(
            select(CompanySetting).where(
                CompanySetting.company_id == company_id,
                CompanySetting.key == PAYROLL_CONFIG_KEY,
            )
        )

    async def get_config(self, company_id: UUID) -> PayrollConfig:
        """Company config merged over defaults; defaults when none is stored."""
        setting = await self._get_setting(company_id)
        if setting is None:
            return PayrollConfig()
        return PayrollConfig.from_mapping(setting.value)

    async def save_config(
        self,
        company_id: UUID,
        config: PayrollConfig,
        updated_by: UUID | None = None,
    ) -> PayrollConfig:
        """Upsert the company's payroll config.

        The caller owns the transaction and commits.
        """
        value = config.to_dict()
        setting = await self._get_setting(company_id)
        now = datetime.now(timezone.utc)

        if setting is None:
            setting = CompanySetting(
                company_id=company_id,
                key=PAYROLL_CONFIG_KEY,
                value=value,
                updated_by=updated_by,
                updated_at=now,
            )
            self.session.add(setting)
            previous = None
        else:
            previous = dict(setting.value or {})
            setting.value = value
            setting.updated_by = updated_by
            setting.updated_at = now

        await self.session.flush()
        logger.info(
            "Payroll config updated for company %s by %s: %s -> %s",
            company_id,
            updated_by,
            previous,
            value,
        )
        return config
