"""Shift coverage service: loads snapshots and runs the analyzer."""

from __future__ import annotations

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from workforce_engine.calculators.coverage import CoverageAnalyzer
from workforce_engine.calculators.types import CoverageSummary
from workforce_engine.services.snapshot_loader import SnapshotLoader

logger = logging.getLogger(__name__)


class CoverageService:
    """Computes coverage summaries from the store.

    A summary with ``total_shifts == 0`` means the range has no shifts.
    ``None`` means the snapshots could not be read and the caller should
    retry later.
    """

    def __init__(self, session: AsyncSession, loader: SnapshotLoader | None = None):
        self.session = session
        self.loader = loader or SnapshotLoader(session)

    async def analyze(
        self, company_id: UUID, date_from: date, date_to: date
    ) -> CoverageSummary | None:
        """Analyze coverage for all shifts of a company in the range."""
        try:
            snapshot = await self.loader.load(company_id, date_from, date_to)
        except Exception:
            logger.exception(
                "Coverage snapshot retrieval failed for company %s (%s to %s)",
                company_id,
                date_from,
                date_to,
            )
            return None

        analyzer = CoverageAnalyzer(company_id, date_from, date_to)
        return analyzer.analyze(
            snapshot.shifts,
            snapshot.assignments,
            snapshot.time_entries,
            snapshot.employees,
        )
