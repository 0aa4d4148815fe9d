"""Workforce engine services."""

from workforce_engine.services.coverage_service import CoverageService
from workforce_engine.services.payroll_config_service import PayrollConfigService
from workforce_engine.services.period_service import PeriodService
from workforce_engine.services.snapshot_loader import CoverageSnapshot, SnapshotLoader

__all__ = [
    "CoverageService",
    "CoverageSnapshot",
    "PayrollConfigService",
    "PeriodService",
    "SnapshotLoader",
]
