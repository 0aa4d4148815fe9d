"""Coverage and payroll period calculators."""

from workforce_engine.calculators.coverage import CoverageAnalyzer, get_shift_coverage_status
from workforce_engine.calculators.overdue import PeriodOverdueCalculator
from workforce_engine.calculators.types import (
    CoverageItem,
    CoverageSummary,
    PayrollConfig,
    PayrollPeriod,
    PayrollWeek,
    PeriodOverdueInfo,
    PeriodStatusSummary,
)

__all__ = [
    "CoverageAnalyzer",
    "get_shift_coverage_status",
    "PeriodOverdueCalculator",
    "CoverageItem",
    "CoverageSummary",
    "PayrollConfig",
    "PayrollPeriod",
    "PayrollWeek",
    "PeriodOverdueInfo",
    "PeriodStatusSummary",
]
