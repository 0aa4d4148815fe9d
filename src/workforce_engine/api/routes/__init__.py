"""API routes."""

from workforce_engine.api.routes.coverage import router as coverage_router
from workforce_engine.api.routes.health import router as health_router
from workforce_engine.api.routes.payroll import router as payroll_router

__all__ = ["coverage_router", "health_router", "payroll_router"]
