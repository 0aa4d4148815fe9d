"""Payroll configuration and period endpoints."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Header, status

from workforce_engine.api.dependencies import AppSettings, CompanyId, DbSession
from workforce_engine.api.schemas import (
    ErrorResponse,
    PayrollConfigPayload,
    PayrollConfigResponse,
    PayrollWeekResponse,
    PeriodOverdueListResponse,
    PeriodOverdueResponse,
    PeriodStatusSummaryResponse,
)
from workforce_engine.calculators.types import PayrollConfig
from workforce_engine.services.payroll_config_service import PayrollConfigService
from workforce_engine.services.period_service import PeriodService

router = APIRouter(prefix="/payroll", tags=["payroll"])


# ============================================================================
# Configuration
# ============================================================================


@router.get(
    "/config",
    response_model=PayrollConfigResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_payroll_config(
    db: DbSession,
    company_id: CompanyId,
) -> PayrollConfigResponse:
    """Company payroll config, or the defaults when none is stored."""
    config = await PayrollConfigService(db).get_config(company_id)
    return PayrollConfigResponse.model_validate(config)


@router.put(
    "/config",
    response_model=PayrollConfigResponse,
    responses={400: {"model": ErrorResponse}},
)
async def update_payroll_config(
    db: DbSession,
    company_id: CompanyId,
    payload: PayrollConfigPayload,
    x_user_id: Annotated[UUID | None, Header()] = None,
) -> PayrollConfigResponse:
    """Replace the company payroll config."""
    config = PayrollConfig(**payload.model_dump())
    await PayrollConfigService(db).save_config(company_id, config, updated_by=x_user_id)
    await db.commit()
    return PayrollConfigResponse.model_validate(config)


@router.get(
    "/current-week",
    response_model=PayrollWeekResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_current_week(
    db: DbSession,
    company_id: CompanyId,
    settings: AppSettings,
) -> PayrollWeekResponse:
    """Boundaries of the payroll week containing today."""
    week = await PeriodService(db, settings=settings).current_week(company_id)
    return PayrollWeekResponse.model_validate(week)


# ============================================================================
# Periods
# ============================================================================


@router.get(
    "/periods/overdue",
    response_model=PeriodOverdueListResponse,
    responses={400: {"model": ErrorResponse}},
)
async def list_period_overdue(
    db: DbSession,
    company_id: CompanyId,
    settings: AppSettings,
    now: datetime | None = None,
) -> PeriodOverdueListResponse:
    """Overdue state for every payroll period, most recent first.

    ``now`` overrides the evaluation instant. A value with a UTC offset is
    converted to the clock the deadlines are built on; a naive one is taken
    as already being on it.
    """
    infos = await PeriodService(db, settings=settings).list_overdue_info(
        company_id, now=now
    )
    return PeriodOverdueListResponse(
        items=[PeriodOverdueResponse.model_validate(info) for info in infos],
        total=len(infos),
        overdue_count=sum(1 for info in infos if info.is_overdue),
    )


@router.get(
    "/periods/summary",
    response_model=PeriodStatusSummaryResponse,
    status_code=status.HTTP_200_OK,
    responses={400: {"model": ErrorResponse}},
)
async def get_period_summary(
    db: DbSession,
    company_id: CompanyId,
    settings: AppSettings,
    now: datetime | None = None,
) -> PeriodStatusSummaryResponse:
    """Period counts by status with overdue totals."""
    summary = await PeriodService(db, settings=settings).summarize(
        company_id, now=now
    )
    return PeriodStatusSummaryResponse.model_validate(summary)
