"""Shift coverage endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Path, Query, status

from workforce_engine.api.dependencies import CompanyId, DbSession
from workforce_engine.api.schemas import (
    CoverageSummaryResponse,
    ErrorResponse,
    ShiftCoverageStatusResponse,
)
from workforce_engine.calculators.coverage import get_shift_coverage_status
from workforce_engine.calculators.types import CoverageSummary
from workforce_engine.services.coverage_service import CoverageService

router = APIRouter(prefix="/coverage", tags=["coverage"])


async def _analyze(
    db: DbSession, company_id: UUID, date_from: date, date_to: date
) -> CoverageSummary:
    if date_from > date_to:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="date_from must not be after date_to",
        )

    summary = await CoverageService(db).analyze(company_id, date_from, date_to)
    if summary is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Coverage data is temporarily unavailable",
            headers={"Retry-After": "30"},
        )
    return summary


@router.get(
    "",
    response_model=CoverageSummaryResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def get_coverage(
    db: DbSession,
    company_id: CompanyId,
    date_from: Annotated[date, Query()],
    date_to: Annotated[date, Query()],
) -> CoverageSummaryResponse:
    """Reconcile assignments against clock-ins for every shift in the range."""
    summary = await _analyze(db, company_id, date_from, date_to)
    return CoverageSummaryResponse.model_validate(summary)


@router.get(
    "/shifts/{shift_id}",
    response_model=ShiftCoverageStatusResponse,
    responses={
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def get_shift_coverage(
    db: DbSession,
    company_id: CompanyId,
    shift_id: Annotated[UUID, Path()],
    date_from: Annotated[date, Query()],
    date_to: Annotated[date, Query()],
) -> ShiftCoverageStatusResponse:
    """Coverage badge (percent, missing, extra) for one shift."""
    summary = await _analyze(db, company_id, date_from, date_to)
    coverage = get_shift_coverage_status(shift_id, summary.items)
    if coverage is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shift not found in range",
        )
    return ShiftCoverageStatusResponse(
        shift_id=shift_id,
        percent=coverage.percent,
        missing=coverage.missing,
        extra=coverage.extra,
    )
