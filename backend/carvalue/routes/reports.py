"""
CarValue Backend — Reports Route Handlers
===========================================

Route Inventory:
    POST  /reports              submit a report (signed in)     201 / 403
    GET   /reports/estimate     average of comparable reports   200
    GET   /reports/{id}         single report                   200 / 404
    PATCH /reports/{id}         set approved flag (admin)       200 / 403 / 404
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from carvalue.database import get_db_session
from carvalue.models.user import User
from carvalue.routes.deps import require_admin, require_user
from carvalue.schemas.common import ErrorResponse
from carvalue.schemas.report import (
    MAX_MILEAGE,
    MAX_YEAR,
    MIN_YEAR,
    ApproveReportRequest,
    CreateReportRequest,
    EstimateResponse,
    ReportResponse,
)
from carvalue.services.reports_service import reports_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.post(
    "",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Not signed in", "model": ErrorResponse}},
    summary="Submit a vehicle price report",
)
async def create_report(
    body: CreateReportRequest,
    current_user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReportResponse:
    report = await reports_service.create(db, owner=current_user, **body.model_dump())
    return ReportResponse.model_validate(report)


# Declared before /{report_id} so "estimate" is never parsed as an id
@router.get(
    "/estimate",
    response_model=EstimateResponse,
    summary="Estimate a vehicle's price from comparable approved reports",
    description=(
        "Averages up to three approved reports with the same make and model, "
        "within 5 degrees of longitude and latitude and 3 model years. "
        "Returns a null price when nothing matches."
    ),
)
async def get_estimate(
    make: str = Query(min_length=1, max_length=100),
    model: str = Query(min_length=1, max_length=100),
    year: int = Query(ge=MIN_YEAR, le=MAX_YEAR),
    mileage: int = Query(ge=0, le=MAX_MILEAGE),
    lng: float = Query(ge=-180, le=180),
    lat: float = Query(ge=-90, le=90),
    db: AsyncSession = Depends(get_db_session),
) -> EstimateResponse:
    price = await reports_service.estimate(
        db,
        make=make,
        model=model,
        year=year,
        mileage=mileage,
        lng=lng,
        lat=lat,
    )
    return EstimateResponse(price=price)


@router.get(
    "/{report_id}",
    response_model=ReportResponse,
    responses={404: {"description": "Report not found", "model": ErrorResponse}},
    summary="Get a report by id",
)
async def get_report(
    report_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ReportResponse:
    report = await reports_service.get(db, report_id)
    return ReportResponse.model_validate(report)


@router.patch(
    "/{report_id}",
    response_model=ReportResponse,
    responses={
        403: {"description": "Admin access required", "model": ErrorResponse},
        404: {"description": "Report not found", "model": ErrorResponse},
    },
    summary="Approve or unapprove a report",
)
async def set_approval(
    report_id: int,
    body: ApproveReportRequest,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> ReportResponse:
    report = await reports_service.set_approval(db, report_id, body.approved)
    logger.info("Admin %s set report %s approved=%s", admin.id, report_id, body.approved)
    return ReportResponse.model_validate(report)
