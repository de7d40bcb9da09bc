"""
CarValue Backend — Reports Service (report store, approval, estimate)
=======================================================================

What:  Report submission, the approval workflow, and the price estimate.
Who:   Called by the /reports routes.

Estimate query:
    SELECT AVG(price) FROM (
        SELECT price FROM reports
        WHERE approved IS TRUE
          AND make = :make AND model = :model
          AND lng - :lng BETWEEN -5 AND 5
          AND lat - :lat BETWEEN -5 AND 5
          AND year - :year BETWEEN -3 AND 3
        ORDER BY ABS(mileage - :mileage) DESC, id ASC
        LIMIT 3
    )

    The location filter is a per-axis bounding box in degrees, not a
    distance. The DESC ordering keeps the three *farthest* mileage matches;
    that is the long-standing production behaviour and is kept as the
    default. settings.estimate_closest_mileage_first switches to ASC.
    The trailing `id ASC` makes ties deterministic.

    AVG over zero rows is NULL, so "no comparables" comes back as None,
    never 0.
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from carvalue import events
from carvalue.config import settings
from carvalue.exceptions import DatabaseError, NotFoundError
from carvalue.models.report import Report
from carvalue.models.user import User

logger = logging.getLogger(__name__)

# ── Estimate window ───────────────────────────────────────────────────────
LOCATION_WINDOW_DEGREES = 5
YEAR_WINDOW = 3
COMPARABLES_LIMIT = 3


class ReportsService:

    async def create(
        self,
        db: AsyncSession,
        *,
        make: str,
        model: str,
        price: int,
        year: int,
        mileage: int,
        lng: float,
        lat: float,
        owner: User,
    ) -> Report:
        """
        Persist a new report owned by `owner`.

        The owner comes from the authenticated session, never from the
        request body. approved starts out False.
        """
        report = Report(
            make=make,
            model=model,
            price=price,
            year=year,
            mileage=mileage,
            lng=lng,
            lat=lat,
            approved=False,
            user_id=owner.id,
        )
        try:
            db.add(report)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating report for user %s: %s", owner.id, str(e))
            raise DatabaseError(
                message="Could not save the report. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        events.queue(db, "report", events.CREATED, report.id)
        return report

    async def get(self, db: AsyncSession, report_id: int) -> Report:
        """
        Fetch a report by id.

        Raises:
            NotFoundError: no report with this id (→ 404)
        """
        try:
            result = await db.execute(select(Report).where(Report.id == report_id))
            report = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching report %s: %s", report_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the report. Please try again.",
                context={"report_id": report_id},
            ) from e

        if report is None:
            raise NotFoundError(resource="report", resource_id=report_id)
        return report

    async def set_approval(self, db: AsyncSession, report_id: int, approved: bool) -> Report:
        """
        Overwrite the approved flag of one report.

        Only `approved` changes. Setting the same value again still
        flushes, so the call is idempotent from the caller's point of view.

        Raises:
            NotFoundError: no report with this id
        """
        report = await self.get(db, report_id)
        report.approved = approved

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error approving report %s: %s", report_id, str(e))
            raise DatabaseError(
                message="Could not update the report. Please try again.",
                context={"report_id": report_id},
            ) from e

        logger.info("Report %s approved=%s", report.id, approved)
        events.queue(db, "report", events.UPDATED, report.id)
        return report

    async def estimate(
        self,
        db: AsyncSession,
        *,
        make: str,
        model: str,
        year: int,
        mileage: int,
        lng: float,
        lat: float,
        closest_first: Optional[bool] = None,
    ) -> Optional[float]:
        """
        Average price of up to three comparable approved reports.

        Args:
            closest_first: Override settings.estimate_closest_mileage_first
                for this call. None uses the configured value.

        Returns:
            The mean price, or None when no approved report matches.
        """
        if closest_first is None:
            closest_first = settings.estimate_closest_mileage_first

        deviation = func.abs(Report.mileage - mileage)
        ranking = deviation.asc() if closest_first else deviation.desc()

        comparables = (
            select(Report.price)
            .where(Report.approved.is_(True))
            .where(Report.make == make)
            .where(Report.model == model)
            .where((Report.lng - lng).between(-LOCATION_WINDOW_DEGREES, LOCATION_WINDOW_DEGREES))
            .where((Report.lat - lat).between(-LOCATION_WINDOW_DEGREES, LOCATION_WINDOW_DEGREES))
            .where((Report.year - year).between(-YEAR_WINDOW, YEAR_WINDOW))
            .order_by(ranking, Report.id.asc())
            .limit(COMPARABLES_LIMIT)
            .subquery()
        )

        try:
            result = await db.execute(select(func.avg(comparables.c.price)))
            average = result.scalar()
        except SQLAlchemyError as e:
            logger.error("Database error computing estimate for %s %s: %s", make, model, str(e))
            raise DatabaseError(
                message="Could not compute an estimate. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        if average is None:
            logger.info("No comparables for %s %s (%s)", make, model, year)
            return None
        return float(average)


reports_service = ReportsService()
