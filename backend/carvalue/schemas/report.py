"""
CarValue Backend — Report Schemas
===================================

What:  Pydantic models for report submission, approval and estimates.
How:   Range checks live here so ReportsService receives already-valid
       scalars; FastAPI answers out-of-range input with 422.

Accepted ranges:
    price    0 .. 1,000,000
    year     1930 .. 2050
    mileage  0 .. 1,000,000
    lng      -180 .. 180
    lat      -90 .. 90
"""

from typing import Optional

from pydantic import BaseModel, Field

MIN_YEAR = 1930
MAX_YEAR = 2050
MAX_PRICE = 1_000_000
MAX_MILEAGE = 1_000_000


class CreateReportRequest(BaseModel):
    """
    Body of POST /reports.

    There is deliberately no user/owner field: the owner is always the
    signed-in user resolved from the session.
    """
    make: str = Field(min_length=1, max_length=100)
    model: str = Field(min_length=1, max_length=100)
    price: int = Field(ge=0, le=MAX_PRICE)
    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    mileage: int = Field(ge=0, le=MAX_MILEAGE)
    lng: float = Field(ge=-180, le=180)
    lat: float = Field(ge=-90, le=90)


class ApproveReportRequest(BaseModel):
    """Body of PATCH /reports/{id}."""
    approved: bool


class ReportResponse(BaseModel):
    id: int
    make: str
    model: str
    price: int
    year: int
    mileage: int
    lng: float
    lat: float
    approved: bool
    user_id: int = Field(description="Identifier of the submitting user")

    model_config = {"from_attributes": True}


class EstimateResponse(BaseModel):
    """
    Result of GET /reports/estimate.

    price is null when no approved report matches the query.
    """
    price: Optional[float] = Field(default=None, description="Average price of comparable reports")
