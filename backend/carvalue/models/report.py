"""
CarValue Backend — Report SQLAlchemy Model
============================================

What:  ORM model for the `reports` table: one vehicle price submission.
Who:   Used by ReportsService (create, approval, estimate) and by Alembic.

Invariants:
    - user_id is stamped from the signed-in session at creation and never
      changes afterwards
    - approved starts FALSE; only approved rows feed the estimate query

Index on (make, model):
    Every estimate filters on exact make/model equality first.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Float, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carvalue.database import Base

if TYPE_CHECKING:
    from carvalue.models.user import User


class Report(Base):
    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    make: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    mileage: Mapped[int] = mapped_column(Integer, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)
    lat: Mapped[float] = mapped_column(Float, nullable=False)

    approved: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    # RESTRICT: a user cannot be deleted while reports still point at it
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(back_populates="reports", lazy="raise")

    __table_args__ = (
        Index("idx_reports_make_model", "make", "model"),
    )

    def __repr__(self) -> str:
        return (
            f"<Report(id={self.id}, make='{self.make}', model='{self.model}', "
            f"price={self.price}, approved={self.approved})>"
        )
