"""
CarValue Backend — User SQLAlchemy Model
==========================================

What:  ORM model for the `users` table.
Who:   Used by UsersService / AuthService and by Alembic.

Table Design Rationale:
    - Integer primary key generated by the database
    - email: no UNIQUE constraint; AuthService.signup rejects duplicates
    - password: salted hash, never the plain text
    - admin: defaults to TRUE. This mirrors the deployed behaviour and is
      flagged for review: self-signup users currently get admin rights.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carvalue.database import Base

if TYPE_CHECKING:
    from carvalue.models.report import Report


class User(Base):
    """
    An account that can sign in and submit reports.

    Lifecycle:
        1. Created on signup
        2. Email / password changed through PATCH /auth/{id}
        3. Removed through DELETE /auth/{id}, only while it owns no reports
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)

    password: Mapped[str] = mapped_column(String(255), nullable=False)

    admin: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    # Loaded explicitly by the services; never lazily inside async code
    reports: Mapped[List["Report"]] = relationship(
        back_populates="user",
        lazy="raise",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', admin={self.admin})>"
