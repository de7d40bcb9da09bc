"""
CarValue Backend — Users Service (user record store)
======================================================

What:  Create / read / update / delete for the `users` table.
Who:   Called by AuthService (create, find by email) and the /auth routes.

Rules:
    - Every method receives the request's AsyncSession explicitly
    - Methods flush, never commit (get_db_session commits)
    - Each successful insert, update and remove queues an entity event
      right after its flush; it is emitted once the transaction commits
    - SQLAlchemy failures are logged and re-raised as DatabaseError
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from carvalue import events
from carvalue.exceptions import ConflictError, DatabaseError, NotFoundError
from carvalue.models.report import Report
from carvalue.models.user import User
from carvalue.security import hash_password

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("email", "password")


class UsersService:
    """
    Data access for user accounts.

    create() expects an already-hashed password; update() hashes a new
    plain-text password itself.
    """

    async def create(self, db: AsyncSession, email: str, password_hash: str) -> User:
        user = User(email=email, password=password_hash)
        try:
            db.add(user)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating user %s: %s", email, str(e))
            raise DatabaseError(
                message="Could not create the user. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        events.queue(db, "user", events.CREATED, user.id)
        return user

    async def find_one(self, db: AsyncSession, user_id: Optional[int]) -> Optional[User]:
        """
        Fetch a user by primary key.

        A missing id (signed-out session) returns None without touching the
        database, so callers can pass the raw session value straight through.
        """
        if not user_id:
            return None
        try:
            return await db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the user. Please try again.",
                context={"user_id": user_id},
            ) from e

    async def find(self, db: AsyncSession, email: str) -> List[User]:
        """All users registered with exactly this email."""
        try:
            result = await db.execute(
                select(User).where(User.email == email).order_by(User.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing users by email: %s", str(e))
            raise DatabaseError(
                message="Could not retrieve users. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def get(self, db: AsyncSession, user_id: int) -> User:
        """Like find_one() but raises NotFoundError instead of returning None."""
        user = await self.find_one(db, user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return user

    async def update(self, db: AsyncSession, user_id: int, **attrs: Any) -> User:
        """
        Apply email and/or password changes to an existing user.

        None values and unknown keys are ignored. A new password is hashed
        before it is stored.

        Raises:
            NotFoundError: no user with this id
        """
        user = await self.get(db, user_id)

        for key, value in attrs.items():
            if key not in UPDATABLE_FIELDS or value is None:
                continue
            if key == "password":
                value = hash_password(value)
            setattr(user, key, value)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not update the user. Please try again.",
                context={"user_id": user_id},
            ) from e

        events.queue(db, "user", events.UPDATED, user.id)
        return user

    async def remove(self, db: AsyncSession, user_id: int) -> User:
        """
        Delete a user and return the removed row.

        Reports are never cascade-deleted and never orphaned: a user who
        still owns reports cannot be removed.

        Raises:
            NotFoundError: no user with this id
            ConflictError: the user still owns reports
        """
        user = await self.get(db, user_id)

        try:
            result = await db.execute(
                select(func.count(Report.id)).where(Report.user_id == user_id)
            )
            report_count = result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error counting reports of user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not remove the user. Please try again.",
                context={"user_id": user_id},
            ) from e

        if report_count:
            raise ConflictError(
                message="user still owns reports and cannot be removed",
                context={"user_id": user_id, "report_count": report_count},
            )

        try:
            await db.delete(user)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error removing user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not remove the user. Please try again.",
                context={"user_id": user_id},
            ) from e

        events.queue(db, "user", events.REMOVED, user_id)
        return user


users_service = UsersService()
