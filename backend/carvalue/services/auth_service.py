"""
CarValue Backend — Auth Service
=================================

What:  Maps credentials to a user identity (signup, signin).
Who:   Called by the /auth routes, which then store the user id in the
       signed session cookie.

Failure modes:
    signup  email already registered     → ValidationError ("email in use")
    signin  no user with this email      → NotFoundError   ("user not found")
    signin  password hash does not match → ValidationError ("bad password")
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from carvalue.exceptions import NotFoundError, ValidationError
from carvalue.models.user import User
from carvalue.security import hash_password, verify_password
from carvalue.services.users_service import UsersService, users_service

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, users: UsersService = users_service):
        self.users = users

    async def signup(self, db: AsyncSession, email: str, password: str) -> User:
        existing = await self.users.find(db, email)
        if existing:
            raise ValidationError(message="email in use", field="email")

        user = await self.users.create(db, email=email, password_hash=hash_password(password))
        logger.info("Signed up user %s", user.id)
        return user

    async def signin(self, db: AsyncSession, email: str, password: str) -> User:
        users = await self.users.find(db, email)
        if not users:
            raise NotFoundError(resource="user")

        user = users[0]
        if not verify_password(password, user.password):
            logger.warning("Rejected signin for user %s: bad password", user.id)
            raise ValidationError(message="bad password", field="password")

        return user


auth_service = AuthService()
