"""
CarValue Backend — Session & Guard Dependencies
=================================================

What:  Resolves the signed-in user from the session cookie and guards routes.
How:   Starlette's SessionMiddleware exposes a signed cookie as
       request.session; the only key we store is "user_id".

    get_current_user  → User | None (never fails)
    require_user      → User, or ForbiddenError (403) when signed out
    require_admin     → User, or ForbiddenError (403) unless user.admin
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from carvalue.database import get_db_session
from carvalue.exceptions import ForbiddenError
from carvalue.models.user import User
from carvalue.services.users_service import users_service

SESSION_USER_KEY = "user_id"


def sign_in(request: Request, user: User) -> None:
    request.session[SESSION_USER_KEY] = user.id


def sign_out(request: Request) -> None:
    request.session.pop(SESSION_USER_KEY, None)


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> Optional[User]:
    user_id = request.session.get(SESSION_USER_KEY)
    return await users_service.find_one(db, user_id)


async def require_user(
    current_user: Optional[User] = Depends(get_current_user),
) -> User:
    if current_user is None:
        raise ForbiddenError(message="You must be signed in")
    return current_user


async def require_admin(
    current_user: Optional[User] = Depends(get_current_user),
) -> User:
    if current_user is None or not current_user.admin:
        raise ForbiddenError(message="Admin access required")
    return current_user
