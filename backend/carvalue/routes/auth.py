"""
CarValue Backend — Auth & Users Route Handlers
================================================

What:  Signup / signin / signout / whoami plus user lookup, update, delete.
How:   Thin handlers: parse the body, call AuthService / UsersService,
       keep the session cookie in sync, return UserResponse (never the hash).

Route Inventory:
    POST   /auth/signup        create account, sign in        201
    POST   /auth/signin        sign in                        200
    POST   /auth/signout       clear session                  200
    GET    /auth/whoami        current user (signed in only)  200 / 403
    GET    /auth?email=...     users with this email          200
    GET    /auth/{id}          single user                    200 / 404
    PATCH  /auth/{id}          change email and/or password   200 / 404
    DELETE /auth/{id}          remove user without reports    200 / 404 / 409
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from carvalue.database import get_db_session
from carvalue.exceptions import NotFoundError
from carvalue.models.user import User
from carvalue.routes.deps import require_user, sign_in, sign_out
from carvalue.schemas.common import ErrorResponse
from carvalue.schemas.user import CredentialsRequest, UpdateUserRequest, UserResponse
from carvalue.services.auth_service import auth_service
from carvalue.services.users_service import users_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Email already in use", "model": ErrorResponse}},
    summary="Create an account and sign in",
)
async def signup(
    body: CredentialsRequest,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await auth_service.signup(db, body.email, body.password)
    sign_in(request, user)
    return UserResponse.model_validate(user)


@router.post(
    "/signin",
    response_model=UserResponse,
    responses={
        400: {"description": "Bad password", "model": ErrorResponse},
        404: {"description": "Unknown email", "model": ErrorResponse},
    },
    summary="Sign in with email and password",
)
async def signin(
    body: CredentialsRequest,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await auth_service.signin(db, body.email, body.password)
    sign_in(request, user)
    return UserResponse.model_validate(user)


@router.post("/signout", status_code=status.HTTP_200_OK, summary="Sign out")
async def signout(request: Request) -> None:
    sign_out(request)


@router.get(
    "/whoami",
    response_model=UserResponse,
    responses={403: {"description": "Not signed in", "model": ErrorResponse}},
    summary="Return the signed-in user",
)
async def whoami(current_user: User = Depends(require_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)


@router.get("", response_model=List[UserResponse], summary="Find users by email")
async def find_users(
    email: str = Query(description="Exact email address to look up"),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    users = await users_service.find(db, email)
    return [UserResponse.model_validate(user) for user in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Get a user by id",
)
async def find_user(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await users_service.find_one(db, user_id)
    if user is None:
        raise NotFoundError(resource="user", resource_id=user_id)
    return UserResponse.model_validate(user)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Update a user's email and/or password",
)
async def update_user(
    user_id: int,
    body: UpdateUserRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await users_service.update(db, user_id, **body.model_dump(exclude_unset=True))
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        404: {"description": "User not found", "model": ErrorResponse},
        409: {"description": "User still owns reports", "model": ErrorResponse},
    },
    summary="Remove a user",
)
async def remove_user(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await users_service.remove(db, user_id)
    return UserResponse.model_validate(user)
