"""
Devotionals API - User Registration Route
=========================================

What:  POST /api/users/register creates an account.
How:   Validates the body with UserRegister, delegates hashing and the INSERT
       to UserService, returns 201 with the new id.
"""

import logging

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from devotional_api.database import get_db_session
from devotional_api.schemas.devotional import ErrorResponse
from devotional_api.schemas.user import UserRegister, UserRegisteredResponse
from devotional_api.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


def get_user_service(request: Request) -> UserService:
    """Builds a UserService from the app's settings."""
    return UserService(password_min_length=request.app.state.settings.password_min_length)


@router.post(
    "/register",
    status_code=201,
    response_model=UserRegisteredResponse,
    responses={
        400: {"description": "Invalid email or password", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a user account",
)
async def register_user(
    payload: UserRegister = Body(...),
    db: AsyncSession = Depends(get_db_session),
    service: UserService = Depends(get_user_service),
) -> UserRegisteredResponse:
    return await service.register(db, payload.email, payload.password)
