"""
Devotionals API - Devotional Route Handlers
===========================================

What:  CRUD endpoints under /api/devotionals.
How:   Extracts path/body parameters, delegates to DevotionalService, and
       picks the success status code. Failures are exceptions translated by
       the global handlers in main.py.

Endpoints:
    GET    /api/devotionals        → 200 [DevotionalResponse, ...] newest first
    GET    /api/devotionals/{id}   → 200 DevotionalResponse
    POST   /api/devotionals        → 201 {message, id, verse, content}
    PATCH  /api/devotionals/{id}   → 200 {message, id, verse, content, updated_at}
    DELETE /api/devotionals/{id}   → 204 (empty body)

The `{devotional_id}` path parameter is declared as `str` so that the service
can answer 400 for malformed ids instead of FastAPI's 422.
"""

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from devotional_api.database import get_db_session
from devotional_api.schemas.devotional import (
    DevotionalCreate,
    DevotionalCreatedResponse,
    DevotionalPatch,
    DevotionalResponse,
    DevotionalUpdatedResponse,
    ErrorResponse,
)
from devotional_api.services.devotional_service import devotional_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Devotionals"])


@router.get(
    "/devotionals",
    response_model=List[DevotionalResponse],
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List active devotionals, newest first",
)
async def list_devotionals(
    db: AsyncSession = Depends(get_db_session),
) -> List[DevotionalResponse]:
    return await devotional_service.list_active(db)


@router.get(
    "/devotionals/{devotional_id}",
    response_model=DevotionalResponse,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Not found or deleted", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single active devotional",
)
async def get_devotional(
    devotional_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DevotionalResponse:
    return await devotional_service.get_by_id(db, devotional_id)


@router.post(
    "/devotionals",
    status_code=201,
    response_model=DevotionalCreatedResponse,
    responses={
        400: {"description": "Missing verse or content", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a devotional",
)
async def create_devotional(
    payload: DevotionalCreate = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> DevotionalCreatedResponse:
    devotional = await devotional_service.create(db, payload.verse, payload.content)
    return DevotionalCreatedResponse(
        id=devotional.id,
        verse=devotional.verse,
        content=devotional.content,
    )


@router.patch(
    "/devotionals/{devotional_id}",
    response_model=DevotionalUpdatedResponse,
    responses={
        400: {"description": "Invalid id or no fields supplied", "model": ErrorResponse},
        404: {"description": "Not found or deleted", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Partially update a devotional",
    description="Only the keys present in the body are changed; updated_at is refreshed.",
)
async def update_devotional(
    devotional_id: str,
    payload: DevotionalPatch = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> DevotionalUpdatedResponse:
    devotional = await devotional_service.update_partial(db, devotional_id, payload)
    return DevotionalUpdatedResponse(
        id=devotional.id,
        verse=devotional.verse,
        content=devotional.content,
        updated_at=devotional.updated_at,
    )


@router.delete(
    "/devotionals/{devotional_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Not found or already deleted", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Soft-delete a devotional",
)
async def delete_devotional(
    devotional_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await devotional_service.soft_delete(db, devotional_id)
    return Response(status_code=204)
