"""
Daily Diet Backend: Meal Route Handlers
=========================================

What:  CRUD for the session user's meals plus GET /meals/metrics.
How:   Every handler depends on get_current_user (401 without a valid
       session) and delegates to MealService with the user's id.

Route order:
    /metrics is declared before /{meal_id} so the literal path is matched
    first. Path ids are typed UUID; malformed ids are rejected with 422.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dailydiet.database import get_db_session
from dailydiet.dependencies import get_current_user
from dailydiet.models.user import User
from dailydiet.schemas.common import ErrorResponse
from dailydiet.schemas.meal import (
    MealDeletedResponse,
    MealDetailResponse,
    MealInput,
    MealListResponse,
    MealMetricsResponse,
)
from dailydiet.services.meal_service import meal_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/meals",
    tags=["Meals"],
    responses={
        401: {"description": "Missing or unknown session", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)

_NOT_FOUND = {404: {"description": "Meal not found", "model": ErrorResponse}}


@router.post(
    "",
    status_code=201,
    response_model=MealDetailResponse,
    summary="Record a meal",
)
async def create_meal(
    body: MealInput,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MealDetailResponse:
    meal = await meal_service.create_meal(db=db, user_id=user.id, data=body)
    return MealDetailResponse(meal=meal)


@router.get(
    "",
    response_model=MealListResponse,
    summary="List the session user's meals, newest first",
)
async def list_meals(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MealListResponse:
    return await meal_service.list_meals(db=db, user_id=user.id)


@router.get(
    "/metrics",
    response_model=MealMetricsResponse,
    summary="Diet metrics for the session user",
    description=(
        "Total meals, on-diet and off-diet counts, and the longest run of "
        "consecutive on-diet meals in the order they were recorded."
    ),
)
async def get_metrics(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MealMetricsResponse:
    return await meal_service.get_metrics(db=db, user_id=user.id)


@router.get(
    "/{meal_id}",
    response_model=MealDetailResponse,
    responses=_NOT_FOUND,
    summary="Get one meal",
)
async def get_meal(
    meal_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MealDetailResponse:
    return await meal_service.get_meal(db=db, user_id=user.id, meal_id=meal_id)


@router.put(
    "/{meal_id}",
    response_model=MealDetailResponse,
    responses=_NOT_FOUND,
    summary="Replace a meal",
)
async def update_meal(
    meal_id: UUID,
    body: MealInput,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MealDetailResponse:
    return await meal_service.update_meal(
        db=db, user_id=user.id, meal_id=meal_id, data=body
    )


@router.delete(
    "/{meal_id}",
    response_model=MealDeletedResponse,
    responses=_NOT_FOUND,
    summary="Delete a meal",
)
async def delete_meal(
    meal_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MealDeletedResponse:
    await meal_service.delete_meal(db=db, user_id=user.id, meal_id=meal_id)
    return MealDeletedResponse()
