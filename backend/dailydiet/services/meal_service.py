"""
Daily Diet Backend: Meal Service
==================================

What:  CRUD and metrics for meals, always scoped to one user.
How:   Every statement filters on `Meal.user_id`; a meal owned by someone
       else is indistinguishable from a missing one (NotFoundError).
Who:   Called by the /meals route handlers with the user resolved by the
       get_current_user dependency.

Error Handling:
    SQLAlchemy failures are logged and re-raised as DatabaseError (→ 500).
    NotFoundError propagates unchanged (→ 404).
"""

import logging
from datetime import datetime, timezone
from typing import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dailydiet.exceptions import DatabaseError, NotFoundError
from dailydiet.models.meal import Meal
from dailydiet.schemas.meal import (
    MealDetailResponse,
    MealInput,
    MealListResponse,
    MealMetricsResponse,
    MealResponse,
)

logger = logging.getLogger(__name__)


def best_on_diet_sequence(on_diet_flags: Iterable[bool]) -> int:
    """
    Length of the longest run of consecutive True values.

    Single forward pass: `current` counts the run in progress and is folded
    into `best` whenever an off-diet meal ends it. The comparison after the
    loop captures a run that reaches the last element.

        >>> best_on_diet_sequence([True, True, False, True, True, True, False])
        3
    """
    best = 0
    current = 0

    for on_diet in on_diet_flags:
        if on_diet:
            current += 1
        else:
            if current > best:
                best = current
            current = 0

    if current > best:
        best = current

    return best


class MealService:
    """
    Business logic for meal operations.

    Responsibilities:
        - create_meal / update_meal / delete_meal: owner-scoped mutations
        - list_meals / get_meal: owner-scoped reads
        - get_metrics: aggregate counts and best on-diet streak
    """

    async def _get_owned_meal(
        self, db: AsyncSession, user_id: UUID, meal_id: UUID
    ) -> Meal:
        result = await db.execute(
            select(Meal).where(Meal.id == meal_id, Meal.user_id == user_id)
        )
        meal = result.scalar_one_or_none()
        if meal is None:
            raise NotFoundError(resource="meal", resource_id=str(meal_id))
        return meal

    async def create_meal(
        self, db: AsyncSession, user_id: UUID, data: MealInput
    ) -> MealResponse:
        """
        Insert a meal for `user_id` with a fresh UUID.

        Raises:
            DatabaseError: Insert failed (→ 500)
        """
        meal = Meal(
            user_id=user_id,
            name=data.name,
            description=data.description,
            date_time=data.date_time,
            is_on_diet=data.is_on_diet,
        )
        try:
            db.add(meal)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating meal: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the meal. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Meal %s created for user %s", meal.id, user_id)
        return MealResponse.model_validate(meal)

    async def list_meals(self, db: AsyncSession, user_id: UUID) -> MealListResponse:
        """
        All meals of `user_id`, newest date_time first.

        Query plan:
            SELECT * FROM meals WHERE user_id = :uid ORDER BY date_time DESC
            → idx_meals_user_date_time
        """
        try:
            result = await db.execute(
                select(Meal)
                .where(Meal.user_id == user_id)
                .order_by(Meal.date_time.desc())
            )
            meals = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing meals: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve meals. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return MealListResponse(
            meals=[MealResponse.model_validate(meal) for meal in meals]
        )

    async def get_meal(
        self, db: AsyncSession, user_id: UUID, meal_id: UUID
    ) -> MealDetailResponse:
        """
        Raises:
            NotFoundError: No meal with this id belongs to the user (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            meal = await self._get_owned_meal(db, user_id, meal_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching meal %s: %s", meal_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the meal. Please try again.",
                context={"meal_id": str(meal_id)},
            )

        return MealDetailResponse(meal=MealResponse.model_validate(meal))

    async def update_meal(
        self,
        db: AsyncSession,
        user_id: UUID,
        meal_id: UUID,
        data: MealInput,
    ) -> MealDetailResponse:
        """
        Replace the editable fields of an owned meal and stamp updated_at.

        Raises:
            NotFoundError: No meal with this id belongs to the user (→ 404)
            DatabaseError: Query or flush failed (→ 500)
        """
        try:
            meal = await self._get_owned_meal(db, user_id, meal_id)
            meal.name = data.name
            meal.description = data.description
            meal.date_time = data.date_time
            meal.is_on_diet = data.is_on_diet
            meal.updated_at = datetime.now(timezone.utc)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating meal %s: %s", meal_id, str(e))
            raise DatabaseError(
                message="Could not update the meal. Please try again.",
                context={"meal_id": str(meal_id)},
            )

        logger.info("Meal %s updated", meal_id)
        return MealDetailResponse(meal=MealResponse.model_validate(meal))

    async def delete_meal(
        self, db: AsyncSession, user_id: UUID, meal_id: UUID
    ) -> None:
        """
        Raises:
            NotFoundError: No meal with this id belongs to the user (→ 404)
            DatabaseError: Query or flush failed (→ 500)
        """
        try:
            meal = await self._get_owned_meal(db, user_id, meal_id)
            await db.delete(meal)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting meal %s: %s", meal_id, str(e))
            raise DatabaseError(
                message="Could not delete the meal. Please try again.",
                context={"meal_id": str(meal_id)},
            )

        logger.info("Meal %s deleted", meal_id)

    async def get_metrics(
        self, db: AsyncSession, user_id: UUID
    ) -> MealMetricsResponse:
        """
        Aggregate statistics over every meal of `user_id`.

        Meals are scanned in insertion order (created_at ascending), which is
        the order the best on-diet streak is measured in.
        """
        try:
            result = await db.execute(
                select(Meal.is_on_diet)
                .where(Meal.user_id == user_id)
                .order_by(Meal.created_at.asc())
            )
            flags = [bool(flag) for flag in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error computing metrics: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not compute metrics. Please try again.",
                context={"error_type": type(e).__name__},
            )

        meals_on_diet = sum(1 for flag in flags if flag)

        return MealMetricsResponse(
            total_meals=len(flags),
            meals_on_diet=meals_on_diet,
            meals_off_diet=len(flags) - meals_on_diet,
            best_sequence_on_diet=best_on_diet_sequence(flags),
        )


meal_service = MealService()
