"""
Daily Diet Backend: Meal Request/Response Schemas
===================================================

What:  Pydantic models defining the meal API contract.
How:   FastAPI validates request bodies against MealInput (422 on failure)
       and serializes ORM rows through MealResponse.

Naming:
    Request bodies and metrics use camelCase keys (dateTime, isOnDiet,
    totalMeals, ...). Meal objects are returned with their column names
    (date_time, is_on_diet, ...).
"""

import uuid
from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field, StrictBool, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class MealInput(BaseModel):
    """
    Body of POST /meals and PUT /meals/{id}.

    dateTime accepts an ISO 8601 string or an epoch number and is stored as
    a UTC instant, so ordering holds across client offsets. isOnDiet must be
    a JSON boolean; "true" or 1 are rejected.
    """
    name: str = Field(description="Meal name")
    description: str = Field(description="Free-text description of the meal")
    date_time: datetime = Field(alias="dateTime", description="When the meal was eaten")
    is_on_diet: StrictBool = Field(alias="isOnDiet", description="Whether the meal is diet-compliant")

    model_config = {"populate_by_name": True}

    @field_validator("date_time")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Naive values are taken as UTC; aware values are converted to UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class MealResponse(BaseModel):
    """Full representation of a stored meal."""
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    description: str
    date_time: datetime
    is_on_diet: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MealListResponse(BaseModel):
    """GET /meals: every meal of the session's user, newest date_time first."""
    meals: List[MealResponse]


class MealDetailResponse(BaseModel):
    """GET/PUT /meals/{id}: a single meal wrapped under `meal`."""
    meal: MealResponse


class MealDeletedResponse(BaseModel):
    message: str = Field(default="Meal deleted")


class MealMetricsResponse(BaseModel):
    """
    GET /meals/metrics.

    Invariant: meals_on_diet + meals_off_diet == total_meals.
    best_sequence_on_diet is the longest run of consecutive on-diet meals in
    insertion order.
    """
    total_meals: int = Field(alias="totalMeals", ge=0)
    meals_on_diet: int = Field(alias="mealsOnDiet", ge=0)
    meals_off_diet: int = Field(alias="mealsOffDiet", ge=0)
    best_sequence_on_diet: int = Field(alias="bestSequenceOnDiet", ge=0)

    model_config = {"populate_by_name": True}
