"""
Daily Diet Backend: Meal SQLAlchemy Model
===========================================

What:  ORM model representing the `meals` table.
How:   Every query MealService issues filters on `user_id`, so a meal is only
       reachable through its owner's session.

Query Patterns:
    - List a user's meals: WHERE user_id = :uid ORDER BY date_time DESC
      → idx_meals_user_date_time
    - Single meal: WHERE id = :id AND user_id = :uid → primary key
    - Metrics scan: WHERE user_id = :uid ORDER BY created_at ASC
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from dailydiet.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Meal(Base):
    """
    A single meal recorded by a user.

    Lifecycle:
        1. Created via POST /meals (created_at = updated_at = now)
        2. Replaced via PUT /meals/{id} (updated_at refreshed)
        3. Removed via DELETE /meals/{id}
    """

    __tablename__ = "meals"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # When the meal was eaten, as reported by the client
    date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    is_on_diet: Mapped[bool] = mapped_column(Boolean, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_meals_user_date_time", user_id, date_time.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Meal(id={self.id}, user_id={self.user_id}, "
            f"is_on_diet={self.is_on_diet})>"
        )
