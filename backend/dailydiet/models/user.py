"""
Daily Diet Backend: User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table.
Who:   Written by UserService at registration; read by the session lookup
       that resolves the acting user on every meal request.

Table Design:
    - UUID primary key generated in Python
    - session_id: opaque cookie token; indexed for the per-request lookup.
      NOT unique: registering twice from the same browser stores two users
      sharing one token, and the lookup resolves to the oldest of them.
    - Rows are immutable after insert and never deleted by the API.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from dailydiet.database import Base


class User(Base):
    """A registered diner, identified on each request by their session token."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    session_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Opaque token stored in the sessionId cookie",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
