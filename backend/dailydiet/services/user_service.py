"""
Daily Diet Backend: User Service
==================================

What:  Registration and session lookup for users.
Who:   POST /users calls register_user; the get_current_user dependency calls
       get_user_by_session on every meal request.

Session semantics:
    A session token is an opaque string stored in the sessionId cookie.
    Several users may share one token (re-registering from a browser that
    already holds a cookie). Lookups resolve to the oldest such user.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dailydiet.exceptions import DatabaseError, UnauthorizedError
from dailydiet.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    """Stateless query layer for the users table."""

    async def register_user(
        self,
        db: AsyncSession,
        name: str,
        email: str,
        session_id: str,
    ) -> User:
        """
        Insert a new user bound to `session_id`.

        No uniqueness checks: duplicate emails and shared session tokens are
        both accepted.

        Raises:
            DatabaseError: Insert failed (→ 500)
        """
        user = User(name=name, email=email, session_id=session_id)
        try:
            db.add(user)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not register the user. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User registered: %s", user.id)
        return user

    async def find_user_by_session(
        self, db: AsyncSession, session_id: str
    ) -> Optional[User]:
        """Return the user owning `session_id`, or None."""
        try:
            result = await db.execute(
                select(User)
                .where(User.session_id == session_id)
                .order_by(User.created_at.asc())
                .limit(1)
            )
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("Database error resolving session: %s", str(e))
            raise DatabaseError(
                message="Could not resolve the session. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_user_by_session(self, db: AsyncSession, session_id: str) -> User:
        """
        Resolve the acting user for a request.

        Raises:
            UnauthorizedError: No user carries this session token (→ 401)
            DatabaseError: Query execution failed (→ 500)
        """
        user = await self.find_user_by_session(db, session_id)
        if user is None:
            logger.info("Rejected unknown session token")
            raise UnauthorizedError(message="Session does not match any user")
        return user


user_service = UserService()
