"""
Daily Diet Backend: Session Dependencies
==========================================

What:  FastAPI dependencies guarding the meal routes.
How:   require_session_id rejects requests without a session cookie.
       get_current_user builds on it and resolves the token to a user row.

Usage:
    @router.get("/meals")
    async def list_meals(
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db_session),
    ):
        ...

FastAPI caches dependencies per request, so the handler and
get_current_user share one database session.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from dailydiet.config import settings
from dailydiet.database import get_db_session
from dailydiet.exceptions import UnauthorizedError
from dailydiet.models.user import User
from dailydiet.services.user_service import user_service


async def require_session_id(request: Request) -> str:
    """
    Session guard: returns the session token or raises 401.

    Only checks presence; whether the token belongs to a user is decided by
    get_current_user.
    """
    session_id = request.cookies.get(settings.session_cookie_name)
    if not session_id:
        raise UnauthorizedError(message="Unauthorized")
    return session_id


async def get_current_user(
    session_id: str = Depends(require_session_id),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """The user owning the request's session. Unknown tokens get 401."""
    return await user_service.get_user_by_session(db, session_id)
