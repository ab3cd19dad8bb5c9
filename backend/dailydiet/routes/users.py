"""
Daily Diet Backend: User Route Handlers
=========================================

What:  GET /users (liveness text) and POST /users (registration).

Registration and the session cookie:
    - No sessionId cookie on the request: mint a UUID4 token and set it as
      the cookie (path "/", max-age 7 days by default).
    - Cookie already present: reuse it and send no Set-Cookie header.
    Either way a new user row is inserted under that token.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from dailydiet.config import settings
from dailydiet.database import get_db_session
from dailydiet.schemas.common import ErrorResponse
from dailydiet.schemas.user import UserCreate, UserResponse
from dailydiet.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_class=PlainTextResponse,
    summary="Liveness text",
)
async def hello() -> str:
    return "Hello World"


@router.post(
    "",
    status_code=201,
    response_model=UserResponse,
    responses={
        201: {"description": "User registered", "model": UserResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a user and open a session",
)
async def create_user(
    body: UserCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """
    Register a user under the request's session, creating the session if needed.

    The cookie is set on the injected Response; FastAPI merges its headers
    into the serialized 201 response.
    """
    session_id = request.cookies.get(settings.session_cookie_name)

    if not session_id:
        session_id = str(uuid.uuid4())
        response.set_cookie(
            key=settings.session_cookie_name,
            value=session_id,
            path="/",
            max_age=settings.session_max_age,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="lax",
        )
        logger.debug("Issued new session cookie")

    user = await user_service.register_user(
        db=db,
        name=body.name,
        email=body.email,
        session_id=session_id,
    )
    return UserResponse.model_validate(user)
