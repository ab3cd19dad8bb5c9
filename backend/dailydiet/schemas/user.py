"""
Daily Diet Backend: User Request/Response Schemas
===================================================

The session token never appears in a response body; it travels only in the
sessionId cookie.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Body of POST /users. Email is stored as given, without format checks."""
    name: str = Field(description="Display name")
    email: str = Field(description="Contact email")


class UserResponse(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}
