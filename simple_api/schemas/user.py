"""User Schemas - Pydantic models for the HTTP boundary.

Invariants:
    - UserCreate only checks shape (two strings); emptiness is a domain rule in core/users.py
    - UserResponse never exposes updated_at or the raw _id

Design Decisions:
    - Shape errors surface as malformed_request, emptiness as validation_error,
      so the two failure kinds keep distinct codes
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from simple_api.core.domain_types import StoredUser


class UserCreate(BaseModel):
    """POST /users body."""
    model_config = ConfigDict(extra="ignore")

    name: str
    email: str


class UserResponse(BaseModel):
    """Public-facing user."""
    id: str
    name: str
    email: str
    created_at: datetime

    @classmethod
    def from_stored(cls, user: StoredUser) -> "UserResponse":
        return cls(
            id=user.id, name=user.name, email=user.email,
            created_at=user.created_at,
        )


class ErrorResponse(BaseModel):
    """Error envelope, documented in the OpenAPI schema."""
    error: str
    message: str
