"""User Rules - pure validation for user input and identifiers.

Invariants:
    - name is checked before email (name error wins when both are empty)
    - Emptiness is judged on the stripped value; the stored value is untouched
    - No email format, length or uniqueness rules

Design Decisions:
    - Plain functions raising domain errors: callable from routes and admin
      verbs alike without a Pydantic model in between
"""

from bson import ObjectId

from simple_api.core.domain_types import NewUser, UserId
from simple_api.core.errors import InvalidIdFormatError, ValidationError


def new_user(name: str, email: str) -> NewUser:
    """Validate required fields and build a NewUser."""
    if not name or not name.strip():
        raise ValidationError("Name is required", field="name")
    if not email or not email.strip():
        raise ValidationError("Email is required", field="email")
    return NewUser(name=name, email=email)


def parse_user_id(raw: str) -> UserId:
    """Normalize a path identifier or raise InvalidIdFormatError."""
    if not isinstance(raw, str) or not ObjectId.is_valid(raw):
        raise InvalidIdFormatError(str(raw))
    return UserId(str(ObjectId(raw)))
