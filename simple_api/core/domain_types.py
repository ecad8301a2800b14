"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - UserId is always the 24-char lowercase hex form of an ObjectId
    - StoredUser is immutable once read back from storage

Design Decisions:
    - NewType over a wrapper class: zero runtime cost, type-checker support
    - Frozen dataclasses for entities: storage gateways hand out values, not live documents
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)

USER_ID_LENGTH = 24


# ─── Entities ────────────────────────────────────────────────────

@dataclass(frozen=True)
class NewUser:
    """A validated user that has not been persisted yet."""
    name: str
    email: str


@dataclass(frozen=True)
class StoredUser:
    """A persisted user with its storage-assigned identity."""
    id: UserId
    name: str
    email: str
    created_at: datetime


# ─── Enums ───────────────────────────────────────────────────────

class StorageBackend(str, Enum):
    """Which Storage Gateway implementation backs the API."""
    MONGO = "mongo"
    MEMORY = "memory"
