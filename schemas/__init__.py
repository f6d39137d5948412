"""Collection schemas organized by collection type."""

from schemas.exercise import Exercise
from schemas.user import User, user_serializer

__all__ = [
    "Exercise",
    "User",
    "user_serializer",
]
