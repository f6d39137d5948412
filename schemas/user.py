"""User collection schema."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """User collection model."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    username: Optional[str] = Field(None, description="Display name, not required to be unique")


def user_serializer(user: dict) -> dict:
    """Serialize a MongoDB user document for the API."""
    return {"_id": str(user["_id"]), "username": user.get("username")}
