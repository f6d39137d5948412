"""Exercise collection schema."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Exercise(BaseModel):
    """Exercise collection model.

    `duration` is an int when the input parsed, otherwise NaN (a float).
    `date` is kept as the raw YYYY-MM-DD text so range queries compare
    lexicographically.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    userId: str = Field(..., description="Id of the user who logged the exercise")
    username: Optional[str] = Field(None, description="Username copied from the user at creation")
    description: str = Field(..., min_length=1, description="What was done")
    duration: Union[int, float] = Field(..., description="Duration in minutes")
    date: str = Field(..., description="Exercise date as YYYY-MM-DD")
