"""Exercise routes: logging exercises and querying a user's log."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from api.request_body import read_request_payload
from api.user_routes import delete_result_serializer
from models.database import find_user_filter, get_exercises_collection, get_users_collection
from schemas.exercise import Exercise
from utils.helpers import (
    EPOCH_DATE,
    format_long_date,
    json_number,
    parse_int,
    parse_limit,
    today_iso,
)
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api", tags=["exercises"])

NO_SUCH_USER = {"message": "There are no users with that ID in the database!"}

LOG_PROJECTION = {"description": 1, "duration": 1, "date": 1}


async def find_user(users_collection, user_id: str) -> Optional[dict]:
    """Look up a user by id; malformed ids raise InvalidId."""
    return await users_collection.find_one(find_user_filter(user_id))


def log_entry_serializer(exercise: dict) -> Dict[str, Any]:
    """Serialize a projected exercise document as a log entry."""
    return {
        "description": exercise.get("description"),
        "duration": json_number(exercise.get("duration")),
        "date": format_long_date(exercise.get("date")),
    }


@router.get("/exercises/delete")
async def delete_all_exercises(exercises_collection=Depends(get_exercises_collection)):
    """Delete every exercise."""
    logger.info("Deleting all exercises")

    try:
        result = await exercises_collection.delete_many({})
        return {
            "message": "All exercises have been deleted!",
            "result": delete_result_serializer(result),
        }
    except Exception as e:
        logger.error(f"Error deleting all exercises: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Deleting all exercises failed!"})


@router.post("/users/{user_id}/exercises")
async def add_exercise(
    user_id: str,
    payload: Dict[str, Any] = Depends(read_request_payload),
    users_collection=Depends(get_users_collection),
    exercises_collection=Depends(get_exercises_collection),
):
    """
    Add an exercise for a user.
    The response `_id` is the user's id, not the new exercise's.
    """
    logger.info("Adding a new exercise")

    try:
        user = await find_user(users_collection, user_id)
        if not user:
            return NO_SUCH_USER

        exercise = Exercise(
            userId=str(user["_id"]),
            username=user.get("username"),
            description=payload.get("description"),
            duration=parse_int(payload.get("duration")),
            date=payload.get("date") or today_iso(),
        )
        await exercises_collection.insert_one(exercise.model_dump(exclude_none=True))

        return {
            "username": user.get("username"),
            "description": exercise.description,
            "duration": json_number(exercise.duration),
            "date": format_long_date(exercise.date),
            "_id": str(user["_id"]),
        }
    except Exception as e:
        logger.error(f"Error adding exercise: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Exercise creation failed!"})


@router.get("/users/{user_id}/logs")
async def get_user_log(
    user_id: str,
    date_from: Optional[str] = Query(None, alias="from", description="Earliest date, YYYY-MM-DD"),
    date_to: Optional[str] = Query(None, alias="to", description="Latest date, YYYY-MM-DD"),
    limit: Optional[str] = Query(None, description="Maximum entries; 0 or missing means no limit"),
    users_collection=Depends(get_users_collection),
    exercises_collection=Depends(get_exercises_collection),
):
    """
    Get a user's exercise log.
    Dates are compared as YYYY-MM-DD strings, both bounds inclusive.
    """
    date_from = date_from or EPOCH_DATE
    date_to = date_to or today_iso()
    max_entries = parse_limit(limit)

    logger.info("Getting the log of a user")

    try:
        user = await find_user(users_collection, user_id)
        if not user:
            return NO_SUCH_USER

        logger.info(f"Looking for exercises with id [{user_id}] ...")

        cursor = exercises_collection.find(
            {"userId": str(user["_id"]), "date": {"$gte": date_from, "$lte": date_to}},
            LOG_PROJECTION,
        )
        # A MongoDB limit of 0 already means "no limit"; only set one when asked
        if max_entries:
            cursor.limit(max_entries)

        exercises = await cursor.to_list(length=None)
        log = [log_entry_serializer(exercise) for exercise in exercises]

        return {
            "_id": str(user["_id"]),
            "username": user.get("username"),
            "count": len(log),
            "log": log,
        }
    except Exception as e:
        logger.error(f"Error retrieving user log: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Error retrieving user log!"})
