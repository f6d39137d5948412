"""User routes: listing, creation and bulk deletion."""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.request_body import read_request_payload
from models.database import get_users_collection
from schemas.user import User, user_serializer
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def delete_result_serializer(result) -> Dict[str, Any]:
    """Serialize a pymongo DeleteResult."""
    return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}


@router.get("/delete")
async def delete_all_users(users_collection=Depends(get_users_collection)):
    """Delete every user. Exercises are left in place."""
    logger.info("Deleting all users")

    try:
        result = await users_collection.delete_many({})
        return {
            "message": "All users have been deleted!",
            "result": delete_result_serializer(result),
        }
    except Exception as e:
        logger.error(f"Error deleting all users: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Deleting all users failed!"})


@router.get("")
async def get_all_users(users_collection=Depends(get_users_collection)):
    """
    Get all users.
    Returns a message object instead of an empty list when there are none.
    """
    logger.info("Getting all users")

    try:
        users = await users_collection.find({}).to_list(length=None)
        if not users:
            return {"message": "There are no users in the database!"}

        logger.info(f"Users in database: {len(users)}")
        return [user_serializer(user) for user in users]
    except Exception as e:
        logger.error(f"Error getting all users: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Getting all users failed!"})


@router.post("")
async def create_user(
    payload: Dict[str, Any] = Depends(read_request_payload),
    users_collection=Depends(get_users_collection),
):
    """Create a new user. Duplicate usernames are allowed."""
    logger.info("Creating a new user")

    try:
        user = User(username=payload.get("username"))
        document = user.model_dump(exclude_none=True)

        result = await users_collection.insert_one(document)
        return {"username": user.username, "_id": str(result.inserted_id)}
    except Exception as e:
        logger.error(f"Error creating user: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": "User creation failed!"})
