from fastapi import APIRouter, HTTPException, Depends, Body, Query
from pydantic import BaseModel, Field
from typing import Dict, Optional
from core.database import Database, get_db
from core.auth import get_optional_user, resolve_user_id
from core.errors import ValidationError, PersistenceError
from models.user_profile_model import UserProfileStore
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


class ProfileResponse(BaseModel):
    """User profile with homes and settings."""
    profile: Dict = Field(..., description="Stored profile, or a default placeholder when none exists")


class ProfileUpsertResponse(BaseModel):
    """Response after creating or updating a profile."""
    success: bool = Field(True, description="Always true on success")
    profile: Dict = Field(..., description="Full profile after the write")


@router.get("/profile", response_model=ProfileResponse, tags=["users"])
async def get_profile(
    userId: Optional[str] = Query(None, description="Profile to read when no Bearer token is sent"),
    current_user: Optional[dict] = Depends(get_optional_user),
    db: Database = Depends(get_db)
):
    """Get the acting user's profile.

    The user is taken from the Bearer token if one is sent, otherwise from the
    ``userId`` query parameter, otherwise the default demo user. A user with no
    stored profile gets a placeholder ("Guest User", one home) that is not saved.

    **Status Codes:**
    - 200: Profile returned
    - 401: Invalid or expired token
    - 500: Server error
    """
    try:
        user_id = resolve_user_id(current_user, userId)
        if not user_id:
            raise HTTPException(status_code=400, detail="userId is required")
        return {"profile": UserProfileStore(db).get_by_user_id(user_id)}
    except HTTPException:
        raise
    except PersistenceError as e:
        logger.error(f"❌ Error getting profile: {e}")
        raise HTTPException(status_code=500, detail="Error fetching profile")


@router.put("/profile", response_model=ProfileUpsertResponse, tags=["users"])
async def upsert_profile(
    payload: Dict = Body(..., examples=[{
        "name": "Alice",
        "address": "12 Lake Road",
        "preferredUnit": "Rs",
        "homes": [{"id": "h1", "name": "My Home", "address": "12 Lake Road"}],
        "settings": {"themeMode": 1, "language": 0}
    }]),
    userId: Optional[str] = Query(None, description="Profile to write when no Bearer token is sent"),
    current_user: Optional[dict] = Depends(get_optional_user),
    db: Database = Depends(get_db)
):
    """Create or update the acting user's profile.

    Each top-level field in the body replaces the stored value; fields left out
    keep their stored value (or their default on a new profile). A ``settings``
    object replaces all settings, with unspecified ones reset to defaults.

    **Status Codes:**
    - 200: Profile saved
    - 400: No user could be determined, or a field is invalid
    - 401: Invalid or expired token
    - 500: Server error
    """
    try:
        user_id = resolve_user_id(current_user, userId, payload.get("userId"))
        profile = UserProfileStore(db).upsert(user_id, payload)
        logger.info(f"✅ Profile saved for user: {profile['userId']}")
        return {"success": True, "profile": profile}
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        logger.error(f"❌ Error saving profile: {e}")
        raise HTTPException(status_code=500, detail="Error saving profile")
