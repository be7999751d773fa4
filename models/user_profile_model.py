from pydantic import ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from typing import Any, Dict, List, Literal, Optional

from core.errors import ValidationError, PersistenceError
from core.utils import describe_validation_error, serialize_document, utcnow
from models.common import CamelModel

ADDRESS_PLACEHOLDER = "—"
DEFAULT_PROFILE_NAME = "Guest User"


class Home(CamelModel):
    id: str
    name: str
    address: str = ADDRESS_PLACEHOLDER


class Settings(CamelModel):
    """App settings. themeMode and language are enum indices owned by the client."""
    theme_mode: int = 0
    language: int = 2
    notifications_power: bool = True
    notifications_automation: bool = True
    notifications_updates: bool = True
    accessibility_mode: bool = False


class UserProfile(CamelModel):
    user_id: str
    name: str = DEFAULT_PROFILE_NAME
    address: str = ADDRESS_PLACEHOLDER
    preferred_unit: Literal["kWh", "Rs"] = "kWh"
    homes: List[Home] = Field(default_factory=list)
    settings: Settings = Field(default_factory=Settings)


class UserProfileUpdate(CamelModel):
    """Top-level fields that may be written by an upsert. Absent fields are left alone."""
    model_config = ConfigDict(extra="ignore")

    user_id: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    preferred_unit: Optional[Literal["kWh", "Rs"]] = None
    homes: Optional[List[Home]] = None
    settings: Optional[Settings] = None


def default_profile(user_id: str) -> Dict:
    """Placeholder profile served when nothing is stored for ``user_id``"""
    profile = UserProfile(
        user_id=user_id,
        homes=[Home(id="h1", name="My Home")]
    )
    return profile.model_dump(by_alias=True)


class UserProfileStore:
    def __init__(self, db):
        self.collection = db.user_profiles

    def get_by_user_id(self, user_id: str) -> Dict:
        """Stored profile, or a synthesized default that is not persisted"""
        try:
            profile = self.collection.find_one({"userId": user_id})
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e
        if not profile:
            return default_profile(user_id)
        return serialize_document(profile)

    def upsert(self, user_id: Optional[str], fields: Dict[str, Any]) -> Dict:
        """Create or field-merge the profile keyed by ``user_id``.

        Every top-level field present in ``fields`` replaces the stored value;
        a new record takes schema defaults for the rest. The identity falls back
        to ``fields["userId"]`` when ``user_id`` is not given.
        """
        fields = dict(fields or {})
        user_id = user_id or fields.get("userId")
        if not user_id:
            raise ValidationError("userId is required")

        fields["userId"] = user_id
        try:
            update = UserProfileUpdate.model_validate(fields)
        except PydanticValidationError as e:
            raise ValidationError(describe_validation_error(e))

        # top-level keys come from the request; nested models keep their defaults
        dumped = update.model_dump(by_alias=True)
        payload = {}
        for name in update.model_fields_set:
            key = UserProfileUpdate.model_fields[name].alias or name
            if dumped[key] is None:
                raise ValidationError(f"{key}: may not be null")
            payload[key] = dumped[key]

        now = utcnow()
        payload["updatedAt"] = now
        defaults = UserProfile(user_id=user_id).model_dump(by_alias=True)
        on_insert = {key: value for key, value in defaults.items() if key not in payload}
        on_insert["createdAt"] = now

        try:
            profile = self.collection.find_one_and_update(
                {"userId": user_id},
                {"$set": payload, "$setOnInsert": on_insert},
                upsert=True,
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e
        return serialize_document(profile)
