from pydantic import ConfigDict, Field, JsonValue, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from core.errors import ValidationError, NotFoundError, PersistenceError
from core.utils import describe_validation_error, serialize_document, utcnow
from models.common import CamelModel, Number


class DeviceState(CamelModel):
    """Live state of a device. Fields that mean nothing for a device type are simply ignored."""
    is_on: bool = False
    brightness: Optional[Number] = None
    fan_speed: Optional[Number] = None
    temperature: Optional[Number] = None  # °C setpoint
    mode: Optional[str] = None  # e.g. "cool"


class DeviceStateUpdate(CamelModel):
    """Partial state change for a single device; only supplied fields are written"""
    model_config = ConfigDict(extra="forbid")

    is_on: Optional[bool] = None
    brightness: Optional[Number] = None
    fan_speed: Optional[Number] = None
    temperature: Optional[Number] = None
    mode: Optional[str] = None


class Device(CamelModel):
    id: str
    name: str
    type: str  # free-form category: light, fan, tv, airConditioner...
    room_id: Optional[str] = None
    is_online: bool = False
    state: DeviceState = Field(default_factory=DeviceState)
    current_load: Optional[Number] = None  # W
    last_update: Optional[datetime] = None
    properties: Optional[JsonValue] = None

    @field_validator("last_update")
    @classmethod
    def as_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class Room(CamelModel):
    """A room together with the devices it owns"""
    id: str
    name: str
    type: str  # free-form, e.g. "livingRoom"
    description: str = ""
    devices: List[Device] = Field(default_factory=list)
    image_url: Optional[str] = None
    is_favorite: bool = False

    @model_validator(mode="after")
    def check_devices(self):
        seen = set()
        for device in self.devices:
            if device.room_id is None:
                device.room_id = self.id
            elif device.room_id != self.id:
                raise ValueError(
                    f"device '{device.id}' has roomId '{device.room_id}' but belongs to room '{self.id}'"
                )
            if device.id in seen:
                raise ValueError(f"duplicate device id '{device.id}' in room '{self.id}'")
            seen.add(device.id)
        return self


class RoomStore:
    def __init__(self, db):
        self.collection = db.rooms

    def list_all(self) -> List[Dict]:
        """Every room in store order. An empty list just means nothing has been seeded yet."""
        try:
            return [serialize_document(room) for room in self.collection.find({})]
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e

    def get_by_id(self, room_id: str) -> Dict:
        try:
            room = self.collection.find_one({"id": room_id})
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e
        if not room:
            raise NotFoundError("Room not found")
        return serialize_document(room)

    def upsert(self, room_id: str, document: Dict[str, Any]) -> Dict:
        """Replace the whole room document, device list included, creating it if absent.

        Unlike profile upserts this never merges: fields missing from ``document``
        fall back to their defaults. ``createdAt`` is kept across replacements.
        """
        try:
            room = Room.model_validate({**document, "id": room_id})
        except PydanticValidationError as e:
            raise ValidationError(describe_validation_error(e))

        now = utcnow()
        replacement = room.model_dump(by_alias=True, exclude_none=True)
        replacement["updatedAt"] = now
        try:
            existing = self.collection.find_one({"id": room_id}, {"createdAt": 1})
            replacement["createdAt"] = (existing or {}).get("createdAt", now)
            stored = self.collection.find_one_and_replace(
                {"id": room_id},
                replacement,
                upsert=True,
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e
        return serialize_document(stored)

    def update_device_state(self, room_id: str, device_id: str, partial_state: Dict[str, Any]) -> Dict:
        """Merge state fields into one device of a room.

        Only the named state fields of that device are written, so concurrent
        toggles of different devices in the same room do not overwrite each other.
        The device is addressed by its array index, and the write only matches
        while that index still holds the same device id.
        """
        if not isinstance(partial_state, dict) or not partial_state:
            raise ValidationError("No state fields supplied")
        try:
            update = DeviceStateUpdate.model_validate(partial_state)
        except PydanticValidationError as e:
            raise ValidationError(describe_validation_error(e))

        fields = update.model_dump(by_alias=True, exclude_unset=True)
        for key, value in fields.items():
            if value is None:
                raise ValidationError(f"{key}: may not be null")

        try:
            room = self.collection.find_one({"id": room_id})
            if not room:
                raise NotFoundError("Room not found")
            index = next(
                (i for i, device in enumerate(room.get("devices", [])) if device.get("id") == device_id),
                None
            )
            if index is None:
                raise NotFoundError("Device not found")

            now = utcnow()
            changes = {f"devices.{index}.state.{key}": value for key, value in fields.items()}
            changes[f"devices.{index}.lastUpdate"] = now
            changes["updatedAt"] = now

            stored = self.collection.find_one_and_update(
                {"id": room_id, f"devices.{index}.id": device_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e
        if stored is None:
            # room replaced or reordered between the lookup and the write
            raise NotFoundError("Device not found")
        return serialize_document(stored)
