from fastapi import APIRouter, HTTPException, Depends, Body
from pydantic import BaseModel, Field
from typing import List, Dict
from core.database import Database, get_db
from core.errors import ValidationError, NotFoundError, PersistenceError
from models.room_model import RoomStore
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/rooms", tags=["rooms"])


class RoomListResponse(BaseModel):
    """All rooms with their embedded devices."""
    rooms: List[Dict] = Field(..., description="Rooms in storage order; empty when none are seeded")


class RoomResponse(BaseModel):
    room: Dict = Field(..., description="Room document including its devices")


class DeviceStateResponse(BaseModel):
    """Response after changing a device's state."""
    success: bool = Field(True, description="Always true on success")
    room: Dict = Field(..., description="Owning room after the update")


@router.get("", response_model=RoomListResponse)
async def list_rooms(db: Database = Depends(get_db)):
    """Get all rooms.

    An empty list is a normal answer: it means no rooms have been seeded yet
    and the client should fall back to its own defaults.
    """
    try:
        return {"rooms": RoomStore(db).list_all()}
    except PersistenceError as e:
        logger.error(f"❌ Error fetching rooms: {e}")
        raise HTTPException(status_code=500, detail="Error fetching rooms")


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(room_id: str, db: Database = Depends(get_db)):
    """Get one room by its id.

    **Status Codes:**
    - 200: Room found
    - 404: No room with that id
    - 500: Server error
    """
    try:
        return {"room": RoomStore(db).get_by_id(room_id)}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceError as e:
        logger.error(f"❌ Error fetching room {room_id}: {e}")
        raise HTTPException(status_code=500, detail="Error fetching room")


@router.patch("/{room_id}/devices/{device_id}/state", response_model=DeviceStateResponse)
async def update_device_state(
    room_id: str,
    device_id: str,
    state: Dict = Body(..., examples=[{"isOn": True, "brightness": 80}]),
    db: Database = Depends(get_db)
):
    """Change part of a device's state.

    Only the supplied fields (isOn, brightness, fanSpeed, temperature, mode)
    are written; the rest of the device and the room are left as stored.

    **Status Codes:**
    - 200: State updated
    - 400: Empty body or invalid field
    - 404: Room or device not found
    - 500: Server error
    """
    try:
        room = RoomStore(db).update_device_state(room_id, device_id, state)
        logger.info(f"✅ Updated state of device {device_id} in room {room_id}")
        return {"success": True, "room": room}
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceError as e:
        logger.error(f"❌ Error updating device {device_id}: {e}")
        raise HTTPException(status_code=500, detail="Error updating device state")
