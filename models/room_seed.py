import logging
from pymongo.errors import PyMongoError
from core.errors import PersistenceError
from models.room_model import RoomStore

logger = logging.getLogger(__name__)

DEFAULT_ROOMS = [
    {
        "id": "1",
        "name": "Living Room",
        "description": "Main living space",
        "type": "livingRoom",
        "isFavorite": False,
        "devices": [
            {
                "id": "d1",
                "name": "Main Light",
                "type": "light",
                "roomId": "1",
                "isOnline": True,
                "state": {"isOn": False, "brightness": 100},
                "currentLoad": 50.5
            },
            {
                "id": "d2",
                "name": "Ceiling Fan",
                "type": "fan",
                "roomId": "1",
                "isOnline": True,
                "state": {"isOn": False, "fanSpeed": 3},
                "currentLoad": 60.0
            },
            {
                "id": "d3",
                "name": "Smart TV",
                "type": "tv",
                "roomId": "1",
                "isOnline": True,
                "state": {"isOn": False},
                "currentLoad": 120.0
            },
            {
                "id": "d4",
                "name": "Air Conditioner",
                "type": "airConditioner",
                "roomId": "1",
                "isOnline": True,
                "state": {"isOn": False, "temperature": 26, "mode": "cool"},
                "currentLoad": 900.0
            }
        ]
    },
    {
        "id": "2",
        "name": "Bedroom 1",
        "description": "Master bedroom",
        "type": "bedroom1",
        "isFavorite": False,
        "devices": [
            {
                "id": "d5",
                "name": "Bedside Lamp",
                "type": "light",
                "roomId": "2",
                "isOnline": True,
                "state": {"isOn": False, "brightness": 50},
                "currentLoad": 25.0
            },
            {
                "id": "d6",
                "name": "Ceiling Fan",
                "type": "fan",
                "roomId": "2",
                "isOnline": True,
                "state": {"isOn": False, "fanSpeed": 2},
                "currentLoad": 40.0
            },
            {
                "id": "d7",
                "name": "TV",
                "type": "tv",
                "roomId": "2",
                "isOnline": True,
                "state": {"isOn": False},
                "currentLoad": 120.0
            },
            {
                "id": "d8",
                "name": "AC",
                "type": "airConditioner",
                "roomId": "2",
                "isOnline": True,
                "state": {"isOn": True, "temperature": 24, "mode": "cool"},
                "currentLoad": 900.0
            }
        ]
    }
]


def seed_rooms(db, rooms=DEFAULT_ROOMS):
    """Wipe the rooms collection and load the default rooms. Destructive."""
    try:
        deleted = db.rooms.delete_many({}).deleted_count
    except PyMongoError as e:
        raise PersistenceError(str(e)) from e
    logger.info(f"🗑️  Removed {deleted} existing rooms")

    store = RoomStore(db)
    seeded = []
    for room_data in rooms:
        room = store.upsert(room_data["id"], room_data)
        logger.info(f"✅ Seeded room: {room['name']} ({room['id']})")
        seeded.append(room)
    return seeded
