from pydantic import BaseModel, Field
from pymongo import DESCENDING
from pymongo.errors import PyMongoError
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.config import ENERGY_QUERY_LIMIT
from core.errors import ValidationError, PersistenceError
from models.common import CamelModel
from core.utils import is_blank, to_float, to_datetime, optional_datetime, serialize_document, utcnow


class EnergySample(CamelModel):
    """One instantaneous power-draw reading for a device"""

    device_id: str
    timestamp: datetime
    watts: float  # W
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EnergySampleCreate(BaseModel):
    """Request body for POST /api/energy.

    ``watts`` may be a numeric string and ``timestamp`` any date
    representation; the store coerces both.
    """
    deviceId: Optional[Any] = Field(None, examples=["d1"])
    watts: Optional[Any] = Field(None, examples=[42.5])
    timestamp: Optional[Any] = Field(None, examples=["2024-01-01T00:00:00Z"])


def energy_filter(device_id: Optional[str] = None, start: Any = None, end: Any = None) -> Dict:
    """Translate external filter parameters into a MongoDB predicate.

    Both bounds are inclusive and independently optional; blank values are ignored.
    """
    query = {}
    if not is_blank(device_id):
        query["deviceId"] = device_id

    start_at = optional_datetime(start, "start")
    end_at = optional_datetime(end, "end")
    if start_at or end_at:
        query["timestamp"] = {}
        if start_at:
            query["timestamp"]["$gte"] = start_at
        if end_at:
            query["timestamp"]["$lte"] = end_at
    return query


class EnergySampleStore:
    def __init__(self, db):
        self.collection = db.energy_samples

    def append(self, device_id: Any, watts: Any, timestamp: Any) -> Dict:
        """Persist a new sample; samples are never merged or deduplicated"""
        if is_blank(device_id) or is_blank(watts) or is_blank(timestamp):
            raise ValidationError("Missing required fields: deviceId, watts, timestamp")

        now = utcnow()
        sample = EnergySample(
            device_id=str(device_id),
            watts=to_float(watts, "watts"),
            timestamp=to_datetime(timestamp, "timestamp"),
            created_at=now,
            updated_at=now
        )
        document = sample.model_dump(by_alias=True)
        try:
            self.collection.insert_one(document)
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e
        return serialize_document(document)

    def query(
        self,
        device_id: Optional[str] = None,
        start: Any = None,
        end: Any = None,
        limit: int = ENERGY_QUERY_LIMIT
    ) -> List[Dict]:
        """Matching samples, newest first, capped at ``limit`` records"""
        predicate = energy_filter(device_id, start, end)
        try:
            cursor = self.collection.find(predicate).sort("timestamp", DESCENDING).limit(limit)
            return [serialize_document(doc) for doc in cursor]
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e
