from fastapi import APIRouter, HTTPException, Depends, Query
from pydantic import BaseModel, Field
from typing import List, Dict, Optional
from core.database import Database, get_db
from core.errors import ValidationError, PersistenceError
from models.energy_model import EnergySampleStore, EnergySampleCreate
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/energy", tags=["energy"])


class CreateSampleResponse(BaseModel):
    """Response after storing an energy sample."""
    success: bool = Field(True, description="Always true on success")
    sample: Dict = Field(..., description="Stored sample with deviceId, timestamp, watts, createdAt, updatedAt")


class SampleListResponse(BaseModel):
    """Energy samples, newest first."""
    samples: List[Dict] = Field(..., description="At most 1000 samples ordered by timestamp descending")


@router.post("", status_code=201, response_model=CreateSampleResponse)
async def create_sample(body: EnergySampleCreate, db: Database = Depends(get_db)):
    """Store one power reading.

    **Request Body:**
    - deviceId: Device that produced the reading
    - watts: Instantaneous draw in watts (numeric strings are accepted)
    - timestamp: When the reading was taken (ISO 8601 or Unix epoch)

    **Status Codes:**
    - 201: Sample stored
    - 400: Missing field, non-numeric watts or unparseable timestamp
    - 500: Server error
    """
    try:
        sample = EnergySampleStore(db).append(body.deviceId, body.watts, body.timestamp)
        return {"success": True, "sample": sample}
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        logger.error(f"❌ Error storing energy sample: {e}")
        raise HTTPException(status_code=500, detail="Error storing energy sample")


@router.get("", response_model=SampleListResponse)
async def list_samples(
    start: Optional[str] = Query(None, description="Inclusive lower bound on timestamp"),
    end: Optional[str] = Query(None, description="Inclusive upper bound on timestamp"),
    deviceId: Optional[str] = Query(None, description="Only samples from this device"),
    db: Database = Depends(get_db)
):
    """List energy samples, newest first.

    Results are capped at 1000 records; there is no paging.
    """
    try:
        samples = EnergySampleStore(db).query(device_id=deviceId, start=start, end=end)
        return {"samples": samples}
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        logger.error(f"❌ Error fetching energy samples: {e}")
        raise HTTPException(status_code=500, detail="Error fetching energy samples")
