from fastapi import APIRouter, Depends
from datetime import datetime, timezone
from core.database import Database, get_db

router = APIRouter(prefix="/health")


@router.get("")
async def health_check(db: Database = Depends(get_db)):
    """Health check endpoint"""
    try:
        db.client.admin.command("ping")
        database = "connected"
    except Exception:
        database = "disconnected"
    return {
        "ok": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": database
    }
