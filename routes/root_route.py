from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint with a short API index"""
    return {
        "message": "🏠 Smart Home API",
        "version": "1.0.0",
        "status": "running",
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "identity": {
            "resolution": "Bearer token user_id, then ?userId=, then the default demo user",
            "token_type": "Bearer JWT (optional)"
        },
        "endpoints": {
            "users": {
                "GET /api/users/profile": "Get profile (placeholder if none stored)",
                "PUT /api/users/profile": "Create or update profile fields"
            },
            "rooms": {
                "GET /api/rooms": "List rooms with their devices",
                "GET /api/rooms/{roomId}": "Get one room",
                "PATCH /api/rooms/{roomId}/devices/{deviceId}/state": "Change part of a device's state"
            },
            "energy": {
                "POST /api/energy": "Store a power sample {deviceId, watts, timestamp}",
                "GET /api/energy": "List samples (filters: start, end, deviceId), newest first, max 1000"
            },
            "health": {
                "GET /health": "Health check"
            }
        }
    }
