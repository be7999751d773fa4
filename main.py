from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from core.config import HOST, PORT, LOG_LEVEL
from core.database import db, mask_uri
from core.errors import ConnectionFailure, PersistenceError
from routes.root_route import router as root_router
from routes.health_routes import router as health_router
from routes.user_routes import router as user_router
from routes.room_routes import router as room_router
from routes.energy_routes import router as energy_router
import logging

logging.basicConfig(level=LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="Smart Home API", version="1.0.0")

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # 400 instead of FastAPI's default 422
    return JSONResponse(status_code=400, content={"detail": jsonable_errors(exc)})


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


@app.on_event("startup")
async def startup():
    try:
        db.ping()
        db.ensure_indexes()
    except ConnectionFailure as e:
        logger.error(f"❌ MongoDB connection error: {e}")
        logger.info("💡 Troubleshooting steps:")
        logger.info("   1. Check that the MongoDB server or Atlas cluster is running")
        logger.info("   2. Verify your IP is allowed to reach the cluster")
        logger.info("   3. Check username/password in MONGODB_URI")
        logger.info(f"   4. Connection string: {mask_uri(db.MONGODB_URI)}")
        raise SystemExit(1)
    except PersistenceError as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise SystemExit(1)


@app.on_event("shutdown")
async def shutdown():
    db.close()


# Routers
app.include_router(root_router)
app.include_router(health_router)
app.include_router(user_router, prefix="/api/users", tags=["users"])
app.include_router(room_router, prefix="/api")
app.include_router(energy_router, prefix="/api")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)
