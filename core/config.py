import os
from dotenv import load_dotenv

load_dotenv()

# MongoDB
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/smarthome")
MONGODB_DEFAULT_DB = "smarthome"
MONGODB_TIMEOUT_MS = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Identity used when no token or explicit userId is supplied
DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "u1")
SECRET_KEY = os.getenv("SECRET_KEY", "smarthome-local-development-secret-key")

# Hard cap on energy query results
ENERGY_QUERY_LIMIT = int(os.getenv("ENERGY_QUERY_LIMIT", "1000"))
