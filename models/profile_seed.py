import logging
from core.config import DEFAULT_USER_ID
from models.user_profile_model import UserProfileStore

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = {
    "name": "Guest User",
    "address": "—",
    "preferredUnit": "kWh",
    "homes": [{"id": "h1", "name": "My Home", "address": "—"}],
    "settings": {"themeMode": 0, "language": 2}
}


def seed_profile(db, user_id=DEFAULT_USER_ID):
    """Upsert the demo profile. Safe to run repeatedly."""
    profile = UserProfileStore(db).upsert(user_id, DEFAULT_PROFILE)
    logger.info(f"✅ Seeded profile: {profile['userId']}")
    return profile
