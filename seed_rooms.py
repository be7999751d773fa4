#!/usr/bin/env python
"""
Reset the rooms collection and load the default rooms and devices.

Usage: python seed_rooms.py

Every existing room is deleted first.
"""
import logging
import sys

from core.database import db
from core.errors import SmartHomeError
from models.room_seed import seed_rooms

logger = logging.getLogger(__name__)


def main():
    db.ping()
    seed_rooms(db)
    logger.info("✅ All rooms seeded successfully")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        main()
    except SmartHomeError as e:
        logger.error(f"❌ Error seeding rooms: {e}")
        sys.exit(1)
    finally:
        db.close()
