#!/usr/bin/env python
"""
Seed the default user profile.

Usage: python seed.py
"""
import logging
import sys

from core.database import db
from core.errors import SmartHomeError
from models.profile_seed import seed_profile

logger = logging.getLogger(__name__)


def main():
    db.ping()
    seed_profile(db)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        main()
    except SmartHomeError as e:
        logger.error(f"❌ Error seeding profile: {e}")
        sys.exit(1)
    finally:
        db.close()
