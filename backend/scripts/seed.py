# scripts/seed.py
"""
Create tables and the initial admin account.

    cd backend && python -m scripts.seed
"""
import asyncio
import os

from realty.core.logging import get_logger, setup_logging
from realty.db import models  # noqa: F401
from realty.db.base import Base
from realty.db.crud_users import create_user, get_user_by_email
from realty.db.session import AsyncSessionLocal, engine

logger = get_logger("realty.seed")

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@deeprealties.in")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin123")


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        if await get_user_by_email(db, ADMIN_EMAIL):
            logger.info("admin %s already exists", ADMIN_EMAIL)
            return
        admin = await create_user(
            db,
            full_name="Admin User",
            email=ADMIN_EMAIL,
            password=ADMIN_PASSWORD,
            phone="+919999999999",
            role="admin",
        )
        logger.info("created admin %s (id=%s)", admin.email, admin.id)


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed())
