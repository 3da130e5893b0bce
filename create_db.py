# create_db.py
import asyncio
import logging

from sqlalchemy import select

from shared.auth import Role
from shared.db import Base, SessionLocal, engine
from shared.logging import configure_logging
from shared.settings import ADMIN_PASSWORD, ADMIN_USERNAME

# Import all models here so they are registered with SQLAlchemy's metadata
import services.school_admin.models  # noqa: F401
from services.school_admin.identity import IdentityProvider
from services.school_admin.models import UserAccount

logger = logging.getLogger("create_db")


async def init_models():
    async with engine.begin() as conn:
        logger.info("Creating tables...")
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Tables created.")


async def seed_admin():
    if not ADMIN_PASSWORD:
        logger.info("ADMIN_PASSWORD not set, skipping admin account")
        return
    async with SessionLocal() as session:
        existing = await session.execute(
            select(UserAccount).where(UserAccount.username == ADMIN_USERNAME)
        )
        if existing.scalars().first():
            logger.info("Admin account %s already exists", ADMIN_USERNAME)
            return
        await IdentityProvider(session).create_account(
            username=ADMIN_USERNAME,
            password=ADMIN_PASSWORD,
            first_name="School",
            last_name="Admin",
            role=Role.ADMIN,
        )
        await session.commit()


async def main():
    await init_models()
    await seed_admin()
    await engine.dispose()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main())
