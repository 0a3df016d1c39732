"""Create demo accounts (test1..test3@weighin.dev / password123) if they don't exist."""

import asyncio
import logging

from weighin.core.logging import setup_logging
from weighin.db.session import async_session_maker, engine
from weighin.services.users import get_user_by_email, register_user

logger = logging.getLogger("seed_users")

DEMO_USERS = [
    ("Test User 1", "test1@weighin.dev"),
    ("Test User 2", "test2@weighin.dev"),
    ("Test User 3", "test3@weighin.dev"),
]
DEMO_PASSWORD = "password123"


async def main():
    setup_logging()
    async with async_session_maker() as session:
        for name, email in DEMO_USERS:
            if await get_user_by_email(session, email) is not None:
                logger.info("User already exists: %s", email)
                continue
            await register_user(session, name, email, DEMO_PASSWORD)
            logger.info("Created user: %s", email)
        await session.commit()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
