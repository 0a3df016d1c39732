"""Print row counts for every application table (quick sanity check against a live DB)."""

import asyncio

from sqlalchemy import func, select

from weighin.db.session import async_session_maker, engine
from weighin.models import Goal, Partnership, PrivacySettings, User, Weight


async def check_data():
    async with async_session_maker() as session:
        for model in (User, PrivacySettings, Weight, Goal, Partnership):
            count = (await session.execute(select(func.count()).select_from(model))).scalar()
            print(f"Table '{model.__tablename__}' row count: {count}")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
