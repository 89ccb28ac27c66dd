import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from settleup.core.config import settings
from settleup.db.base import Base
from settleup.db.session import engine

logger = logging.getLogger(__name__)


async def wait_for_db(retries: int | None = None, delay: float = 2):
    retries = settings.DB_RETRIES if retries is None else retries
    for i in range(retries):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connected")
            return
        except (SQLAlchemyError, OSError):
            logger.warning("Database not ready | [ %d/%d ] -> retrying...", i + 1, retries)
            await asyncio.sleep(delay)

    raise RuntimeError("Database unreachable after retries")


async def create_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")
