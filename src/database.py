import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config import DATABASE_URL, DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME, DOMAINS
from auth.users import seed_admin
from domains.crud import seed_domains
from settings.crud import seed_default_settings
from models import metadata

# Imported for their side effect of registering tables on the shared metadata
import auth.models  # noqa: F401
import domains.models  # noqa: F401
import links.models  # noqa: F401
import settings.models  # noqa: F401

logger = logging.getLogger("uvicorn")

engine = create_async_engine(DATABASE_URL)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def create_db_and_tables(bind: AsyncEngine = engine) -> None:
    async with bind.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    # One session per request, closed on every exit path
    async with async_session_maker() as session:
        yield session


async def seed_first_run(session: AsyncSession) -> None:
    """
    Fill in default settings, and on a fresh database create the default
    admin and register the legacy DOMAINS list.
    """
    inserted = await seed_default_settings(session)
    if inserted:
        logger.info(f"Default settings inserted: {', '.join(inserted)}")

    if await seed_admin(session, DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD):
        logger.warning(
            f"Created default admin '{DEFAULT_ADMIN_USERNAME}'; change its password"
        )
        added = await seed_domains(session, DOMAINS)
        if added:
            logger.info(f"Domains registered from DOMAINS: {', '.join(added)}")
