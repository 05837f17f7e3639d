from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from settings.models import (
    DEFAULT_SETTINGS,
    PRIMARY_DOMAIN,
    TURNSTILE_ENABLED,
    settings as Setting,
)


async def get_setting(session: AsyncSession, key: str) -> Optional[str]:
    statement = select(Setting.c.value).where(Setting.c.key == key)
    result = await session.execute(statement)
    return result.scalar_one_or_none()


async def get_all_settings(session: AsyncSession) -> dict[str, Optional[str]]:
    result = await session.execute(select(Setting.c.key, Setting.c.value))
    return {row.key: row.value for row in result.all()}


def _update_value(key: str, value: Optional[str]):
    return (
        update(Setting)
        .where(Setting.c.key == key)
        .values(value=value, updated_at=func.now())
    )


async def upsert_setting(session: AsyncSession, key: str, value: Optional[str]) -> None:
    result = await session.execute(_update_value(key, value))
    if result.rowcount == 0:
        try:
            await session.execute(insert(Setting).values(key=key, value=value))
        except IntegrityError:
            # Another writer stored the key between our update and insert
            await session.rollback()
            await session.execute(_update_value(key, value))
    await session.commit()


async def seed_default_settings(session: AsyncSession) -> list[str]:
    """Insert every recognized setting that is not stored yet.

    Returns the keys that were inserted.
    """
    existing = await get_all_settings(session)
    missing = [key for key in DEFAULT_SETTINGS if key not in existing]
    for key in missing:
        await session.execute(insert(Setting).values(key=key, value=DEFAULT_SETTINGS[key]))
    await session.commit()
    return missing


async def is_turnstile_enabled(session: AsyncSession) -> bool:
    return await get_setting(session, TURNSTILE_ENABLED) == "true"


async def get_primary_domain(session: AsyncSession) -> Optional[str]:
    value = await get_setting(session, PRIMARY_DOMAIN)
    return value or None
