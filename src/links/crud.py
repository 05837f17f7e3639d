import logging
from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from errors import Conflict
from links.models import paths as Link

logger = logging.getLogger("uvicorn")

TAKEN_MESSAGE = "That short URL is already taken."


async def get_link(session: AsyncSession, path: str, domain: str) -> Optional[Row]:
    # Exact, case-sensitive match on both columns
    statement = select(Link).where(Link.c.path == path, Link.c.domain == domain)
    result = await session.execute(statement)
    return result.first()


async def list_links(session: AsyncSession) -> list[dict]:
    statement = select(Link).order_by(Link.c.id.desc())
    result = await session.execute(statement)
    return [dict(row) for row in result.mappings().all()]


async def create_link(
    session: AsyncSession, path: str, domain: str, redirect_url: str
) -> None:
    """
    Insert a link. The lookup is only a shortcut: two concurrent requests can
    both pass it, and the (path, domain) unique constraint rejects the second.
    """
    if await get_link(session, path, domain) is not None:
        raise Conflict(TAKEN_MESSAGE)
    try:
        statement = insert(Link).values(path=path, domain=domain, redirect_url=redirect_url)
        await session.execute(statement)
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise Conflict(TAKEN_MESSAGE)
    logger.info(f"Link created: {domain}/{path} -> {redirect_url}")


async def delete_link(session: AsyncSession, link_id: int) -> None:
    await session.execute(delete(Link).where(Link.c.id == link_id))
    await session.commit()
