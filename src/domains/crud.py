import logging

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domains.models import domains as Domain
from errors import Conflict

logger = logging.getLogger("uvicorn")


async def list_domains(session: AsyncSession) -> list[dict]:
    statement = select(Domain).order_by(Domain.c.id)
    result = await session.execute(statement)
    return [dict(row) for row in result.mappings().all()]


async def domain_exists(session: AsyncSession, domain: str) -> bool:
    statement = select(Domain.c.id).where(Domain.c.domain == domain)
    result = await session.execute(statement)
    return result.first() is not None


async def add_domain(session: AsyncSession, domain: str) -> None:
    """Register a hostname.

    The lookup beforehand only saves a failed insert; the unique constraint
    on ``domains.domain`` is what rejects concurrent duplicates.
    """
    if await domain_exists(session, domain):
        raise Conflict("Domain already exists")
    try:
        await session.execute(insert(Domain).values(domain=domain))
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise Conflict("Domain already exists")
    logger.info(f"Domain added: {domain}")


async def delete_domain(session: AsyncSession, domain_id: int) -> None:
    # Links pointing at the domain are kept; the resolver rejects the host
    # before looking them up, and re-adding the domain revives them.
    await session.execute(delete(Domain).where(Domain.c.id == domain_id))
    await session.commit()
    logger.info(f"Domain deleted: id={domain_id}")


async def seed_domains(session: AsyncSession, names: list[str]) -> list[str]:
    added = []
    for name in names:
        if await domain_exists(session, name):
            continue
        await session.execute(insert(Domain).values(domain=name))
        added.append(name)
    await session.commit()
    return added
