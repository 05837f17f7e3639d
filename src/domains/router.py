from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.users import AdminContext, current_admin
from database import get_async_session
from domains import crud
from domains.schemas import DomainCreate, DomainDelete, DomainList
from errors import BadRequest


router = APIRouter(prefix="/api", tags=["domains"])


@router.get("/domains", response_model=DomainList)
async def get_domains(session: AsyncSession = Depends(get_async_session)):
    """
    List the hostnames short links can be created for, in registration order.
    """
    rows = await crud.list_domains(session)
    return {"domains": [row["domain"] for row in rows]}


@router.post("/admin/domains")
async def add_domain(
    data: DomainCreate,
    session: AsyncSession = Depends(get_async_session),
    admin: AdminContext = Depends(current_admin),
):
    domain = (data.domain or "").strip()
    if not domain:
        raise BadRequest("Domain is required")
    await crud.add_domain(session, domain)
    return {"ok": True}


@router.delete("/admin/domains")
async def delete_domain(
    data: DomainDelete,
    session: AsyncSession = Depends(get_async_session),
    admin: AdminContext = Depends(current_admin),
):
    if not data.id:
        raise BadRequest("Domain ID is required")
    await crud.delete_domain(session, data.id)
    return {"ok": True}
