import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

import captcha
from auth.users import AdminContext, current_admin
from database import get_async_session
from errors import BadRequest, CaptchaError
from links import crud
from links.schemas import LinkCreate, LinkRead
from settings.crud import get_setting, is_turnstile_enabled
from settings.models import TURNSTILE_SECRET_KEY

logger = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api", tags=["links"])


def _required_fields(data: LinkCreate) -> tuple[str, str, str]:
    path = (data.path or "").strip()
    domain = (data.domain or "").strip()
    redirect_url = (data.redirectUrl or "").strip()
    if not path or not domain or not redirect_url:
        raise BadRequest("Missing required fields.")
    return path, domain, redirect_url


async def _check_captcha(
    session: AsyncSession, token: Optional[str], remote_ip: Optional[str]
) -> None:
    if not await is_turnstile_enabled(session):
        return
    if not token:
        raise BadRequest("Missing Turnstile token.")

    secret_key = await get_setting(session, TURNSTILE_SECRET_KEY)
    if not secret_key:
        logger.error("🚨 turnstile_secret_key is not configured in settings")
        raise CaptchaError("Server configuration error.", misconfigured=True)

    await captcha.verify_turnstile(secret_key, token, remote_ip)


@router.post("/save")
async def save_link(
    data: LinkCreate,
    request: Request,
    session: AsyncSession = Depends(get_async_session),
):
    """
    Public link creation. No login needed; guarded by Turnstile when it is
    enabled in settings.
    """
    path, domain, redirect_url = _required_fields(data)
    remote_ip = request.client.host if request.client else None
    await _check_captcha(session, data.turnstileResponse, remote_ip)
    await crud.create_link(session, path, domain, redirect_url)
    return {"ok": True}


@router.post("/admin/add")
async def add_link(
    data: LinkCreate,
    session: AsyncSession = Depends(get_async_session),
    admin: AdminContext = Depends(current_admin),
):
    path, domain, redirect_url = _required_fields(data)
    await crud.create_link(session, path, domain, redirect_url)
    return {"ok": True}


@router.delete("/admin/delete")
async def delete_link(
    id: int = Query(..., description="Id of the link to delete"),
    session: AsyncSession = Depends(get_async_session),
    admin: AdminContext = Depends(current_admin),
):
    await crud.delete_link(session, id)
    logger.info(f"Link {id} deleted by {admin.username}")
    return {"ok": True}


@router.get("/admin/links", response_model=list[LinkRead])
async def get_links(
    session: AsyncSession = Depends(get_async_session),
    admin: AdminContext = Depends(current_admin),
):
    """
    All links, newest first.
    """
    return await crud.list_links(session)
