import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.schemas import AdminRead, CredentialsUpdate, LoginRequest
from auth.users import (
    AdminContext,
    authenticate,
    change_credentials,
    current_admin,
    login_session,
    logout_session,
)
from database import get_async_session
from errors import Unauthorized

logger = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api/admin", tags=["auth"])


@router.post("/login")
async def login(
    data: LoginRequest,
    request: Request,
    session: AsyncSession = Depends(get_async_session),
):
    user = None
    if data.username and data.password:
        user = await authenticate(session, data.username, data.password)
    if user is None:
        logger.warning(f"Failed admin login for {data.username!r}")
        raise Unauthorized("Invalid credentials")

    login_session(request, AdminContext(username=user.username))
    return {"ok": True}


@router.post("/logout")
async def logout(request: Request):
    logout_session(request)
    return {"ok": True}


@router.get("/me", response_model=AdminRead)
async def me(admin: AdminContext = Depends(current_admin)):
    return {"username": admin.username}


@router.post("/change-password")
async def change_password(
    data: CredentialsUpdate,
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    admin: AdminContext = Depends(current_admin),
):
    """
    Change username and/or password. A new username is written back into the
    session so the caller stays logged in under it.
    """
    updated = await change_credentials(
        session,
        admin,
        data.currentPassword,
        new_username=data.newUsername,
        new_password=data.newPassword,
    )
    if updated != admin:
        login_session(request, updated)
    return {"ok": True}
