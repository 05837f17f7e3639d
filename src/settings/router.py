import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.users import AdminContext, current_admin
from database import get_async_session
from domains.crud import list_domains
from settings import crud
from settings.models import TURNSTILE_ENABLED, TURNSTILE_SITE_KEY
from settings.schemas import PublicConfig, SettingsRead, SettingsUpdate

logger = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api", tags=["settings"])


@router.get("/admin/settings", response_model=SettingsRead)
async def get_settings(
    session: AsyncSession = Depends(get_async_session),
    admin: AdminContext = Depends(current_admin),
):
    """
    Return every stored setting together with the domain registry.
    """
    return {
        "settings": await crud.get_all_settings(session),
        "domains": await list_domains(session),
    }


@router.put("/admin/settings")
async def put_settings(
    data: SettingsUpdate,
    session: AsyncSession = Depends(get_async_session),
    admin: AdminContext = Depends(current_admin),
):
    """
    Upsert each submitted field. Omitted fields keep their stored value,
    except turnstile_enabled which is always written.
    """
    submitted = data.model_dump(exclude_unset=True)
    await crud.upsert_setting(
        session, TURNSTILE_ENABLED, "true" if data.turnstile_enabled else "false"
    )
    for key, value in submitted.items():
        if key == TURNSTILE_ENABLED:
            continue
        await crud.upsert_setting(session, key, value)

    logger.info(f"Settings updated by {admin.username}")
    return {"ok": True}


@router.get("/config", response_model=PublicConfig)
async def get_public_config(session: AsyncSession = Depends(get_async_session)):
    """
    What the public link form needs to render the captcha widget.
    The secret key never leaves the server.
    """
    return {
        "turnstileEnabled": await crud.is_turnstile_enabled(session),
        "turnstileSiteKey": await crud.get_setting(session, TURNSTILE_SITE_KEY) or "",
    }
