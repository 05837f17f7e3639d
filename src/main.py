import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from auth.router import router as auth_router
from config import LOG_LEVEL, SECRET, SECRET_FROM_ENV, SESSION_COOKIE, SESSION_HTTPS_ONLY
from database import async_session_maker, create_db_and_tables, seed_first_run
from domains.router import router as domains_router
from errors import register_exception_handlers
from links.router import router as links_router
from redirects.router import router as redirects_router
from settings.router import router as settings_router

import uvicorn

logger = logging.getLogger("uvicorn")


def check_session_secret(secret_from_env: bool = SECRET_FROM_ENV) -> bool:
    if not secret_from_env:
        logger.warning(
            "⚠️ SECRET is not set: admin sessions use a per-process random key, "
            "are lost on restart and are not shared between workers"
        )
    return secret_from_env


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    check_session_secret()
    logger.info("📊 Creating tables...")
    await create_db_and_tables()
    async with async_session_maker() as session:
        await seed_first_run(session)
    logger.info("🚀 Shrinx ready")
    yield


app = FastAPI(title="Shrinx", lifespan=lifespan)

app.add_middleware(
    SessionMiddleware,
    secret_key=SECRET,
    session_cookie=SESSION_COOKIE,
    https_only=SESSION_HTTPS_ONLY,
    same_site="lax",
)
register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(settings_router)
app.include_router(domains_router)
app.include_router(links_router)
# Catch-all short link route, must stay last
app.include_router(redirects_router)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        reload=True,
        host="0.0.0.0",
        log_level=LOG_LEVEL,
        proxy_headers=True,
    )
