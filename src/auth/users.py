import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from fastapi_users.password import PasswordHelper
from sqlalchemy import insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.models import users as User
from errors import BadRequest, Conflict, Unauthorized

logger = logging.getLogger("uvicorn")

SESSION_KEY = "user"

password_helper = PasswordHelper()


@dataclass(frozen=True)
class AdminContext:
    """Identity of the logged-in admin, passed explicitly to admin operations."""

    username: str


def current_admin(request: Request) -> AdminContext:
    """Session gate for every admin route; raises 401 without a login."""
    user = request.session.get(SESSION_KEY) or {}
    if not user.get("isLoggedIn") or not user.get("username"):
        raise Unauthorized()
    return AdminContext(username=user["username"])


def login_session(request: Request, admin: AdminContext) -> None:
    request.session[SESSION_KEY] = {"isLoggedIn": True, "username": admin.username}


def logout_session(request: Request) -> None:
    request.session.pop(SESSION_KEY, None)


async def get_user_by_username(session: AsyncSession, username: str) -> Optional[Row]:
    statement = select(User).where(User.c.username == username)
    result = await session.execute(statement)
    return result.first()


async def count_users(session: AsyncSession) -> int:
    result = await session.execute(select(User.c.id))
    return len(result.all())


async def create_user(session: AsyncSession, username: str, password: str) -> None:
    statement = insert(User).values(
        username=username,
        hashed_password=password_helper.hash(password),
    )
    await session.execute(statement)
    await session.commit()


async def authenticate(
    session: AsyncSession, username: str, password: str
) -> Optional[Row]:
    """
    Return the user row when the password matches its stored hash.
    Hashes stored with an outdated scheme are upgraded on the way.
    """
    user = await get_user_by_username(session, username)
    if user is None:
        # Keep the timing of unknown usernames close to wrong passwords
        password_helper.hash(password)
        return None

    verified, updated_hash = password_helper.verify_and_update(
        password, user.hashed_password
    )
    if not verified:
        return None
    if updated_hash is not None:
        await session.execute(
            update(User).where(User.c.id == user.id).values(hashed_password=updated_hash)
        )
        await session.commit()
    return user


async def change_credentials(
    session: AsyncSession,
    admin: AdminContext,
    current_password: Optional[str],
    new_username: Optional[str] = None,
    new_password: Optional[str] = None,
) -> AdminContext:
    """
    Change the admin's username and/or password after re-checking the current
    password. Returns the identity the caller's session must now carry.
    """
    new_username = (new_username or "").strip() or None
    new_password = new_password or None

    if not current_password:
        raise BadRequest("Current password is required")
    if not new_username and not new_password:
        raise BadRequest("New password or new username is required")

    user = await authenticate(session, admin.username, current_password)
    if user is None:
        logger.warning(f"Credential change rejected for {admin.username}: wrong password")
        raise Unauthorized("Current password is incorrect")

    values = {}
    if new_username and new_username != user.username:
        if await get_user_by_username(session, new_username) is not None:
            raise Conflict("Username already taken")
        values["username"] = new_username
    if new_password:
        values["hashed_password"] = password_helper.hash(new_password)

    if values:
        try:
            await session.execute(update(User).where(User.c.id == user.id).values(**values))
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise Conflict("Username already taken")
        logger.info(f"Credentials changed for {admin.username}: {', '.join(sorted(values))}")

    return AdminContext(username=values.get("username", user.username))


async def seed_admin(session: AsyncSession, username: str, password: str) -> bool:
    """Create the first admin account. Does nothing once any user exists."""
    if await count_users(session) > 0:
        return False
    await create_user(session, username, password)
    return True
