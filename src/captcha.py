"""Cloudflare Turnstile token verification."""

import logging
from typing import Optional

import httpx

from config import TURNSTILE_TIMEOUT, TURNSTILE_VERIFY_URL
from errors import CaptchaError, ServerError

logger = logging.getLogger("uvicorn")


async def verify_turnstile(
    secret_key: str,
    token: str,
    remote_ip: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> None:
    """
    Ask the provider whether ``token`` is valid for ``secret_key``.

    Raises CaptchaError when the provider rejects the token and ServerError
    when it cannot be reached within TURNSTILE_TIMEOUT seconds or answers
    with something other than a verdict.
    """
    form = {"secret": secret_key, "response": token}
    if remote_ip:
        form["remoteip"] = remote_ip

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=TURNSTILE_TIMEOUT) as own_client:
                response = await own_client.post(TURNSTILE_VERIFY_URL, data=form)
        else:
            response = await client.post(
                TURNSTILE_VERIFY_URL, data=form, timeout=TURNSTILE_TIMEOUT
            )
        response.raise_for_status()
        verdict = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Turnstile verification error: {e!r}")
        raise ServerError("Error verifying captcha.") from e

    if not verdict.get("success"):
        error_codes = verdict.get("error-codes", [])
        logger.warning(f"Turnstile failed: {error_codes}")
        raise CaptchaError("Captcha verification failed.", errors=error_codes)
