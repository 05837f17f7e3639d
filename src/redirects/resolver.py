"""Short-link resolution for an incoming host and path.

The checks run in a fixed order and the first one that applies decides the
outcome:

1. primary domain enforcement (permanent redirect to the canonical host)
2. host must be in the domain registry (bare 404 otherwise)
3. (path, host) lookup in the link table (redirect to ``/error`` on a miss)
4. temporary redirect to the stored destination
"""

from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from domains.crud import domain_exists
from links.crud import get_link
from settings.crud import get_primary_domain

ERROR_PAGE = "/error"


@dataclass(frozen=True)
class PermanentRedirect:
    location: str


@dataclass(frozen=True)
class RedirectTo:
    location: str


@dataclass(frozen=True)
class NotFound:
    pass


RedirectDecision = Union[PermanentRedirect, RedirectTo, NotFound]


def matches_host(request_host: str, domain: str) -> bool:
    """True for ``domain`` itself or ``domain`` with any port."""
    return request_host == domain or request_host.startswith(domain + ":")


def strip_port(request_host: str) -> str:
    host, sep, port = request_host.rpartition(":")
    # A colon inside brackets belongs to an IPv6 address, not a port
    if sep and "]" not in port:
        return host
    return request_host


async def resolve(
    session: AsyncSession,
    request_host: str,
    request_path: str,
    request_url: str,
    forwarded_proto: Optional[str] = None,
) -> RedirectDecision:
    """
    Decide what a request for ``request_path`` on ``request_host`` gets.

    ``request_url`` is the path plus query string as received; it is appended
    unchanged to the primary domain when the host has to be canonicalized.
    """
    primary_domain = await get_primary_domain(session)
    if primary_domain and not matches_host(request_host, primary_domain):
        scheme = forwarded_proto or "http"
        return PermanentRedirect(f"{scheme}://{primary_domain}{request_url}")

    host = strip_port(request_host)
    if not await domain_exists(session, host):
        return NotFound()

    link = await get_link(session, request_path.strip(), host)
    if link is None:
        return RedirectTo(ERROR_PAGE)
    return RedirectTo(link.redirect_url)
