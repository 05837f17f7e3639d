from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_async_session
from redirects.resolver import PermanentRedirect, RedirectTo, resolve


router = APIRouter(tags=["redirects"])

ERROR_HTML = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>Error · Shrinx</title></head>
<body>
<h1>404</h1>
<h2>Page Not Found</h2>
<p>The link you are trying to access does not exist or has been removed.</p>
<a href="/">Go home</a>
</body>
</html>
"""


@router.get("/error", response_class=HTMLResponse)
async def error_page():
    return HTMLResponse(ERROR_HTML, status_code=status.HTTP_404_NOT_FOUND)


@router.get("/")
async def home():
    return {"message": "Shrinx is running"}


@router.get("/{path:path}")
async def redirect_short_link(
    path: str,
    request: Request,
    session: AsyncSession = Depends(get_async_session),
):
    """
    Resolve a short link on whichever registered domain the request came in on.
    """
    # Still percent-encoded, so %3F and %2F survive the primary domain redirect
    raw_path = request.scope.get("raw_path")
    request_url = raw_path.decode("latin-1") if raw_path else request.url.path
    if request.url.query:
        request_url += f"?{request.url.query}"

    decision = await resolve(
        session,
        request_host=request.headers.get("host", ""),
        request_path=path,
        request_url=request_url,
        forwarded_proto=request.headers.get("x-forwarded-proto"),
    )
    if isinstance(decision, PermanentRedirect):
        return RedirectResponse(
            decision.location, status_code=status.HTTP_301_MOVED_PERMANENTLY
        )
    if isinstance(decision, RedirectTo):
        return RedirectResponse(decision.location, status_code=status.HTTP_302_FOUND)
    return Response(status_code=status.HTTP_404_NOT_FOUND)
