import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from domains.crud import add_domain, delete_domain, list_domains
from links.crud import create_link
from redirects.resolver import NotFound, PermanentRedirect, RedirectTo, resolve
from settings.crud import upsert_setting

pytestmark = pytest.mark.anyio


async def test_unregistered_host_is_not_found(session: AsyncSession):
    await create_link(session, "abc", "unknown.org", "https://example.org/")

    for path in ("abc", "", "anything/else"):
        decision = await resolve(session, "unknown.org", path, f"/{path}")
        assert decision == NotFound()


async def test_missing_link_on_registered_host_goes_to_error_page(session: AsyncSession):
    await add_domain(session, "sho.rt")

    decision = await resolve(session, "sho.rt", "nope", "/nope")
    assert decision == RedirectTo("/error")


async def test_existing_link_redirects_to_destination(session: AsyncSession):
    await add_domain(session, "sho.rt")
    await create_link(session, "docs", "sho.rt", "https://example.com/docs?a=1")

    decision = await resolve(session, "sho.rt", "docs", "/docs")
    assert decision == RedirectTo("https://example.com/docs?a=1")


async def test_port_is_ignored_for_lookup(session: AsyncSession):
    await add_domain(session, "sho.rt")
    await create_link(session, "docs", "sho.rt", "https://example.com/docs")

    decision = await resolve(session, "sho.rt:3000", "docs", "/docs")
    assert decision == RedirectTo("https://example.com/docs")


async def test_lookup_is_per_domain(session: AsyncSession):
    await add_domain(session, "a.rt")
    await add_domain(session, "b.rt")
    await create_link(session, "x", "a.rt", "https://a.example/")
    await create_link(session, "x", "b.rt", "https://b.example/")

    assert await resolve(session, "a.rt", "x", "/x") == RedirectTo("https://a.example/")
    assert await resolve(session, "b.rt", "x", "/x") == RedirectTo("https://b.example/")


async def test_matching_is_case_sensitive_and_exact(session: AsyncSession):
    await add_domain(session, "sho.rt")
    await create_link(session, "Docs", "sho.rt", "https://example.com/docs")

    assert await resolve(session, "sho.rt", "docs", "/docs") == RedirectTo("/error")
    assert await resolve(session, "sho.rt", "Docs/", "/Docs/") == RedirectTo("/error")
    assert await resolve(session, "SHO.RT", "Docs", "/Docs") == NotFound()


async def test_surrounding_whitespace_in_path_is_trimmed(session: AsyncSession):
    await add_domain(session, "sho.rt")
    await create_link(session, "docs", "sho.rt", "https://example.com/docs")

    assert await resolve(session, "sho.rt", " docs ", "/%20docs%20") == RedirectTo(
        "https://example.com/docs"
    )


async def test_primary_domain_redirects_other_hosts(session: AsyncSession):
    await upsert_setting(session, "primary_domain", "example.com")

    decision = await resolve(session, "other.com", "abc", "/abc?utm=1")
    assert decision == PermanentRedirect("http://example.com/abc?utm=1")


async def test_primary_domain_redirect_uses_forwarded_proto(session: AsyncSession):
    await upsert_setting(session, "primary_domain", "example.com")

    decision = await resolve(session, "other.com", "abc", "/abc", forwarded_proto="https")
    assert decision == PermanentRedirect("https://example.com/abc")


async def test_primary_domain_with_port_is_not_redirected(session: AsyncSession):
    await upsert_setting(session, "primary_domain", "example.com")
    await add_domain(session, "example.com")
    await create_link(session, "abc", "example.com", "https://target.example/")

    decision = await resolve(session, "example.com:8080", "abc", "/abc")
    assert decision == RedirectTo("https://target.example/")


async def test_primary_domain_check_runs_before_registry(session: AsyncSession):
    await upsert_setting(session, "primary_domain", "example.com")

    # other.com is not registered, but canonicalization wins
    decision = await resolve(session, "other.com", "abc", "/abc")
    assert isinstance(decision, PermanentRedirect)


async def test_empty_primary_domain_is_not_enforced(session: AsyncSession):
    await upsert_setting(session, "primary_domain", "")
    await add_domain(session, "sho.rt")

    assert await resolve(session, "sho.rt", "x", "/x") == RedirectTo("/error")


async def test_deleted_domain_orphans_its_links(session: AsyncSession):
    await add_domain(session, "sho.rt")
    await create_link(session, "x", "sho.rt", "https://example.com/")
    [domain] = await list_domains(session)

    await delete_domain(session, domain["id"])
    assert await resolve(session, "sho.rt", "x", "/x") == NotFound()

    await add_domain(session, "sho.rt")
    assert await resolve(session, "sho.rt", "x", "/x") == RedirectTo("https://example.com/")
