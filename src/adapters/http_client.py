"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers para los chequeos del sitio publicado.
- Facilita testeo: se puede sustituir por un transport mockeado.
"""

from __future__ import annotations

import httpx

from core.config import SiteSettings

USER_AGENT = "blog-pipeline/0.1 (+doctor)"


def build_async_client(
    settings: SiteSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros."""

    settings = settings or SiteSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT, "Accept": "text/html,*/*;q=0.8"},
        transport=transport,
    )


async def check_site(
    url: str,
    *,
    settings: SiteSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    """HEAD-less reachability probe: GET `url`, OK on any 2xx/3xx."""

    try:
        async with build_async_client(settings, transport=transport) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        return False, f"{type(exc).__name__}: {exc}"
    return response.is_success or response.is_redirect, f"HTTP {response.status_code}"
