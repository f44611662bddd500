from typing import Optional

import httpx

from .models import DEFAULT_TIMEOUT_MS, FindOptions, coerce_options


DEFAULT_USER_AGENT = "next-link/0.1"


class FetchError(RuntimeError):
    pass


class Fetcher:
    """Thin async HTTP client used for page retrieval and existence checks."""

    def __init__(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_ms / 1000),
            follow_redirects=True,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    async def __aenter__(self) -> "Fetcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch(self, url: str) -> httpx.Response:
        try:
            return await self._client.get(url)
        except httpx.RequestError as exc:
            raise FetchError(str(exc) or exc.__class__.__name__) from exc

    async def exists(self, url: str) -> bool:
        # Timeouts and transport failures count as "does not exist".
        try:
            response = await self._client.head(url)
        except httpx.HTTPError:
            return False
        return response.is_success


async def fetch_html(
    url: str,
    options=None,
    *,
    fetcher: Optional[Fetcher] = None,
) -> Optional[str]:
    """Fetch ``url`` and return its body if it is a 2xx ``text/html`` response.

    Every failure is reported through ``options`` and yields None.
    """
    options = coerce_options(options)
    if fetcher is None:
        async with Fetcher(timeout_ms=options.timeout_ms) as own_fetcher:
            return await _fetch_html(own_fetcher, url, options)
    return await _fetch_html(fetcher, url, options)


async def _fetch_html(fetcher: Fetcher, url: str, options: FindOptions) -> Optional[str]:
    try:
        response = await fetcher.fetch(url)
    except FetchError as exc:
        options.report("error", f"Error fetching {url}: {exc}")
        return None

    if not response.is_success:
        options.report(
            "warn",
            f"Failed to fetch {url}: {response.status_code} {response.reason_phrase}",
        )
        return None

    content_type = response.headers.get("content-type", "")
    if "text/html" not in content_type.lower():
        options.report("warn", f"URL {url} did not return HTML content.")
        return None

    return response.text
