"""Page fetching, body decoding and the reader-service client."""

import asyncio
import json
import logging
import re
from typing import Dict, Optional

import httpx

from recipe_import.app.core.config import Settings, get_settings
from recipe_import.app.services.url_parsing.errors import NetworkFailureError
from recipe_import.app.services.url_parsing.models import FetchedPage

logger = logging.getLogger(__name__)

_META_CHARSET_RE = re.compile(r'<meta[^>]+charset=["\']?([^"\'>\s]+)', re.I)


def build_headers(settings: Settings) -> Dict[str, str]:
    return {
        "User-Agent": settings.scraper_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
        "Connection": "keep-alive",
    }


def load_cookies(settings: Settings) -> Dict[str, str]:
    if not settings.scraper_cookies:
        return {}
    try:
        cookies = json.loads(settings.scraper_cookies)
    except json.JSONDecodeError:
        logger.warning("SCRAPER_COOKIES is not valid JSON; ignoring")
        return {}
    return cookies if isinstance(cookies, dict) else {}


def create_client(settings: Optional[Settings] = None) -> httpx.AsyncClient:
    """Create the per-attempt HTTP client (cookie jar enabled, bounded timeouts)."""
    settings = settings or get_settings()
    timeout = httpx.Timeout(settings.request_timeout_seconds, connect=5.0)
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers=build_headers(settings),
        cookies=load_cookies(settings),
    )


def _charset_from_content_type(content_type: str) -> Optional[str]:
    if "charset=" not in content_type.lower():
        return None
    try:
        return content_type.lower().split("charset=")[1].split(";")[0].strip().strip("\"'")
    except IndexError:
        return None


def decode_body(content: bytes, content_type: str = "") -> Optional[str]:
    """Decode a response body to text, or None when no encoding fits."""
    encoding = _charset_from_content_type(content_type) or "utf-8"
    try:
        return content.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        pass

    sniffed = _META_CHARSET_RE.search(content[:4096].decode("ascii", errors="ignore"))
    if sniffed and sniffed.group(1).lower() != encoding:
        try:
            return content.decode(sniffed.group(1))
        except (UnicodeDecodeError, LookupError):
            pass
    if encoding != "utf-8":
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError:
            pass
    logger.warning("Unable to decode response body (content-type=%s)", content_type or "unknown")
    return None


async def fetch_page(
    client: httpx.AsyncClient, url: str, timeout: Optional[float] = None
) -> FetchedPage:
    """GET a page, raising NetworkFailureError on transport errors, timeouts and non-2xx."""
    timeout = timeout if timeout is not None else get_settings().resource_timeout_seconds
    try:
        response = await asyncio.wait_for(client.get(url), timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.warning("Timed out fetching %s", url)
        raise NetworkFailureError("Timed out loading that page.") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Network error fetching %s: %s", url, exc)
        raise NetworkFailureError(f"Couldn't reach that page: {exc}") from exc

    if not 200 <= response.status_code < 300:
        logger.warning("Fetching %s returned status %s", url, response.status_code)
        raise NetworkFailureError(status_code=response.status_code)

    content_type = response.headers.get("content-type", "")
    return FetchedPage(
        url=str(response.url),
        status_code=response.status_code,
        content_type=content_type,
        content=response.content,
        text=decode_body(response.content, content_type),
    )


def reader_url(url: str, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    return f"{settings.reader_base_url.rstrip('/')}/{url}"


async def fetch_reader_markdown(
    client: httpx.AsyncClient, url: str, settings: Optional[Settings] = None
) -> Optional[str]:
    """Fetch a markdown rendition of ``url`` from the reader service.

    Any failure (non-2xx, transport error, timeout, undecodable body) means
    the service is unavailable and yields None.
    """
    settings = settings or get_settings()
    target = reader_url(url, settings)
    try:
        response = await asyncio.wait_for(
            client.get(target, headers={"Accept": "text/plain"}),
            timeout=settings.resource_timeout_seconds,
        )
    except (asyncio.TimeoutError, httpx.HTTPError) as exc:
        logger.warning("Reader service unavailable for %s: %s", url, exc or type(exc).__name__)
        return None
    if not 200 <= response.status_code < 300:
        logger.warning("Reader service returned status %s for %s", response.status_code, url)
        return None
    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Reader service returned a non UTF-8 body for %s", url)
        return None
