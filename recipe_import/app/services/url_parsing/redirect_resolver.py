"""Resolve social-media share links to the article they point at."""

import asyncio
import logging
import re
from typing import Iterable, Optional
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from recipe_import.app.core.config import get_settings
from recipe_import.app.services.url_parsing.html_fetcher import decode_body
from recipe_import.app.services.url_parsing.url_classifier import (
    is_http_url,
    is_social_media_url,
)

logger = logging.getLogger(__name__)

# Origins whose landing pages bury the outbound link in a plain anchor.
_EXTERNAL_ANCHOR_ORIGINS = ("pinterest", "tiktok", "tik", "instagram")
# Origins that expose the outbound link through data-href attributes.
_DATA_HREF_ORIGINS = ("facebook", "fb", "instagram")


def _absolute(candidate: Optional[str], base_url: Optional[str]) -> Optional[str]:
    if not candidate:
        return None
    candidate = candidate.strip()
    if base_url:
        candidate = urljoin(base_url, candidate)
    elif candidate.startswith("//"):
        candidate = f"https:{candidate}"
    return candidate if is_http_url(candidate) else None


def _accept(candidate: Optional[str], base_url: Optional[str]) -> Optional[str]:
    """Absolute, non-social URL or None."""
    url = _absolute(candidate, base_url)
    if url and not is_social_media_url(url):
        return url
    return None


def extract_refresh_url(html: str, base_url: Optional[str] = None) -> Optional[str]:
    """Pull the target out of a ``<meta http-equiv="refresh">`` tag."""
    soup = BeautifulSoup(html, "lxml")
    meta = soup.find("meta", attrs={"http-equiv": re.compile(r"^refresh$", re.I)})
    if not meta:
        return None
    content = meta.get("content") or ""
    for part in content.split(";"):
        trimmed = part.strip()
        if trimmed.lower().startswith("url="):
            target = trimmed[4:].strip().strip("\"'")
            resolved = _absolute(target, base_url)
            if resolved:
                return resolved
    return None


async def follow_redirect(
    client: httpx.AsyncClient, url: str, timeout: Optional[float] = None
) -> Optional[str]:
    """Find where a share link redirects to.

    Checks the Location header of an unfollowed request first, then a
    meta-refresh tag in the page body. Returns None when neither is found or
    the request fails; callers keep the original URL in that case.
    """
    timeout = timeout if timeout is not None else get_settings().redirect_timeout_seconds
    try:
        response = await asyncio.wait_for(
            client.get(url, follow_redirects=False), timeout=timeout
        )
        location = response.headers.get("location")
        if location:
            resolved = _absolute(location, url)
            if resolved:
                logger.info("Share link %s redirects to %s", url, resolved)
                return resolved

        page = await asyncio.wait_for(client.get(url), timeout=timeout)
    except (asyncio.TimeoutError, httpx.HTTPError) as exc:
        logger.warning("Redirect resolution failed for %s: %s", url, exc or type(exc).__name__)
        return None

    html = decode_body(page.content, page.headers.get("content-type", ""))
    if not html:
        return None
    resolved = extract_refresh_url(html, str(page.url))
    if resolved:
        logger.info("Share link %s refreshes to %s", url, resolved)
    return resolved


def _first_accepted(values: Iterable[Optional[str]], base_url: Optional[str]) -> Optional[str]:
    for value in values:
        accepted = _accept(value, base_url)
        if accepted:
            return accepted
    return None


def extract_recipe_link(
    html: str, page_url: Optional[str] = None, base_domain: str = ""
) -> Optional[str]:
    """Find the outbound recipe link on a social share landing page.

    Candidates in priority order: og:url, canonical link, anchors whose href
    mentions "recipe", any external anchor (Pinterest/TikTok/Instagram),
    data-href attributes (Facebook/Instagram). Links back to a social site are
    skipped.
    """
    soup = BeautifulSoup(html, "lxml")
    domain = (base_domain or "").lower()

    og_url = soup.find("meta", attrs={"property": "og:url"})
    found = _accept(og_url.get("content") if og_url else None, page_url)
    if found:
        return found

    canonical = soup.select_one("link[rel=canonical]")
    found = _accept(canonical.get("href") if canonical else None, page_url)
    if found:
        return found

    found = _first_accepted((a.get("href") for a in soup.select("a[href*=recipe]")), page_url)
    if found:
        return found

    if any(origin in domain for origin in _EXTERNAL_ANCHOR_ORIGINS):
        hrefs = (
            a.get("href")
            for a in soup.select("a[href]")
            if a.get("href", "").startswith(("http", "//"))
        )
        found = _first_accepted(hrefs, page_url)
        if found:
            return found

    if any(origin in domain for origin in _DATA_HREF_ORIGINS):
        data_hrefs = (
            el.get("data-href")
            for el in soup.select("[data-href]")
            if el.get("data-href", "").startswith(("http", "//"))
        )
        found = _first_accepted(data_hrefs, page_url)
        if found:
            return found

    return None
