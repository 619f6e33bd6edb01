"""URL classification, share-link unwrapping and deep-link helpers."""

import logging
from typing import Dict, Optional
from urllib.parse import quote, unquote, urlparse

import httpx

from recipe_import.app.core.config import get_settings

logger = logging.getLogger(__name__)

SOCIAL_MEDIA_PATTERNS = (
    "pinterest",
    "facebook",
    "fb",
    "twitter",
    "x.com",
    "instagram",
    "tiktok",
    "tik",
)

RECIPE_SITE_PATTERNS = (
    "allrecipes",
    "epicurious",
    "foodnetwork",
    "seriouseats",
    "serious eats",
    "bbcgoodfood",
    "bonappetit",
    "food52",
    "tastingtable",
    "recipe",
    "cooking",
    "cuisine",
    "meal",
    "dish",
    "cooks.com",
    "chef",
)


def _host(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def _host_and_path(url: str) -> str:
    try:
        path = urlparse(url).path.lower()
    except ValueError:
        path = ""
    return f"{_host(url)} {path}"


def matches_social_media(text: str) -> bool:
    """Case-insensitive substring match against the social-media table."""
    lowered = (text or "").lower()
    return any(pattern in lowered for pattern in SOCIAL_MEDIA_PATTERNS)


def is_social_media_url(url: str) -> bool:
    return matches_social_media(_host(url))


def is_likely_recipe_url(url: str) -> bool:
    """Check host and path against known recipe sites and cooking keywords."""
    combined = _host_and_path(url)
    return any(pattern in combined for pattern in RECIPE_SITE_PATTERNS)


def is_http_url(url: Optional[str]) -> bool:
    if not url:
        return False
    try:
        parsed = urlparse(url)
        return parsed.scheme in {"http", "https"} and bool(parsed.hostname)
    except ValueError:
        return False


def normalize_url(raw: str) -> Optional[str]:
    """Turn user input into an absolute http(s) URL, or None if it isn't one."""
    candidate = (raw or "").strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return None
    parsed = urlparse(candidate)
    if not parsed.scheme and "." in candidate.split("/")[0]:
        candidate = f"https://{candidate}"
    if not is_http_url(candidate):
        return None
    try:
        httpx.URL(candidate)
    except httpx.InvalidURL:
        return None
    return candidate


def query_parameters(url: str) -> Optional[Dict[str, str]]:
    """Return the URL's query items as a dict, or None when there are none.

    Values are percent-decoded only; a literal "+" is kept as-is. The first
    occurrence of a repeated key wins.
    """
    try:
        query = urlparse(url).query
    except ValueError:
        return None
    params: Dict[str, str] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        params.setdefault(unquote(key), unquote(value))
    return params or None


def extract_recipe_url_from_share(text: str) -> Optional[str]:
    """Unwrap a shared link into the URL that should be imported."""
    candidate = (text or "").strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return None
    if not urlparse(candidate).scheme or not _host(candidate):
        return None

    if is_likely_recipe_url(candidate):
        return candidate

    host = _host(candidate)
    if "pinterest" in host:
        return candidate

    if "facebook" in host or "fb.com" in host:
        redirect = (query_parameters(candidate) or {}).get("u")
        if is_http_url(redirect):
            logger.debug("Unwrapped Facebook share link to %s", redirect)
            return redirect
        return candidate

    if "twitter" in host or "x.com" in host:
        return candidate

    return None


def is_import_candidate(text: str) -> bool:
    """Check whether clipboard or shared text looks like an importable link."""
    candidate = (text or "").strip()
    if not (candidate.startswith("http://") or candidate.startswith("https://")):
        return False
    if not is_http_url(candidate):
        return False
    return is_social_media_url(candidate) or is_likely_recipe_url(candidate)


def source_label(url: str) -> Optional[str]:
    """Short label for a detected link (its host)."""
    return _host((url or "").strip()) or None


def parse_deep_link(link: str, scheme: Optional[str] = None) -> Optional[str]:
    """Decode ``<scheme>://import?url=<encoded>`` into the target URL."""
    scheme = (scheme or get_settings().app_scheme).lower()
    parsed = urlparse((link or "").strip())
    if parsed.scheme.lower() != scheme or parsed.netloc.lower() != "import":
        return None
    target = (query_parameters(link.strip()) or {}).get("url")
    return target or None


def build_deep_link(target_url: str, scheme: Optional[str] = None) -> str:
    """Build the deep link a share extension hands to the app."""
    scheme = scheme or get_settings().app_scheme
    return f"{scheme}://import?url={quote(target_url, safe='')}"
