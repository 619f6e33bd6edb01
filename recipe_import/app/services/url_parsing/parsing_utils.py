"""General parsing utilities for recipe extraction."""

import re
from typing import Iterable, List, Optional
from urllib.parse import urlparse

_ISO_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?")


def clean_text(text: Optional[str]) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def parse_iso_duration(duration: str) -> Optional[int]:
    """Parse a PT-prefixed duration (e.g. PT1H30M) into whole minutes.

    Returns None when the PT prefix is missing. Seconds are ignored, and a
    bare "PT" yields 0.
    """
    if not isinstance(duration, str) or not duration.startswith("PT"):
        return None
    match = _ISO_DURATION_RE.match(duration)
    if not match:
        return None
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    return hours * 60 + minutes


def extract_instruction_text(instructions) -> List[str]:
    """Extract step text from a string, a list of strings, or HowToStep objects."""
    steps: List[str] = []
    if isinstance(instructions, str):
        cleaned = clean_text(instructions)
        if cleaned:
            steps.append(cleaned)
    elif isinstance(instructions, list):
        for entry in instructions:
            if isinstance(entry, str):
                cleaned = clean_text(entry)
            elif isinstance(entry, dict) and isinstance(entry.get("text"), str):
                cleaned = clean_text(entry["text"])
            else:
                continue
            if cleaned:
                steps.append(cleaned)
    return steps


def extract_image(value) -> Optional[str]:
    """Extract an image URL from the schema.org image shapes."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and isinstance(value.get("url"), str):
        return value["url"]
    if isinstance(value, list):
        for item in value:
            found = extract_image(item)
            if found:
                return found
    return None


def url_host(url: Optional[str]) -> Optional[str]:
    """Return the host of a URL, or None when it has none."""
    if not url:
        return None
    return urlparse(url).hostname or None


def cap_items(items: Iterable[str], limit: int) -> List[str]:
    return list(items)[:limit]
