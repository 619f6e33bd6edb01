"""Heuristic recipe parsing of reader-service markdown."""

import logging
import re
from typing import List, Optional

from recipe_import.app.core.config import get_settings
from recipe_import.app.schemas.recipe import DEFAULT_RECIPE_NAME, Recipe
from recipe_import.app.services.url_parsing.parsing_utils import url_host

logger = logging.getLogger(__name__)

_LEADING_BULLET_RE = re.compile(r"^[-*\d.]+\s*")
_HEADING_MARKERS = ("##", "**")
_INSTRUCTION_KEYWORDS = ("instruction", "direction", "step")

PLACEHOLDER = "See recipe at source"


def _is_heading(lowered: str) -> bool:
    return any(marker in lowered for marker in _HEADING_MARKERS)


def _markdown_title(lines: List[str], url: str) -> str:
    for line in lines[:10]:
        if line.startswith("# "):
            title = line[2:].strip()
            if title:
                return title
    return url_host(url) or DEFAULT_RECIPE_NAME


def parse_recipe_from_markdown(
    markdown: str, url: str, max_items: Optional[int] = None
) -> Optional[Recipe]:
    """Split markdown into ingredient and instruction sections by heading.

    Returns None when neither section yields any lines.
    """
    max_items = max_items or get_settings().max_list_items
    lines = markdown.split("\n")

    ingredients: List[str] = []
    instructions: List[str] = []
    section = None

    for line in lines:
        lowered = line.lower()
        if "ingredient" in lowered and _is_heading(lowered):
            section = "ingredients"
            continue
        if any(word in lowered for word in _INSTRUCTION_KEYWORDS) and _is_heading(lowered):
            section = "instructions"
            continue

        trimmed = line.strip()
        if not trimmed:
            continue

        if section == "ingredients":
            if trimmed.startswith(("-", "*")) or trimmed[0].isdigit():
                cleaned = _LEADING_BULLET_RE.sub("", trimmed)
                if len(cleaned) > 2:
                    ingredients.append(cleaned)
        elif section == "instructions":
            if trimmed.startswith(("##", "**", "[")) or len(trimmed) <= 10:
                continue
            cleaned = _LEADING_BULLET_RE.sub("", trimmed).replace("**", "").strip()
            if len(cleaned) > 10:
                instructions.append(cleaned)

    if not ingredients and not instructions:
        logger.debug("Markdown for %s had no recipe sections", url)
        return None

    logger.debug(
        "Markdown for %s: ingredients=%d, instructions=%d", url, len(ingredients), len(instructions)
    )
    return Recipe(
        name=_markdown_title(lines, url),
        ingredients=ingredients[:max_items] or [PLACEHOLDER],
        instructions=instructions[:max_items] or [PLACEHOLDER],
        source_url=url,
    )
