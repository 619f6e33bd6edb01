"""Recipe extraction from itemprop microdata and common class conventions."""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from recipe_import.app.schemas.recipe import DEFAULT_RECIPE_NAME, Recipe
from recipe_import.app.services.url_parsing.parsing_utils import clean_text, url_host

logger = logging.getLogger(__name__)

INGREDIENT_FALLBACK_SELECTOR = ".ingredient, .ingredients li, li.ingredient"
INSTRUCTION_FALLBACK_SELECTOR = ".instructions li, .directions li, .method li"


def _texts(soup: BeautifulSoup, selector: str) -> List[str]:
    texts = (clean_text(el.get_text(" ", strip=True)) for el in soup.select(selector))
    return [text for text in texts if text]


def _find_name(soup: BeautifulSoup) -> Optional[str]:
    named = soup.select_one("[itemprop=name]")
    if named:
        # <meta itemprop="name" content="..."> carries no text
        text = clean_text(named.get("content") or named.get_text(" ", strip=True))
        if text:
            return text
    if soup.title:
        return clean_text(soup.title.get_text()) or None
    return None


def extract_recipe_from_microdata(html: str, url: str) -> Optional[Recipe]:
    """Extract a recipe from itemprop markup, falling back to class conventions.

    Returns None only when the page has no name or title and neither list
    turned up anything; otherwise empty lists get a placeholder.
    """
    soup = BeautifulSoup(html, "lxml")
    name = _find_name(soup)

    ingredients = _texts(soup, "[itemprop=recipeIngredient]")
    if not ingredients:
        ingredients = _texts(soup, INGREDIENT_FALLBACK_SELECTOR)

    instructions = _texts(soup, "[itemprop=recipeInstructions]")
    if not instructions:
        instructions = _texts(soup, INSTRUCTION_FALLBACK_SELECTOR)

    if name is None and not ingredients and not instructions:
        logger.debug("No microdata found for %s", url)
        return None

    host = url_host(url)
    logger.debug(
        "Microdata for %s: name=%s, ingredients=%d, instructions=%d",
        url,
        name,
        len(ingredients),
        len(instructions),
    )
    return Recipe(
        name=name or host or DEFAULT_RECIPE_NAME,
        ingredients=ingredients or [f"Imported from {host or 'source'}"],
        instructions=instructions or [f"See original page: {url}"],
        source_url=url,
    )
