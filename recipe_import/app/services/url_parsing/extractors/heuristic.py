"""Last-resort heuristic recipe scraping from arbitrary HTML structure."""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from recipe_import.app.core.config import get_settings
from recipe_import.app.schemas.recipe import DEFAULT_RECIPE_NAME, Recipe
from recipe_import.app.services.url_parsing.parsing_utils import clean_text, url_host

logger = logging.getLogger(__name__)

INGREDIENT_SELECTORS = (
    ".ingredient",
    ".ingredient-item",
    ".ingredients li",
    ".recipe-ingredient",
    ".ingredient-list li",
    "li.ingredient",
    "[class*=ingredientLine]",
    ".ingredient-line",
    ".ingredient__item",
    "[class*=ingredient]",
)

INSTRUCTION_SELECTORS = (
    ".instruction",
    ".instructions li",
    ".directions li",
    ".steps li",
    ".instruction-step",
    ".instruction-list li",
    "[class*=instructionLine]",
    ".instruction-line",
    ".step",
    "[class*=directions]",
    "[class*=method]",
)

MAIN_CONTENT_SELECTOR = "main, article, [role=main], .recipe, .recipe-content"


def _text(el) -> str:
    return clean_text(el.get_text(" ", strip=True))


def _is_ingredient_noise(text: str) -> bool:
    return "Add to" in text or "Save" in text or "print" in text.lower()


def _is_list_noise(text: str) -> bool:
    return "Add to" in text or "Save" in text


def _is_instruction_noise(text: str) -> bool:
    return "Add to" in text or "Print" in text


def _find_title(soup: BeautifulSoup, url: str) -> str:
    h1 = soup.find("h1")
    if h1 and _text(h1):
        return _text(h1)
    og_title = soup.find("meta", attrs={"property": "og:title"})
    if og_title and clean_text(og_title.get("content")):
        return clean_text(og_title.get("content"))
    if soup.title and clean_text(soup.title.get_text()):
        return clean_text(soup.title.get_text())
    return url_host(url) or DEFAULT_RECIPE_NAME


def _find_ingredients(soup: BeautifulSoup) -> List[str]:
    ingredients = [t for t in map(_text, soup.select("[itemprop=recipeIngredient]")) if t]
    if ingredients:
        return ingredients

    for selector in INGREDIENT_SELECTORS:
        ingredients = [
            t for t in map(_text, soup.select(selector)) if len(t) > 3 and not _is_ingredient_noise(t)
        ]
        if ingredients:
            logger.debug("Ingredients matched selector %s", selector)
            return ingredients

    for lst in soup.find_all(["ul", "ol"]):
        items = [
            t for t in map(_text, lst.find_all("li")) if len(t) > 3 and not _is_list_noise(t)
        ]
        if len(items) > 2:
            return items
    return []


def _find_instructions(soup: BeautifulSoup) -> List[str]:
    instructions = [t for t in map(_text, soup.select("[itemprop=recipeInstructions]")) if len(t) > 10]
    if instructions:
        return instructions

    for selector in INSTRUCTION_SELECTORS:
        instructions = [
            t for t in map(_text, soup.select(selector)) if len(t) > 10 and not _is_instruction_noise(t)
        ]
        if instructions:
            logger.debug("Instructions matched selector %s", selector)
            return instructions

    content = soup.select_one(MAIN_CONTENT_SELECTOR) or soup.body
    if not content:
        return []
    numbered: List[str] = []
    for el in content.find_all(["p", "div"]):
        text = _text(el)
        if not 20 < len(text) < 500 or "Add to" in text:
            continue
        if text[0].isdigit() or text.startswith(("Step", "1.", "-")):
            numbered.append(text)
    return numbered


def scrape_recipe_heuristic(html: str, url: str, max_items: Optional[int] = None) -> Recipe:
    """Scrape whatever looks like a recipe; never returns None.

    Missing ingredients or instructions are replaced by a pointer to the
    source page.
    """
    max_items = max_items or get_settings().max_list_items
    soup = BeautifulSoup(html, "lxml")
    title = _find_title(soup, url)
    ingredients = _find_ingredients(soup)[:max_items]
    instructions = _find_instructions(soup)[:max_items]
    logger.info(
        "Heuristic scrape of %s: ingredients=%d, instructions=%d",
        url,
        len(ingredients),
        len(instructions),
    )

    placeholder = f"See full recipe at: {url}"
    return Recipe(
        name=title,
        ingredients=ingredients or [placeholder],
        instructions=instructions or [placeholder],
        source_url=url,
    )
