"""Schema.org recipe extraction from JSON-LD blocks and raw JSON payloads."""

import json
import logging
from typing import Any, List, Optional

from bs4 import BeautifulSoup

from recipe_import.app.schemas.recipe import (
    DEFAULT_COOK_TIME_MINUTES,
    DEFAULT_DIFFICULTY,
    DEFAULT_RECIPE_NAME,
    Recipe,
)
from recipe_import.app.services.url_parsing.parsing_utils import (
    clean_text,
    extract_image,
    extract_instruction_text,
    parse_iso_duration,
)

logger = logging.getLogger(__name__)

INGREDIENTS_PLACEHOLDER = "Imported from web"
INSTRUCTIONS_PLACEHOLDER = "See original page for steps"


def _mentions_recipe(value: Any) -> bool:
    return "recipe" in str(value).lower()


def _string_list(value: Any) -> Optional[List[str]]:
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return value
    return None


def _first_string(*values: Any) -> Optional[str]:
    for value in values:
        if isinstance(value, str) and value.strip():
            return value
    return None


def recipe_from_dict(obj: dict, url: Optional[str] = None) -> Recipe:
    """Map a schema.org Recipe-shaped object onto a Recipe."""
    name = clean_text(_first_string(obj.get("name"), obj.get("headline"))) or DEFAULT_RECIPE_NAME

    cuisine_raw = obj.get("recipeCuisine")
    if isinstance(cuisine_raw, list):
        cuisine_raw = _first_string(*cuisine_raw)
    cuisine = clean_text(cuisine_raw) if isinstance(cuisine_raw, str) else ""

    cook_time = DEFAULT_COOK_TIME_MINUTES
    total_time = obj.get("totalTime")
    if isinstance(total_time, str):
        minutes = parse_iso_duration(total_time)
        if minutes is not None:
            cook_time = minutes

    difficulty = _first_string(obj.get("difficulty"), obj.get("level")) or DEFAULT_DIFFICULTY

    ingredients = _string_list(obj.get("recipeIngredient"))
    if ingredients is None:
        ingredients = _string_list(obj.get("ingredients")) or []
    ingredients = [clean_text(item) for item in ingredients if clean_text(item)]

    instructions = extract_instruction_text(obj.get("recipeInstructions"))

    return Recipe(
        name=name,
        cuisine=cuisine,
        cook_time_minutes=cook_time,
        difficulty=difficulty,
        ingredients=ingredients or [INGREDIENTS_PLACEHOLDER],
        instructions=instructions or [INSTRUCTIONS_PLACEHOLDER],
        image_name=extract_image(obj.get("image")) or "",
        source_url=url,
    )


def parse_json_recipe_any(data: Any, url: Optional[str] = None) -> Optional[Recipe]:
    """Detect a recipe in a decoded JSON value.

    Checks, in order: a string @type mentioning "recipe", an @type array with
    such an element, an @graph member with a string @type mentioning
    "recipe", and finally any object carrying recipeIngredient,
    recipeInstructions or name.
    """
    if not isinstance(data, dict):
        return None

    at_type = data.get("@type")
    if isinstance(at_type, str) and _mentions_recipe(at_type):
        return recipe_from_dict(data, url)
    if isinstance(at_type, list) and any(_mentions_recipe(t) for t in at_type):
        return recipe_from_dict(data, url)

    graph = data.get("@graph")
    if isinstance(graph, list):
        for item in graph:
            if not isinstance(item, dict):
                continue
            item_type = item.get("@type")
            if isinstance(item_type, str) and _mentions_recipe(item_type):
                logger.debug("Recipe found inside @graph (%d items)", len(graph))
                return recipe_from_dict(item, url)

    if any(key in data for key in ("recipeIngredient", "recipeInstructions", "name")):
        return recipe_from_dict(data, url)
    return None


def parse_json_recipe_data(data: bytes, url: Optional[str] = None) -> Optional[Recipe]:
    """Parse raw JSON bytes (e.g. an application/json response) into a Recipe."""
    try:
        decoded = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Raw JSON payload failed to parse: %s", exc)
        return None
    return parse_json_recipe_any(decoded, url)


def extract_recipe_from_json_ld(html: str, url: Optional[str] = None) -> Optional[Recipe]:
    """Return the recipe from the first JSON-LD block that yields one."""
    soup = BeautifulSoup(html, "lxml")
    scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
    logger.debug("Found %d JSON-LD script blocks", len(scripts))

    for idx, script in enumerate(scripts):
        raw_json = script.string or script.get_text()
        if not raw_json or not raw_json.strip():
            continue
        try:
            data = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            logger.warning(
                "JSON-LD block %d failed to parse: %s (first 200 chars: %s)",
                idx,
                exc,
                raw_json[:200],
            )
            continue

        candidates = data if isinstance(data, list) else [data]
        for candidate in candidates:
            recipe = parse_json_recipe_any(candidate, url)
            if recipe:
                logger.info("JSON-LD block %d produced recipe %r", idx, recipe.name)
                return recipe
    return None
