#!/usr/bin/env python
"""
Import a single recipe from a URL, share link or deep link and print it as JSON.

Run manually:
    python scripts/import_recipe.py "https://www.allrecipes.com/recipe/12345/chocolate-cake/"
    python scripts/import_recipe.py "recipeapp://import?url=https%3A%2F%2Fexample.com%2Fsoup"
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from recipe_import.app.core.config import get_settings
from recipe_import.app.services.recipe_store import InMemoryRecipeStore
from recipe_import.app.services.url_parsing.url_classifier import (
    extract_recipe_url_from_share,
    parse_deep_link,
)
from recipe_import.app.services.url_recipe_parser import import_recipe_from_url

logger = logging.getLogger("import_recipe")


def resolve_target(raw: str) -> str:
    """Deep links and share wrappers are unwrapped; anything else is passed through."""
    return parse_deep_link(raw) or extract_recipe_url_from_share(raw) or raw


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("url", help="recipe URL, social share link or deep link")
    args = parser.parse_args(argv)

    repo_root = Path(__file__).resolve().parents[1]
    env_path = repo_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    target = resolve_target(args.url)
    store = InMemoryRecipeStore()
    result = asyncio.run(import_recipe_from_url(target, store=store))
    if not result.success:
        logger.error("Import failed (%s): %s", result.error_code, result.error_message)
        return 1

    print(result.recipe.model_dump_json(indent=2))
    logger.info("Stored %d recipe(s) via %s", len(store), result.parser_strategy)
    return 0


if __name__ == "__main__":
    sys.exit(main())
