"""URL recipe import package.

This package provides the pieces of the recipe import pipeline: schema.org
JSON-LD and raw JSON extraction, microdata, reader-service markdown parsing,
heuristic HTML scraping, and social-media share link resolution.
"""

from recipe_import.app.services.url_parsing.errors import (
    InvalidInputError,
    NetworkFailureError,
    NoDataFoundError,
    RecipeImportError,
)
from recipe_import.app.services.url_parsing.html_fetcher import (
    create_client,
    decode_body,
    fetch_page,
    fetch_reader_markdown,
)
from recipe_import.app.services.url_parsing.models import (
    FetchedPage,
    ImportResult,
    ImportState,
    PipelineContext,
)
from recipe_import.app.services.url_parsing.parsing_utils import (
    clean_text,
    extract_instruction_text,
    parse_iso_duration,
)
from recipe_import.app.services.url_parsing.redirect_resolver import (
    extract_recipe_link,
    extract_refresh_url,
    follow_redirect,
)
from recipe_import.app.services.url_parsing.url_classifier import (
    build_deep_link,
    extract_recipe_url_from_share,
    is_import_candidate,
    is_likely_recipe_url,
    is_social_media_url,
    normalize_url,
    parse_deep_link,
    query_parameters,
    source_label,
)

__all__ = [
    # Errors
    "InvalidInputError",
    "NetworkFailureError",
    "NoDataFoundError",
    "RecipeImportError",
    # Models
    "FetchedPage",
    "ImportResult",
    "ImportState",
    "PipelineContext",
    # Fetching
    "create_client",
    "decode_body",
    "fetch_page",
    "fetch_reader_markdown",
    # Parsing utilities
    "clean_text",
    "extract_instruction_text",
    "parse_iso_duration",
    # Social redirects
    "extract_recipe_link",
    "extract_refresh_url",
    "follow_redirect",
    # URL classification
    "build_deep_link",
    "extract_recipe_url_from_share",
    "is_import_candidate",
    "is_likely_recipe_url",
    "is_social_media_url",
    "normalize_url",
    "parse_deep_link",
    "query_parameters",
    "source_label",
]
