"""Recipe extractors for different parsing strategies."""

from recipe_import.app.services.url_parsing.extractors.heuristic import (
    scrape_recipe_heuristic,
)
from recipe_import.app.services.url_parsing.extractors.markdown import (
    parse_recipe_from_markdown,
)
from recipe_import.app.services.url_parsing.extractors.microdata import (
    extract_recipe_from_microdata,
)
from recipe_import.app.services.url_parsing.extractors.schema_org import (
    extract_recipe_from_json_ld,
    parse_json_recipe_any,
    parse_json_recipe_data,
    recipe_from_dict,
)

__all__ = [
    "extract_recipe_from_json_ld",
    "extract_recipe_from_microdata",
    "parse_json_recipe_any",
    "parse_json_recipe_data",
    "parse_recipe_from_markdown",
    "recipe_from_dict",
    "scrape_recipe_heuristic",
]
