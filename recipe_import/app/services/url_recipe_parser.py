import logging
from typing import Callable, List, Optional, Tuple

import httpx

from recipe_import.app.core.config import Settings, get_settings
from recipe_import.app.schemas.recipe import Recipe
from recipe_import.app.services.recipe_store import RecipeStore
from recipe_import.app.services.url_parsing.errors import (
    InvalidInputError,
    NetworkFailureError,
    NoDataFoundError,
    RecipeImportError,
)
from recipe_import.app.services.url_parsing.extractors import (
    extract_recipe_from_json_ld,
    extract_recipe_from_microdata,
    parse_json_recipe_data,
    parse_recipe_from_markdown,
    scrape_recipe_heuristic,
)
from recipe_import.app.services.url_parsing.html_fetcher import (
    create_client,
    fetch_page,
    fetch_reader_markdown,
)
from recipe_import.app.services.url_parsing.models import (
    FetchedPage,
    ImportResult,
    ImportState,
    PipelineContext,
)
from recipe_import.app.services.url_parsing.parsing_utils import url_host
from recipe_import.app.services.url_parsing.redirect_resolver import (
    extract_recipe_link,
    follow_redirect,
)
from recipe_import.app.services.url_parsing.url_classifier import (
    is_social_media_url,
    normalize_url,
)

logger = logging.getLogger(__name__)

Extractor = Callable[[str, str], Optional[Recipe]]

# Strategies that may report "no data"; tried in order on every fetched page.
STRUCTURED_EXTRACTORS: List[Tuple[str, Extractor]] = [
    ("schema_org_json_ld", extract_recipe_from_json_ld),
    ("microdata", extract_recipe_from_microdata),
]


def _transition(ctx: PipelineContext, state: ImportState) -> None:
    logger.info("Import %r: %s -> %s", ctx.original_input, ctx.state.value, state.value)
    ctx.state = state


def run_structured_extractors(html: str, url: str) -> Optional[Tuple[str, Recipe]]:
    """Run the JSON-LD and microdata extractors; first present result wins."""
    for name, extractor in STRUCTURED_EXTRACTORS:
        recipe = extractor(html, url)
        if recipe:
            return name, recipe
    return None


async def _follow_in_page_recipe_link(
    client: httpx.AsyncClient, ctx: PipelineContext, page: FetchedPage, settings: Settings
) -> Optional[Tuple[str, Recipe]]:
    link = extract_recipe_link(
        ctx.html or "", page.url, base_domain=url_host(ctx.resolved_url) or ""
    )
    if not link or link in (page.url, ctx.resolved_url):
        return None
    logger.info("Following in-page recipe link %s", link)
    try:
        linked = await fetch_page(client, link, timeout=settings.resource_timeout_seconds)
    except NetworkFailureError as exc:
        logger.warning("In-page recipe link %s could not be loaded: %s", link, exc)
        ctx.warnings.append("recipe_link_unreachable")
        return None
    if not linked.text:
        return None
    found = run_structured_extractors(linked.text, link)
    if found:
        return f"{found[0]}_linked", found[1]
    return None


async def run_extraction_cascade(
    client: httpx.AsyncClient,
    ctx: PipelineContext,
    page: FetchedPage,
    settings: Optional[Settings] = None,
) -> Optional[Tuple[str, Recipe]]:
    """Try each strategy in priority order and return (strategy, recipe).

    Returns None only when the page body could not be decoded as text, since
    the heuristic scraper always produces a recipe.
    """
    settings = settings or get_settings()
    url = ctx.resolved_url or page.url

    if page.is_json:
        recipe = parse_json_recipe_data(page.content, url)
        if recipe:
            return "json", recipe

    html = ctx.html
    if html is None:
        logger.warning("Response from %s could not be decoded as text", url)
        return None

    found = run_structured_extractors(html, url)
    if found:
        return found

    if ctx.social_origin:
        found = await _follow_in_page_recipe_link(client, ctx, page, settings)
        if found:
            return found

    markdown = await fetch_reader_markdown(client, url, settings)
    if markdown:
        recipe = parse_recipe_from_markdown(markdown, url, max_items=settings.max_list_items)
        if recipe:
            return "reader_markdown", recipe

    return "heuristic", scrape_recipe_heuristic(html, url, max_items=settings.max_list_items)


async def import_recipe(
    raw_input: str,
    store: Optional[RecipeStore] = None,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
    ctx: Optional[PipelineContext] = None,
) -> Recipe:
    """Run one import attempt and return the recipe.

    The recipe is handed to ``store`` only once the attempt reaches the done
    state. Raises InvalidInputError, NetworkFailureError or NoDataFoundError.
    """
    settings = settings or get_settings()
    ctx = ctx or PipelineContext(original_input=raw_input)
    owns_client = client is None
    if owns_client:
        client = create_client(settings)
    try:
        recipe = await _run(client, ctx, settings)
    except RecipeImportError:
        _transition(ctx, ImportState.FAILED)
        raise
    finally:
        if owns_client:
            await client.aclose()

    _transition(ctx, ImportState.DONE)
    if store is not None:
        store.insert(recipe)
    return recipe


async def _run(client: httpx.AsyncClient, ctx: PipelineContext, settings: Settings) -> Recipe:
    _transition(ctx, ImportState.RESOLVING)
    url = normalize_url(ctx.original_input)
    if not url:
        raise InvalidInputError()
    ctx.normalized_url = url
    ctx.resolved_url = url
    ctx.social_origin = is_social_media_url(url)

    if ctx.social_origin:
        redirected = await follow_redirect(client, url, timeout=settings.redirect_timeout_seconds)
        if redirected:
            ctx.resolved_url = redirected
        else:
            ctx.warnings.append("redirect_unresolved")

    _transition(ctx, ImportState.FETCHING)
    page = await fetch_page(client, ctx.resolved_url, timeout=settings.resource_timeout_seconds)
    ctx.content = page.content
    ctx.content_type = page.content_type
    ctx.html = page.text

    _transition(ctx, ImportState.EXTRACTING)
    found = await run_extraction_cascade(client, ctx, page, settings)
    if not found:
        raise NoDataFoundError()
    ctx.strategy, recipe = found
    logger.info("Imported %r from %s via %s", recipe.name, ctx.resolved_url, ctx.strategy)
    return recipe


async def import_recipe_from_url(
    raw_input: str,
    store: Optional[RecipeStore] = None,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
) -> ImportResult:
    """Run one import attempt and report the outcome as an ImportResult."""
    ctx = PipelineContext(original_input=raw_input)
    try:
        recipe = await import_recipe(raw_input, store=store, client=client, settings=settings, ctx=ctx)
    except NetworkFailureError as exc:
        return ImportResult(
            success=False,
            resolved_url=ctx.resolved_url,
            error_code=exc.error_code,
            error_message=exc.message,
            status_code=exc.status_code,
            warnings=ctx.warnings,
        )
    except RecipeImportError as exc:
        return ImportResult(
            success=False,
            resolved_url=ctx.resolved_url,
            error_code=exc.error_code,
            error_message=exc.message,
            warnings=ctx.warnings,
        )
    return ImportResult(
        success=True,
        recipe=recipe,
        parser_strategy=ctx.strategy,
        resolved_url=ctx.resolved_url,
        warnings=ctx.warnings,
    )
