import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    reader_base_url: str = Field("https://r.jina.ai", alias="RECIPE_IMPORT_READER_BASE_URL")
    request_timeout_seconds: float = Field(15.0, alias="RECIPE_IMPORT_REQUEST_TIMEOUT")
    resource_timeout_seconds: float = Field(60.0, alias="RECIPE_IMPORT_RESOURCE_TIMEOUT")
    redirect_timeout_seconds: float = Field(10.0, alias="RECIPE_IMPORT_REDIRECT_TIMEOUT")
    app_scheme: str = Field("recipeapp", alias="RECIPE_IMPORT_APP_SCHEME")
    max_list_items: int = Field(50, alias="RECIPE_IMPORT_MAX_ITEMS")
    scraper_user_agent: str = Field(
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_6) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36",
        alias="SCRAPER_USER_AGENT",
    )
    scraper_cookies: str | None = Field(None, alias="SCRAPER_COOKIES")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings
