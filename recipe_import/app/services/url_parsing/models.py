"""Pydantic models for the recipe import pipeline."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from recipe_import.app.schemas.recipe import Recipe


class ImportState(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    DONE = "done"
    FAILED = "failed"


class FetchedPage(BaseModel):
    """A successfully fetched (2xx) response."""

    url: str
    status_code: int
    content_type: str = ""
    content: bytes = b""
    text: Optional[str] = None

    @property
    def is_json(self) -> bool:
        return "application/json" in self.content_type.lower()


class PipelineContext(BaseModel):
    """Per-attempt working state; discarded when the attempt completes."""

    original_input: str
    normalized_url: Optional[str] = None
    resolved_url: Optional[str] = None
    social_origin: bool = False
    html: Optional[str] = None
    content: bytes = b""
    content_type: str = ""
    state: ImportState = ImportState.IDLE
    strategy: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class ImportResult(BaseModel):
    """Outcome of a single import attempt."""

    success: bool
    recipe: Optional[Recipe] = None
    parser_strategy: Optional[str] = None
    resolved_url: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    status_code: Optional[int] = None
