from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_RECIPE_NAME = "Imported Recipe"
DEFAULT_COOK_TIME_MINUTES = 30
DEFAULT_DIFFICULTY = "Medium"
DIFFICULTY_LEVELS = ("Easy", "Medium", "Hard")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Recipe(BaseModel):
    """A recipe produced by the import pipeline.

    Instances are immutable once built; the record store takes ownership
    after insertion. Ingredients and instructions always hold at least one
    entry, substituting a placeholder when the page had none.
    """

    name: str = Field(DEFAULT_RECIPE_NAME, min_length=1)
    cuisine: str = ""
    cook_time_minutes: int = DEFAULT_COOK_TIME_MINUTES
    difficulty: str = DEFAULT_DIFFICULTY
    ingredients: List[str] = Field(min_length=1)
    instructions: List[str] = Field(min_length=1)
    image_name: str = ""
    is_favorite: bool = False
    date_created: datetime = Field(default_factory=_utcnow)
    source_url: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value
