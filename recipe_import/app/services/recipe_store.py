from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from uuid import uuid4

from recipe_import.app.schemas.recipe import Recipe


class RecipeStore(ABC):
    """Record store that takes ownership of finished recipes."""

    @abstractmethod
    def insert(self, recipe: Recipe) -> str:  # pragma: no cover - interface
        raise NotImplementedError


class InMemoryRecipeStore(RecipeStore):
    def __init__(self):
        self._recipes: Dict[str, Recipe] = {}

    def insert(self, recipe: Recipe) -> str:
        recipe_id = uuid4().hex
        self._recipes[recipe_id] = recipe
        return recipe_id

    def get(self, recipe_id: str) -> Optional[Recipe]:
        return self._recipes.get(recipe_id)

    def all(self) -> List[Recipe]:
        return list(self._recipes.values())

    def __len__(self) -> int:
        return len(self._recipes)
