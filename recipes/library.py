"""
Recipe Library

In-memory collection of saved recipes, newest first.
"""

import logging
import threading
from typing import List, Optional

from recipes.models import Recipe


def matches(recipe: Recipe, term: str) -> bool:
    """
    Case-insensitive substring match on title, description or any ingredient.

    An empty term matches every recipe.
    """
    needle = term.lower()
    return (
        needle in recipe.title.lower()
        or needle in recipe.description.lower()
        or any(needle in ingredient.lower() for ingredient in recipe.ingredients)
    )


class RecipeLibrary:
    """
    Holds saved recipes for the running app.

    Usage:
        library = RecipeLibrary()
        library.add(recipe)
        latest = library.all()[0]
        soups = library.search("soup")
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._recipes: List[Recipe] = []
        self._lock = threading.Lock()

    def add(self, recipe: Recipe) -> None:
        """Add a recipe at the front of the collection"""
        with self._lock:
            self._recipes.insert(0, recipe)
        self.logger.info(f"Recipe added to library: {recipe.title or '(untitled)'}")

    def all(self) -> List[Recipe]:
        """Copy of the collection, newest first"""
        with self._lock:
            return list(self._recipes)

    def search(self, term: str) -> List[Recipe]:
        """Recipes matching term, newest first"""
        results = [recipe for recipe in self.all() if matches(recipe, term)]
        self.logger.debug(f"Search '{term}': {len(results)} of {len(self)} recipes")
        return results

    def get(self, position: int) -> Optional[Recipe]:
        """
        Recipe at a 1-based position in the newest-first listing.

        Returns:
            The recipe, or None if position is out of range
        """
        recipes = self.all()
        if 1 <= position <= len(recipes):
            return recipes[position - 1]
        return None

    def count(self) -> int:
        with self._lock:
            return len(self._recipes)

    def __len__(self) -> int:
        return self.count()
