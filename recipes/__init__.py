"""
Recipes Module

Manual recipe write-up for finished recordings.
"""

from recipes.export import (
    export_recipe,
    format_recipe_card,
    format_recipe_text,
    recipe_filename,
)
from recipes.library import RecipeLibrary
from recipes.models import Recipe, parse_lines
from recipes.processor import RecipeProcessor

__all__ = [
    "Recipe",
    "RecipeLibrary",
    "RecipeProcessor",
    "export_recipe",
    "format_recipe_card",
    "format_recipe_text",
    "parse_lines",
    "recipe_filename",
]
