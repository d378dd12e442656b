"""
Recipe Library Search Tests

Tests for RecipeLibrary.search and get showing:
- Matches on title, description and ingredients
- Case folding
- Empty and unmatched terms
- 1-based lookup

To run:
    pytest tests/recipes/test_recipe_library.py -v
"""

import pytest

from recipes.library import RecipeLibrary, matches
from recipes.models import Recipe


@pytest.fixture
def stocked_library(pasta_recipe):
    """Library holding a soup (newest), the pasta sauce and a salad (oldest)"""
    library = RecipeLibrary()
    library.add(Recipe(title="Green Salad", description="Quick lunch.", ingredients=["lettuce"]))
    library.add(pasta_recipe)
    library.add(
        Recipe(
            title="Tomato Soup",
            description="Warming winter dinner.",
            ingredients=["4 tomatoes", "1 cup Cream"],
        ),
    )
    return library


def _titles(recipes):
    return [recipe.title for recipe in recipes]


@pytest.mark.unit
def test_search_matches_title(stocked_library):
    """Test a title substring matches."""
    assert _titles(stocked_library.search("salad")) == ["Green Salad"]


@pytest.mark.unit
def test_search_matches_description(stocked_library):
    """Test a description substring matches."""
    assert _titles(stocked_library.search("family")) == ["Mom's Pasta Sauce"]


@pytest.mark.unit
def test_search_matches_ingredient(stocked_library):
    """Test any ingredient substring matches."""
    assert _titles(stocked_library.search("cream")) == ["Tomato Soup"]
    assert _titles(stocked_library.search("lettuce")) == ["Green Salad"]


@pytest.mark.unit
def test_search_is_case_insensitive(stocked_library):
    """Test case is ignored on both sides."""
    assert _titles(stocked_library.search("TOMATO")) == ["Tomato Soup", "Mom's Pasta Sauce"]
    assert _titles(stocked_library.search("wInTeR")) == ["Tomato Soup"]


@pytest.mark.unit
def test_search_empty_term_returns_everything(stocked_library):
    """Test an empty term keeps the full newest-first listing."""
    assert stocked_library.search("") == stocked_library.all()


@pytest.mark.unit
def test_search_no_match(stocked_library):
    """Test an unmatched term returns nothing."""
    assert stocked_library.search("chocolate") == []


@pytest.mark.unit
def test_search_ignores_other_fields():
    """Test notes and instructions are not searched."""
    recipe = Recipe(title="Bread", instructions=["Knead the dough"], notes="Use rye")

    assert matches(recipe, "knead") is False
    assert matches(recipe, "rye") is False
    assert matches(recipe, "bread") is True


@pytest.mark.unit
def test_get_by_position(stocked_library):
    """Test positions are 1-based and newest first."""
    assert stocked_library.get(1).title == "Tomato Soup"
    assert stocked_library.get(3).title == "Green Salad"
    assert stocked_library.get(0) is None
    assert stocked_library.get(4) is None
