"""
Recipe Model Tests

To run:
    pytest tests/recipes/test_recipe_models.py -v
"""

import pytest

from recipes.library import RecipeLibrary
from recipes.models import Recipe, parse_lines


@pytest.mark.unit
def test_parse_lines_drops_blank_lines():
    """Test blank and whitespace-only lines are removed."""
    assert parse_lines("a\n\n   \nb") == ["a", "b"]


@pytest.mark.unit
def test_parse_lines_keeps_lines_as_typed():
    """Test kept lines are not stripped."""
    assert parse_lines("  1 cup flour \n2 eggs") == ["  1 cup flour ", "2 eggs"]


@pytest.mark.unit
def test_parse_lines_empty():
    """Test empty text gives no entries."""
    assert parse_lines("") == []


@pytest.mark.unit
def test_recipe_defaults():
    """Test an empty draft."""
    recipe = Recipe()

    assert recipe.title == ""
    assert recipe.ingredients == []
    assert recipe.instructions == []
    assert recipe.date_created is None
    assert recipe.is_saved is False


@pytest.mark.unit
def test_recipe_lists_not_shared():
    """Test each draft gets its own lists."""
    first, second = Recipe(), Recipe()
    first.ingredients.append("salt")

    assert second.ingredients == []


@pytest.mark.unit
def test_recipe_dict_round_trip(pasta_recipe):
    """Test to_dict/from_dict keep every field."""
    assert Recipe.from_dict(pasta_recipe.to_dict()) == pasta_recipe


@pytest.mark.unit
def test_library_newest_first(pasta_recipe):
    """Test the library puts new recipes at the front."""
    library = RecipeLibrary()
    older = Recipe(title="Older")

    library.add(older)
    library.add(pasta_recipe)

    assert library.all() == [pasta_recipe, older]
    assert library.count() == 2
    assert len(library) == 2


@pytest.mark.unit
def test_library_all_returns_copy(pasta_recipe):
    """Test callers cannot change the collection through all()."""
    library = RecipeLibrary()
    library.add(pasta_recipe)

    library.all().clear()

    assert len(library) == 1
