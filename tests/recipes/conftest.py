"""
Recipes Test Configuration and Fixtures
"""

import pytest

from recipes import Recipe, RecipeLibrary, RecipeProcessor
from recording.models.recording_models import Artifact, RecordingResult


@pytest.fixture
def recording():
    """
    Provide a finished 2:05 recording made at midday UTC.

    Midday keeps the local calendar date stable across time zones.
    """
    return RecordingResult(
        artifact=Artifact(data=b"webm", mime_type="video/webm"),
        duration=125,
        timestamp="2025-07-26T12:00:00.000Z",
    )


@pytest.fixture
def library():
    return RecipeLibrary()


@pytest.fixture
def processor(recording, library):
    """Provide a RecipeProcessor that saves into the library fixture"""
    return RecipeProcessor(recording, on_save=library.add)


@pytest.fixture
def pasta_recipe():
    return Recipe(
        title="Mom's Pasta Sauce",
        description="A family recipe.",
        ingredients=["2 lbs tomatoes", "1 onion"],
        instructions=["Heat oil", "Add onions"],
        prep_time="15 minutes",
        cook_time="45 minutes",
        servings="4-6 people",
        notes="Simmer slowly.",
    )
