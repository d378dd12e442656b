"""
Recipe Export

Plain-text rendering of a recipe together with its recording details.
"""

import logging
import re
from datetime import datetime
from pathlib import Path

from config.settings import RECIPE_FILENAME_SUFFIX
from recipes.models import Recipe
from recording.models.recording_models import RecordingResult

logger = logging.getLogger(__name__)


def format_recorded_date(recording: RecordingResult) -> str:
    """Local calendar date of the recording as M/D/YYYY"""
    moment = recording.created_at.astimezone()
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_recipe_duration(seconds: int) -> str:
    """
    Duration as M:SS (minutes not padded).

    Example:
        format_recipe_duration(125) -> "2:05"
    """
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"


def format_recipe_text(recipe: Recipe, recording: RecordingResult) -> str:
    """Render a recipe as the downloadable text file"""
    ingredients = "\n".join(f"• {item}" for item in recipe.ingredients)
    instructions = "\n".join(
        f"{index}. {step}" for index, step in enumerate(recipe.instructions, start=1)
    )

    text = f"""
{recipe.title}

{recipe.description}

INGREDIENTS:
{ingredients}

INSTRUCTIONS:
{instructions}

DETAILS:
• Prep Time: {recipe.prep_time}
• Cook Time: {recipe.cook_time}
• Servings: {recipe.servings}

NOTES:
{recipe.notes}

Recorded on: {format_recorded_date(recording)}
Duration: {format_recipe_duration(recording.duration)}
"""
    return text.strip()


def format_saved_date(recipe: Recipe) -> str:
    """Local calendar date the recipe was saved as M/D/YYYY, or "No date" for drafts"""
    if not recipe.date_created:
        return "No date"
    moment = datetime.fromisoformat(recipe.date_created.replace("Z", "+00:00")).astimezone()
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_recipe_card(recipe: Recipe) -> str:
    """Render a saved recipe for the library detail view"""
    lines = [
        recipe.title or "(untitled)",
        f"Saved on: {format_saved_date(recipe)}",
    ]
    if recipe.description:
        lines.append(recipe.description)
    lines.append(
        f"Prep: {recipe.prep_time} | Cook: {recipe.cook_time} | Serves: {recipe.servings}",
    )

    lines.append("")
    lines.append("INGREDIENTS:")
    lines.extend(f"• {item}" for item in recipe.ingredients)

    lines.append("")
    lines.append("INSTRUCTIONS:")
    lines.extend(
        f"{index}. {step}" for index, step in enumerate(recipe.instructions, start=1)
    )

    if recipe.notes:
        lines.append("")
        lines.append("NOTES:")
        lines.append(recipe.notes)

    return "\n".join(lines)


def recipe_filename(title: str) -> str:
    """
    Filename for an exported recipe.

    Example:
        recipe_filename("Mom's Pasta") -> "mom_s_pasta_recipe.txt"
    """
    return re.sub(r"[^a-z0-9]", "_", title, flags=re.IGNORECASE).lower() + RECIPE_FILENAME_SUFFIX


def export_recipe(recipe: Recipe, recording: RecordingResult, directory: Path) -> Path:
    """
    Write the recipe text file into a directory.

    Returns:
        Path of the written file
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / recipe_filename(recipe.title)
    path.write_text(format_recipe_text(recipe, recording), encoding="utf-8")

    logger.info(f"Exported recipe: {path.name}")
    return path
